"""
Bezier Curve Editor - Curve Data Model

THE MODEL of the editing engine. Owns the ordered point list and every
operation on it.

This class handles:
- Point management (add, insert, remove, clear, move)
- Tangent handle mutation by index
- Global evaluation across segments (open or looping)
- Bounds, length and polyline sampling
- Opt-in auto-tangent smoothing
- Dict serialization for hosts that persist curves

The Curve model is INDEPENDENT of UI:
- No rendering or input logic
- No selection state (that's InteractionController)
- No view state (that's ViewSettings)

Every indexed mutator is a no-op on an out-of-range index.

Usage:
    curve = Curve.smooth(Vec2(0.0, 0.0), Vec2(1.0, 1.0))
    index = curve.add_point(Vec2(1.5, 0.5))
    curve.move_point(index, Vec2(1.6, 0.4))
    midpoint = curve.evaluate(0.5)
"""

import math
import logging
from typing import Dict, List, Optional, Tuple, Any

import numpy as np

from models.curve_point import CurvePoint
from models.transform import Vec2, Rect
from utils import bezier_math
from constants import (
    CURVE_RESOLUTION_MIN, DEFAULT_CURVE_RESOLUTION, DEFAULT_SAMPLE_COUNT,
    BOUNDS_MARGIN, BOUNDS_MIN_SIZE, EMPTY_CURVE_BOUNDS,
    SMOOTH_TANGENT_WEIGHT,
)


class Curve:
    """Piecewise cubic Bezier curve

    Segment i runs from point i to point (i + 1) mod point_count, shaped by
    the outgoing handle of the first and the incoming handle of the second.
    A looping curve has point_count segments, an open one point_count - 1.

    Properties:
        points: Read-only tuple of CurvePoint (order defines adjacency)
        point_count: Number of points
        loop: Close the curve back to the first point
        resolution: Sampling density hint for polyline approximations (>= 2)
    """

    def __init__(self, loop: bool = False, resolution: int = DEFAULT_CURVE_RESOLUTION):
        """Create an empty curve"""
        self._logger = logging.getLogger('Curve')
        self._points: List[CurvePoint] = []
        self._loop = bool(loop)
        self._resolution = max(CURVE_RESOLUTION_MIN, int(resolution))

    # ========================================
    # Properties
    # ========================================

    @property
    def points(self) -> Tuple[CurvePoint, ...]:
        """Snapshot of the point sequence for reading

        The tuple holds the live CurvePoint objects. Add, remove, move and
        flag changes go through the Curve mutators so they stay validated
        and logged.
        """
        return tuple(self._points)

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def loop(self) -> bool:
        return self._loop

    @loop.setter
    def loop(self, value: bool):
        self._loop = bool(value)

    @property
    def resolution(self) -> int:
        return self._resolution

    @resolution.setter
    def resolution(self, value: int):
        self._resolution = max(CURVE_RESOLUTION_MIN, int(value))

    @property
    def segment_count(self) -> int:
        """Number of Bezier segments (0 for fewer than two points)"""
        count = len(self._points)
        if count < 2:
            return 0
        return count if self._loop else count - 1

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(tuple(self._points))

    def get_point(self, index: int) -> Optional[CurvePoint]:
        """Get point at index, or None when out of range"""
        if not self._valid_index(index):
            return None
        return self._points[index]

    def _valid_index(self, index) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._points)

    # ========================================
    # Point Management
    # ========================================

    def add_point(self, position) -> int:
        """Append a point with zero handles

        Returns:
            Index of the new point
        """
        self._points.append(CurvePoint(Vec2.of(position)))
        index = len(self._points) - 1
        self._logger.debug(f"Added point {index} at {tuple(self._points[index].position)}")
        return index

    def insert_point(self, index: int, position):
        """Insert a point before index (index == point_count appends)

        No-op when index is outside [0, point_count].
        """
        if not isinstance(index, int) or index < 0 or index > len(self._points):
            self._logger.debug(f"insert_point ignored: index {index} out of range")
            return
        self._points.insert(index, CurvePoint(Vec2.of(position)))
        self._logger.debug(f"Inserted point at {index}")

    def remove_point(self, index: int):
        """Remove point at index (no-op when out of range)"""
        if not self._valid_index(index):
            self._logger.debug(f"remove_point ignored: index {index} out of range")
            return
        del self._points[index]
        self._logger.debug(f"Removed point {index}, {len(self._points)} left")

    def clear_points(self):
        """Remove all points"""
        self._points.clear()
        self._logger.debug("Cleared all points")

    def move_point(self, index: int, new_position):
        """Move anchor at index; handles follow since they are relative

        No-op when index is out of range.
        """
        if not self._valid_index(index):
            self._logger.debug(f"move_point ignored: index {index} out of range")
            return
        self._points[index].position = Vec2.of(new_position)

    # ========================================
    # Tangent Handles
    # ========================================

    def set_control_in(self, index: int, offset):
        point = self.get_point(index)
        if point is not None:
            point.control_in = offset

    def set_control_out(self, index: int, offset):
        point = self.get_point(index)
        if point is not None:
            point.control_out = offset

    def set_control_in_world(self, index: int, world_pos):
        point = self.get_point(index)
        if point is not None:
            point.set_control_in_world(world_pos)

    def set_control_out_world(self, index: int, world_pos):
        point = self.get_point(index)
        if point is not None:
            point.set_control_out_world(world_pos)

    def set_auto_tangents(self, index: int, enabled: bool):
        """Flag point at index for auto-tangent smoothing (no-op when out of range)"""
        point = self.get_point(index)
        if point is not None:
            point.auto_tangents = enabled
            self._logger.debug(f"Point {index} auto_tangents={point.auto_tangents}")

    def set_mirror_tangents(self, index: int, enabled: bool):
        """Set the mirror flag of point at index; enabling mirrors control_out onto control_in"""
        point = self.get_point(index)
        if point is not None:
            point.mirror_tangents = enabled
            self._logger.debug(f"Point {index} mirror_tangents={point.mirror_tangents}")

    def update_auto_tangents(self, index: Optional[int] = None) -> bool:
        """Recompute handles of points flagged with auto_tangents

        Only flagged points are touched: the point at index and its two
        neighbours, or every flagged point when index is None. Missing
        neighbours on open curves are passed to neighbour_tangent as None,
        so a neighbour sitting at the origin still counts.

        Returns:
            True if any handle changed
        """
        count = len(self._points)
        if count < 2:
            return False

        if index is None:
            candidates = range(count)
        else:
            candidates = sorted({i % count if self._loop else i
                                 for i in (index - 1, index, index + 1)})

        changed = False
        for i in candidates:
            if not self._valid_index(i):
                continue
            point = self._points[i]
            if not point.auto_tangents:
                continue

            prev_pos = self._neighbour_position(i, -1)
            next_pos = self._neighbour_position(i, 1)
            tangent = bezier_math.neighbour_tangent(prev_pos, point.position, next_pos)

            if point.control_out != tangent or point.control_in != -tangent:
                point.control_out = tangent
                point.control_in = -tangent
                changed = True

        return changed

    def _neighbour_position(self, index: int, step: int) -> Optional[Vec2]:
        neighbour = index + step
        if self._loop:
            neighbour %= len(self._points)
        elif neighbour < 0 or neighbour >= len(self._points):
            return None
        return self._points[neighbour].position

    # ========================================
    # Evaluation
    # ========================================

    def segment_controls(self, segment_index: int) -> Optional[Tuple[Vec2, Vec2, Vec2, Vec2]]:
        """Four Bezier control points of a segment, or None if it does not exist"""
        if not isinstance(segment_index, int) or not 0 <= segment_index < self.segment_count:
            return None
        start = self._points[segment_index]
        end = self._points[(segment_index + 1) % len(self._points)]
        return (start.position, start.control_out_world(),
                end.control_in_world(), end.position)

    def _locate(self, t: float) -> Tuple[int, float]:
        """Map global t to (segment index, local t)

        Requires at least two points.
        """
        t = max(0.0, min(1.0, float(t)))
        segment_count = self.segment_count
        segment_t = t * segment_count
        segment_index = int(math.floor(segment_t))

        if self._loop:
            local_t = segment_t - segment_index
            segment_index %= len(self._points)
        else:
            segment_index = max(0, min(segment_count - 1, segment_index))
            # Measured from the clamped segment so t == 1 ends on the last anchor
            local_t = segment_t - segment_index
            if segment_index == segment_count - 1:
                local_t = max(0.0, min(1.0, local_t))

        return segment_index, local_t

    def evaluate(self, t: float) -> Vec2:
        """Point on the curve at global parameter t in [0, 1]

        Returns (0, 0) for an empty curve and the sole anchor for a single
        point curve.
        """
        if not self._points:
            return Vec2.ZERO
        if len(self._points) == 1:
            return self._points[0].position

        segment_index, local_t = self._locate(t)
        p0, p1, p2, p3 = self.segment_controls(segment_index)
        return bezier_math.evaluate_cubic(p0, p1, p2, p3, local_t)

    def evaluate_tangent(self, t: float) -> Vec2:
        """Derivative with respect to the local segment parameter at global t"""
        if len(self._points) < 2:
            return Vec2.ZERO

        segment_index, local_t = self._locate(t)
        p0, p1, p2, p3 = self.segment_controls(segment_index)
        return bezier_math.tangent_cubic(p0, p1, p2, p3, local_t)

    def sample(self, resolution: Optional[int] = None) -> np.ndarray:
        """Polyline approximation of the whole curve

        Args:
            resolution: Samples per segment (defaults to self.resolution)

        Returns:
            numpy array of shape (N, 2); empty (0, 2) for an empty curve
        """
        if not self._points:
            return np.zeros((0, 2))
        if len(self._points) == 1:
            return np.array([tuple(self._points[0].position)], dtype=float)

        resolution = max(CURVE_RESOLUTION_MIN, int(resolution or self._resolution))
        pieces = []
        for segment_index in range(self.segment_count):
            samples = bezier_math.sample_cubic(*self.segment_controls(segment_index), resolution)
            # Consecutive segments share their joining anchor
            pieces.append(samples if segment_index == 0 else samples[1:])
        return np.vstack(pieces)

    def length(self, samples: int = DEFAULT_SAMPLE_COUNT) -> float:
        """Approximate arc length summed over all segments"""
        return sum(bezier_math.curve_length(*self.segment_controls(i), samples)
                   for i in range(self.segment_count))

    def distance_to(self, point, samples: int = DEFAULT_SAMPLE_COUNT) -> float:
        """Approximate distance from point to the nearest segment

        Falls back to anchor distance for curves with fewer than two points,
        and returns inf for an empty curve.
        """
        point = Vec2.of(point)
        if not self._points:
            return math.inf
        if len(self._points) == 1:
            return point.distance(self._points[0].position)
        return min(bezier_math.distance_to_curve(point, *self.segment_controls(i), samples)
                   for i in range(self.segment_count))

    # ========================================
    # Bounds
    # ========================================

    def bounds(self) -> Rect:
        """Bounding box of every anchor and handle, with margin

        Handles are included since they can extend outside the anchor hull.
        Extents below BOUNDS_MIN_SIZE are floored so the box is never a
        point or a line, then BOUNDS_MARGIN is added on each side.
        """
        if not self._points:
            return Rect(*EMPTY_CURVE_BOUNDS)

        coords = []
        for point in self._points:
            coords.append(tuple(point.position))
            coords.append(tuple(point.control_in_world()))
            coords.append(tuple(point.control_out_world()))
        coords = np.array(coords, dtype=float)

        min_corner = coords.min(axis=0)
        max_corner = coords.max(axis=0)
        size = np.maximum(max_corner - min_corner, BOUNDS_MIN_SIZE)
        center = (min_corner + max_corner) * 0.5
        margin = size * BOUNDS_MARGIN

        origin = center - size * 0.5 - margin
        extent = size + margin * 2.0
        return Rect(float(origin[0]), float(origin[1]), float(extent[0]), float(extent[1]))

    # ========================================
    # Factories
    # ========================================

    @classmethod
    def linear(cls, start, end) -> 'Curve':
        """Two points joined by a straight segment (zero handles)"""
        curve = cls()
        curve.add_point(start)
        curve.add_point(end)
        return curve

    @classmethod
    def smooth(cls, start, end) -> 'Curve':
        """Two points with handles a third of the way along the chord"""
        start, end = Vec2.of(start), Vec2.of(end)
        curve = cls()
        curve.add_point(start)
        curve.add_point(end)

        direction = (end - start).normalized()
        distance = start.distance(end) * SMOOTH_TANGENT_WEIGHT
        curve.set_control_out(0, direction * distance)
        curve.set_control_in(1, -direction * distance)
        return curve

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        """Export curve data for host-side persistence"""
        return {
            'loop': self._loop,
            'resolution': self._resolution,
            'points': [point.to_dict() for point in self._points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Curve':
        """Create curve from dictionary

        Raises:
            ValueError: If data is malformed or resolution < 2
        """
        if not isinstance(data, dict):
            raise ValueError(f"Curve data must be a mapping, got {type(data).__name__}")

        points = data.get('points', [])
        if not isinstance(points, (list, tuple)):
            raise ValueError("Curve field 'points' must be a list")

        resolution = data.get('resolution', DEFAULT_CURVE_RESOLUTION)
        if isinstance(resolution, bool) or not isinstance(resolution, int):
            raise ValueError(f"Curve field 'resolution' must be an integer: {resolution!r}")
        if resolution < CURVE_RESOLUTION_MIN:
            raise ValueError(f"Curve resolution must be >= {CURVE_RESOLUTION_MIN}, got {resolution}")

        curve = cls(loop=bool(data.get('loop', False)), resolution=resolution)
        for point_data in points:
            curve._points.append(CurvePoint.from_dict(point_data))
        curve._logger.debug(f"Loaded curve with {len(curve._points)} points")
        return curve

    def copy(self) -> 'Curve':
        """Deep copy; the new curve owns fresh CurvePoint objects"""
        curve = Curve(loop=self._loop, resolution=self._resolution)
        curve._points = [point.copy() for point in self._points]
        return curve

    def __repr__(self) -> str:
        return f"Curve(points={len(self._points)}, loop={self._loop}, resolution={self._resolution})"
