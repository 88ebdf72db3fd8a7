"""View and interaction settings shared by the transform math and the controller."""
import math
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any

from models.transform import Vec2, Rect
from constants import (
    SHOW_GRID, SHOW_CONTROL_POINTS, SHOW_TANGENT_LINES, SHOW_CURVE,
    GRID_SUBDIVISIONS, DEFAULT_CURVE_RESOLUTION, CURVE_RESOLUTION_MIN,
    POINT_SIZE, SELECTED_POINT_SIZE, TANGENT_HANDLE_SIZE, CURVE_WIDTH, TANGENT_LINE_WIDTH,
    PICK_DISTANCE, SNAP_TO_GRID, SNAP_DISTANCE,
    DEFAULT_VIEW_BOUNDS, DEFAULT_ZOOM, MIN_ZOOM, MAX_ZOOM, ZOOM_SPEED,
)


@dataclass
class ViewSettings:
    """Editor settings for one editing session.

    Display:
        show_grid, show_control_points, show_tangent_lines, show_curve,
        point/handle sizes and line widths (hints for the host's painter)

    Interaction:
        pick_distance: Hit-test radius in screen pixels
        snap_to_grid: Snap dragged anchors near grid lines
        snap_distance: Max curve-space distance a snap may move an axis
        grid_subdivisions: Snap grid lines per curve-space unit
        auto_tangents / mirror_tangents: Defaults hosts apply to new points

    View (mutated at runtime only by InteractionController):
        view_bounds: Curve-space window mapped to the screen before zoom/pan
        pan_offset: Offset in normalized view units, applied after zoom
        zoom: Magnification about the view centre, within [min_zoom, max_zoom]
    """
    show_grid: bool = SHOW_GRID
    show_control_points: bool = SHOW_CONTROL_POINTS
    show_tangent_lines: bool = SHOW_TANGENT_LINES
    show_curve: bool = SHOW_CURVE

    grid_subdivisions: int = GRID_SUBDIVISIONS
    curve_resolution: int = DEFAULT_CURVE_RESOLUTION

    point_size: float = POINT_SIZE
    selected_point_size: float = SELECTED_POINT_SIZE
    tangent_handle_size: float = TANGENT_HANDLE_SIZE
    curve_width: float = CURVE_WIDTH
    tangent_line_width: float = TANGENT_LINE_WIDTH

    pick_distance: float = PICK_DISTANCE
    snap_to_grid: bool = SNAP_TO_GRID
    snap_distance: float = SNAP_DISTANCE
    auto_tangents: bool = False
    mirror_tangents: bool = False

    view_bounds: Rect = field(default_factory=lambda: Rect(*DEFAULT_VIEW_BOUNDS))
    pan_offset: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))
    zoom: float = DEFAULT_ZOOM
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    zoom_speed: float = ZOOM_SPEED

    @classmethod
    def default(cls) -> 'ViewSettings':
        return cls()

    def copy(self) -> 'ViewSettings':
        return replace(self)

    def clamp_zoom(self, value: float) -> float:
        return max(self.min_zoom, min(self.max_zoom, float(value)))

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (Vec2, Rect)):
                value = list(value.to_tuple())
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ViewSettings':
        """Build settings from a dictionary, unknown keys are ignored

        Raises:
            ValueError: On ill-typed values, non-finite numbers, an empty
                view window or an inverted zoom range
        """
        if not isinstance(data, dict):
            raise ValueError(f"Settings data must be a mapping, got {type(data).__name__}")

        settings = cls()
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            current = getattr(settings, f.name)
            try:
                if isinstance(current, bool):
                    if not isinstance(value, bool):
                        raise TypeError(f"expected bool, got {type(value).__name__}")
                elif isinstance(current, Rect):
                    value = Rect.of(value)
                    _require_finite(f.name, *value.to_tuple())
                elif isinstance(current, Vec2):
                    value = Vec2.of(value)
                    _require_finite(f.name, *value.to_tuple())
                elif isinstance(current, int):
                    if isinstance(value, bool) or not isinstance(value, int):
                        raise TypeError(f"expected int, got {type(value).__name__}")
                else:
                    if isinstance(value, bool):
                        raise TypeError("expected number, got bool")
                    value = float(value)
                    _require_finite(f.name, value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid setting '{f.name}': {e}") from e
            setattr(settings, f.name, value)

        if settings.view_bounds.width <= 0 or settings.view_bounds.height <= 0:
            raise ValueError(f"view_bounds must have a positive size: {settings.view_bounds}")
        if not 0 < settings.min_zoom <= settings.max_zoom:
            raise ValueError(f"Invalid zoom range [{settings.min_zoom}, {settings.max_zoom}]")
        if settings.grid_subdivisions < 1:
            raise ValueError("grid_subdivisions must be >= 1")
        if settings.curve_resolution < CURVE_RESOLUTION_MIN:
            raise ValueError(f"curve_resolution must be >= {CURVE_RESOLUTION_MIN}")
        settings.zoom = settings.clamp_zoom(settings.zoom)
        return settings


def _require_finite(name, *values):
    for value in values:
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
