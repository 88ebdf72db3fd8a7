"""CurvePoint class - a single anchor with its two tangent handles"""

import math
from typing import Dict, Any

from models.transform import Vec2


class CurvePoint:
    """Anchor point of a piecewise cubic Bezier curve

    Tangent handles are stored as offsets relative to the anchor. Absolute
    ("world") handle positions are always derived from the current anchor
    position and never cached.

    Properties:
        position: Anchor position (curve space)
        control_in: Incoming handle offset relative to position
        control_out: Outgoing handle offset relative to position
        mirror_tangents: When True, assigning either handle forces the other
            to its exact negation
        auto_tangents: Passive flag read by Curve.update_auto_tangents()
    """

    def __init__(self, position=None, control_in=None, control_out=None,
                 auto_tangents: bool = False, mirror_tangents: bool = False):
        self._position = Vec2.ZERO if position is None else Vec2.of(position)
        self._control_in = Vec2.ZERO if control_in is None else Vec2.of(control_in)
        self._control_out = Vec2.ZERO if control_out is None else Vec2.of(control_out)
        self._auto_tangents = bool(auto_tangents)
        self._mirror_tangents = False
        # Assigned through the property so the mirror rule applies
        self.mirror_tangents = mirror_tangents

    # ========================================
    # Properties
    # ========================================

    @property
    def position(self) -> Vec2:
        """Anchor position (curve space)"""
        return self._position

    @position.setter
    def position(self, value):
        self._position = Vec2.of(value)

    @property
    def control_in(self) -> Vec2:
        """Incoming handle offset relative to the anchor"""
        return self._control_in

    @control_in.setter
    def control_in(self, value):
        self._control_in = Vec2.of(value)
        if self._mirror_tangents:
            self._control_out = -self._control_in

    @property
    def control_out(self) -> Vec2:
        """Outgoing handle offset relative to the anchor"""
        return self._control_out

    @control_out.setter
    def control_out(self, value):
        self._control_out = Vec2.of(value)
        if self._mirror_tangents:
            self._control_in = -self._control_out

    @property
    def auto_tangents(self) -> bool:
        return self._auto_tangents

    @auto_tangents.setter
    def auto_tangents(self, value: bool):
        self._auto_tangents = bool(value)

    @property
    def mirror_tangents(self) -> bool:
        """Keep control_in == -control_out

        Enabling the flag immediately mirrors control_out onto control_in.
        """
        return self._mirror_tangents

    @mirror_tangents.setter
    def mirror_tangents(self, value: bool):
        self._mirror_tangents = bool(value)
        if self._mirror_tangents:
            self._control_in = -self._control_out

    # ========================================
    # World-space handle access
    # ========================================

    def control_in_world(self) -> Vec2:
        """Absolute position of the incoming handle"""
        return self._position + self._control_in

    def control_out_world(self) -> Vec2:
        """Absolute position of the outgoing handle"""
        return self._position + self._control_out

    def set_control_in_world(self, world_pos):
        """Place the incoming handle at an absolute position (mirror rule applies)"""
        self.control_in = Vec2.of(world_pos) - self._position

    def set_control_out_world(self, world_pos):
        """Place the outgoing handle at an absolute position (mirror rule applies)"""
        self.control_out = Vec2.of(world_pos) - self._position

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert point to dictionary for serialization

        Returns:
            Dictionary with position, both handle offsets and both flags
        """
        return {
            'position': [self._position.x, self._position.y],
            'control_in': [self._control_in.x, self._control_in.y],
            'control_out': [self._control_out.x, self._control_out.y],
            'auto_tangents': self._auto_tangents,
            'mirror_tangents': self._mirror_tangents,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> 'CurvePoint':
        """Create point from dictionary

        Args:
            data: Dictionary as produced by to_dict(); handle offsets and flags
                are optional

        Returns:
            New CurvePoint

        Raises:
            ValueError: If data is not a mapping or holds malformed vectors
        """
        if not isinstance(data, dict):
            raise ValueError(f"Curve point data must be a mapping, got {type(data).__name__}")
        if 'position' not in data:
            raise ValueError("Curve point data is missing 'position'")

        position = _parse_vector(data['position'], 'position')
        control_in = _parse_vector(data.get('control_in', (0.0, 0.0)), 'control_in')
        control_out = _parse_vector(data.get('control_out', (0.0, 0.0)), 'control_out')

        point = CurvePoint(position, control_in, control_out,
                           auto_tangents=bool(data.get('auto_tangents', False)))
        # Restore stored offsets verbatim, then the flag (no re-mirroring of
        # data that was saved consistent)
        point._mirror_tangents = bool(data.get('mirror_tangents', False))
        return point

    # ========================================
    # Utility Methods
    # ========================================

    def copy(self) -> 'CurvePoint':
        """Create an independent copy of this point"""
        point = CurvePoint(self._position, self._control_in, self._control_out,
                           auto_tangents=self._auto_tangents)
        point._mirror_tangents = self._mirror_tangents
        return point

    def __eq__(self, other) -> bool:
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return (self._position == other._position
                and self._control_in == other._control_in
                and self._control_out == other._control_out
                and self._auto_tangents == other._auto_tangents
                and self._mirror_tangents == other._mirror_tangents)

    __hash__ = None

    def __repr__(self) -> str:
        """String representation for debugging"""
        return (f"CurvePoint(pos=({self._position.x:.3f}, {self._position.y:.3f}), "
                f"in=({self._control_in.x:.3f}, {self._control_in.y:.3f}), "
                f"out=({self._control_out.x:.3f}, {self._control_out.y:.3f}))")


def _parse_vector(value, field_name: str) -> Vec2:
    """Validate an [x, y] pair of finite numbers"""
    try:
        x, y = value
        x, y = float(x), float(y)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Field '{field_name}' must be a pair of numbers: {value!r}") from e
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"Field '{field_name}' must be finite: {value!r}")
    return Vec2(x, y)
