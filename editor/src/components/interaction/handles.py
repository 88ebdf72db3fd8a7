"""Curve point handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- Where it sits in curve space for a given CurvePoint
- Whether it exists at all (zero tangent offsets are absent)
- How to test if a screen position hits it
- How to apply a drag to the curve
"""

from abc import ABC, abstractmethod
from enum import Enum

from models.transform import Vec2
from utils.coordinate_transforms import curve_to_screen


class HandleKind(Enum):
    ANCHOR = 'anchor'
    TANGENT_IN = 'tangent_in'
    TANGENT_OUT = 'tangent_out'


class Handle(ABC):
    """Abstract base class for curve point handles."""

    kind = None

    @abstractmethod
    def world_position(self, point) -> Vec2:
        """Absolute curve-space position of this handle on point."""
        pass

    def is_present(self, point) -> bool:
        return True

    def hit_test(self, point, screen_pos, screen_rect, settings) -> bool:
        """Test if screen_pos is strictly within pick_distance of this handle.

        Args:
            point: CurvePoint owning the handle
            screen_pos: Pointer position in screen pixels
            screen_rect: Screen rectangle of the view
            settings: ViewSettings (pick_distance, view transform)
        """
        if not self.is_present(point):
            return False
        handle_screen = curve_to_screen(self.world_position(point), screen_rect, settings)
        return screen_pos.distance(handle_screen) < settings.pick_distance

    @abstractmethod
    def drag(self, curve, index, curve_pos, settings) -> bool:
        """Move this handle of curve point index to curve_pos.

        Returns:
            bool: True if the curve changed
        """
        pass


class AnchorHandle(Handle):
    """The anchor itself; optionally snapped to the grid while dragged."""

    kind = HandleKind.ANCHOR

    def world_position(self, point):
        return point.position

    def drag(self, curve, index, curve_pos, settings):
        point = curve.get_point(index)
        if point is None:
            return False
        if settings.snap_to_grid:
            curve_pos = snap_to_grid(curve_pos, settings)

        before = point.position
        curve.move_point(index, curve_pos)
        tangents_changed = curve.update_auto_tangents(index)
        return point.position != before or tangents_changed


class TangentInHandle(Handle):
    """Incoming tangent handle; absent while its offset is zero."""

    kind = HandleKind.TANGENT_IN

    def world_position(self, point):
        return point.control_in_world()

    def is_present(self, point):
        return not point.control_in.is_zero()

    def drag(self, curve, index, curve_pos, settings):
        point = curve.get_point(index)
        if point is None:
            return False
        before = (point.control_in, point.control_out)
        curve.set_control_in_world(index, curve_pos)
        return (point.control_in, point.control_out) != before


class TangentOutHandle(Handle):
    """Outgoing tangent handle; absent while its offset is zero."""

    kind = HandleKind.TANGENT_OUT

    def world_position(self, point):
        return point.control_out_world()

    def is_present(self, point):
        return not point.control_out.is_zero()

    def drag(self, curve, index, curve_pos, settings):
        point = curve.get_point(index)
        if point is None:
            return False
        before = (point.control_in, point.control_out)
        curve.set_control_out_world(index, curve_pos)
        return (point.control_in, point.control_out) != before


HANDLES = {
    HandleKind.ANCHOR: AnchorHandle(),
    HandleKind.TANGENT_IN: TangentInHandle(),
    HandleKind.TANGENT_OUT: TangentOutHandle(),
}

# Tangent handles win over the anchor of the same point
HIT_ORDER = (HandleKind.TANGENT_IN, HandleKind.TANGENT_OUT, HandleKind.ANCHOR)


def get_handle(kind):
    return HANDLES[kind]


def snap_to_grid(position, settings):
    """Snap each axis to the nearest 1/grid_subdivisions line if close enough.

    An axis keeps its raw value unless the quantized value is closer than
    snap_distance, which snaps near grid lines and moves freely elsewhere.
    """
    position = Vec2.of(position)
    subdivisions = max(1, int(settings.grid_subdivisions))
    snap_distance = settings.snap_distance

    snapped_x = round(position.x * subdivisions) / subdivisions
    snapped_y = round(position.y * subdivisions) / subdivisions

    x = snapped_x if abs(position.x - snapped_x) < snap_distance else position.x
    y = snapped_y if abs(position.y - snapped_y) < snap_distance else position.y
    return Vec2(x, y)
