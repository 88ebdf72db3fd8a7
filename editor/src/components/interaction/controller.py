"""Interaction controller - pointer state machine for curve editing.

Consumes normalized pointer events, hit-tests against a Curve through the
view transform, and mutates the Curve (anchors, tangents) or the
ViewSettings (pan, zoom, view bounds).

States (see states.InteractionState):
    IDLE <-> HOVER_*            pointer-move hover refresh
    IDLE/HOVER_* -> DRAGGING_*  pointer-down on a handle
    IDLE/HOVER_* -> PANNING     pointer-down with the pan gesture, no hit
    DRAGGING_*/PANNING -> IDLE  pointer-up

Every handler returns True only when persistent state (curve geometry or
view pan/zoom/bounds) was mutated by that call. Hover and selection changes
are reported through feedback_changed instead.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from models.transform import Vec2, Rect
from utils.coordinate_transforms import screen_to_curve, screen_delta_to_curve
from constants import DEFAULT_VIEW_BOUNDS, MIN_VIEW_EXTENT, MIN_CURVE_POINTS, BUTTON_PRIMARY
from .events import PointerEventType
from .handles import HandleKind, HIT_ORDER, get_handle
from .states import InteractionState, HOVER_STATES, DRAG_STATES
from .drag_context import DragContext


@dataclass(frozen=True)
class HitResult:
    """A hit-test match: point index and which of its handles was hit"""
    index: int
    handle: HandleKind


class InteractionController:
    """Hover/drag/pan state machine for one editing session.

    Properties:
        state: Current InteractionState
        selected_index: Selected point index (-1 = none)
        hovered_index: Hovered point index (-1 = none)
        hovered_handle: HandleKind under the pointer, or None
        drag: DragContext of the active drag/pan, or None
        feedback_changed: True if the last call changed state, hover or
            selection (the host should repaint)
    """

    def __init__(self):
        self._logger = logging.getLogger('InteractionController')
        self._state = InteractionState.IDLE
        self._selected_index = -1
        self._hovered_index = -1
        self._hovered_handle = None
        self._drag = None
        self.feedback_changed = False

        self._handlers = {
            PointerEventType.DOWN: self._handle_pointer_down,
            PointerEventType.MOVE: self._handle_pointer_move,
            PointerEventType.UP: self._handle_pointer_up,
        }

    # ========================================
    # Properties
    # ========================================

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def hovered_index(self) -> int:
        return self._hovered_index

    @property
    def hovered_handle(self) -> Optional[HandleKind]:
        return self._hovered_handle

    @property
    def drag(self) -> Optional[DragContext]:
        return self._drag

    def drag_offset(self, curve) -> Vec2:
        """Live anchor displacement since the current handle drag started"""
        if self._drag is None or self._drag.is_pan:
            return Vec2.ZERO
        point = curve.get_point(self._drag.point_index)
        if point is None:
            return Vec2.ZERO
        return point.position - self._drag.start_position

    # ========================================
    # Event dispatch
    # ========================================

    def handle_pointer(self, curve, screen_rect, settings, event) -> bool:
        """Process one pointer event.

        Args:
            curve: Curve being edited
            screen_rect: Screen rectangle the view is drawn into
            settings: ViewSettings (mutated while panning)
            event: PointerEvent

        Returns:
            bool: True if curve geometry or view state was mutated
        """
        self.feedback_changed = False
        handler = self._handlers.get(event.type)
        if handler is None:
            return False
        return handler(curve, Rect.of(screen_rect), settings, event)

    def _transition(self, new_state: InteractionState):
        if new_state is self._state:
            return
        self._logger.debug(f"{self._state.name} -> {new_state.name}")
        self._state = new_state
        self.feedback_changed = True

    # ========================================
    # Hit testing
    # ========================================

    def hit_test(self, curve, screen_rect, settings, screen_pos) -> Optional[HitResult]:
        """Find the first handle within pick_distance of screen_pos.

        Points are scanned in index order; for each point the tangent handles
        are tested before the anchor. The first match wins, there is no
        closest-candidate tie-break. Zero tangent offsets are never hit.
        """
        screen_pos = Vec2.of(screen_pos)
        screen_rect = Rect.of(screen_rect)
        for index, point in enumerate(curve.points):
            for kind in HIT_ORDER:
                if get_handle(kind).hit_test(point, screen_pos, screen_rect, settings):
                    return HitResult(index, kind)
        return None

    # ========================================
    # Pointer handlers
    # ========================================

    def _handle_pointer_down(self, curve, screen_rect, settings, event) -> bool:
        if self._state.is_active:
            # A drag is already running; extra buttons are ignored
            return False

        pointer = event.screen_position
        hit = None
        if event.button == BUTTON_PRIMARY:
            hit = self.hit_test(curve, screen_rect, settings, pointer)

        if hit is not None:
            point = curve.get_point(hit.index)
            self._selected_index = hit.index
            self._hovered_index = hit.index
            self._hovered_handle = hit.handle
            self._drag = DragContext(
                handle=hit.handle,
                point_index=hit.index,
                start_position=point.position,
                start_pointer=pointer,
                start_pan=settings.pan_offset,
            )
            self._transition(DRAG_STATES[hit.handle])
            self.feedback_changed = True
            self._logger.debug(f"Start dragging {hit.handle.value} of point {hit.index}")
            return False

        if event.is_pan_gesture:
            self._drag = DragContext(
                handle=None,
                start_pointer=pointer,
                start_pan=settings.pan_offset,
            )
            self._transition(InteractionState.PANNING)
            self._logger.debug(f"Start panning from {tuple(settings.pan_offset)}")
            return False

        return False

    def _handle_pointer_move(self, curve, screen_rect, settings, event) -> bool:
        if self._state.is_dragging:
            return self._drag_handle(curve, screen_rect, settings, event.screen_position)
        if self._state is InteractionState.PANNING:
            return self._pan(screen_rect, settings, event.screen_position)

        self._refresh_hover(curve, screen_rect, settings, event.screen_position)
        return False

    def _handle_pointer_up(self, curve, screen_rect, settings, event) -> bool:
        if self._state.is_active:
            self._drag = None
            self._transition(InteractionState.IDLE)
        return False

    # ========================================
    # Drag/pan/hover
    # ========================================

    def _drag_handle(self, curve, screen_rect, settings, pointer) -> bool:
        index = self._drag.point_index
        if curve.get_point(index) is None:
            # Point vanished under the drag (external mutation)
            self._logger.debug(f"Abandoning drag: point {index} no longer exists")
            self._drag = None
            self._selected_index = -1
            self._hovered_index = -1
            self._hovered_handle = None
            self._transition(InteractionState.IDLE)
            return False

        curve_pos = screen_to_curve(pointer, screen_rect, settings)
        return get_handle(self._drag.handle).drag(curve, index, curve_pos, settings)

    def _pan(self, screen_rect, settings, pointer) -> bool:
        """Pan so the curve point grabbed at pointer-down follows the pointer.

        The curve-space delta of the screen delta is converted to normalized
        view units; the visible window moves opposite to the pointer.
        """
        delta = self._drag.pointer_delta(pointer)
        curve_delta = screen_delta_to_curve(delta, screen_rect, settings)
        bounds = settings.view_bounds
        view_delta = Vec2(curve_delta.x * settings.zoom / max(bounds.width, MIN_VIEW_EXTENT),
                          curve_delta.y * settings.zoom / max(bounds.height, MIN_VIEW_EXTENT))

        new_pan = self._drag.start_pan + view_delta
        if new_pan == settings.pan_offset:
            return False
        settings.pan_offset = new_pan
        return True

    def _refresh_hover(self, curve, screen_rect, settings, pointer):
        hit = self.hit_test(curve, screen_rect, settings, pointer)
        previous = (self._hovered_index, self._hovered_handle)

        if hit is not None:
            self._hovered_index = hit.index
            self._hovered_handle = hit.handle
            self._transition(HOVER_STATES[hit.handle])
        else:
            self._hovered_index = -1
            self._hovered_handle = None
            self._transition(InteractionState.IDLE)

        if (self._hovered_index, self._hovered_handle) != previous:
            self.feedback_changed = True

    # ========================================
    # View commands
    # ========================================

    def handle_scroll(self, scroll_delta, screen_pos, screen_rect, settings) -> bool:
        """Zoom about the pointer.

        Positive scroll_delta zooms out, negative zooms in. The curve point
        under screen_pos stays under it.
        """
        self.feedback_changed = False
        old_zoom = settings.zoom
        new_zoom = settings.clamp_zoom(old_zoom * (1.0 - float(scroll_delta) * settings.zoom_speed))
        if abs(new_zoom - old_zoom) < 1e-9:
            return False

        bounds = settings.view_bounds
        pointer_curve = screen_to_curve(screen_pos, Rect.of(screen_rect), settings)
        normalized = Vec2((pointer_curve.x - bounds.x) / max(bounds.width, MIN_VIEW_EXTENT),
                          (pointer_curve.y - bounds.y) / max(bounds.height, MIN_VIEW_EXTENT))
        center_offset = normalized - Vec2(0.5, 0.5)

        settings.zoom = new_zoom
        settings.pan_offset = settings.pan_offset + center_offset * (old_zoom - new_zoom)
        self._logger.debug(f"Zoom {old_zoom:.3f} -> {new_zoom:.3f}")
        return True

    def fit_view(self, curve, settings) -> bool:
        """Frame the curve: view bounds = curve bounds, zoom 1, no pan"""
        if curve.point_count == 0:
            return False
        settings.view_bounds = curve.bounds()
        settings.pan_offset = Vec2(0.0, 0.0)
        settings.zoom = settings.clamp_zoom(1.0)
        self._logger.debug(f"Fit view to {settings.view_bounds}")
        return True

    def update_view_bounds(self, curve, settings) -> bool:
        """Set view bounds to the curve bounds, keeping zoom and pan"""
        if curve.point_count == 0:
            return False
        bounds = curve.bounds()
        if bounds == settings.view_bounds:
            return False
        settings.view_bounds = bounds
        return True

    def reset_view(self, settings) -> bool:
        """Unit view window, zoom 1, no pan"""
        settings.view_bounds = Rect(*DEFAULT_VIEW_BOUNDS)
        settings.pan_offset = Vec2(0.0, 0.0)
        settings.zoom = settings.clamp_zoom(1.0)
        self._logger.debug("Reset view")
        return True

    # ========================================
    # Selection commands
    # ========================================

    def remove_selected_point(self, curve) -> bool:
        """Delete the selected point if the curve keeps at least two points.

        Returns:
            bool: True if a point was removed (selection is then cleared)
        """
        index = self._selected_index
        if curve.get_point(index) is None:
            return False
        if curve.point_count <= MIN_CURVE_POINTS:
            self._logger.debug(f"Refusing to delete point {index}: curve would drop below {MIN_CURVE_POINTS} points")
            return False

        curve.remove_point(index)
        self.clear_selection()
        return True

    def clear_selection(self):
        """Drop selection/hover and abandon any drag"""
        self._selected_index = -1
        self._hovered_index = -1
        self._hovered_handle = None
        self._drag = None
        self._transition(InteractionState.IDLE)
        self.feedback_changed = True
