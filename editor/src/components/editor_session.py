"""
Bezier Curve Editor - Editing Session

Orchestrates one editing session for a host UI. Owns:
- The Curve being edited
- The ViewSettings (view window, zoom, pan, tunables)
- The InteractionController

Hosts call it once per input event and query drawing geometry once per
redraw. No rendering or toolkit code lives here: the host draws whatever the
queries return.

Usage:
    session = EditorSession()
    rect = Rect(0, 0, 800, 600)
    if session.handle_pointer(PointerEvent.down((400, 300)), rect):
        mark_document_dirty()
    if session.needs_repaint:
        request_redraw()
    polyline = session.curve_polyline(rect)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from models.curve import Curve
from models.transform import Vec2, Rect
from models.view_settings import ViewSettings
from utils import coordinate_transforms
from constants import DEFAULT_CURVE_START, DEFAULT_CURVE_END
from components.interaction import InteractionController, PointerEventType, HandleKind

logger = logging.getLogger(__name__)

DELETE_KEYS = ('delete', 'backspace')
FIT_VIEW_KEY = 'f'


@dataclass
class HandleGeometry:
    """Screen-space handle positions of one point, for drawing.

    control_in/control_out are None while the handle offset is zero.
    """
    index: int
    anchor: Vec2
    control_in: Optional[Vec2]
    control_out: Optional[Vec2]
    selected: bool = False
    hovered: bool = False
    hovered_handle: Optional[HandleKind] = None


@dataclass
class SessionStatus:
    """Status bar data"""
    cursor: Optional[Vec2]
    zoom: float
    pan: Vec2
    point_count: int

    def format(self) -> str:
        cursor = f"X: {self.cursor.x:.2f}  Y: {self.cursor.y:.2f}" if self.cursor is not None else ""
        return (f"{cursor} | Zoom: {self.zoom:.2f} | "
                f"Pan: ({self.pan.x:.2f}, {self.pan.y:.2f}) | Points: {self.point_count}")


class EditorSession:
    """One curve editing session.

    Properties:
        curve: Curve being edited
        settings: ViewSettings of this session
        controller: InteractionController
        dirty: Set when persistent state changed; hosts clear it after saving
        needs_repaint: True if the last call changed anything visible
    """

    def __init__(self, curve: Curve = None, settings: ViewSettings = None):
        self.curve = curve if curve is not None else Curve.smooth(Vec2.of(DEFAULT_CURVE_START),
                                                                  Vec2.of(DEFAULT_CURVE_END))
        self.settings = settings if settings is not None else ViewSettings.default()
        self.controller = InteractionController()
        self.dirty = False
        self.needs_repaint = True
        self._last_pointer = None

        self.controller.update_view_bounds(self.curve, self.settings)
        logger.debug(f"Session started with {self.curve!r}")

    # ========================================
    # Input
    # ========================================

    def handle_pointer(self, event, screen_rect) -> bool:
        """Forward a pointer event to the controller.

        Pointer-down outside the screen rectangle is ignored, and a collapsed
        rectangle drops downs and moves. Ups are always forwarded so drags end
        cleanly.

        Returns:
            bool: True if persistent state changed
        """
        screen_rect = Rect.of(screen_rect)
        self._last_pointer = event.screen_position
        collapsed = screen_rect.width <= 0 or screen_rect.height <= 0
        if collapsed and event.type is not PointerEventType.UP:
            self.needs_repaint = False
            return False
        if event.type is PointerEventType.DOWN and not screen_rect.contains(event.screen_position):
            self.needs_repaint = False
            return False

        changed = self.controller.handle_pointer(self.curve, screen_rect, self.settings, event)
        return self._after_input(changed, self.controller.feedback_changed)

    def handle_scroll(self, scroll_delta, screen_pos, screen_rect) -> bool:
        """Zoom about screen_pos (positive delta zooms out)"""
        screen_rect = Rect.of(screen_rect)
        if not screen_rect.contains(Vec2.of(screen_pos)):
            self.needs_repaint = False
            return False
        changed = self.controller.handle_scroll(scroll_delta, Vec2.of(screen_pos), screen_rect, self.settings)
        return self._after_input(changed, False)

    def handle_key(self, key: str, modifiers=()) -> bool:
        """Keyboard shortcuts: Delete/Backspace removes the selection, F fits the view.

        Returns:
            bool: True if the key was handled and changed persistent state
        """
        key = key.lower()
        if key in DELETE_KEYS:
            return self.delete_selected_point()
        if key == FIT_VIEW_KEY:
            return self.fit_view()
        self.needs_repaint = False
        return False

    def _after_input(self, changed, feedback_changed) -> bool:
        if changed:
            self.dirty = True
        self.needs_repaint = changed or feedback_changed
        return changed

    # ========================================
    # Commands
    # ========================================

    def delete_selected_point(self) -> bool:
        if not self.controller.remove_selected_point(self.curve):
            self.needs_repaint = False
            return False
        self.controller.update_view_bounds(self.curve, self.settings)
        logger.debug(f"Deleted selected point, {self.curve.point_count} left")
        return self._after_input(True, True)

    def fit_view(self) -> bool:
        return self._after_input(self.controller.fit_view(self.curve, self.settings), False)

    def reset_view(self) -> bool:
        return self._after_input(self.controller.reset_view(self.settings), False)

    def toggle_grid(self) -> bool:
        self.settings.show_grid = not self.settings.show_grid
        self.needs_repaint = True
        return self.settings.show_grid

    # ========================================
    # Drawing queries
    # ========================================

    def curve_polyline(self, screen_rect):
        """Screen-space polyline of the curve, numpy array (N, 2)"""
        samples = self.curve.sample(self.settings.curve_resolution)
        return coordinate_transforms.curve_to_screen_array(samples, screen_rect, self.settings)

    def handle_geometry(self, screen_rect) -> List[HandleGeometry]:
        """Screen positions of every anchor and present tangent handle"""
        screen_rect = Rect.of(screen_rect)

        def to_screen(p):
            return coordinate_transforms.curve_to_screen(p, screen_rect, self.settings)

        geometry = []
        for index, point in enumerate(self.curve.points):
            hovered = index == self.controller.hovered_index
            geometry.append(HandleGeometry(
                index=index,
                anchor=to_screen(point.position),
                control_in=None if point.control_in.is_zero() else to_screen(point.control_in_world()),
                control_out=None if point.control_out.is_zero() else to_screen(point.control_out_world()),
                selected=index == self.controller.selected_index,
                hovered=hovered,
                hovered_handle=self.controller.hovered_handle if hovered else None,
            ))
        return geometry

    def grid_lines(self, screen_rect):
        """Background grid for this redraw, or None while the grid is hidden"""
        if not self.settings.show_grid:
            return None
        return coordinate_transforms.grid_lines(screen_rect, self.settings)

    def status(self, screen_rect, pointer=None) -> SessionStatus:
        """Status bar data; cursor is the pointer in curve space when inside screen_rect"""
        screen_rect = Rect.of(screen_rect)
        pointer = self._last_pointer if pointer is None else Vec2.of(pointer)
        cursor = None
        if pointer is not None and screen_rect.width > 0 and screen_rect.height > 0 \
                and screen_rect.contains(pointer):
            cursor = coordinate_transforms.screen_to_curve(pointer, screen_rect, self.settings)
        return SessionStatus(cursor=cursor, zoom=self.settings.zoom,
                             pan=self.settings.pan_offset, point_count=self.curve.point_count)
