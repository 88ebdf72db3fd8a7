"""Drag context dataclass for the interaction controller.

Unified drag state captured at pointer-down, replacing loose start fields.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.transform import Vec2
from .handles import HandleKind


@dataclass
class DragContext:
    """Start-of-drag references for one handle drag or pan.

    Handle drags re-read the live curve on every move; the captured anchor
    and pointer positions are only references for deltas. Pans have no curve
    state to re-read, so they use start_pan + pointer delta.
    """
    handle: Optional[HandleKind]  # None while panning
    point_index: int = -1
    start_position: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))  # anchor, curve space
    start_pointer: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))   # screen space
    start_pan: Vec2 = field(default_factory=lambda: Vec2(0.0, 0.0))

    @property
    def is_pan(self) -> bool:
        return self.handle is None

    def pointer_delta(self, pointer) -> Vec2:
        """Screen-space displacement since the drag started"""
        return Vec2.of(pointer) - self.start_pointer
