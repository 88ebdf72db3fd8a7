"""Normalized pointer events delivered by hosts.

Hosts translate their native mouse/touch events into PointerEvent before
handing them to the controller, so the engine never touches a UI toolkit.
"""

from dataclasses import dataclass, field
from enum import Enum

from models.transform import Vec2
from constants import BUTTON_PRIMARY, BUTTON_MIDDLE


class PointerEventType(Enum):
    DOWN = 'down'
    MOVE = 'move'
    UP = 'up'


@dataclass(frozen=True)
class PointerEvent:
    """One pointer event in screen space.

    modifiers is a set of lowercase names: {'alt', 'ctrl', 'shift'}
    """
    type: PointerEventType
    screen_position: Vec2
    button: int = BUTTON_PRIMARY
    modifiers: frozenset = field(default_factory=frozenset)

    @classmethod
    def down(cls, position, button=BUTTON_PRIMARY, modifiers=()):
        return cls(PointerEventType.DOWN, Vec2.of(position), button, frozenset(modifiers))

    @classmethod
    def move(cls, position, button=BUTTON_PRIMARY, modifiers=()):
        return cls(PointerEventType.MOVE, Vec2.of(position), button, frozenset(modifiers))

    @classmethod
    def up(cls, position, button=BUTTON_PRIMARY, modifiers=()):
        return cls(PointerEventType.UP, Vec2.of(position), button, frozenset(modifiers))

    @property
    def alt(self) -> bool:
        return 'alt' in self.modifiers

    @property
    def is_pan_gesture(self) -> bool:
        """Middle button, or primary button with alt held"""
        return self.button == BUTTON_MIDDLE or (self.button == BUTTON_PRIMARY and self.alt)
