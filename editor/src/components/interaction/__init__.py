"""
Bezier Curve Editor - Interaction Components

This package contains the pointer interaction architecture:
- handles.py: ABC-based handle classes (AnchorHandle, TangentInHandle, TangentOutHandle)
- states.py: InteractionState enum and handle -> state tables
- events.py: Normalized PointerEvent delivered by hosts
- drag_context.py: Unified drag state management
- controller.py: InteractionController state machine
"""

from .handles import (
    HandleKind, Handle, AnchorHandle, TangentInHandle, TangentOutHandle,
    HIT_ORDER, get_handle, snap_to_grid
)
from .states import InteractionState, HOVER_STATES, DRAG_STATES
from .events import PointerEvent, PointerEventType
from .drag_context import DragContext
from .controller import InteractionController, HitResult

__all__ = [
    'HandleKind', 'Handle', 'AnchorHandle', 'TangentInHandle', 'TangentOutHandle',
    'HIT_ORDER', 'get_handle', 'snap_to_grid',
    'InteractionState', 'HOVER_STATES', 'DRAG_STATES',
    'PointerEvent', 'PointerEventType',
    'DragContext',
    'InteractionController', 'HitResult',
]
