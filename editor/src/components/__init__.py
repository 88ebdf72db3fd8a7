"""Editing components for the Bezier Curve Editor

This package contains the UI-independent editing layer:
- interaction: Pointer state machine, handle classes and drag context
- editor_session: EditorSession orchestrating curve, settings and controller

Direct imports for convenience:
"""

from .interaction import InteractionController, HitResult, InteractionState, PointerEvent, PointerEventType
from .editor_session import EditorSession, HandleGeometry, SessionStatus

__all__ = [
    'InteractionController',
    'HitResult',
    'InteractionState',
    'PointerEvent',
    'PointerEventType',
    'EditorSession',
    'HandleGeometry',
    'SessionStatus',
]
