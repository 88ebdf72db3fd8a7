"""Interaction states - the controller's finite state set."""

from enum import Enum

from .handles import HandleKind


class InteractionState(Enum):
	"""At most one interaction is active at any time."""
	IDLE = 'idle'
	HOVER_ANCHOR = 'hover_anchor'
	HOVER_TANGENT_IN = 'hover_tangent_in'
	HOVER_TANGENT_OUT = 'hover_tangent_out'
	DRAGGING_ANCHOR = 'dragging_anchor'
	DRAGGING_TANGENT_IN = 'dragging_tangent_in'
	DRAGGING_TANGENT_OUT = 'dragging_tangent_out'
	PANNING = 'panning'

	@property
	def is_dragging(self):
		return self in DRAG_STATES.values()

	@property
	def is_active(self):
		"""True while a pointer drag (handle drag or pan) is in progress."""
		return self.is_dragging or self is InteractionState.PANNING


HOVER_STATES = {
	HandleKind.ANCHOR: InteractionState.HOVER_ANCHOR,
	HandleKind.TANGENT_IN: InteractionState.HOVER_TANGENT_IN,
	HandleKind.TANGENT_OUT: InteractionState.HOVER_TANGENT_OUT,
}

DRAG_STATES = {
	HandleKind.ANCHOR: InteractionState.DRAGGING_ANCHOR,
	HandleKind.TANGENT_IN: InteractionState.DRAGGING_TANGENT_IN,
	HandleKind.TANGENT_OUT: InteractionState.DRAGGING_TANGENT_OUT,
}
