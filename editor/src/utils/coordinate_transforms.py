"""Coordinate transformation utilities for curve editing views.

Provides conversion between the two coordinate systems:
- Curve space (authoring space, Y-up)
- Screen space (host pixels inside a screen rectangle, Y-down)

The mapping is affine:
	curve -> normalized [0,1] by view_bounds -> zoom about 0.5 -> + pan_offset
	-> linear map onto the screen rectangle with Y flipped

Also computes the adaptive background grid (step size and line positions).

Degenerate inputs are clamped instead of raising: screen rectangles are at
least MIN_SCREEN_EXTENT wide/high and view bounds at least MIN_VIEW_EXTENT.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from models.transform import Vec2, Rect
from constants import (
	MIN_SCREEN_EXTENT, MIN_VIEW_EXTENT,
	MIN_GRID_STEP, MAX_GRID_STEP, MIN_GRID_LINES, MAX_GRID_LINES,
	GRID_STEP_LADDER, GRID_LOG_RANGE,
)


def _screen_size(screen_rect):
	return (max(screen_rect.width, MIN_SCREEN_EXTENT),
	        max(screen_rect.height, MIN_SCREEN_EXTENT))


def _view_size(settings):
	bounds = settings.view_bounds
	return (max(bounds.width, MIN_VIEW_EXTENT),
	        max(bounds.height, MIN_VIEW_EXTENT))


def _zoom(settings):
	return max(float(settings.zoom), 1e-6)


def curve_to_screen(curve_point, screen_rect, settings):
	"""Convert a curve-space point to screen coordinates.

	Args:
		curve_point: Vec2 in curve space
		screen_rect: Rect of the drawing area (top-left origin, Y-down)
		settings: ViewSettings with view_bounds, zoom, pan_offset

	Returns:
		Vec2 in screen pixels
	"""
	curve_point = Vec2.of(curve_point)
	screen_rect = Rect.of(screen_rect)
	view_w, view_h = _view_size(settings)
	screen_w, screen_h = _screen_size(screen_rect)
	zoom = _zoom(settings)
	pan = settings.pan_offset

	# Normalize into the view window [0,1]
	view_x = (curve_point.x - settings.view_bounds.x) / view_w
	view_y = (curve_point.y - settings.view_bounds.y) / view_h

	# Zoom about the centre
	view_x = (view_x - 0.5) * zoom + 0.5
	view_y = (view_y - 0.5) * zoom + 0.5

	# Pan
	view_x += pan.x
	view_y += pan.y

	# Onto the screen rectangle, Y flipped (screen Y grows downward)
	screen_x = screen_rect.x + view_x * screen_w
	screen_y = (screen_rect.y + screen_h) - view_y * screen_h
	return Vec2(screen_x, screen_y)


def screen_to_curve(screen_point, screen_rect, settings):
	"""Convert screen coordinates to curve space (exact inverse of curve_to_screen).

	Args:
		screen_point: Vec2 in screen pixels
		screen_rect: Rect of the drawing area
		settings: ViewSettings

	Returns:
		Vec2 in curve space
	"""
	screen_point = Vec2.of(screen_point)
	screen_rect = Rect.of(screen_rect)
	view_w, view_h = _view_size(settings)
	screen_w, screen_h = _screen_size(screen_rect)
	zoom = _zoom(settings)
	pan = settings.pan_offset

	# Off the screen rectangle, Y flipped
	view_x = (screen_point.x - screen_rect.x) / screen_w
	view_y = ((screen_rect.y + screen_h) - screen_point.y) / screen_h

	# Remove pan
	view_x -= pan.x
	view_y -= pan.y

	# Undo zoom about the centre
	view_x = (view_x - 0.5) / zoom + 0.5
	view_y = (view_y - 0.5) / zoom + 0.5

	# Out of the view window
	return Vec2(view_x * view_w + settings.view_bounds.x,
	            view_y * view_h + settings.view_bounds.y)


def screen_delta_to_curve(screen_delta, screen_rect, settings):
	"""Convert a screen-space displacement to a curve-space displacement.

	The transform is affine, so a delta maps as the difference between the
	transformed delta and the transformed origin.
	"""
	return (screen_to_curve(screen_delta, screen_rect, settings)
	        - screen_to_curve(Vec2.ZERO, screen_rect, settings))


def curve_to_screen_array(points, screen_rect, settings):
	"""Vectorized curve_to_screen for an (N, 2) array of curve-space points.

	Returns:
		numpy array of shape (N, 2) in screen pixels
	"""
	points = np.asarray(points, dtype=float).reshape(-1, 2)
	screen_rect = Rect.of(screen_rect)
	view_w, view_h = _view_size(settings)
	screen_w, screen_h = _screen_size(screen_rect)
	zoom = _zoom(settings)

	origin = np.array([settings.view_bounds.x, settings.view_bounds.y])
	view = (points - origin) / np.array([view_w, view_h])
	view = (view - 0.5) * zoom + 0.5
	view = view + np.array([settings.pan_offset.x, settings.pan_offset.y])

	screen = np.empty_like(view)
	screen[:, 0] = screen_rect.x + view[:, 0] * screen_w
	screen[:, 1] = (screen_rect.y + screen_h) - view[:, 1] * screen_h
	return screen


def visible_bounds(screen_rect, settings):
	"""Curve-space rectangle currently visible inside screen_rect."""
	screen_rect = Rect.of(screen_rect)
	screen_w, screen_h = _screen_size(screen_rect)
	corners = [
		screen_to_curve(Vec2(screen_rect.x, screen_rect.y), screen_rect, settings),
		screen_to_curve(Vec2(screen_rect.x + screen_w, screen_rect.y), screen_rect, settings),
		screen_to_curve(Vec2(screen_rect.x, screen_rect.y + screen_h), screen_rect, settings),
		screen_to_curve(Vec2(screen_rect.x + screen_w, screen_rect.y + screen_h), screen_rect, settings),
	]
	min_corner = Vec2(min(c.x for c in corners), min(c.y for c in corners))
	max_corner = Vec2(max(c.x for c in corners), max(c.y for c in corners))
	return Rect.from_min_max(min_corner, max_corner)


# ======================================================================
# ADAPTIVE GRID
# ======================================================================

def grid_step(visible_extent):
	"""Grid step (curve units) for an axis showing visible_extent units.

	Log-scale interpolation between MIN_GRID_STEP and MAX_GRID_STEP, bounded
	so the axis shows between MIN_GRID_LINES and MAX_GRID_LINES lines, then
	aligned to GRID_STEP_LADDER so lines stay put while panning.

	Non-decreasing in visible_extent, so non-increasing in zoom. Always
	within [MIN_GRID_STEP, MAX_GRID_STEP].
	"""
	extent = max(float(visible_extent), 1e-12)
	log_min, log_max = GRID_LOG_RANGE

	normalized = (math.log10(max(extent, 0.001)) - log_min) / (log_max - log_min)
	normalized = max(0.0, min(1.0, normalized))
	step = MIN_GRID_STEP + (MAX_GRID_STEP - MIN_GRID_STEP) * normalized

	# Inclusive line positions: count <= extent/step + 1
	densest = extent / (MAX_GRID_LINES - 1)
	sparsest = extent / MIN_GRID_LINES
	step = min(max(step, densest), sparsest)

	at_or_below = [s for s in GRID_STEP_LADDER if s <= step]
	aligned = at_or_below[-1] if at_or_below else GRID_STEP_LADDER[0]
	at_or_above = [s for s in GRID_STEP_LADDER if s >= densest]
	fallback = at_or_above[0] if at_or_above else GRID_STEP_LADDER[-1]

	return max(aligned, fallback)


def grid_steps(settings):
	"""Per-axis grid step for the current view.

	The visible extent of an axis is its view_bounds size divided by zoom,
	independent of the screen rectangle.
	"""
	view_w, view_h = _view_size(settings)
	zoom = _zoom(settings)
	return Vec2(grid_step(view_w / zoom), grid_step(view_h / zoom))


@dataclass
class GridLine:
	"""One grid line: its curve-space coordinate and screen coordinate."""
	value: float
	screen: float


@dataclass
class GridLayout:
	"""Background grid for one redraw.

	vertical lines are constant-x (screen x in GridLine.screen), horizontal
	lines constant-y (screen y). axis_x/axis_y are the screen positions of the
	curve-space x=0 and y=0 lines when visible.
	"""
	step: Vec2
	vertical: List[GridLine] = field(default_factory=list)
	horizontal: List[GridLine] = field(default_factory=list)
	axis_x: Optional[float] = None
	axis_y: Optional[float] = None


def _line_values(lower, upper, step):
	"""Multiples of step inside [lower, upper], at most MAX_GRID_LINES of them."""
	first = math.ceil(lower / step - 1e-9)
	last = math.floor(upper / step + 1e-9)
	count = last - first + 1
	if count <= 0:
		return []

	# Far outside the tuned zoom range: keep every n-th line, still aligned
	stride = max(1, math.ceil(count / MAX_GRID_LINES))
	first = math.ceil(first / stride) * stride
	return [k * step for k in range(first, last + 1, stride)]


def grid_lines(screen_rect, settings):
	"""Compute grid line positions for screen_rect.

	Returns:
		GridLayout with screen-space line coordinates
	"""
	screen_rect = Rect.of(screen_rect)
	bounds = visible_bounds(screen_rect, settings)
	steps = grid_steps(settings)
	layout = GridLayout(step=steps)

	for x in _line_values(bounds.x_min, bounds.x_max, steps.x):
		screen = curve_to_screen(Vec2(x, bounds.y_min), screen_rect, settings)
		layout.vertical.append(GridLine(x, screen.x))

	for y in _line_values(bounds.y_min, bounds.y_max, steps.y):
		screen = curve_to_screen(Vec2(bounds.x_min, y), screen_rect, settings)
		layout.horizontal.append(GridLine(y, screen.y))

	origin = curve_to_screen(Vec2.ZERO, screen_rect, settings)
	if bounds.x_min <= 0.0 <= bounds.x_max:
		layout.axis_x = origin.x
	if bounds.y_min <= 0.0 <= bounds.y_max:
		layout.axis_y = origin.y

	return layout
