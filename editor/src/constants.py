"""
Bezier Curve Editor - Constants and Configuration

This module contains all constant values used throughout the engine:
- Default curve layout
- Bezier evaluation/sampling defaults
- View defaults (bounds, zoom limits, pan)
- Interaction tunables (pick distance, snapping)
- Adaptive grid parameters
- Display defaults used by hosts when drawing
"""

# ======================================================================
# DEFAULT CURVE
# ======================================================================

# Endpoints of the curve a new editing session starts with
DEFAULT_CURVE_START = (0.2, 0.2)
DEFAULT_CURVE_END = (0.8, 0.8)

# Smooth factory places handles at this fraction of the chord length
SMOOTH_TANGENT_WEIGHT = 0.33

# Curve sampling density (polyline approximations)
CURVE_RESOLUTION_MIN = 2
DEFAULT_CURVE_RESOLUTION = 100

# ======================================================================
# BEZIER MATH
# ======================================================================

# Uniform samples used by distance/length approximations
DEFAULT_SAMPLE_COUNT = 100

# ======================================================================
# BOUNDS
# ======================================================================

# Margin added on each side of Curve.bounds(), as a fraction of the extent
BOUNDS_MARGIN = 0.1

# Degenerate extents are floored to this size (curve-space units)
BOUNDS_MIN_SIZE = 0.1

# Bounds returned for an empty curve (x, y, width, height)
EMPTY_CURVE_BOUNDS = (0.0, 0.0, 1.0, 1.0)

# ======================================================================
# VIEW
# ======================================================================

# Curve-space window mapped onto the screen rectangle (x, y, width, height)
DEFAULT_VIEW_BOUNDS = (0.0, 0.0, 1.0, 1.0)

DEFAULT_ZOOM = 1.0
MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
ZOOM_SPEED = 0.1

# Screen rectangles are clamped to at least this many units per side
MIN_SCREEN_EXTENT = 1.0

# View bounds are clamped to at least this size per side
MIN_VIEW_EXTENT = 1e-6

# ======================================================================
# INTERACTION
# ======================================================================

# Hit-test radius in screen pixels
PICK_DISTANCE = 10.0

# Grid snapping (curve-space units)
SNAP_TO_GRID = False
SNAP_DISTANCE = 0.1
GRID_SUBDIVISIONS = 10

# Curves never drop below this many points through interactive deletion
MIN_CURVE_POINTS = 2

# Button ids as delivered by hosts
BUTTON_PRIMARY = 0
BUTTON_SECONDARY = 1
BUTTON_MIDDLE = 2

# ======================================================================
# ADAPTIVE GRID
# ======================================================================

MIN_GRID_STEP = 0.005
MAX_GRID_STEP = 0.5

# Line count per axis the adaptive step aims for
MIN_GRID_LINES = 5
MAX_GRID_LINES = 50

# Candidate steps, each a multiple or divisor of 0.05.
# Consecutive ratio never exceeds 2.5.
GRID_STEP_LADDER = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5)

# log10 of the visible extent mapped onto [MIN_GRID_STEP, MAX_GRID_STEP]
GRID_LOG_RANGE = (-3.0, 1.0)

# ======================================================================
# DISPLAY DEFAULTS
# ======================================================================

SHOW_GRID = True
SHOW_CONTROL_POINTS = True
SHOW_TANGENT_LINES = True
SHOW_CURVE = True

POINT_SIZE = 8.0
SELECTED_POINT_SIZE = 10.0
TANGENT_HANDLE_SIZE = 6.0
CURVE_WIDTH = 2.0
TANGENT_LINE_WIDTH = 1.0

# ======================================================================
# LOGGING
# ======================================================================

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
