"""
Shared fixtures for Bezier Curve Editor tests.

Provides default settings, a screen rectangle, sample curves, an interaction
controller, an editor session and pointer event factories.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))


# ── Geometry ─────────────────────────────────────────────────────────────

SCREEN_RECT = (0.0, 0.0, 400.0, 400.0)


@pytest.fixture
def settings():
    """Fresh default ViewSettings (unit view window, zoom 1, no pan)"""
    from models.view_settings import ViewSettings
    return ViewSettings.default()


@pytest.fixture
def screen_rect():
    """400x400 screen rectangle at the origin"""
    from models.transform import Rect
    return Rect(*SCREEN_RECT)


# ── Curves ───────────────────────────────────────────────────────────────

@pytest.fixture
def two_point_curve():
    """Straight curve (0.25, 0.25) -> (0.75, 0.75) with zero handles"""
    from models.curve import Curve
    from models.transform import Vec2
    return Curve.linear(Vec2(0.25, 0.25), Vec2(0.75, 0.75))


@pytest.fixture
def smooth_curve():
    """Default session curve (0.2, 0.2) -> (0.8, 0.8) with chord handles"""
    from models.curve import Curve
    from models.transform import Vec2
    return Curve.smooth(Vec2(0.2, 0.2), Vec2(0.8, 0.8))


# ── Interaction ──────────────────────────────────────────────────────────

@pytest.fixture
def controller():
    from components.interaction import InteractionController
    return InteractionController()


@pytest.fixture
def session():
    """EditorSession with its default curve and settings"""
    from components.editor_session import EditorSession
    return EditorSession()


@pytest.fixture
def down():
    from components.interaction import PointerEvent
    return PointerEvent.down


@pytest.fixture
def move():
    from components.interaction import PointerEvent
    return PointerEvent.move


@pytest.fixture
def up():
    from components.interaction import PointerEvent
    return PointerEvent.up
