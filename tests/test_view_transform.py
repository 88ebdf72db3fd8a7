"""
Tests for curve <-> screen coordinate conversion.

Covers:
- Known mappings (Y flip, zoom about the centre, pan)
- Round trips over a range of views
- Delta conversion
- Degenerate screen rectangles and view windows
- Vectorized conversion and visible bounds
"""
import math
import pytest

from models.transform import Vec2, Rect
from utils.coordinate_transforms import (
    curve_to_screen, screen_to_curve, screen_delta_to_curve,
    curve_to_screen_array, visible_bounds,
)


def assert_vec_close(actual, expected, tol=1e-9):
    assert actual.x == pytest.approx(expected.x, abs=tol)
    assert actual.y == pytest.approx(expected.y, abs=tol)


# ══════════════════════════════════════════════════════════════════════════
# Known mappings
# ══════════════════════════════════════════════════════════════════════════

class TestCurveToScreen:

    def test_unit_view_corners(self, settings, screen_rect):
        assert_vec_close(curve_to_screen(Vec2(0.0, 0.0), screen_rect, settings), Vec2(0.0, 400.0))
        assert_vec_close(curve_to_screen(Vec2(1.0, 1.0), screen_rect, settings), Vec2(400.0, 0.0))
        assert_vec_close(curve_to_screen(Vec2(0.5, 0.5), screen_rect, settings), Vec2(200.0, 200.0))

    def test_y_axis_flipped(self, settings, screen_rect):
        low = curve_to_screen(Vec2(0.5, 0.1), screen_rect, settings)
        high = curve_to_screen(Vec2(0.5, 0.9), screen_rect, settings)
        assert high.y < low.y

    def test_zoom_about_centre(self, settings, screen_rect):
        settings.zoom = 2.0
        assert_vec_close(curve_to_screen(Vec2(0.5, 0.5), screen_rect, settings), Vec2(200.0, 200.0))
        assert_vec_close(curve_to_screen(Vec2(0.75, 0.75), screen_rect, settings), Vec2(400.0, 0.0))

    def test_pan_in_view_units(self, settings, screen_rect):
        settings.pan_offset = Vec2(0.1, -0.25)
        assert_vec_close(curve_to_screen(Vec2(0.5, 0.5), screen_rect, settings), Vec2(240.0, 300.0))

    def test_view_bounds_normalize(self, settings, screen_rect):
        settings.view_bounds = Rect(-1.0, -1.0, 2.0, 2.0)
        assert_vec_close(curve_to_screen(Vec2(0.0, 0.0), screen_rect, settings), Vec2(200.0, 200.0))

    def test_offset_screen_rect(self, settings):
        rect = Rect(100.0, 50.0, 200.0, 100.0)
        assert_vec_close(curve_to_screen(Vec2(0.0, 0.0), rect, settings), Vec2(100.0, 150.0))
        assert_vec_close(curve_to_screen(Vec2(1.0, 1.0), rect, settings), Vec2(300.0, 50.0))


# ══════════════════════════════════════════════════════════════════════════
# Round trips
# ══════════════════════════════════════════════════════════════════════════

class TestRoundTrip:

    @pytest.mark.parametrize("zoom", [0.1, 0.5, 1.0, 3.7, 10.0])
    @pytest.mark.parametrize("pan", [(0.0, 0.0), (0.3, -0.2), (-1.5, 2.0)])
    def test_curve_screen_curve(self, settings, zoom, pan):
        settings.zoom = zoom
        settings.pan_offset = Vec2(*pan)
        settings.view_bounds = Rect(-0.5, 0.2, 3.0, 1.5)
        rect = Rect(12.0, 30.0, 640.0, 480.0)
        for point in [Vec2(0.0, 0.0), Vec2(0.37, 0.81), Vec2(-2.0, 5.0), Vec2(2.5, 1.7)]:
            back = screen_to_curve(curve_to_screen(point, rect, settings), rect, settings)
            assert_vec_close(back, point, tol=1e-3)

    def test_screen_curve_screen(self, settings, screen_rect):
        settings.zoom = 2.5
        settings.pan_offset = Vec2(0.05, 0.1)
        for pixel in [Vec2(0.0, 0.0), Vec2(123.0, 321.0), Vec2(400.0, 400.0)]:
            back = curve_to_screen(screen_to_curve(pixel, screen_rect, settings), screen_rect, settings)
            assert_vec_close(back, pixel, tol=1e-6)


# ══════════════════════════════════════════════════════════════════════════
# Deltas
# ══════════════════════════════════════════════════════════════════════════

class TestScreenDelta:

    def test_horizontal_delta(self, settings, screen_rect):
        assert_vec_close(screen_delta_to_curve(Vec2(40.0, 0.0), screen_rect, settings), Vec2(0.1, 0.0))

    def test_vertical_delta_flipped(self, settings, screen_rect):
        assert_vec_close(screen_delta_to_curve(Vec2(0.0, 40.0), screen_rect, settings), Vec2(0.0, -0.1))

    def test_delta_independent_of_pan(self, settings, screen_rect):
        before = screen_delta_to_curve(Vec2(10.0, 10.0), screen_rect, settings)
        settings.pan_offset = Vec2(0.4, 0.4)
        assert_vec_close(screen_delta_to_curve(Vec2(10.0, 10.0), screen_rect, settings), before)

    def test_delta_scales_with_zoom(self, settings, screen_rect):
        settings.zoom = 2.0
        assert_vec_close(screen_delta_to_curve(Vec2(40.0, 0.0), screen_rect, settings), Vec2(0.05, 0.0))


# ══════════════════════════════════════════════════════════════════════════
# Degenerate inputs
# ══════════════════════════════════════════════════════════════════════════

class TestDegenerateInputs:

    def test_zero_size_screen_rect_clamped(self, settings):
        rect = Rect(10.0, 10.0, 0.0, 0.0)
        screen = curve_to_screen(Vec2(0.5, 0.5), rect, settings)
        assert screen == Vec2(10.5, 10.5)
        back = screen_to_curve(screen, rect, settings)
        assert_vec_close(back, Vec2(0.5, 0.5))

    def test_zero_size_view_bounds_finite(self, settings, screen_rect):
        settings.view_bounds = Rect(0.0, 0.0, 0.0, 0.0)
        screen = curve_to_screen(Vec2(0.5, 0.5), screen_rect, settings)
        assert math.isfinite(screen.x) and math.isfinite(screen.y)
        curve = screen_to_curve(Vec2(200.0, 200.0), screen_rect, settings)
        assert math.isfinite(curve.x) and math.isfinite(curve.y)

    def test_tuple_inputs(self, settings):
        screen = curve_to_screen((0.5, 0.5), (0, 0, 400, 400), settings)
        assert_vec_close(screen, Vec2(200.0, 200.0))


# ══════════════════════════════════════════════════════════════════════════
# Vectorized conversion & visible bounds
# ══════════════════════════════════════════════════════════════════════════

class TestArrayAndVisibleBounds:

    def test_array_matches_scalar(self, settings, screen_rect):
        settings.zoom = 1.7
        settings.pan_offset = Vec2(-0.1, 0.2)
        points = [(0.0, 0.0), (0.25, 0.9), (1.3, -0.4)]
        screen = curve_to_screen_array(points, screen_rect, settings)
        assert screen.shape == (3, 2)
        for row, point in zip(screen, points):
            expected = curve_to_screen(Vec2(*point), screen_rect, settings)
            assert row[0] == pytest.approx(expected.x)
            assert row[1] == pytest.approx(expected.y)

    def test_visible_bounds_default(self, settings, screen_rect):
        bounds = visible_bounds(screen_rect, settings)
        assert bounds.x == pytest.approx(0.0)
        assert bounds.y == pytest.approx(0.0)
        assert bounds.width == pytest.approx(1.0)
        assert bounds.height == pytest.approx(1.0)

    def test_visible_bounds_zoomed(self, settings, screen_rect):
        settings.zoom = 2.0
        bounds = visible_bounds(screen_rect, settings)
        assert bounds.x_min == pytest.approx(0.25)
        assert bounds.x_max == pytest.approx(0.75)
