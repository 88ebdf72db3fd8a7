"""
Tests for CurvePoint: relative handles, world-space access, the mirror rule
and dict serialization.
"""
import pytest

from models.curve_point import CurvePoint
from models.transform import Vec2


# ══════════════════════════════════════════════════════════════════════════
# Construction & world-space handles
# ══════════════════════════════════════════════════════════════════════════

class TestCurvePointHandles:

    def test_defaults_are_zero(self):
        point = CurvePoint()
        assert point.position == Vec2.ZERO
        assert point.control_in == Vec2.ZERO
        assert point.control_out == Vec2.ZERO
        assert not point.auto_tangents
        assert not point.mirror_tangents

    def test_world_positions_follow_anchor(self):
        point = CurvePoint(Vec2(1.0, 1.0), Vec2(-0.5, 0.0), Vec2(0.5, 0.25))
        assert point.control_in_world() == Vec2(0.5, 1.0)
        assert point.control_out_world() == Vec2(1.5, 1.25)

        point.position = Vec2(2.0, 2.0)
        assert point.control_in == Vec2(-0.5, 0.0)  # offsets unchanged
        assert point.control_out_world() == Vec2(2.5, 2.25)

    def test_set_world_stores_offset(self):
        point = CurvePoint(Vec2(1.0, 1.0))
        point.set_control_out_world(Vec2(1.5, 2.0))
        assert point.control_out == Vec2(0.5, 1.0)
        point.set_control_in_world((0.0, 1.0))
        assert point.control_in == Vec2(-1.0, 0.0)

    def test_tuple_inputs_coerced(self):
        point = CurvePoint((1, 2), (0, 1), (3, 4))
        assert isinstance(point.position, Vec2)
        assert point.control_out == Vec2(3.0, 4.0)


# ══════════════════════════════════════════════════════════════════════════
# Mirror rule
# ══════════════════════════════════════════════════════════════════════════

class TestMirrorTangents:

    def test_setting_out_mirrors_in(self):
        point = CurvePoint(mirror_tangents=True)
        point.control_out = Vec2(0.3, -0.2)
        assert point.control_in == Vec2(-0.3, 0.2)

    def test_setting_in_mirrors_out(self):
        point = CurvePoint(mirror_tangents=True)
        point.control_in = Vec2(0.1, 0.4)
        assert point.control_out == Vec2(-0.1, -0.4)

    def test_world_setter_mirrors(self):
        point = CurvePoint(Vec2(1.0, 1.0), mirror_tangents=True)
        point.set_control_in_world(Vec2(0.5, 1.0))
        assert point.control_out_world() == Vec2(1.5, 1.0)

    def test_enabling_flag_forces_mirror(self):
        point = CurvePoint(control_in=Vec2(-1.0, 0.0), control_out=Vec2(0.2, 0.2))
        point.mirror_tangents = True
        assert point.control_out == Vec2(0.2, 0.2)
        assert point.control_in == Vec2(-0.2, -0.2)

    def test_without_flag_handles_independent(self):
        point = CurvePoint(control_in=Vec2(-1.0, 0.0))
        point.control_out = Vec2(0.0, 2.0)
        assert point.control_in == Vec2(-1.0, 0.0)


# ══════════════════════════════════════════════════════════════════════════
# Serialization
# ══════════════════════════════════════════════════════════════════════════

class TestCurvePointSerialization:

    def test_to_dict(self):
        point = CurvePoint(Vec2(1.0, 2.0), Vec2(-0.5, 0.0), Vec2(0.5, 0.0), auto_tangents=True)
        assert point.to_dict() == {
            'position': [1.0, 2.0],
            'control_in': [-0.5, 0.0],
            'control_out': [0.5, 0.0],
            'auto_tangents': True,
            'mirror_tangents': False,
        }

    def test_from_dict_restores_point(self):
        original = CurvePoint(Vec2(0.2, 0.3), Vec2(-0.1, 0.0), Vec2(0.1, 0.0), mirror_tangents=True)
        assert CurvePoint.from_dict(original.to_dict()) == original

    def test_from_dict_optional_fields(self):
        point = CurvePoint.from_dict({'position': [0.5, 0.5]})
        assert point.control_in == Vec2.ZERO
        assert point.control_out == Vec2.ZERO

    @pytest.mark.parametrize("data", [
        None,
        {},
        {'position': [1.0]},
        {'position': ['a', 'b']},
        {'position': [float('nan'), 0.0]},
        {'position': [0.0, 0.0], 'control_out': [float('inf'), 0.0]},
    ])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            CurvePoint.from_dict(data)

    def test_copy_is_independent(self):
        point = CurvePoint(Vec2(1.0, 1.0), control_out=Vec2(0.5, 0.0))
        clone = point.copy()
        assert clone == point
        clone.position = Vec2(3.0, 3.0)
        assert point.position == Vec2(1.0, 1.0)
