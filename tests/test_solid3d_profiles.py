"""Tests for solid3d solids built from 2D profiles."""

import numpy as np
import numpy.testing as npt
import pytest

from profile2d import AABB, Box2D, Circle2D
from solid3d import (
    InvalidParameter,
    Revolve3D, Extrude3D, TwistExtrude3D, ScaleExtrude3D, ScaleTwistExtrude3D,
    ExtrudeRounded3D, Loft3D,
    revolve, twist_extrude,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p(*xyz) -> np.ndarray:
    return np.array([list(xyz)], dtype=float)


def _grid(n: int = 31, extent: float = 3.0) -> np.ndarray:
    lin = np.linspace(-extent, extent, n)
    Z, Y, X = np.meshgrid(lin, lin, lin, indexing="ij")
    return np.stack([X, Y, Z], axis=-1)


def _assert_box_contains_solid(geom, extent: float = 3.0) -> None:
    p = _grid(41, extent)
    inside = geom.sdf(p) <= 0
    assert inside.any()
    assert geom.bounding_box().contains(p[inside], eps=1e-9).all()


def _ring():
    return Circle2D(0.5).translate(2, 0)


class _Slot:
    """Minimal profile: any object with sdf() and bounding_box() will do."""

    def sdf(self, p):
        return np.abs(p[..., 0]) + np.abs(p[..., 1]) - 1.0

    def bounding_box(self):
        return AABB((-1, -1), (1, 1))


# ===========================================================================
# Revolve
# ===========================================================================

class TestRevolve3D:
    def test_torus(self):
        t = Revolve3D(_ring())
        npt.assert_allclose(t.sdf(_p(2, 0, 0)), [-0.5], atol=1e-12)
        npt.assert_allclose(t.sdf(_p(0, 2, 0)), [-0.5], atol=1e-12)
        npt.assert_allclose(t.sdf(_p(0, 0, 0)), [1.5], atol=1e-12)

    def test_torus_bounding_box(self):
        bb = Revolve3D(_ring()).bounding_box()
        npt.assert_allclose(bb.min, [-2.5, -2.5, -0.5])
        npt.assert_allclose(bb.max, [2.5, 2.5, 0.5])

    def test_quarter_sweep(self):
        t = Revolve3D(_ring(), np.pi / 2)
        npt.assert_allclose(t.sdf(_p(np.sqrt(2.0), np.sqrt(2.0), 0)), [-0.5], atol=1e-12)
        npt.assert_allclose(t.sdf(_p(0, -2, 0)), [2.0], atol=1e-12)

    def test_quarter_sweep_bounding_box(self):
        bb = Revolve3D(_ring(), np.pi / 2).bounding_box()
        npt.assert_allclose(bb.min, [0, 0, -0.5], atol=1e-12)
        npt.assert_allclose(bb.max, [2.5, 2.5, 0.5], atol=1e-12)

    def test_three_quarter_sweep(self):
        t = Revolve3D(_ring(), 1.5 * np.pi)
        r = np.sqrt(2.0)
        npt.assert_allclose(t.sdf(_p(-r, -r, 0)), [-0.5], atol=1e-12)
        assert t.sdf(_p(r, -r, 0))[0] > 0

    @pytest.mark.parametrize("theta", [0.3, np.pi / 2, 2.0, np.pi, 4.0, 5.5])
    def test_box_contains_solid(self, theta):
        _assert_box_contains_solid(Revolve3D(_ring(), theta))

    def test_full_turn_is_full_revolve(self):
        a = Revolve3D(_ring(), 2.0 * np.pi)
        b = Revolve3D(_ring())
        p = _grid(9)
        npt.assert_allclose(a.sdf(p), b.sdf(p), atol=1e-12)

    def test_negative_theta_rejected(self):
        with pytest.raises(InvalidParameter):
            Revolve3D(_ring(), -1.0)

    def test_missing_profile(self):
        with pytest.raises(InvalidParameter):
            Revolve3D(None)
        assert revolve(None) is None

    def test_duck_typed_profile(self):
        t = revolve(_Slot())
        # slot centred on the axis revolves into a double cone
        npt.assert_allclose(t.sdf(_p(0, 0, 0)), [-1.0])


# ===========================================================================
# Extrusions
# ===========================================================================

class TestExtrude3D:
    def test_values(self):
        e = Extrude3D(Box2D((2, 2)), 4)
        npt.assert_allclose(e.sdf(_p(0, 0, 0)), [-1.0])
        npt.assert_allclose(e.sdf(_p(0, 0, 3)), [1.0])
        npt.assert_allclose(e.sdf(_p(2, 0, 0)), [1.0])

    def test_box_contains_solid(self):
        _assert_box_contains_solid(Extrude3D(Box2D((2, 1)).translate(0.5, 0.3), 2))

    def test_bounding_box(self):
        bb = Extrude3D(Box2D((2, 3)), 4).bounding_box()
        npt.assert_allclose(bb.min, [-1, -1.5, -2])
        npt.assert_allclose(bb.max, [1, 1.5, 2])

    def test_set_extrude(self):
        e = Extrude3D(Box2D((4, 1)), 4)
        p = _p(0, 1.5, 1)
        assert e.sdf(p)[0] > 0
        e.set_extrude(twist_extrude(4, 2.0 * np.pi))
        # a quarter turn at z = 1 brings the long side under the point
        assert e.sdf(p)[0] < 0

    def test_invalid_height(self):
        with pytest.raises(InvalidParameter):
            Extrude3D(Box2D((1, 1)), 0)

    def test_duck_typed_profile(self):
        e = Extrude3D(_Slot(), 2)
        npt.assert_allclose(e.sdf(_p(0, 0, 0)), [-1.0])


class TestTwistExtrude3D:
    def test_rotated_section(self):
        t = TwistExtrude3D(Box2D((4, 1)), 4, np.pi / 2)
        a = np.pi / 8
        npt.assert_allclose(t.sdf(_p(1.5 * np.cos(a), -1.5 * np.sin(a), 1)), [-0.5], atol=1e-12)

    def test_bounding_box(self):
        bb = TwistExtrude3D(Box2D((4, 1)), 4, np.pi / 2).bounding_box()
        r = np.hypot(2.0, 0.5)
        npt.assert_allclose(bb.min, [-r, -r, -2])
        npt.assert_allclose(bb.max, [r, r, 2])

    def test_box_contains_solid(self):
        _assert_box_contains_solid(TwistExtrude3D(Box2D((3, 0.5)), 4, 2.0))

    def test_off_centre_box_contains_solid(self):
        # the far corner sits at radius hypot(1.3, 0.8), beyond |bb.max|
        t = TwistExtrude3D(Box2D((0.6, 0.6)).translate(-1.0, 0.5), 2, 2.0)
        npt.assert_allclose(t.bounding_box().max[:2], [np.hypot(1.3, 0.8)] * 2)
        _assert_box_contains_solid(t)


class TestScaleExtrude3D:
    def test_tapers(self):
        s = ScaleExtrude3D(Circle2D(1), 2, (0.5, 0.5))
        assert s.sdf(_p(0.6, 0, 0))[0] < 0
        assert s.sdf(_p(0.7, 0, 0))[0] > 0
        assert s.sdf(_p(0.9, 0, -0.99))[0] < 0
        assert s.sdf(_p(0.6, 0, 0.99))[0] > 0

    def test_bounding_box(self):
        bb = ScaleExtrude3D(Circle2D(1), 2, (2.0, 0.5)).bounding_box()
        npt.assert_allclose(bb.min, [-2, -1, -1])
        npt.assert_allclose(bb.max, [2, 1, 1])

    def test_box_contains_solid(self):
        _assert_box_contains_solid(ScaleExtrude3D(Box2D((1, 1)), 3, (2.5, 0.5)))

    @pytest.mark.parametrize("scale", [(0, 1), (1, -1), (1, 1, 1)])
    def test_invalid_scale(self, scale):
        with pytest.raises(InvalidParameter):
            ScaleExtrude3D(Circle2D(1), 2, scale)


class TestScaleTwistExtrude3D:
    def test_mid_section(self):
        # no rotation at z = 0, scaled by 1.5 against the profile
        s = ScaleTwistExtrude3D(Box2D((2, 1)), 2, np.pi, (0.5, 0.5))
        assert s.sdf(_p(0.6, 0, 0))[0] < 0
        assert s.sdf(_p(0, 0.3, 0))[0] < 0
        assert s.sdf(_p(0, 0.4, 0))[0] > 0

    def test_box_contains_solid(self):
        _assert_box_contains_solid(ScaleTwistExtrude3D(Box2D((2, 1)), 4, np.pi, (1.5, 1.5)))

    def test_invalid_height(self):
        with pytest.raises(InvalidParameter):
            ScaleTwistExtrude3D(Box2D((2, 1)), -1, 1.0, (1, 1))


# ===========================================================================
# Rounded extrusion and loft
# ===========================================================================

class TestExtrudeRounded3D:
    def test_side_and_cap(self):
        e = ExtrudeRounded3D(Box2D((2, 2)), 2, 0.25)
        npt.assert_allclose(e.sdf(_p(1.25, 0, 0)), [0.0], atol=1e-12)
        npt.assert_allclose(e.sdf(_p(0, 0, 1)), [0.0], atol=1e-12)

    def test_rounded_edge(self):
        e = ExtrudeRounded3D(Box2D((2, 2)), 2, 0.25)
        # the edge is a quarter circle of radius 0.25 about (1, 0, 0.75)
        c = 0.25 / np.sqrt(2.0)
        npt.assert_allclose(e.sdf(_p(1 + c, 0, 0.75 + c)), [0.0], atol=1e-12)

    def test_bounding_box(self):
        bb = ExtrudeRounded3D(Box2D((2, 2)), 2, 0.25).bounding_box()
        npt.assert_allclose(bb.min, [-1.25, -1.25, -1])
        npt.assert_allclose(bb.max, [1.25, 1.25, 1])

    def test_zero_round(self):
        e = ExtrudeRounded3D(Box2D((2, 2)), 4, 0)
        npt.assert_allclose(e.sdf(_p(0, 0, 0)), [-1.0])
        npt.assert_allclose(e.sdf(_p(0, 0, 3)), [1.0])

    @pytest.mark.parametrize("height,round", [(0, 0), (1, -0.1), (1, 0.6)])
    def test_invalid(self, height, round):
        with pytest.raises(InvalidParameter):
            ExtrudeRounded3D(Box2D((1, 1)), height, round)

    def test_box_contains_solid(self):
        _assert_box_contains_solid(ExtrudeRounded3D(Box2D((2, 1.5)).translate(0.3, 0), 1.5, 0.3))


class TestLoft3D:
    def test_interpolates_profiles(self):
        l = Loft3D(Circle2D(1), Circle2D(0.5), 2)
        npt.assert_allclose(l.sdf(_p(0.9, 0, -0.5)), [0.025], atol=1e-12)
        npt.assert_allclose(l.sdf(_p(0.8, 0, -0.5)), [-0.075], atol=1e-12)

    def test_ends(self):
        l = Loft3D(Circle2D(1), Circle2D(0.5), 2)
        assert l.sdf(_p(0.9, 0, -0.99))[0] < 0
        assert l.sdf(_p(0.9, 0, 0.99))[0] > 0

    def test_bounding_box(self):
        bb = Loft3D(Circle2D(1), Box2D((1, 3)), 2).bounding_box()
        npt.assert_allclose(bb.min, [-1, -1.5, -1])
        npt.assert_allclose(bb.max, [1, 1.5, 1])

    def test_rounded_box_contains_solid(self):
        _assert_box_contains_solid(Loft3D(Box2D((2, 2)), Circle2D(0.5), 3, 0.3))

    def test_fully_rounded_is_valid(self):
        l = Loft3D(Circle2D(1), Circle2D(0.5), 2, 1.0)
        assert l.bounding_box().is_valid()
        assert l.sdf(_p(0, 0, 0))[0] < 0

    def test_missing_profile(self):
        with pytest.raises(InvalidParameter):
            Loft3D(Circle2D(1), None, 2)
