"""Tests for solid3d grid utilities."""

import os
import tempfile

import numpy as np
import numpy.testing as npt
import pytest

from solid3d import (
    AABB, InvalidParameter,
    Sphere3D, Box3D, sample_levelset_3d, bounds_from_box, save_npy,
)


class TestSampleLevelset3D:
    def test_output_shape(self):
        g = Sphere3D(0.3)
        phi = sample_levelset_3d(g, ((-1, 1), (-1, 1), (-1, 1)), (16, 16, 16))
        assert phi.shape == (16, 16, 16)

    def test_non_cube(self):
        g = Sphere3D(0.3)
        phi = sample_levelset_3d(g, ((-1, 1), (-1, 1), (-1, 1)), (8, 16, 32))
        assert phi.shape == (32, 16, 8)

    def test_cell_centred_near_minus_r(self):
        n = 65
        g = Sphere3D(0.3)
        phi = sample_levelset_3d(g, ((-1, 1), (-1, 1), (-1, 1)), (n, n, n))
        npt.assert_allclose(phi[32, 32, 32], -0.3, atol=0.02)

    def test_z_first_indexing(self):
        g = Box3D((0.2, 0.2, 0.2)).translate(0.0, 0.0, 0.5)
        phi = sample_levelset_3d(g, ((-1, 1), (-1, 1), (-1, 1)), (4, 4, 4))
        # cell centres at -0.75, -0.25, 0.25, 0.75; only z = 0.75 rows are near the box
        assert phi[3].min() < phi[0].min()

    def test_inside_negative_outside_positive(self):
        g = Sphere3D(0.3)
        phi = sample_levelset_3d(g, ((-1, 1), (-1, 1), (-1, 1)), (16, 16, 16))
        assert (phi < 0).any()
        assert (phi > 0).any()

    def test_bounds_from_geometry(self):
        phi = sample_levelset_3d(Box3D((1, 2, 3)), None, (9, 9, 9))
        assert (phi < 0).any()
        # corner cells lie in the margin, outside the box
        assert phi[0, 0, 0] > 0 and phi[-1, -1, -1] > 0

    def test_invalid_resolution(self):
        with pytest.raises(InvalidParameter):
            sample_levelset_3d(Sphere3D(0.3), None, (0, 8, 8))


class TestBoundsFromBox:
    def test_margin(self):
        b = bounds_from_box(AABB((0, 0, 0), (1, 2, 4)), margin=0.25)
        npt.assert_allclose(b, [(-1, 2), (-1, 3), (-1, 5)])

    def test_zero_margin(self):
        b = bounds_from_box(AABB((-1, -1, -1), (1, 1, 1)), margin=0.0)
        npt.assert_allclose(b, [(-1, 1)] * 3)


class TestSaveNpy3D:
    def test_round_trip(self):
        phi = np.random.rand(4, 4, 4)
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "phi3d.npy")
            save_npy(path, phi)
            loaded = np.load(path)
        npt.assert_array_equal(phi, loaded)

    def test_creates_nested_dirs(self):
        phi = np.zeros((4, 4, 4))
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "a", "b", "phi.npy")
            save_npy(path, phi)
            assert os.path.isfile(path)
