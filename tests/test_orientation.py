"""
Tests for the cube-face orientation table.
Run with: python -m pytest tests/test_orientation.py
"""

import math

import numpy as np
import pytest

from tocubemap.orientation import FACES, cube_orientation
from tocubemap.projection import to_spherical

CORNERS = [(-1.0, -1.0), (1.0, 1.0)]


@pytest.mark.parametrize('x, y', CORNERS + [(0.25, -0.5)])
def test_orientation_table(x, y):
    assert cube_orientation('pz', x, y) == (-1, -x, -y)
    assert cube_orientation('nz', x, y) == (1, x, -y)
    assert cube_orientation('px', x, y) == (x, -1, -y)
    assert cube_orientation('nx', x, y) == (-x, 1, -y)
    assert cube_orientation('py', x, y) == (-y, -x, 1)
    assert cube_orientation('ny', x, y) == (y, -x, -1)


def test_corner_values():
    assert cube_orientation('pz', -1.0, -1.0) == (-1.0, 1.0, 1.0)
    assert cube_orientation('pz', 1.0, 1.0) == (-1.0, -1.0, -1.0)
    assert cube_orientation('nz', -1.0, -1.0) == (1.0, -1.0, 1.0)
    assert cube_orientation('nz', 1.0, 1.0) == (1.0, 1.0, -1.0)


def test_every_face_lies_on_the_cube():
    xs = np.linspace(-1.0, 1.0, 5)
    xx, yy = np.meshgrid(xs, xs)
    for face in FACES:
        X, Y, Z = np.broadcast_arrays(*cube_orientation(face, xx, yy))
        extent = np.maximum(np.maximum(np.abs(X), np.abs(Y)), np.abs(Z))
        assert np.allclose(extent, 1.0), face


def test_unknown_face():
    with pytest.raises(ValueError, match='Unknown face'):
        cube_orientation('xx', 0.0, 0.0)


@pytest.mark.parametrize('x, y', CORNERS)
def test_pz_and_nz_differ_by_half_turn(x, y):
    """nz is pz rotated by π around the vertical (Z) axis."""
    px_, py_, pz_ = cube_orientation('pz', x, y)
    assert cube_orientation('nz', x, y) == (-px_, -py_, pz_)

    lon_pz, lat_pz = to_spherical(*cube_orientation('pz', x, y), rotation=math.pi)
    lon_nz, lat_nz = to_spherical(*cube_orientation('nz', x, y), rotation=0.0)
    assert float(lon_pz) == pytest.approx(float(lon_nz), abs=1e-12)
    assert float(lat_pz) == pytest.approx(float(lat_nz), abs=1e-12)
