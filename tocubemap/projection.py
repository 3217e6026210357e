"""
projection.py — Render cube faces from an equirectangular panorama.

For every output pixel:
    pixel centre → face-local (x, y) ∈ [-1, +1]² → point on the cube
    → (lon, lat) on the unit sphere → fractional source pixel → sampler

Longitude runs 0 → 2π left→right across the panorama, colatitude 0 → π
top→bottom.  Both pixel grids use pixel-centre sampling, hence the ±0.5.
"""

import math

import numpy as np

from .imagedata import ImageData
from .orientation import FACES, cube_orientation
from .sampler import get_copy_pixel

TWO_PI = 2.0 * math.pi
ROWS_PER_BAND = 256   # face rows projected per pass; bounds intermediate arrays


def mod(x, n):
    """Non-negative modulo: the result always lies in [0, n) for n > 0."""
    r = np.mod(x, n)
    # np.mod(-tiny, n) rounds to n itself
    return np.where(r >= n, r - n, r)


# ── Forward mapping ───────────────────────────────────────────────────────────

def to_spherical(X, Y, Z, rotation: float = 0.0):
    """Cube point → (lon, lat); lon ∈ [0, 2π) offset by *rotation*, lat ∈ [0, π]."""
    r = np.sqrt(X * X + Y * Y + Z * Z)
    lon = mod(np.arctan2(Y, X) + rotation, TWO_PI)
    lat = np.arccos(Z / r)
    return lon, lat


def spherical_to_source(lon, lat, width: int, height: int):
    """(lon, lat) → fractional pixel coordinates in a width × height panorama."""
    src_x = width * lon / math.pi / 2 - 0.5
    src_y = height * lat / math.pi - 0.5
    return src_x, src_y


# ── Inverse mapping ───────────────────────────────────────────────────────────

def source_to_spherical(src_x, src_y, width: int, height: int):
    lon = (np.asarray(src_x) + 0.5) * 2 * math.pi / width
    lat = (np.asarray(src_y) + 0.5) * math.pi / height
    return lon, lat


def spherical_to_direction(lon, lat, rotation: float = 0.0):
    """(lon, lat) → unit direction vector, undoing the *rotation* offset."""
    theta = lon - rotation
    sin_lat = np.sin(lat)
    return sin_lat * np.cos(theta), sin_lat * np.sin(theta), np.cos(lat)


# ── Face rendering ────────────────────────────────────────────────────────────

def face_size(source: ImageData, max_width: int | None = None) -> int:
    size = source.width // 4
    if max_width is not None:
        size = min(max_width, size)
    return size


def render_face(source: ImageData, face: str, rotation: float = 0.0,
                interpolation: str = 'nearest', max_width: int | None = None,
                rows_per_band: int = ROWS_PER_BAND) -> ImageData:
    """
    Project the panorama *source* onto one cube face.

    Args:
        source:        equirectangular image (3 or 4 channels; alpha unused)
        face:          'pz', 'nz', 'px', 'nx', 'py' or 'ny'
        rotation:      longitude offset in radians
        interpolation: 'nearest', 'linear', 'cubic' or 'lanczos'
                       (anything else samples as 'nearest')
        max_width:     cap on the face side length
        rows_per_band: face rows projected per pass

    Returns:
        New RGBA ImageData, min(max_width, source.width // 4) square,
        fully opaque.
    """
    if face not in FACES:
        raise ValueError(f"Unknown face: {face!r}")

    if max_width is not None and max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")

    size = face_size(source, max_width)
    if size < 1:
        raise ValueError(f"Source image {source.width} × {source.height} px is too small "
                         f"to render a cube face (need width ≥ 4).")

    copy_pixel = get_copy_pixel(interpolation)
    H, W = source.height, source.width

    out = ImageData(size, size, 4)
    out.pixels[:, :, 3] = 255

    # Face-local coordinates of the pixel centres, shared by both axes
    coords = 2 * (np.arange(size, dtype=np.float64) + 0.5) / size - 1

    for top in range(0, size, rows_per_band):
        cy = coords[top:top + rows_per_band]
        cx_grid, cy_grid = np.meshgrid(coords, cy)
        X, Y, Z = np.broadcast_arrays(*cube_orientation(face, cx_grid, cy_grid))
        del cx_grid, cy_grid

        lon, lat = to_spherical(X, Y, Z, rotation)
        del X, Y, Z

        src_x, src_y = spherical_to_source(lon, lat, W, H)
        del lon, lat

        out.pixels[top:top + len(cy), :, :3] = copy_pixel(source.pixels, src_x, src_y)

    return out


def render_cubemap(source: ImageData, rotation: float = 0.0,
                   interpolation: str = 'nearest',
                   max_width: int | None = None) -> dict[str, ImageData]:
    """Render all six faces, keyed by face name in FACES order."""
    return {face: render_face(source, face, rotation, interpolation, max_width)
            for face in FACES}
