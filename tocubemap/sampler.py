"""
sampler.py — Fetch filtered RGB values at fractional source coordinates.

Every strategy takes an (H, W, C) uint8 array and coordinate arrays of any
(matching) shape, and returns uint8 RGB of shape coords.shape + (3,).  Only
the first three channels are read.  Each axis is clamped to [0, dim - 1]
independently; nothing wraps and nothing is read out of bounds.
"""

import numpy as np

from .kernels import BICUBIC_RADIUS, LANCZOS_RADIUS, bicubic_kernel, lanczos_kernel

INTERPOLATIONS = ['nearest', 'linear', 'cubic', 'lanczos']


def _clamp(v, lo, hi):
    return np.minimum(hi, np.maximum(v, lo))


def _gather(pixels: np.ndarray, xi, yi) -> np.ndarray:
    # Fancy indexing copies, so convert after the gather, not on the whole source
    return pixels[yi, xi, :3].astype(np.float64)


def copy_pixel_nearest(pixels: np.ndarray, x_from, y_from) -> np.ndarray:
    H, W = pixels.shape[:2]
    # np.round is round-half-to-even
    xi = _clamp(np.round(x_from), 0, W - 1).astype(np.intp)
    yi = _clamp(np.round(y_from), 0, H - 1).astype(np.intp)
    return pixels[yi, xi, :3].copy()


def copy_pixel_bilinear(pixels: np.ndarray, x_from, y_from) -> np.ndarray:
    """Blend the four neighbours; the result is rounded up (ceil), not to nearest."""
    H, W = pixels.shape[:2]
    x_from = np.asarray(x_from, dtype=np.float64)
    y_from = np.asarray(y_from, dtype=np.float64)

    xl = _clamp(np.floor(x_from), 0, W - 1)
    xr = _clamp(np.ceil(x_from), 0, W - 1)
    xf = (x_from - xl)[..., np.newaxis]

    yl = _clamp(np.floor(y_from), 0, H - 1)
    yr = _clamp(np.ceil(y_from), 0, H - 1)
    yf = (y_from - yl)[..., np.newaxis]

    xl = xl.astype(np.intp)
    xr = xr.astype(np.intp)
    yl = yl.astype(np.intp)
    yr = yr.astype(np.intp)

    p0 = _gather(pixels, xl, yl) * (1 - xf) + _gather(pixels, xr, yl) * xf
    p1 = _gather(pixels, xl, yr) * (1 - xf) + _gather(pixels, xr, yr) * xf
    return _clamp(np.ceil(p0 * (1 - yf) + p1 * yf), 0.0, 255.0).astype(np.uint8)


def kernel_resample(pixels: np.ndarray, x_from, y_from,
                    filter_size: int, kernel) -> np.ndarray:
    """
    Separable discrete convolution with *kernel* over 2 × filter_size taps per axis.

    Taps start at floor(coord) - filter_size + 1.  Kernel weights are computed
    once per sample and shared by the three channels; the result is rounded
    half-to-even and clamped to [0, 255].
    """
    H, W = pixels.shape[:2]
    x_from = np.asarray(x_from, dtype=np.float64)
    y_from = np.asarray(y_from, dtype=np.float64)
    taps = np.arange(2 * filter_size, dtype=np.float64)

    xs = (np.floor(x_from) - filter_size + 1)[..., np.newaxis] + taps
    ys = (np.floor(y_from) - filter_size + 1)[..., np.newaxis] + taps
    x_kernel = kernel(x_from[..., np.newaxis] - xs)
    y_kernel = kernel(y_from[..., np.newaxis] - ys)

    xi = _clamp(xs, 0, W - 1).astype(np.intp)
    yi = _clamp(ys, 0, H - 1).astype(np.intp)

    q = np.zeros(x_from.shape + (3,), dtype=np.float64)
    for i in range(2 * filter_size):
        p = np.zeros_like(q)
        for j in range(2 * filter_size):
            p += _gather(pixels, xi[..., j], yi[..., i]) * x_kernel[..., j, np.newaxis]
        q += p * y_kernel[..., i, np.newaxis]

    return _clamp(np.rint(q), 0.0, 255.0).astype(np.uint8)


def copy_pixel_bicubic(pixels: np.ndarray, x_from, y_from) -> np.ndarray:
    return kernel_resample(pixels, x_from, y_from, BICUBIC_RADIUS, bicubic_kernel)


def copy_pixel_lanczos(pixels: np.ndarray, x_from, y_from) -> np.ndarray:
    return kernel_resample(pixels, x_from, y_from, LANCZOS_RADIUS, lanczos_kernel)


def get_copy_pixel(interpolation: str):
    """Return the sampling strategy for *interpolation*; unknown names get nearest."""
    if interpolation == 'linear':
        return copy_pixel_bilinear
    elif interpolation == 'cubic':
        return copy_pixel_bicubic
    elif interpolation == 'lanczos':
        return copy_pixel_lanczos
    return copy_pixel_nearest


def sample(image, x_from, y_from, interpolation: str = 'nearest') -> np.ndarray:
    """
    Sample *image* (an ImageData) at (x_from, y_from).

    Scalar coordinates give one RGB triple of shape (3,); coordinate arrays
    give one triple per element.
    """
    return get_copy_pixel(interpolation)(image.pixels, x_from, y_from)
