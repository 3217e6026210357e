"""
kernels.py — 1-D resampling kernels for the convolution resampler.
"""

import numpy as np

BICUBIC_RADIUS = 2
LANCZOS_RADIUS = 5


def bicubic_kernel(x, b: float = -0.5):
    """Cubic convolution kernel (b = -0.5 is Catmull-Rom)."""
    x1 = np.abs(x)
    x2 = x1 * x1
    x3 = x1 * x1 * x1
    return np.where(x1 <= 1.0,
                    (b + 2.0) * x3 - (b + 3.0) * x2 + 1.0,
                    b * x3 - 5.0 * b * x2 + 8.0 * b * x1 - 4.0 * b)


def lanczos_kernel(x, filter_size: int = LANCZOS_RADIUS):
    """Sinc windowed by a sinc of width *filter_size*; 1 at the origin."""
    x = np.asarray(x, dtype=np.float64)
    xp = np.pi * x
    with np.errstate(divide='ignore', invalid='ignore'):
        value = filter_size * np.sin(xp) * np.sin(xp / filter_size) / (xp * xp)
    return np.where(x == 0, 1.0, value)
