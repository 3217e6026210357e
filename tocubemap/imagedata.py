"""
imagedata.py — Raw pixel buffers and their Pillow-backed loader / encoder.

An ImageData owns a row-major (height, width, channels) uint8 array, so the
flat byte view places pixel (x, y) channel c at (y * width + x) * channels + c.
"""

import numpy as np
from PIL import Image

OUTPUT_FORMATS = ['jpeg', 'png']


class ImageData:
    """Rectangular grid of 8-bit pixels with 3 (RGB) or 4 (RGBA) channels."""

    def __init__(self, width: int, height: int, channels: int = 4):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid image size: {width} × {height}")
        if channels not in (3, 4):
            raise ValueError(f"Unsupported channel count: {channels}")
        self.pixels = np.zeros((height, width, channels), dtype=np.uint8)

    @classmethod
    def from_array(cls, array) -> 'ImageData':
        """Wrap a copy of an (H, W, 3|4) array."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (H, W, 3|4) array, got shape {array.shape}")
        image = cls.__new__(cls)
        image.pixels = np.array(array, dtype=np.uint8)
        return image

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def data(self) -> np.ndarray:
        """Flat byte view of the pixels."""
        return self.pixels.reshape(-1)

    def offset(self, x: int, y: int) -> int:
        """Flat index of the first channel of pixel (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width} × {self.height} image")
        return (y * self.width + x) * self.channels

    def pixel(self, x: int, y: int) -> tuple:
        start = self.offset(x, y)
        return tuple(int(v) for v in self.data[start:start + self.channels])

    def freeze(self) -> 'ImageData':
        """Mark the buffer read-only and return it."""
        self.pixels.flags.writeable = False
        return self

    def __repr__(self):
        return f"ImageData({self.width} × {self.height} × {self.channels})"


def load_image(path: str) -> ImageData:
    """
    Decode an image file into a read-only RGB ImageData.

    Raises FileNotFoundError for a missing file and PIL.UnidentifiedImageError
    for data Pillow cannot decode.
    """
    with Image.open(path) as img:
        rgb = img.convert('RGB')
    image = ImageData.from_array(np.array(rgb))
    rgb.close()
    return image.freeze()


def save_image(path: str, image: ImageData, output_format: str = 'jpeg',
               quality: int = 100) -> None:
    """
    Encode an ImageData as JPEG (alpha dropped) or PNG.

    Args:
        path:          destination file
        image:         3 or 4 channel buffer
        output_format: 'jpeg' or 'png'
        quality:       JPEG quality, clamped to [0, 100]
    """
    img = Image.fromarray(image.pixels)   # (H, W, 4) → RGBA, (H, W, 3) → RGB

    if output_format == 'png':
        img.save(path, format='PNG')
    elif output_format == 'jpeg':
        quality = max(0, min(100, int(quality)))
        img.convert('RGB').save(path, format='JPEG', quality=quality)
    else:
        raise ValueError(f"Unknown output format: {output_format!r}")
