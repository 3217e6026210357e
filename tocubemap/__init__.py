"""
tocubemap — Convert equirectangular panoramas into six cube-map faces.
"""

from .imagedata import ImageData, load_image, save_image
from .orientation import FACES, cube_orientation
from .projection import render_cubemap, render_face
from .sampler import INTERPOLATIONS, sample

__version__ = '1.0.0'

__all__ = [
    'ImageData', 'load_image', 'save_image',
    'FACES', 'cube_orientation',
    'render_face', 'render_cubemap',
    'INTERPOLATIONS', 'sample',
]
