"""
cli.py — Convert an equirectangular panorama into six cube-face images.

Writes {face}.{format} for pz, nz, px, nx, py and ny into the output
directory.

Usage:
    tocubemap source=pano.jpg output-directory=out [interpolation=nearest|linear|cubic|lanczos]
              [output-format=jpeg|png] [jpeg-quality=100] [rotation=180] [max-width=4096]

Every option is also accepted as --name=value.  Invalid interpolation,
output-format, jpeg-quality, rotation and max-width values fall back to
their defaults.
"""

import sys
import math
import os
import argparse

from PIL import Image

from .imagedata import OUTPUT_FORMATS, load_image, save_image
from .orientation import FACES
from .projection import face_size, render_face
from .sampler import INTERPOLATIONS

Image.MAX_IMAGE_PIXELS = None   # allow very large panoramas

VERSION = '1.0'

DEFAULT_INTERPOLATION = 'nearest'
DEFAULT_OUTPUT_FORMAT = 'jpeg'
DEFAULT_JPEG_QUALITY = 100
DEFAULT_ROTATION = 180.0      # degrees
DEFAULT_MAX_WIDTH = 4096

OPTIONS = ['source', 'output-directory', 'interpolation', 'output-format',
           'jpeg-quality', 'rotation', 'max-width']


# ── Argument handling ─────────────────────────────────────────────────────────

class UsageError(Exception):
    """Malformed command line."""


class ArgumentParser(argparse.ArgumentParser):
    """Reports parse errors as UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog='tocubemap',
        usage=('tocubemap source=an-input-image.* output-directory=an-output-directory-path '
               '[interpolation=nearest|linear|cubic|lanczos] [output-format=jpeg|png] '
               '[jpeg-quality=100] [rotation=180] [max-width=4096]'),
        description='Convert a 2:1 equirectangular panorama into six cube-face images.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Output files: {', '.join(FACES)} with the output-format as extension.",
    )
    parser.add_argument('--source', help='Equirectangular image path')
    parser.add_argument('--output-directory', help='Directory for the six face images')
    parser.add_argument('--interpolation', default=DEFAULT_INTERPOLATION,
                        help=f"{'|'.join(INTERPOLATIONS)} (default: %(default)s)")
    parser.add_argument('--output-format', default=DEFAULT_OUTPUT_FORMAT,
                        help=f"{'|'.join(OUTPUT_FORMATS)} (default: %(default)s)")
    parser.add_argument('--jpeg-quality', default=str(DEFAULT_JPEG_QUALITY),
                        help='0..100 (default: %(default)s)')
    parser.add_argument('--rotation', default=str(DEFAULT_ROTATION),
                        help='Cube rotation around the vertical axis in degrees (default: %(default)s)')
    parser.add_argument('--max-width', default=str(DEFAULT_MAX_WIDTH),
                        help='Maximum face size in pixels (default: %(default)s)')
    return parser


def normalize_argv(argv: list[str]) -> list[str]:
    """Rewrite bare name=value arguments into --name=value."""
    result = []
    for arg in argv:
        name = arg.split('=', 1)[0]
        if not arg.startswith('-') and '=' in arg and name in OPTIONS:
            arg = '--' + arg
        result.append(arg)
    return result


def sanitize_interpolation(value: str) -> str:
    return value if value in INTERPOLATIONS else DEFAULT_INTERPOLATION


def sanitize_output_format(value: str) -> str:
    return value if value in OUTPUT_FORMATS else DEFAULT_OUTPUT_FORMAT


def sanitize_jpeg_quality(value: str) -> int:
    try:
        quality = int(value)
    except (TypeError, ValueError):
        return DEFAULT_JPEG_QUALITY
    return max(0, min(100, quality))


def sanitize_rotation(value: str) -> float:
    try:
        rotation = float(value)
    except (TypeError, ValueError):
        return DEFAULT_ROTATION
    return rotation if math.isfinite(rotation) else DEFAULT_ROTATION


def sanitize_max_width(value: str) -> int:
    try:
        max_width = int(value)
    except (TypeError, ValueError):
        return DEFAULT_MAX_WIDTH
    return max_width if max_width > 0 else DEFAULT_MAX_WIDTH


def parse_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    """Parse and sanitise *argv*; returns the options and any ignored arguments."""
    args, unknown = build_parser().parse_known_args(normalize_argv(argv))
    args.interpolation = sanitize_interpolation(args.interpolation)
    args.output_format = sanitize_output_format(args.output_format)
    args.jpeg_quality = sanitize_jpeg_quality(args.jpeg_quality)
    args.rotation = sanitize_rotation(args.rotation)
    args.max_width = sanitize_max_width(args.max_width)
    return args, unknown


# ── Main processing ───────────────────────────────────────────────────────────

def process_image(source: str, out_dir: str, interpolation: str = DEFAULT_INTERPOLATION,
                  output_format: str = DEFAULT_OUTPUT_FORMAT,
                  jpeg_quality: int = DEFAULT_JPEG_QUALITY,
                  rotation: float = DEFAULT_ROTATION,
                  max_width: int = DEFAULT_MAX_WIDTH) -> list[str]:
    """
    Render and save all six faces of *source*; returns the written paths.

    Any load, render or save error propagates and stops the remaining faces.
    """
    print(f"Loading image data from: {source}")
    image = load_image(source)
    size = face_size(image, max_width)
    print(f"Source:     {image.width} × {image.height} px")
    print(f"Face size:  {size} × {size} px")

    print(f"Creating the output directory: {out_dir}")
    os.makedirs(out_dir, exist_ok=True)

    print("Generating face images...")
    written = []
    for face in FACES:
        out_path = os.path.join(out_dir, f"{face}.{output_format}")
        print(f"  [{face}] → {out_path} … ", end='', flush=True)
        face_img = render_face(image, face, math.radians(rotation), interpolation, max_width)
        save_image(out_path, face_img, output_format, jpeg_quality)
        del face_img
        written.append(out_path)
        print("done")

    return written


# ── CLI ───────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    print(f"Panorama to Cubemap v{VERSION}")
    try:
        args, unknown = parse_args(argv)
    except UsageError as exc:
        build_parser().print_usage(sys.stderr)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    for arg in unknown:
        print(f"WARNING: ignoring unknown argument: {arg}", file=sys.stderr)

    print(f"  The source is: '{args.source or '<NOT SET>'}'")
    print(f"  The output-directory is: '{args.output_directory or '<NOT SET>'}'")
    print(f"  The interpolation is: '{args.interpolation}'")
    print(f"  The output-format is: '{args.output_format}'")
    print(f"  The jpeg-quality is: '{args.jpeg_quality}'")
    print(f"  The rotation is: '{args.rotation}'")
    print(f"  The max-width is: '{args.max_width}'")
    print()

    if not (args.source or '').strip() or not (args.output_directory or '').strip():
        build_parser().print_usage(sys.stderr)
        print("ERROR: source and output-directory are required.", file=sys.stderr)
        return 1

    try:
        process_image(args.source, args.output_directory, args.interpolation,
                      args.output_format, args.jpeg_quality, args.rotation, args.max_width)
    except Exception as exc:
        print(f"\nERROR processing {args.source}: {exc}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1

    print("DONE")
    return 0


if __name__ == '__main__':
    sys.exit(main())
