"""Command line interface: blur an image file.

Usage:
    python -m expblur input.png output.png --radius 8
    expblur photo.jpg soft.png --radius 3 --aprec 12 --zprec 6
"""

import argparse
import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .config import settings
from .exceptions import ExpBlurError
from .kernel import APREC_RANGE, ZPREC_RANGE, apply_blur

logger = logging.getLogger(__name__)

# Formats Pillow cannot write with an alpha channel
_NO_ALPHA_SUFFIXES = {'.jpg', '.jpeg', '.bmp'}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='expblur',
        description='Apply a fixed-point exponential blur to an image.',
    )
    parser.add_argument('input', type=Path, help='Image to read (any format Pillow can open)')
    parser.add_argument('output', type=Path, help='Where to write the blurred image')
    parser.add_argument('--radius', type=float, default=settings.DEFAULT_RADIUS,
                        help='Blur radius in pixels; below 1 copies the image '
                             '(default: %(default)s)')
    parser.add_argument('--aprec', type=int, default=settings.DEFAULT_APREC,
                        help=f'Alpha precision in bits, {APREC_RANGE[0]}-{APREC_RANGE[1]} '
                             '(default: %(default)s)')
    parser.add_argument('--zprec', type=int, default=settings.DEFAULT_ZPREC,
                        help=f'State precision in bits, {ZPREC_RANGE[0]}-{ZPREC_RANGE[1]} '
                             '(default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def blur_file(input_path: Path, output_path: Path, radius: float,
              aprec: int, zprec: int) -> None:
    """Read an image, blur its RGBA pixels and write the result."""
    if output_path.suffix.lower() not in Image.registered_extensions():
        raise ValueError(f"Unsupported output format: {output_path.suffix or output_path.name}")

    with Image.open(input_path) as img:
        pixels = np.array(img.convert('RGBA'), dtype=np.uint8)

    height, width = pixels.shape[:2]
    if radius < 1:
        logger.info(f"Radius {radius} < 1, writing {input_path} unchanged")
    apply_blur(pixels, width, height, radius, aprec, zprec)

    result = Image.fromarray(pixels)
    if output_path.suffix.lower() in _NO_ALPHA_SUFFIXES:
        result = result.convert('RGB')
    result.save(output_path)
    logger.info(f"Wrote {width}x{height} image to {output_path} (radius={radius})")


def main(argv: list[str] | None = None) -> int:
    """Entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else settings.LOG_LEVEL.upper()
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    try:
        blur_file(args.input, args.output, args.radius, args.aprec, args.zprec)
    except ExpBlurError as e:
        logger.error(f"Invalid blur parameters: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not process {args.input}: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Could not write {args.output}: {e}")
        return 1
    return 0
