"""Command-line entry point for pixelblock.

This tool loads a JPEG or PNG image, replaces every block of pixels with
the block's average colour, and saves the result as an RGBA PNG.

All processing occurs on NumPy arrays; Pillow is used only for
loading and saving.

Usage example:
    python -m pixelblock -i input.jpg -b 16
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .errors import InvalidBlockSizeError, MissingInputError, PixelblockError
from .utils.loader import load_image, save_image
from .utils.pixelate import AVERAGES, pixelate

DEFAULT_BLOCK_SIZE = 8
DEFAULT_OUTPUT = "out.png"
DEFAULT_AVERAGE = "running-zero"

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing. If None, uses sys.argv.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="pixelblock",
        description="Pixelate an image by flattening square blocks to their average colour.",
    )

    parser.add_argument("-i", "--input", default=None, help="Image to pixelate (JPEG or PNG)")
    parser.add_argument(
        "-b",
        "--block-size",
        "--bs",
        dest="block_size",
        type=int,
        default=DEFAULT_BLOCK_SIZE,
        help=f"Block size in pixels, defaults to {DEFAULT_BLOCK_SIZE}",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output PNG path (default: {DEFAULT_OUTPUT} in the current directory)",
    )
    parser.add_argument(
        "--average",
        default=DEFAULT_AVERAGE,
        choices=AVERAGES,
        help=(
            "How each block's colour is computed: running-zero (pairwise running "
            "average in scan order, starting from transparent black) | running (same, "
            "seeded with the block's first pixel) | mean (arithmetic mean). "
            f"Default: {DEFAULT_AVERAGE}."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr; repeat for debug output",
    )

    return parser.parse_args(argv)


def validate_args(ns: argparse.Namespace) -> None:
    """Validate argument values.

    Raises
    ------
    MissingInputError
        If no input image was given.
    InvalidBlockSizeError
        If the block size is below 1.
    """
    if not ns.input:
        raise MissingInputError("input image required, use the -h flag for help")
    if ns.block_size < 1:
        raise InvalidBlockSizeError(f"block size must be a positive integer, got {ns.block_size}")


def pixelate_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path] = DEFAULT_OUTPUT,
    block_size: int = DEFAULT_BLOCK_SIZE,
    average: str = DEFAULT_AVERAGE,
) -> None:
    """Decode ``input_path``, pixelate it and write a PNG to ``output_path``."""
    img = load_image(input_path)
    result = pixelate(img, block_size, average=average)
    save_image(result, output_path)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry function for the CLI.

    Parameters
    ----------
    argv : list[str] | None
        Optional list of arguments for testing.

    Returns
    -------
    int
        Exit status code: 0 on success, 2 for usage errors, 1 when the
        image cannot be read or written.
    """
    args = parse_args(argv)
    _configure_logging(args.verbose)

    try:
        validate_args(args)
    except (MissingInputError, InvalidBlockSizeError) as e:
        print(e, file=sys.stderr)
        return 2

    try:
        pixelate_file(args.input, args.output, args.block_size, args.average)
    except PixelblockError as e:
        logger.debug("pipeline failed", exc_info=True)
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
