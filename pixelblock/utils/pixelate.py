"""Block-averaging pixelation on NumPy pixel grids.

The grid is split into ``block_size x block_size`` tiles aligned to (0, 0).
Each tile is reduced to one colour, then every pixel of the tile is rewritten
with it. When the image size is not a multiple of the block size the last
tile in each dimension is simply smaller; it is neither padded nor clipped.

Tile colours come from one of three strategies:

- ``"running-zero"`` (default): running pairwise average. Every tile's
  accumulator starts at the zero pixel. Pixels are visited column by column
  (outer loop over x, inner over y) and each one, the first included, is
  merged into the accumulator with a floor average, so later pixels weigh
  more. A solid tile therefore comes out slightly darker and more
  transparent than its input.
- ``"running"``: as ``"running-zero"``, but the first pixel of a tile seeds
  its accumulator, which keeps solid tiles unchanged.
- ``"mean"``: floor of the arithmetic mean over the pixels in the tile.
"""
from __future__ import annotations

import logging

import numpy as np

from ..errors import InvalidBlockSizeError
from ..pixel import ZERO_PIXEL, average_channels

Array = np.ndarray

AVERAGES = ("running-zero", "running", "mean")

logger = logging.getLogger(__name__)


def _check_block_size(block_size) -> None:
    if isinstance(block_size, bool) or not isinstance(block_size, (int, np.integer)):
        raise InvalidBlockSizeError(f"block size must be a positive integer, got {block_size!r}")
    if block_size < 1:
        raise InvalidBlockSizeError(f"block size must be a positive integer, got {block_size}")


def _running_average(arr: Array, block_size: int, zero_start: bool) -> Array:
    """Accumulate each tile's running average.

    Returns the averages grid of shape (H // S + 1, W // S + 1, 4), every
    entry starting at ``ZERO_PIXEL``. Rows and columns past the last real tile
    keep that value.
    """
    H, W, _ = arr.shape
    averages = np.full((H // block_size + 1, W // block_size + 1, len(ZERO_PIXEL)), ZERO_PIXEL, dtype=np.int32)

    # Offset (dx, dy) inside a tile addresses one pixel in every tile at once,
    # so walking the offsets x-major reproduces the per-tile traversal order.
    for dx in range(min(block_size, W)):
        for dy in range(min(block_size, H)):
            samples = arr[dy::block_size, dx::block_size]
            th, tw = samples.shape[:2]
            if dx == 0 and dy == 0 and not zero_start:
                averages[:th, :tw] = samples
            else:
                averages[:th, :tw] = average_channels(averages[:th, :tw], samples)
    return averages


def _block_mean(arr: Array, block_size: int) -> Array:
    """Floor mean of every tile, partial tiles divided by their own size."""
    H, W, _ = arr.shape
    rows = np.arange(0, H, block_size)
    cols = np.arange(0, W, block_size)

    sums = np.add.reduceat(np.add.reduceat(arr.astype(np.int64), rows, axis=0), cols, axis=1)
    counts = np.outer(np.diff(np.append(rows, H)), np.diff(np.append(cols, W)))
    return sums // counts[:, :, None]


def _expand_tiles(averages: Array, block_size: int, height: int, width: int) -> Array:
    """Nearest-neighbour upscale of the tile grid, cropped to (height, width)."""
    yi = np.arange(height) // block_size
    xi = np.arange(width) // block_size
    return averages[yi[:, None], xi[None, :], :].astype(np.uint8)


def pixelate(arr: Array, block_size: int, average: str = "running-zero") -> Array:
    """Pixelate an RGBA grid by flattening each tile to a single colour.

    Parameters
    ----------
    arr : np.ndarray
        Pixel grid of shape (H, W, 4), dtype=uint8. It is not modified.
    block_size : int
        Side length of the square tiles (>=1).
    average : str
        Tile colour strategy, one of ``AVERAGES``.

    Returns
    -------
    np.ndarray
        New grid with the same shape and dtype as the input.

    Raises
    ------
    InvalidBlockSizeError
        If ``block_size`` is not an integer >= 1.
    ValueError
        If ``arr`` is not an RGBA grid or ``average`` is unknown.
    """
    if not isinstance(arr, np.ndarray) or arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError("arr must be an RGBA grid with shape (H, W, 4)")
    if arr.dtype != np.uint8:
        raise ValueError("arr must have dtype=uint8")
    _check_block_size(block_size)
    if average not in AVERAGES:
        raise ValueError(f"Unknown averaging strategy: {average}")

    H, W, _ = arr.shape
    if H == 0 or W == 0:
        return arr.copy()

    logger.debug(
        "pixelating %dx%d grid, block size %d, %d tiles, %s average",
        W,
        H,
        block_size,
        -(-W // block_size) * -(-H // block_size),
        average,
    )

    if average == "mean":
        averages = _block_mean(arr, block_size)
    else:
        averages = _running_average(arr, block_size, zero_start=average == "running-zero")
    return _expand_tiles(averages, block_size, H, W)
