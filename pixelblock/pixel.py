"""Pixel value type and the channel arithmetic shared by the pipeline."""
from __future__ import annotations

from typing import NamedTuple

import numpy as np

Array = np.ndarray

# 65535 / 255: maps a 16-bit channel onto the 8-bit range.
CHANNEL_SCALE = 257


class Pixel(NamedTuple):
    """One RGBA pixel, each channel an int in [0, 255]."""

    r: int
    g: int
    b: int
    a: int

    def average(self, other: "Pixel") -> "Pixel":
        """Floor-average each channel against ``other``."""
        return Pixel(*((x + y) // 2 for x, y in zip(self, other)))


ZERO_PIXEL = Pixel(0, 0, 0, 0)


def normalize_channel(value):
    """Scale 16-bit channel value(s) to 8 bits, truncating toward zero.

    Works on plain ints and on integer NumPy arrays alike.
    """
    return value // CHANNEL_SCALE


def average_channels(a: Array, b: Array) -> Array:
    """Vectorized form of :meth:`Pixel.average` over arrays of pixels."""
    return (a.astype(np.int32) + b) // 2


def pixel_at(grid: Array, x: int, y: int) -> Pixel:
    """Return the pixel at column ``x``, row ``y`` of an (H, W, 4) grid."""
    return Pixel(*(int(c) for c in grid[y, x]))
