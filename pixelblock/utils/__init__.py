"""Utility functions for pixelblock.

Modules:
- loader: JPEG/PNG decoding into RGBA grids and PNG encoding back out.
- pixelate: Tile averaging over RGBA grids.
"""
from .loader import extract_pixels, load_image, open_image, save_image
from .pixelate import AVERAGES, pixelate

__all__ = [
    "AVERAGES",
    "extract_pixels",
    "load_image",
    "open_image",
    "pixelate",
    "save_image",
]
