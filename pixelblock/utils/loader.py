"""Image loading and saving utilities using Pillow, with NumPy arrays.

All pixel processing happens on NumPy grids of shape (H, W, 4), dtype
uint8, RGBA order, straight (non-premultiplied) alpha. These helpers only
convert between image files and such grids.

Pillow narrows 16-bit colour PNGs to 8 bits on decode by keeping the high
byte. Those files are decoded again with OpenCV at full width so every
channel goes through the same ``// 257`` scaling as 16-bit greyscale.
"""
from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image

from ..errors import DecodeError, OpenError, WriteError
from ..pixel import normalize_channel

Array = np.ndarray

SUPPORTED_FORMATS = ("JPEG", "PNG")

# Pillow modes holding one wide (16-bit or more) luminance channel.
_WIDE_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}

_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
# PNG colour types Pillow narrows at 16 bits: grey+alpha, RGB, RGBA.
_WIDE_COLOUR_TYPES = {2, 4, 6}

logger = logging.getLogger(__name__)


def _read_bytes(p: Path) -> bytes:
    try:
        with p.open("rb") as fp:
            return fp.read()
    except OSError as exc:
        raise OpenError(f"failed to open image: {p}") from exc


def _decode(data: bytes, p: Path) -> Image.Image:
    try:
        with Image.open(io.BytesIO(data), formats=SUPPORTED_FORMATS) as im:
            im.load()
            logger.info("opened %s (%s, %s, %dx%d)", p, im.format, im.mode, im.width, im.height)
            return im.copy()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"failed to get pixels from image: {p}") from exc


def _is_wide_colour_png(data: bytes) -> bool:
    """True for a 16-bit PNG with colour or alpha channels, read from IHDR."""
    if len(data) < 26 or not data.startswith(_PNG_SIGNATURE) or data[12:16] != b"IHDR":
        return False
    bit_depth, colour_type = struct.unpack(">BB", data[24:26])
    return bit_depth == 16 and colour_type in _WIDE_COLOUR_TYPES


def _extract_wide_colour(data: bytes, p: Path) -> Array:
    """Decode a 16-bit colour PNG at full width and scale it to RGBA 8-bit."""
    decoded = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if decoded is None or decoded.dtype != np.uint16:
        raise DecodeError(f"failed to get pixels from image: {p}")

    if decoded.ndim == 2:
        rgba = cv2.cvtColor(decoded, cv2.COLOR_GRAY2RGBA)
    elif decoded.shape[2] == 3:
        rgba = cv2.cvtColor(decoded, cv2.COLOR_BGR2RGBA)
    else:
        rgba = cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGBA)
    logger.debug("decoded %s at 16 bits per channel", p)
    return normalize_channel(rgba.astype(np.int64)).astype(np.uint8)


def open_image(path: Union[str, Path]) -> Image.Image:
    """Open and fully decode a JPEG or PNG file.

    Parameters
    ----------
    path : str | Path
        Path to the input image.

    Returns
    -------
    PIL.Image.Image
        A decoded image detached from the file.

    Raises
    ------
    OpenError
        If the file cannot be opened.
    DecodeError
        If the contents are not a valid JPEG or PNG image.
    """
    p = Path(path)
    return _decode(_read_bytes(p), p)


def extract_pixels(image: Image.Image) -> Array:
    """Convert a decoded image into an RGBA pixel grid.

    Wide single-channel images are scaled to 8 bits by integer division
    by 257 and get opaque alpha. Everything else goes through Pillow's
    RGBA conversion with straight (non-premultiplied) alpha.

    Returns
    -------
    np.ndarray
        Array of shape (H, W, 4), dtype=uint8.
    """
    if image.mode in _WIDE_MODES:
        wide = np.clip(np.asarray(image, dtype=np.int64), 0, 65535)
        grey = normalize_channel(wide).astype(np.uint8)
        return np.dstack([grey, grey, grey, np.full_like(grey, 255)])
    return np.array(image.convert("RGBA"), dtype=np.uint8)


def load_image(path: Union[str, Path]) -> Array:
    """Load a JPEG or PNG file into an RGBA pixel grid.

    Raises
    ------
    OpenError
        If the file cannot be opened.
    DecodeError
        If the contents are not a valid JPEG or PNG image.
    """
    p = Path(path)
    data = _read_bytes(p)
    image = _decode(data, p)
    if _is_wide_colour_png(data):
        return _extract_wide_colour(data, p)
    return extract_pixels(image)


def save_image(arr: Array, path: Union[str, Path]) -> None:
    """Save an RGBA pixel grid as a PNG file via Pillow.

    The file is PNG-encoded whatever its extension.

    Parameters
    ----------
    arr : np.ndarray
        Array of shape (H, W, 4), dtype=uint8.
    path : str | Path
        Output file path.

    Raises
    ------
    WriteError
        If encoding or writing fails.
    """
    if not isinstance(arr, np.ndarray):
        raise TypeError("arr must be a NumPy array")
    if arr.dtype != np.uint8:
        raise TypeError("arr must have dtype=uint8")
    if arr.ndim != 3 or arr.shape[2] != 4:
        raise ValueError("arr must have shape (H, W, 4)")

    p = Path(path)
    try:
        Image.fromarray(arr).save(p, format="PNG")
    except (OSError, ValueError) as exc:
        raise WriteError(f"failed to write image: {p}") from exc
    logger.info("wrote %s (%dx%d)", p, arr.shape[1], arr.shape[0])
