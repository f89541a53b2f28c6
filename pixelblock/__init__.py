"""pixelblock - flatten an image into square blocks of averaged colour.

Example:
    from pixelblock import load_image, pixelate, save_image

    grid = load_image("photo.jpg")
    save_image(pixelate(grid, 8), "out.png")

For debug logging, enable with:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""
import logging

# Package logger - silent unless the application configures logging.
logger = logging.getLogger("pixelblock")
logger.addHandler(logging.NullHandler())

from .errors import (  # noqa: E402
    DecodeError,
    InvalidBlockSizeError,
    MissingInputError,
    OpenError,
    PixelblockError,
    WriteError,
)
from .pixel import ZERO_PIXEL, Pixel, pixel_at  # noqa: E402
from .utils.loader import extract_pixels, load_image, open_image, save_image  # noqa: E402
from .utils.pixelate import AVERAGES, pixelate  # noqa: E402

__all__ = [
    "AVERAGES",
    "DecodeError",
    "InvalidBlockSizeError",
    "MissingInputError",
    "OpenError",
    "Pixel",
    "PixelblockError",
    "WriteError",
    "ZERO_PIXEL",
    "extract_pixels",
    "load_image",
    "open_image",
    "pixel_at",
    "pixelate",
    "save_image",
]
