"""Exceptions raised by pixelblock.

Every error is terminal: library code raises one of these and the CLI turns
it into a one-line diagnostic and a non-zero exit status.
"""
from __future__ import annotations


class PixelblockError(Exception):
    """Base exception for pixelblock errors."""

    pass


class MissingInputError(PixelblockError):
    """No input image path was given."""


class OpenError(PixelblockError):
    """The input file could not be opened."""


class DecodeError(PixelblockError):
    """The input bytes are not a valid JPEG or PNG image."""


class InvalidBlockSizeError(PixelblockError, ValueError):
    """Block size is not a positive integer."""


class WriteError(PixelblockError):
    """The output image could not be encoded or written."""
