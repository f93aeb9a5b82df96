"""Failures raised inside the palette extraction pipeline.

None of these reach callers of :class:`~cover_palette.imgproc.color_extract.PaletteExtractor`
or the theme service: both convert them into the fallback palette.
"""

from __future__ import annotations


class PaletteExtractionError(RuntimeError):
    """Base class for recoverable extraction failures."""


class ImageUnavailableError(PaletteExtractionError):
    """Raised when there is no image to work with (missing reference or failed fetch)."""


class ImageDecodeError(PaletteExtractionError):
    """Raised when bytes cannot be decoded into an image."""


class EmptyImageError(PaletteExtractionError):
    """Raised when the image or its histogram carries no usable pixels."""
