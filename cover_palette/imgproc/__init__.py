"""Cover image analysis: pixel decoding, histogramming and palette selection."""

from .color import Color
from .color_extract import ExtractionParams, PaletteExtractor, extract
from .errors import EmptyImageError, ImageDecodeError, ImageUnavailableError, PaletteExtractionError
from .palette import FALLBACK_PALETTE, GradientStop, Palette
from .pixels import PixelBuffer, decode_image

__all__ = [
    "Color",
    "EmptyImageError",
    "ExtractionParams",
    "FALLBACK_PALETTE",
    "GradientStop",
    "ImageDecodeError",
    "ImageUnavailableError",
    "Palette",
    "PaletteExtractionError",
    "PaletteExtractor",
    "PixelBuffer",
    "decode_image",
    "extract",
]
