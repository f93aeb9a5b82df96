"""Dominant colour extraction pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cover_palette.config.settings import Settings
from cover_palette.imgproc import histogram, palette, pixels, vibrancy
from cover_palette.imgproc.errors import (
    EmptyImageError,
    ImageDecodeError,
    ImageUnavailableError,
    PaletteExtractionError,
)
from cover_palette.imgproc.palette import FALLBACK_PALETTE, Palette
from cover_palette.imgproc.pixels import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExtractionParams:
    """Tunables for a single extraction run."""

    target_size: tuple[int, int] = pixels.DEFAULT_TARGET_SIZE
    stride: int = histogram.DEFAULT_STRIDE
    bucket_width: int = histogram.DEFAULT_BUCKET_WIDTH
    alpha_threshold: int = histogram.DEFAULT_ALPHA_THRESHOLD
    min_saturation: float = vibrancy.MIN_SATURATION
    min_brightness: float = vibrancy.MIN_BRIGHTNESS
    max_brightness: float = vibrancy.MAX_BRIGHTNESS
    secondary_delta: float = palette.SECONDARY_BRIGHTNESS_DELTA
    light_delta: float = palette.LIGHT_BRIGHTNESS_DELTA

    def __post_init__(self) -> None:
        width, height = self.target_size
        if width <= 0 or height <= 0:
            raise ValueError(f"Target size must be positive, got {self.target_size}.")
        if self.stride <= 0:
            raise ValueError(f"Stride must be positive, got {self.stride}.")
        histogram.validate_bucket_width(self.bucket_width)
        if not 0 <= self.alpha_threshold <= 255:
            raise ValueError(f"Alpha threshold must be within 0..255, got {self.alpha_threshold}.")

    @classmethod
    def from_settings(cls, settings: Settings) -> ExtractionParams:
        size = settings.cover_target_size
        return cls(
            target_size=(size, size),
            stride=settings.cover_sample_stride,
            bucket_width=settings.cover_bucket_width,
            alpha_threshold=settings.cover_alpha_threshold,
        )


class PaletteExtractor:
    """Turns cover pixels into a :class:`Palette`; never raises on bad images.

    The extractor holds only its parameters, so one instance can serve any
    number of concurrent calls.
    """

    def __init__(self, params: ExtractionParams | None = None) -> None:
        self._params = params or ExtractionParams()

    @property
    def params(self) -> ExtractionParams:
        return self._params

    def extract(self, buffer: PixelBuffer | None) -> Palette:
        """Return the palette for ``buffer`` or the fallback palette."""

        if buffer is None:
            return FALLBACK_PALETTE
        try:
            return self._run(buffer)
        except PaletteExtractionError as exc:
            return self._fallback(exc)

    def extract_bytes(self, data: bytes | None) -> Palette:
        """Decode encoded image bytes and extract their palette."""

        if not data:
            return FALLBACK_PALETTE
        try:
            return self._run(pixels.decode_image(data))
        except PaletteExtractionError as exc:
            return self._fallback(exc)

    def _run(self, buffer: PixelBuffer) -> Palette:
        params = self._params
        small = pixels.downsample(buffer, params.target_size)
        counts = histogram.build_histogram(
            small,
            stride=params.stride,
            bucket_width=params.bucket_width,
            alpha_threshold=params.alpha_threshold,
        )
        if not counts:
            raise EmptyImageError("No opaque pixels were sampled.")

        candidates = vibrancy.filter_vibrant(
            counts,
            min_saturation=params.min_saturation,
            min_brightness=params.min_brightness,
            max_brightness=params.max_brightness,
        )
        if not candidates:
            raise EmptyImageError(f"None of {len(counts)} sampled colours is vibrant.")

        return palette.select_palette(
            candidates,
            secondary_delta=params.secondary_delta,
            light_delta=params.light_delta,
        )

    @staticmethod
    def _fallback(exc: PaletteExtractionError) -> Palette:
        if isinstance(exc, (ImageUnavailableError, ImageDecodeError)):
            logger.warning("Palette extraction fell back to defaults: %s", exc)
        else:
            logger.debug("Palette extraction fell back to defaults: %s", exc)
        return FALLBACK_PALETTE


def extract(buffer: PixelBuffer | None) -> Palette:
    """Extract a palette with default parameters."""

    return PaletteExtractor().extract(buffer)
