"""Strided colour histogram over quantized RGB buckets."""

from __future__ import annotations

import numpy as np

from cover_palette.imgproc.color import Color
from cover_palette.imgproc.pixels import PixelBuffer

DEFAULT_STRIDE = 5
DEFAULT_BUCKET_WIDTH = 32
DEFAULT_ALPHA_THRESHOLD = 128

Histogram = dict[Color, int]


def validate_bucket_width(bucket_width: int) -> None:
    if bucket_width <= 0 or 256 % bucket_width:
        raise ValueError(f"Bucket width must divide 256, got {bucket_width}.")


def quantize_channel(value: int, bucket_width: int = DEFAULT_BUCKET_WIDTH) -> int:
    """Map an 8-bit channel value to the lower bound of its bucket."""

    return (value // bucket_width) * bucket_width


def build_histogram(
    buffer: PixelBuffer,
    *,
    stride: int = DEFAULT_STRIDE,
    bucket_width: int = DEFAULT_BUCKET_WIDTH,
    alpha_threshold: int = DEFAULT_ALPHA_THRESHOLD,
) -> Histogram:
    """Count quantized colours of every ``stride``-th pixel in both axes.

    Sampling starts at the origin, so buffers smaller than the stride still
    contribute pixel (0, 0). Pixels with alpha at or below ``alpha_threshold``
    are skipped.
    """

    if stride <= 0:
        raise ValueError(f"Stride must be positive, got {stride}.")
    validate_bucket_width(bucket_width)
    if buffer.is_empty:
        return {}

    sampled = buffer.as_array()[::stride, ::stride].reshape(-1, 4)
    opaque = sampled[sampled[:, 3] > alpha_threshold]
    if not len(opaque):
        return {}

    quantized = (opaque[:, :3].astype(np.int32) // bucket_width) * bucket_width
    buckets, counts = np.unique(quantized, axis=0, return_counts=True)

    return {
        Color.from_rgb8(int(red), int(green), int(blue)): int(count)
        for (red, green, blue), count in zip(buckets, counts)
    }
