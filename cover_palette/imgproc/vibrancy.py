"""Drop colours that make poor accents: grays, near-black and near-white."""

from __future__ import annotations

from collections.abc import Mapping

from cover_palette.imgproc.color import Color

MIN_SATURATION = 0.3
MIN_BRIGHTNESS = 0.2
MAX_BRIGHTNESS = 0.9

Candidate = tuple[Color, int]


def is_vibrant(
    color: Color,
    *,
    min_saturation: float = MIN_SATURATION,
    min_brightness: float = MIN_BRIGHTNESS,
    max_brightness: float = MAX_BRIGHTNESS,
) -> bool:
    """All bounds are exclusive."""

    _, saturation, brightness = color.hsb
    return saturation > min_saturation and min_brightness < brightness < max_brightness


def filter_vibrant(
    histogram: Mapping[Color, int],
    *,
    min_saturation: float = MIN_SATURATION,
    min_brightness: float = MIN_BRIGHTNESS,
    max_brightness: float = MAX_BRIGHTNESS,
) -> list[Candidate]:
    """Return the vibrant ``(colour, count)`` pairs ordered by colour."""

    return [
        (color, count)
        for color, count in sorted(histogram.items())
        if is_vibrant(
            color,
            min_saturation=min_saturation,
            min_brightness=min_brightness,
            max_brightness=max_brightness,
        )
    ]
