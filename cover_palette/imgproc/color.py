"""Colour value type with on-demand HSB conversion."""

from __future__ import annotations

import colorsys
from dataclasses import dataclass


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True, slots=True, order=True)
class Color:
    """sRGB colour with channels stored as floats in ``[0, 1]``.

    Instances compare lexicographically by ``(red, green, blue)``, which is the
    tie-break order used when ranking palette candidates.
    """

    red: float
    green: float
    blue: float

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} channel must be within [0, 1], got {value!r}")

    @classmethod
    def from_rgb8(cls, red: int, green: int, blue: int) -> Color:
        """Build a colour from 8-bit channel values."""

        return cls(red / 255.0, green / 255.0, blue / 255.0)

    @classmethod
    def from_hsb(cls, hue: float, saturation: float, brightness: float) -> Color:
        red, green, blue = colorsys.hsv_to_rgb(hue, _clamp(saturation), _clamp(brightness))
        return cls(_clamp(red), _clamp(green), _clamp(blue))

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#rrggbb`` (leading ``#`` optional)."""

        digits = value.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected a #rrggbb colour, got {value!r}")
        return cls.from_rgb8(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def hsb(self) -> tuple[float, float, float]:
        """Hue, saturation and brightness, each in ``[0, 1]``."""

        return colorsys.rgb_to_hsv(self.red, self.green, self.blue)

    @property
    def rgb8(self) -> tuple[int, int, int]:
        return (
            round(self.red * 255),
            round(self.green * 255),
            round(self.blue * 255),
        )

    @property
    def hex(self) -> str:
        red, green, blue = self.rgb8
        return f"#{red:02x}{green:02x}{blue:02x}"

    @property
    def luminance(self) -> float:
        """Perceived luminance using Rec. 601 luma weights."""

        return 0.299 * self.red + 0.587 * self.green + 0.114 * self.blue

    def adjust_brightness(self, amount: float) -> Color:
        """Return a copy with brightness shifted by ``amount`` and clamped to ``[0, 1]``.

        Hue and saturation are preserved.
        """

        hue, saturation, brightness = self.hsb
        return Color.from_hsb(hue, saturation, _clamp(brightness + amount))

    def contrasting_text_color(self) -> Color:
        """Black for light backgrounds, white for dark ones."""

        return BLACK if self.luminance > 0.5 else WHITE


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
