"""Palette selection and background gradient composition."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from cover_palette.imgproc.color import BLACK, Color
from cover_palette.imgproc.vibrancy import Candidate

SECONDARY_BRIGHTNESS_DELTA = -0.2
LIGHT_BRIGHTNESS_DELTA = 0.4


@dataclass(frozen=True, slots=True)
class GradientStop:
    """A colour drawn at the given opacity."""

    color: Color
    opacity: float

    def to_dict(self) -> dict[str, Any]:
        return {"color": self.color.hex, "opacity": self.opacity}


CLEAR = GradientStop(BLACK, 0.0)


@dataclass(frozen=True, slots=True)
class Palette:
    """Theme colours derived from a cover image."""

    dominant: Color
    secondary: Color
    light: Color
    gradient: tuple[GradientStop, GradientStop, GradientStop]

    @property
    def text_color(self) -> Color:
        """Readable text colour on top of the dominant colour."""

        return self.dominant.contrasting_text_color()

    def to_dict(self) -> dict[str, Any]:
        return {
            "dominant": self.dominant.hex,
            "secondary": self.secondary.hex,
            "light": self.light.hex,
            "gradient": [stop.to_dict() for stop in self.gradient],
            "text_color": self.text_color.hex,
        }


FALLBACK_DOMINANT = Color.from_hex("#007aff")
FALLBACK_SECONDARY = Color.from_hex("#8e8e93")
FALLBACK_LIGHT = Color.from_hex("#f2f2f7")

FALLBACK_PALETTE = Palette(
    dominant=FALLBACK_DOMINANT,
    secondary=FALLBACK_SECONDARY,
    light=FALLBACK_LIGHT,
    gradient=(CLEAR, CLEAR, CLEAR),
)


def compose_gradient(light: Color) -> tuple[GradientStop, GradientStop, GradientStop]:
    """Background stops from top to bottom: faint tint fading to transparent."""

    return (GradientStop(light, 0.3), GradientStop(light, 0.1), CLEAR)


def rank_candidates(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Order by descending count; equal counts fall back to ascending (R, G, B)."""

    return sorted(candidates, key=lambda item: (-item[1], item[0]))


def select_palette(
    candidates: Sequence[Candidate],
    *,
    secondary_delta: float = SECONDARY_BRIGHTNESS_DELTA,
    light_delta: float = LIGHT_BRIGHTNESS_DELTA,
) -> Palette:
    """Pick dominant and secondary colours and derive the light variant.

    With no candidates the fixed :data:`FALLBACK_PALETTE` is returned.
    """

    ranked = rank_candidates(candidates)
    if not ranked:
        return FALLBACK_PALETTE

    dominant = ranked[0][0]
    if len(ranked) > 1:
        secondary = ranked[1][0]
    else:
        secondary = dominant.adjust_brightness(secondary_delta)
    light = dominant.adjust_brightness(light_delta)

    return Palette(
        dominant=dominant,
        secondary=secondary,
        light=light,
        gradient=compose_gradient(light),
    )
