"""Response models for the palette API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cover_palette.imgproc.palette import FALLBACK_PALETTE, Palette


class GradientStopModel(BaseModel):
    color: str
    opacity: float = Field(ge=0.0, le=1.0)


class PaletteResponse(BaseModel):
    """Palette colours serialised as ``#rrggbb`` strings."""

    dominant: str
    secondary: str
    light: str
    gradient: list[GradientStopModel]
    text_color: str
    fallback: bool

    @classmethod
    def from_palette(cls, palette: Palette) -> PaletteResponse:
        return cls(**palette.to_dict(), fallback=palette == FALLBACK_PALETTE)
