"""Print the palette of a cover image from a file or URL."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Sequence

from cover_palette.api.cover_client import CoverImageClient
from cover_palette.config.settings import Settings, get_settings
from cover_palette.imgproc.color_extract import ExtractionParams, PaletteExtractor
from cover_palette.imgproc.errors import PaletteExtractionError
from cover_palette.imgproc.palette import FALLBACK_PALETTE, Palette
from cover_palette.imgproc.pixels import load_image
from cover_palette.monitoring.logging import configure_logging
from cover_palette.services.theme import CoverThemeService

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def _palette_from_url(url: str, settings: Settings, extractor: PaletteExtractor) -> Palette:
    client = CoverImageClient(settings)
    try:
        return await CoverThemeService(client, extractor).palette_for(url)
    finally:
        await client.close()


def resolve_palette(source: str, settings: Settings) -> Palette:
    extractor = PaletteExtractor(ExtractionParams.from_settings(settings))
    if _is_url(source):
        return asyncio.run(_palette_from_url(source, settings, extractor))

    try:
        buffer = load_image(Path(source).expanduser())
    except PaletteExtractionError as exc:
        logger.warning("Cannot read cover %s: %s", source, exc)
        return FALLBACK_PALETTE
    return extractor.extract(buffer)


def format_palette(palette: Palette) -> str:
    lines = [
        f"dominant   {palette.dominant.hex}",
        f"secondary  {palette.secondary.hex}",
        f"light      {palette.light.hex}",
        f"text       {palette.text_color.hex}",
    ]
    for index, stop in enumerate(palette.gradient):
        lines.append(f"stop {index}     {stop.color.hex} @ {stop.opacity:.1f}")
    if palette == FALLBACK_PALETTE:
        lines.append("(default palette)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cover-palette", description=__doc__)
    parser.add_argument("source", help="Image file path or http(s) URL")
    parser.add_argument("--json", action="store_true", help="Print the palette as JSON")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    palette = resolve_palette(args.source, get_settings())
    if args.json:
        print(json.dumps(palette.to_dict(), indent=2))
    else:
        print(format_palette(palette))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
