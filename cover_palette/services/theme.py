"""Cover theming: fetch, extract off the event loop, publish in request order."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from cover_palette.api.cover_client import CoverImageClient
from cover_palette.imgproc.color_extract import PaletteExtractor
from cover_palette.imgproc.errors import ImageUnavailableError
from cover_palette.imgproc.palette import FALLBACK_PALETTE, Palette

logger = logging.getLogger(__name__)

PaletteListener = Callable[[Palette], None]


class CoverThemeService:
    """Produces a palette for a cover reference; never raises on image problems."""

    def __init__(self, client: CoverImageClient, extractor: PaletteExtractor | None = None) -> None:
        self._client = client
        self._extractor = extractor or PaletteExtractor()

    async def palette_for(self, image_url: str | None) -> Palette:
        """Fetch ``image_url`` and extract its palette.

        A missing URL yields the fallback palette without touching the network.
        """

        if image_url is None or not image_url.strip():
            return FALLBACK_PALETTE
        try:
            data = await self._client.fetch(image_url)
        except ImageUnavailableError as exc:
            logger.warning("Cover unavailable, using default palette: %s", exc)
            return FALLBACK_PALETTE
        return await self.palette_for_bytes(data)

    async def palette_for_bytes(self, data: bytes | None) -> Palette:
        """Decode and analyse ``data`` in a worker thread."""

        return await asyncio.to_thread(self._extractor.extract_bytes, data)


class ThemeState:
    """Holds the palette currently shown and guards it against stale results.

    Every :meth:`request` takes a new generation number. A result is published
    only if no newer request started while it was being computed.
    """

    def __init__(self, service: CoverThemeService) -> None:
        self._service = service
        self._palette = FALLBACK_PALETTE
        self._generation = 0
        self._listeners: list[PaletteListener] = []

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: PaletteListener) -> None:
        """Call ``listener`` with every published palette."""

        self._listeners.append(listener)

    async def request(self, image_url: str | None) -> Palette | None:
        """Compute and publish the palette for ``image_url``.

        Returns the published palette, or ``None`` when a newer request
        superseded this one before it finished.
        """

        self._generation += 1
        generation = self._generation
        result = await self._service.palette_for(image_url)
        if generation != self._generation:
            logger.debug(
                "Discarding palette for generation %d; generation %d is current.",
                generation,
                self._generation,
            )
            return None
        self._publish(result)
        return result

    def reset(self) -> None:
        """Invalidate in-flight requests and publish the fallback palette."""

        self._generation += 1
        self._publish(FALLBACK_PALETTE)

    def _publish(self, result: Palette) -> None:
        self._palette = result
        for listener in self._listeners:
            listener(result)
