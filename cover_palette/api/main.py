"""FastAPI entrypoint and HTTP routes."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Query, Request

from cover_palette import __version__
from cover_palette.api.cover_client import CoverImageClient
from cover_palette.api.schemas import PaletteResponse
from cover_palette.config.settings import get_settings
from cover_palette.imgproc.color_extract import ExtractionParams, PaletteExtractor
from cover_palette.monitoring.logging import configure_logging
from cover_palette.services.theme import CoverThemeService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    client = CoverImageClient(settings)
    extractor = PaletteExtractor(ExtractionParams.from_settings(settings))
    app.state.theme_service = CoverThemeService(client, extractor)
    try:
        yield
    finally:
        await client.close()


def get_theme_service(request: Request) -> CoverThemeService:
    """Return the service created during application startup."""

    return request.app.state.theme_service


def create_app() -> FastAPI:
    """Initialise the FastAPI application."""

    settings = get_settings()
    configure_logging()
    app = FastAPI(
        title="Cover Palette API",
        version=__version__,
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    @app.get("/palette", tags=["palette"], response_model=PaletteResponse)
    async def palette_from_url(
        url: str | None = Query(default=None, description="Cover image URL."),
        service: CoverThemeService = Depends(get_theme_service),
    ) -> PaletteResponse:
        """Fetch a cover and return its palette; failures yield the default palette."""

        palette = await service.palette_for(url)
        return PaletteResponse.from_palette(palette)

    @app.post("/palette", tags=["palette"], response_model=PaletteResponse)
    async def palette_from_upload(
        request: Request,
        service: CoverThemeService = Depends(get_theme_service),
    ) -> PaletteResponse:
        """Analyse image bytes sent as the raw request body."""

        palette = await service.palette_for_bytes(await request.body())
        return PaletteResponse.from_palette(palette)

    return app


app = create_app()
