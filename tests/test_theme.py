"""Tests for the theming service and its publish boundary."""

from __future__ import annotations

import asyncio

import pytest
import pytest_mock

from cover_palette.api.cover_client import CoverImageClient
from cover_palette.imgproc.color import Color
from cover_palette.imgproc.errors import ImageUnavailableError
from cover_palette.imgproc.palette import FALLBACK_PALETTE, Palette, select_palette
from cover_palette.services.theme import CoverThemeService, ThemeState

OLD = select_palette([(Color.from_rgb8(192, 32, 32), 1)])
NEW = select_palette([(Color.from_rgb8(32, 32, 192), 1)])


class _GatedService:
    """Returns a fixed palette per URL once the test opens that URL's gate."""

    def __init__(self, palettes: dict[str, Palette]) -> None:
        self._palettes = palettes
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, url: str) -> asyncio.Event:
        return self._gates.setdefault(url, asyncio.Event())

    def release(self, url: str) -> None:
        self._gate(url).set()

    async def palette_for(self, image_url: str | None) -> Palette:
        await self._gate(image_url).wait()
        return self._palettes[image_url]


@pytest.fixture
def client_mock(mocker: pytest_mock.MockerFixture):
    client = mocker.Mock(spec=CoverImageClient)
    client.fetch = mocker.AsyncMock()
    return client


@pytest.mark.asyncio
async def test_missing_url_skips_fetch(client_mock) -> None:
    service = CoverThemeService(client_mock)

    assert await service.palette_for(None) is FALLBACK_PALETTE
    assert await service.palette_for("") is FALLBACK_PALETTE
    client_mock.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_fetch_failure_falls_back(client_mock) -> None:
    client_mock.fetch.side_effect = ImageUnavailableError("timeout")

    palette = await CoverThemeService(client_mock).palette_for("https://covers.test/a.jpg")

    assert palette == FALLBACK_PALETTE


@pytest.mark.asyncio
async def test_fetched_cover_is_analysed(client_mock, red_cover_png: bytes) -> None:
    client_mock.fetch.return_value = red_cover_png

    palette = await CoverThemeService(client_mock).palette_for("https://covers.test/a.jpg")

    assert palette.dominant == Color.from_rgb8(192, 32, 32)
    client_mock.fetch.assert_awaited_once_with("https://covers.test/a.jpg")


@pytest.mark.asyncio
async def test_state_publishes_latest_result(client_mock, red_cover_png: bytes) -> None:
    client_mock.fetch.return_value = red_cover_png
    state = ThemeState(CoverThemeService(client_mock))
    published: list[Palette] = []
    state.subscribe(published.append)

    result = await state.request("https://covers.test/a.jpg")

    assert state.palette is result
    assert published == [result]
    assert state.generation == 1


@pytest.mark.asyncio
async def test_stale_result_never_overwrites_newer_request() -> None:
    service = _GatedService({"old": OLD, "new": NEW})
    state = ThemeState(service)  # type: ignore[arg-type]
    published: list[Palette] = []
    state.subscribe(published.append)

    first = asyncio.create_task(state.request("old"))
    await asyncio.sleep(0)
    second = asyncio.create_task(state.request("new"))
    await asyncio.sleep(0)

    service.release("new")
    assert await second == NEW
    service.release("old")
    assert await first is None

    assert state.palette == NEW
    assert published == [NEW]


@pytest.mark.asyncio
async def test_reset_invalidates_in_flight_request() -> None:
    service = _GatedService({"old": OLD})
    state = ThemeState(service)  # type: ignore[arg-type]

    pending = asyncio.create_task(state.request("old"))
    await asyncio.sleep(0)
    state.reset()
    service.release("old")

    assert await pending is None
    assert state.palette is FALLBACK_PALETTE
