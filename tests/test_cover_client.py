"""Tests for the cover download client."""

from __future__ import annotations

import httpx
import pytest

from cover_palette.api.cover_client import CoverImageClient
from cover_palette.config.settings import Settings
from cover_palette.imgproc.errors import ImageUnavailableError


def _client(handler, **overrides) -> CoverImageClient:
    return CoverImageClient(Settings(**overrides), transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_upgrades_known_host_to_https() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, content=b"cover-bytes")

    client = _client(handler)
    try:
        data = await client.fetch("http://books.google.com/books/content?id=1")
    finally:
        await client.close()

    assert data == b"cover-bytes"
    assert seen[0].scheme == "https"


@pytest.mark.asyncio
async def test_fetch_maps_error_status() -> None:
    client = _client(lambda request: httpx.Response(404))
    try:
        with pytest.raises(ImageUnavailableError, match="404"):
            await client.fetch("https://covers.test/missing.jpg")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_fetch_maps_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(ImageUnavailableError):
            await client.fetch("https://covers.test/a.jpg")
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_fetch_rejects_empty_and_oversized_bodies() -> None:
    empty = _client(lambda request: httpx.Response(200, content=b""))
    large = _client(lambda request: httpx.Response(200, content=b"x" * 16), cover_max_bytes=8)
    try:
        with pytest.raises(ImageUnavailableError, match="empty"):
            await empty.fetch("https://covers.test/a.jpg")
        with pytest.raises(ImageUnavailableError, match="limit"):
            await large.fetch("https://covers.test/a.jpg")
    finally:
        await empty.close()
        await large.close()


@pytest.mark.asyncio
async def test_fetch_blank_url() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"unused"))
    try:
        with pytest.raises(ImageUnavailableError):
            await client.fetch("  ")
    finally:
        await client.close()


class _EndlessBody:
    """Async byte stream that never ends and records how much was pulled."""

    def __init__(self, chunk: bytes) -> None:
        self.chunk = chunk
        self.pulled = 0

    async def __aiter__(self):
        while True:
            self.pulled += 1
            yield self.chunk


@pytest.mark.asyncio
async def test_fetch_stops_reading_past_the_limit() -> None:
    body = _EndlessBody(b"x" * 8)
    client = _client(lambda request: httpx.Response(200, content=body), cover_max_bytes=20)
    try:
        with pytest.raises(ImageUnavailableError, match="limit"):
            await client.fetch("https://covers.test/endless.jpg")
    finally:
        await client.close()

    assert body.pulled == 3


@pytest.mark.asyncio
async def test_fetch_rejects_declared_length_before_reading() -> None:
    body = _EndlessBody(b"x" * 8)
    client = _client(
        lambda request: httpx.Response(200, headers={"Content-Length": "4096"}, content=body),
        cover_max_bytes=1024,
    )
    try:
        with pytest.raises(ImageUnavailableError, match="4096"):
            await client.fetch("https://covers.test/huge.jpg")
    finally:
        await client.close()

    assert body.pulled == 0


@pytest.mark.asyncio
async def test_fetch_joins_streamed_chunks() -> None:
    async def chunks():
        yield b"cover-"
        yield b"bytes"

    client = _client(lambda request: httpx.Response(200, content=chunks()))
    try:
        assert await client.fetch("https://covers.test/a.jpg") == b"cover-bytes"
    finally:
        await client.close()
