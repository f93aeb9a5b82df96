"""Async HTTP client fetching cover image bytes."""

from __future__ import annotations

import logging

import httpx

from cover_palette.api.urls import secure_cover_url
from cover_palette.config.settings import Settings
from cover_palette.imgproc.errors import ImageUnavailableError

logger = logging.getLogger(__name__)


class CoverImageClient:
    """Downloads cover images, upgrading known hosts to HTTPS first."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            timeout=settings.cover_fetch_timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    async def fetch(self, url: str) -> bytes:
        """Return the raw bytes behind ``url``.

        Raises :class:`ImageUnavailableError` for blank URLs, transport failures,
        error statuses, empty bodies and bodies above ``cover_max_bytes``. The
        body is streamed, so an oversized response is abandoned once the limit
        is passed instead of being buffered whole.
        """

        target = secure_cover_url(url, self._settings.cover_secure_hosts)
        if target is None:
            raise ImageUnavailableError("No cover URL given.")

        try:
            async with self._client.stream("GET", target) as response:
                response.raise_for_status()
                content = await self._read_limited(response, target)
        except httpx.HTTPStatusError as exc:
            raise ImageUnavailableError(
                f"Cover request to {target} failed with status {exc.response.status_code}.",
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise ImageUnavailableError(f"Cover request to {target} failed: {exc}") from exc

        if not content:
            raise ImageUnavailableError(f"Cover at {target} returned an empty body.")
        logger.debug("Fetched %d bytes from %s", len(content), target)
        return content

    async def _read_limited(self, response: httpx.Response, target: str) -> bytes:
        limit = self._settings.cover_max_bytes
        declared = response.headers.get("Content-Length", "")
        if declared.isdigit() and int(declared) > limit:
            raise ImageUnavailableError(
                f"Cover at {target} declares {declared} bytes, above the {limit} byte limit.",
            )

        chunks: list[bytes] = []
        received = 0
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > limit:
                raise ImageUnavailableError(
                    f"Cover at {target} exceeded the {limit} byte limit.",
                )
            chunks.append(chunk)
        return b"".join(chunks)
