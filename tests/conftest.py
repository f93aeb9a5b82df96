"""Shared fixtures for palette tests."""

from __future__ import annotations

import struct
import zlib
from io import BytesIO
from typing import Callable

import pytest
from PIL import Image

from cover_palette.config.settings import get_settings

PngFactory = Callable[..., bytes]


def _encode_png(width: int, height: int, rgba: tuple[int, int, int, int]) -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", (width, height), rgba).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_png() -> PngFactory:
    """Return a factory producing PNG bytes of a solid-colour image."""

    return _encode_png


@pytest.fixture
def red_cover_png() -> bytes:
    return _encode_png(40, 60, (200, 40, 40, 255))


def _png_chunk(kind: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", zlib.crc32(kind + payload))


@pytest.fixture
def damaged_png() -> bytes:
    """A PNG whose image data is split over two chunks, the second with a mangled chunk type."""

    data = _encode_png(64, 64, (200, 40, 40, 255))
    signature, offset = data[:8], 8
    header = idat = b""
    while offset < len(data):
        (length,) = struct.unpack(">I", data[offset : offset + 4])
        kind = data[offset + 4 : offset + 8]
        payload = data[offset + 8 : offset + 8 + length]
        if kind == b"IHDR":
            header = _png_chunk(kind, payload)
        elif kind == b"IDAT":
            idat += payload
        offset += 12 + length

    half = len(idat) // 2
    return (
        signature
        + header
        + _png_chunk(b"IDAT", idat[:half])
        + _png_chunk(b"I\xd6ND", idat[half:])
        + _png_chunk(b"IEND", b"")
    )
