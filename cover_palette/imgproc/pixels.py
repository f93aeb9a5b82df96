"""Pixel buffers, image decoding and downsampling."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from cover_palette.imgproc.errors import EmptyImageError, ImageDecodeError, ImageUnavailableError

DEFAULT_TARGET_SIZE = (100, 100)
BYTES_PER_PIXEL = 4


@dataclass(frozen=True, slots=True)
class PixelBuffer:
    """Row-major RGBA8 pixels with known dimensions."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Pixel buffer dimensions must be non-negative.")
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for a {self.width}x{self.height} RGBA buffer, got {len(self.data)}.",
            )

    @classmethod
    def filled(cls, width: int, height: int, rgba: tuple[int, int, int, int]) -> PixelBuffer:
        """Return a buffer where every pixel has the same RGBA value."""

        return cls(width, height, bytes(rgba) * (width * height))

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_array(self) -> np.ndarray:
        """Read-only ``(height, width, 4)`` uint8 view over the pixel data."""

        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, BYTES_PER_PIXEL)

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), self.data)


def buffer_from_image(image: Image.Image) -> PixelBuffer:
    """Convert an opened Pillow image into an RGBA pixel buffer."""

    rgba = image.convert("RGBA")
    return PixelBuffer(rgba.width, rgba.height, rgba.tobytes())


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, ...) into an RGBA pixel buffer."""

    if not data:
        raise ImageUnavailableError("No image bytes to decode.")
    try:
        with Image.open(BytesIO(data)) as img:
            return buffer_from_image(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise ImageDecodeError(f"Image bytes could not be decoded: {exc}") from exc


def load_image(path: Path) -> PixelBuffer:
    """Decode an image stored on the local filesystem."""

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageUnavailableError(f"Image file {path} is not readable: {exc}") from exc
    return decode_image(data)


def downsample(buffer: PixelBuffer, size: tuple[int, int] = DEFAULT_TARGET_SIZE) -> PixelBuffer:
    """Resize ``buffer`` to ``size`` regardless of aspect ratio.

    Bilinear resampling keeps the result deterministic for identical input.
    """

    if buffer.is_empty:
        raise EmptyImageError("Cannot downsample an empty pixel buffer.")
    resized = buffer.to_image().resize(size, Image.Resampling.BILINEAR)
    return PixelBuffer(resized.width, resized.height, resized.tobytes())
