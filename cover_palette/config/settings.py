"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _split_hosts(raw: str) -> tuple[str, ...]:
    return tuple(host.strip().lower() for host in raw.split(",") if host.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    cover_target_size: int = 100
    cover_sample_stride: int = 5
    cover_bucket_width: int = 32
    cover_alpha_threshold: int = 128

    cover_secure_hosts: tuple[str, ...] = ("books.google.com",)
    cover_fetch_timeout: float = 10.0
    cover_max_bytes: int = 10 * 1024 * 1024


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        cover_target_size=int(os.getenv("COVER_TARGET_SIZE", "100")),
        cover_sample_stride=int(os.getenv("COVER_SAMPLE_STRIDE", "5")),
        cover_bucket_width=int(os.getenv("COVER_BUCKET_WIDTH", "32")),
        cover_alpha_threshold=int(os.getenv("COVER_ALPHA_THRESHOLD", "128")),
        cover_secure_hosts=_split_hosts(os.getenv("COVER_SECURE_HOSTS", "books.google.com")),
        cover_fetch_timeout=float(os.getenv("COVER_FETCH_TIMEOUT", "10")),
        cover_max_bytes=int(os.getenv("COVER_MAX_BYTES", str(10 * 1024 * 1024))),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
