"""Cover URL normalisation."""

from __future__ import annotations

from collections.abc import Iterable

DEFAULT_SECURE_HOSTS = ("books.google.com",)


def secure_cover_url(url: str | None, hosts: Iterable[str] = DEFAULT_SECURE_HOSTS) -> str | None:
    """Upgrade ``http://`` cover links of known hosts to ``https://``.

    Returns ``None`` for a missing or blank reference; other URLs pass through.
    """

    if url is None or not url.strip():
        return None
    url = url.strip()
    for host in hosts:
        if url.startswith(f"http://{host}"):
            return "https://" + url[len("http://"):]
    return url
