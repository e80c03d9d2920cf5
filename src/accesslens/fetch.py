"""Fetch remote markup with httpx."""
from __future__ import annotations

import logging

import httpx

from accesslens.errors import InputError

log = logging.getLogger(__name__)


def fetch_markup(
    url: str,
    *,
    timeout: float = 30.0,
    max_bytes: int = 5 * 1024 * 1024,
    client: httpx.Client | None = None,
) -> str:
    """Download *url* and return its body as text.

    Raises :class:`InputError` on transport failure, a non-2xx status, or
    a body over *max_bytes*.
    """
    owned = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        log.info("Fetching %s", url)
        try:
            resp = http.get(url)
        except httpx.HTTPError as exc:
            raise InputError(f"Could not fetch {url}: {exc}", cause=exc) from exc
        if resp.status_code >= 400:
            raise InputError(f"Could not fetch {url}: HTTP {resp.status_code}")
        if len(resp.content) > max_bytes:
            raise InputError(f"Document at {url} exceeds {max_bytes} bytes")
        return resp.text
    finally:
        if owned:
            http.close()
