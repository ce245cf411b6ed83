"""HTTP health probe and blocking sleep adapters."""

from __future__ import annotations

import logging
import time

import httpx

logger = logging.getLogger(__name__)


def probe_url(url: str, *, timeout: float = 1.0) -> bool:
    """Issue one GET against ``url`` and report whether it answered.

    Mirrors ``curl -fsS``: redirects are not followed, any status below 400
    counts as success, and transport failures count as a failed attempt.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=False)
    except httpx.HTTPError as exc:
        logger.debug("Health probe failed", extra={"url": url, "error": str(exc)})
        return False
    return response.status_code < 400


def sleep(seconds: float) -> None:
    """Block the current thread for ``seconds``."""
    time.sleep(seconds)


__all__ = ["probe_url", "sleep"]
