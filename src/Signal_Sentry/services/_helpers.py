"""Shared helpers for the HTTP-backed service modules.

Holds the common timeout configuration and small conversions used by both
``finnhub`` and ``notifier``.
"""

from __future__ import annotations

import datetime
import logging
import math
from typing import Final

import httpx

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------

EXTERNAL_CALL_TIMEOUT_SECONDS: Final[float] = 30.0

HTTP_TIMEOUT: Final[httpx.Timeout] = httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0)
HTTP_LIMITS: Final[httpx.Limits] = httpx.Limits(max_connections=10, max_keepalive_connections=5)


def build_client() -> httpx.AsyncClient:
    """Create an httpx client with the shared timeout and pool limits."""
    return httpx.AsyncClient(timeout=HTTP_TIMEOUT, limits=HTTP_LIMITS)


def unix_seconds(moment: datetime.datetime) -> int:
    """Whole seconds since the epoch, truncated toward negative infinity."""
    return math.floor(moment.timestamp())


def parse_retry_after(value: str | None) -> float | None:
    """Parse a ``Retry-After`` header given in seconds.

    HTTP-date values and garbage return None so the caller falls back to its
    own backoff schedule.
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        logger.debug("Ignoring non-numeric Retry-After header: %r", value)
        return None
    if not math.isfinite(seconds) or seconds <= 0:
        return None
    return seconds


def is_price(value: object) -> bool:
    """True for finite, non-negative int/float values (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0
