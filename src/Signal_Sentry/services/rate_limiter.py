"""Serial request pacing with retry on rate-limit responses.

Provides a fixed pause between consecutive symbols and automatic retry with
backoff when a data source answers HTTP 429. The sleep function is injectable
so tests can run the scanner without real delays.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from Signal_Sentry.utils.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_DELAY_SECONDS: float = 1.2
DEFAULT_MAX_RETRIES: int = 3
DEFAULT_BACKOFF_DELAYS: list[float] = [2.0, 4.0, 8.0]

SleepFn = Callable[[float], Awaitable[None]]

T = TypeVar("T")


class RateLimiter:
    """Fixed-interval pacing policy with retry on rate limiting.

    Usage::

        limiter = RateLimiter(delay_seconds=1.2)

        for symbol in symbols:
            closes = await limiter.execute(
                lambda: fetch_closes(symbol),
                ticker=symbol,
                source="finnhub",
            )
            ...
            await limiter.wait()
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_delays: list[float] | None = None,
        sleep: SleepFn | None = None,
    ) -> None:
        self._delay_seconds = max(0.0, delay_seconds)
        self._max_retries = max_retries
        self._backoff_delays = (
            backoff_delays if backoff_delays is not None else list(DEFAULT_BACKOFF_DELAYS)
        )
        self._sleep: SleepFn = sleep if sleep is not None else asyncio.sleep

        logger.info(
            "RateLimiter initialized: delay=%.2fs, max_retries=%d",
            self._delay_seconds,
            max_retries,
        )

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    async def wait(self) -> None:
        """Pause for the configured inter-request delay (no-op when zero)."""
        if self._delay_seconds > 0:
            await self._sleep(self._delay_seconds)

    async def execute(
        self,
        fetch_fn: Callable[[], Awaitable[T]],
        *,
        ticker: str,
        source: str,
    ) -> T:
        """Call *fetch_fn* and retry on RateLimitExceededError.

        Each retry waits for the exception's ``retry_after`` when the server
        supplied one, otherwise for the next delay of the backoff schedule.

        Args:
            fetch_fn: Zero-argument callable returning an awaitable.
            ticker: Ticker symbol for error context.
            source: Data source name for error context.

        Returns:
            Whatever *fetch_fn* returns.

        Raises:
            RateLimitExceededError: After exhausting all retries.
        """
        attempt = 0
        while True:
            try:
                return await fetch_fn()
            except RateLimitExceededError as exc:
                if attempt >= self._max_retries:
                    logger.error(
                        "Rate limit exceeded for %s from %s after %d retries",
                        ticker,
                        source,
                        self._max_retries,
                    )
                    raise

                delay = self._get_retry_delay(exc, attempt)
                logger.warning(
                    "Rate limited on %s from %s (attempt %d/%d), retrying in %.1fs",
                    ticker,
                    source,
                    attempt + 1,
                    self._max_retries,
                    delay,
                )
                await self._sleep(delay)
                attempt += 1

    def _get_retry_delay(
        self,
        exc: RateLimitExceededError,
        attempt: int,
    ) -> float:
        """Determine how long to wait before the next retry."""
        if exc.retry_after is not None and exc.retry_after > 0:
            return exc.retry_after

        if not self._backoff_delays:
            return self._delay_seconds

        if attempt < len(self._backoff_delays):
            return self._backoff_delays[attempt]

        # Beyond the schedule: reuse the last delay
        return self._backoff_delays[-1]
