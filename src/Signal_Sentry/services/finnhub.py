"""Finnhub REST client for the symbol universe and daily closing prices.

Two endpoints are used: ``/stock/symbol`` lists the tradable symbols of an
exchange and ``/stock/candle`` returns daily candles for one symbol. All
requests go through a shared ``httpx.AsyncClient`` with a bounded per-call
timeout. HTTP 429 responses are surfaced as ``RateLimitExceededError`` and
retried by the ``RateLimiter``.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
from collections.abc import Callable
from typing import Any, Final

import httpx

from Signal_Sentry.services._helpers import (
    EXTERNAL_CALL_TIMEOUT_SECONDS,
    build_client,
    is_price,
    parse_retry_after,
    unix_seconds,
)
from Signal_Sentry.services.rate_limiter import RateLimiter
from Signal_Sentry.utils.exceptions import (
    DataSourceUnavailableError,
    InsufficientDataError,
    RateLimitExceededError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

FINNHUB_SOURCE: Final[str] = "finnhub"
FINNHUB_API_BASE_URL: Final[str] = "https://finnhub.io/api/v1"
FINNHUB_FETCH_TIMEOUT: Final[float] = EXTERNAL_CALL_TIMEOUT_SECONDS

DAILY_RESOLUTION: Final[str] = "D"
DEFAULT_EXCHANGE: Final[str] = "US"
DEFAULT_HISTORY_DAYS: Final[int] = 120

# Symbols containing this character denote share classes, units, warrants etc.
NON_COMMON_MARKER: Final[str] = "."

_HTTP_TOO_MANY_REQUESTS: Final[int] = 429


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def filter_common_symbols(payload: object) -> list[str]:
    """Extract usable symbols from a ``/stock/symbol`` payload, keeping order.

    Entries without a string ``symbol`` and symbols containing a period are
    dropped.
    """
    if not isinstance(payload, list):
        return []
    symbols: list[str] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        symbol = entry.get("symbol")
        if not isinstance(symbol, str) or not symbol or NON_COMMON_MARKER in symbol:
            continue
        symbols.append(symbol)
    return symbols


class FinnhubService:
    """Async Finnhub client providing symbols and daily closes.

    Usage::

        limiter = RateLimiter(delay_seconds=1.2)
        finnhub = FinnhubService(api_key="...", rate_limiter=limiter)

        symbols = await finnhub.get_symbols(exchange="US")
        closes = await finnhub.get_closes("AAPL", days=120)
        await finnhub.aclose()
    """

    def __init__(
        self,
        api_key: str,
        rate_limiter: RateLimiter,
        client: httpx.AsyncClient | None = None,
        base_url: str = FINNHUB_API_BASE_URL,
        clock: Callable[[], datetime.datetime] = _utc_now,
    ) -> None:
        self._api_key = api_key
        self._rate_limiter = rate_limiter
        self._client = client if client is not None else build_client()
        self._base_url = base_url.rstrip("/")
        self._clock = clock

        logger.info(
            "FinnhubService initialized: api_key=%s",
            "configured" if api_key else "not configured",
        )

    async def aclose(self) -> None:
        """Close the shared httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> FinnhubService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_symbols(self, exchange: str = DEFAULT_EXCHANGE) -> list[str]:
        """Return the common-stock symbols listed on *exchange*.

        Raises:
            DataSourceUnavailableError: If Finnhub is unreachable, answers
                with an error status, or returns something other than a list.
        """
        payload = await self._rate_limiter.execute(
            lambda: self._get_json("/stock/symbol", {"exchange": exchange}, ticker="*"),
            ticker="*",
            source=FINNHUB_SOURCE,
        )
        if not isinstance(payload, list):
            raise DataSourceUnavailableError(
                f"Unexpected symbol list payload: {type(payload).__name__}",
                ticker="*",
                source=FINNHUB_SOURCE,
            )

        symbols = filter_common_symbols(payload)
        logger.info("Fetched %d symbols for exchange %s from Finnhub", len(symbols), exchange)
        return symbols

    async def get_closes(
        self,
        symbol: str,
        days: int = DEFAULT_HISTORY_DAYS,
    ) -> list[float]:
        """Return daily closing prices for *symbol* over the last *days* days.

        Returns:
            Closing prices, oldest first.

        Raises:
            InsufficientDataError: If Finnhub reports no data or the payload
                is malformed.
            RateLimitExceededError: If still rate limited after retries.
            DataSourceUnavailableError: On HTTP errors and timeouts.
        """
        to_ts = self._clock()
        from_ts = to_ts - datetime.timedelta(days=days)
        params = {
            "symbol": symbol,
            "resolution": DAILY_RESOLUTION,
            "from": str(unix_seconds(from_ts)),
            "to": str(unix_seconds(to_ts)),
        }
        payload = await self._rate_limiter.execute(
            lambda: self._get_json("/stock/candle", params, ticker=symbol),
            ticker=symbol,
            source=FINNHUB_SOURCE,
        )
        closes = self._parse_closes(payload, symbol)
        logger.debug("Fetched %d closes for %s", len(closes), symbol)
        return closes

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get_json(
        self,
        path: str,
        params: dict[str, str],
        *,
        ticker: str,
    ) -> Any:
        """GET ``{base_url}{path}`` with the API token and decode the JSON body."""
        url = f"{self._base_url}{path}"
        query = {**params, "token": self._api_key}

        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=query),
                timeout=FINNHUB_FETCH_TIMEOUT,
            )
        except TimeoutError as exc:
            raise DataSourceUnavailableError(
                f"Finnhub request {path} timed out.",
                ticker=ticker,
                source=FINNHUB_SOURCE,
            ) from exc
        except httpx.HTTPError as exc:
            raise DataSourceUnavailableError(
                f"Finnhub request {path} failed: {exc}",
                ticker=ticker,
                source=FINNHUB_SOURCE,
            ) from exc

        if response.status_code == _HTTP_TOO_MANY_REQUESTS:
            raise RateLimitExceededError(
                f"Finnhub rate limit hit on {path}.",
                ticker=ticker,
                source=FINNHUB_SOURCE,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
            )

        if not response.is_success:
            raise DataSourceUnavailableError(
                f"Finnhub returned HTTP {response.status_code} for {path}.",
                ticker=ticker,
                source=FINNHUB_SOURCE,
                http_status=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise DataSourceUnavailableError(
                f"Finnhub returned a non-JSON body for {path}.",
                ticker=ticker,
                source=FINNHUB_SOURCE,
                http_status=response.status_code,
            ) from exc

    @staticmethod
    def _parse_closes(payload: object, symbol: str) -> list[float]:
        """Validate a ``/stock/candle`` payload and return its close array."""
        if not isinstance(payload, dict) or payload.get("s") != "ok":
            status = payload.get("s") if isinstance(payload, dict) else None
            raise InsufficientDataError(
                f"No candle data for {symbol} (status={status!r}).",
                ticker=symbol,
                source=FINNHUB_SOURCE,
            )

        closes = payload.get("c")
        if not isinstance(closes, list):
            raise InsufficientDataError(
                f"Candle payload for {symbol} has no close array.",
                ticker=symbol,
                source=FINNHUB_SOURCE,
            )

        if not all(is_price(value) for value in closes):
            raise InsufficientDataError(
                f"Candle payload for {symbol} contains non-numeric or negative closes.",
                ticker=symbol,
                source=FINNHUB_SOURCE,
            )

        return [float(value) for value in closes]
