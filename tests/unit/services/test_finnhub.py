"""Tests for FinnhubService using an httpx MockTransport.

Covers:
- get_symbols(): period-containing symbols filtered, order preserved
- get_symbols(): non-list payload and HTTP errors raise DataSourceUnavailableError
- get_closes(): query parameters (resolution D, unix from/to, token)
- get_closes(): status != "ok", missing/invalid close arrays raise InsufficientDataError
- 429 retried through the RateLimiter, then surfaced
- Transport errors and non-JSON bodies mapped to DataSourceUnavailableError
"""

from __future__ import annotations

import datetime
from collections.abc import Callable

import httpx
import pytest

from Signal_Sentry.services.finnhub import FinnhubService, filter_common_symbols
from Signal_Sentry.services.rate_limiter import RateLimiter
from Signal_Sentry.utils.exceptions import (
    DataSourceUnavailableError,
    InsufficientDataError,
    RateLimitExceededError,
)

NOW = datetime.datetime(2025, 1, 15, 21, 0, tzinfo=datetime.UTC)

Handler = Callable[[httpx.Request], httpx.Response]


async def _no_sleep(seconds: float) -> None:
    return None


def _service(handler: Handler, *, max_retries: int = 0) -> FinnhubService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    limiter = RateLimiter(delay_seconds=0.0, max_retries=max_retries, sleep=_no_sleep)
    return FinnhubService(
        api_key="test_key",
        rate_limiter=limiter,
        client=client,
        clock=lambda: NOW,
    )


class TestFilterCommonSymbols:
    """Tests for filter_common_symbols()."""

    def test_drops_symbols_with_period(self) -> None:
        payload = [{"symbol": "AAPL"}, {"symbol": "BRK.B"}, {"symbol": "MSFT"}]
        assert filter_common_symbols(payload) == ["AAPL", "MSFT"]

    def test_skips_malformed_entries(self) -> None:
        payload = [{"symbol": "AAPL"}, {"description": "x"}, "TSLA", {"symbol": 5}, {"symbol": ""}]
        assert filter_common_symbols(payload) == ["AAPL"]

    def test_non_list_is_empty(self) -> None:
        assert filter_common_symbols({"symbol": "AAPL"}) == []


class TestGetSymbols:
    """Tests for get_symbols()."""

    @pytest.mark.asyncio()
    async def test_returns_filtered_symbols(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json=[{"symbol": "AAPL"}, {"symbol": "BF.B"}, {"symbol": "NVDA"}],
            )

        async with _service(handler) as service:
            symbols = await service.get_symbols("US")

        assert symbols == ["AAPL", "NVDA"]
        assert seen[0].url.path == "/api/v1/stock/symbol"
        assert seen[0].url.params["exchange"] == "US"
        assert seen[0].url.params["token"] == "test_key"

    @pytest.mark.asyncio()
    async def test_non_list_payload_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"error": "bad token"})

        async with _service(handler) as service:
            with pytest.raises(DataSourceUnavailableError):
                await service.get_symbols()

    @pytest.mark.asyncio()
    async def test_http_error_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, text="Invalid API key")

        async with _service(handler) as service:
            with pytest.raises(DataSourceUnavailableError) as exc_info:
                await service.get_symbols()
        assert exc_info.value.http_status == 401

    @pytest.mark.asyncio()
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _service(handler) as service:
            with pytest.raises(DataSourceUnavailableError):
                await service.get_symbols()

    @pytest.mark.asyncio()
    async def test_non_json_body_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        async with _service(handler) as service:
            with pytest.raises(DataSourceUnavailableError):
                await service.get_symbols()


class TestGetCloses:
    """Tests for get_closes()."""

    @pytest.mark.asyncio()
    async def test_returns_closes_and_sends_window(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"s": "ok", "c": [1.0, 2, 3.5], "t": [1, 2, 3]})

        async with _service(handler) as service:
            closes = await service.get_closes("AAPL", days=120)

        assert closes == [1.0, 2.0, 3.5]
        params = seen[0].url.params
        to_ts = int(NOW.timestamp())
        assert seen[0].url.path == "/api/v1/stock/candle"
        assert params["symbol"] == "AAPL"
        assert params["resolution"] == "D"
        assert params["to"] == str(to_ts)
        assert params["from"] == str(to_ts - 120 * 86400)
        assert params["token"] == "test_key"

    @pytest.mark.asyncio()
    async def test_no_data_status_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"s": "no_data"})

        async with _service(handler) as service:
            with pytest.raises(InsufficientDataError) as exc_info:
                await service.get_closes("ZZZZ")
        assert exc_info.value.ticker == "ZZZZ"

    @pytest.mark.asyncio()
    async def test_missing_close_array_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"s": "ok", "c": None})

        async with _service(handler) as service:
            with pytest.raises(InsufficientDataError):
                await service.get_closes("AAPL")

    @pytest.mark.asyncio()
    async def test_non_numeric_close_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"s": "ok", "c": [1.0, "2.0", 3.0]})

        async with _service(handler) as service:
            with pytest.raises(InsufficientDataError):
                await service.get_closes("AAPL")

    @pytest.mark.asyncio()
    async def test_negative_close_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"s": "ok", "c": [1.0, -2.0]})

        async with _service(handler) as service:
            with pytest.raises(InsufficientDataError):
                await service.get_closes("AAPL")

    @pytest.mark.asyncio()
    async def test_empty_close_array_is_allowed(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"s": "ok", "c": []})

        async with _service(handler) as service:
            assert await service.get_closes("AAPL") == []


class TestRateLimitHandling:
    """Tests for 429 responses."""

    @pytest.mark.asyncio()
    async def test_retries_after_429(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                return httpx.Response(429, headers={"Retry-After": "1"})
            return httpx.Response(200, json={"s": "ok", "c": [10.0]})

        async with _service(handler, max_retries=2) as service:
            assert await service.get_closes("AAPL") == [10.0]
        assert calls == 2

    @pytest.mark.asyncio()
    async def test_raises_when_retries_exhausted(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, headers={"Retry-After": "3"})

        async with _service(handler, max_retries=1) as service:
            with pytest.raises(RateLimitExceededError) as exc_info:
                await service.get_closes("AAPL")
        assert exc_info.value.retry_after == 3.0
        assert exc_info.value.http_status == 429
