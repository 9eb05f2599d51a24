"""Shared test fixtures for the Signal Sentry test suite.

Provides a ready configuration, representative close series and a fixed
clock so tests don't need to inline construction blocks.
"""

import datetime

import numpy as np
import pytest

from Signal_Sentry.config import ScannerConfig
from Signal_Sentry.models import IndicatorSet

FIXED_NOW = datetime.datetime(2025, 1, 15, 21, 0, 0, tzinfo=datetime.UTC)


@pytest.fixture()
def fixed_now() -> datetime.datetime:
    """A fixed UTC instant used as 'now' in ledger and scanner tests."""
    return FIXED_NOW


@pytest.fixture()
def sample_config(tmp_path) -> ScannerConfig:  # type: ignore[no-untyped-def]
    """Scanner configuration with defaults, no pacing and a temp ledger file."""
    return ScannerConfig(
        finnhub_api_key="test_finnhub_key",
        discord_webhook="https://discord.test/api/webhooks/1/abc",
        batch_delay_ms=0,
        alerts_file=tmp_path / "alerts_history.json",
    )


@pytest.fixture()
def flat_closes() -> list[float]:
    """60 identical closes."""
    return [100.0] * 60


@pytest.fixture()
def bullish_closes() -> list[float]:
    """80 closes trending up with a pullback every third day.

    Every scoring rule holds at the last point: close and SMA10 above SMA50,
    RSI below 70 thanks to the pullbacks, positive MACD and momentum.
    """
    closes: list[float] = []
    price = 50.0
    for i in range(80):
        price = price - 1.5 if i % 3 == 2 else price + 1.0
        closes.append(round(price, 2))
    return closes


@pytest.fixture()
def bearish_closes() -> list[float]:
    """80 strictly falling closes: no rule holds except RSI < 70."""
    return [float(v) for v in np.linspace(200.0, 120.0, 80)]


@pytest.fixture()
def sample_indicators() -> IndicatorSet:
    """A fully defined indicator snapshot for a qualifying symbol."""
    return IndicatorSet(
        last_close=186.75,
        sma_short=184.2,
        sma_long=178.4,
        rsi=58.3,
        macd=1.2345,
        momentum=0.0213,
    )
