"""Indicator snapshot: evaluate the indicator library at the latest close."""

import logging

import pandas as pd

from Signal_Sentry.indicators import latest, macd, momentum, rsi, sma
from Signal_Sentry.models.signals import IndicatorSet

logger = logging.getLogger(__name__)

# --- Indicator periods ---
SMA_SHORT_PERIOD: int = 10
SMA_LONG_PERIOD: int = 50
RSI_PERIOD: int = 14
MACD_FAST_PERIOD: int = 12
MACD_SLOW_PERIOD: int = 26
MOMENTUM_PERIOD: int = 5


def compute_indicators(close: pd.Series | list[float]) -> IndicatorSet:
    """Compute the :class:`IndicatorSet` for a series of daily closes.

    Args:
        close: Daily closing prices, oldest first.

    Returns:
        IndicatorSet whose fields are ``None`` wherever the series is too
        short for the indicator's window.
    """
    prices = close if isinstance(close, pd.Series) else pd.Series(close, dtype=float)

    indicators = IndicatorSet(
        last_close=latest(prices),
        sma_short=latest(sma(prices, period=SMA_SHORT_PERIOD)),
        sma_long=latest(sma(prices, period=SMA_LONG_PERIOD)),
        rsi=latest(rsi(prices, period=RSI_PERIOD)),
        macd=latest(macd(prices, fast=MACD_FAST_PERIOD, slow=MACD_SLOW_PERIOD)),
        momentum=latest(momentum(prices, period=MOMENTUM_PERIOD)),
    )
    logger.debug("Indicators over %d closes: %s", len(prices), indicators)
    return indicators
