"""Trend indicators: Momentum ratio, MACD line.

All functions take pandas Series in, return pandas Series out.
NaN for warmup period, never filled or dropped.
"""

import numpy as np
import pandas as pd

from Signal_Sentry.indicators.moving_averages import ema


def momentum(
    close: pd.Series,
    period: int = 5,
) -> pd.Series:
    """Momentum ratio: (close - close_n_periods_ago) / close_n_periods_ago.

    The lookback index is clamped to the start of the series, so the first
    ``period`` points are measured against the first close instead of being
    left undefined. A zero reference close yields NaN.

    No warmup: every point of a non-empty series has a value.
    """
    values = close.astype(float)
    if values.empty:
        return values

    past = values.shift(period)
    past.iloc[:period] = values.iloc[0]

    # Guard division by zero when the reference close is 0
    result: pd.Series = (values - past) / past.replace(0.0, np.nan)
    return result


def macd(
    close: pd.Series,
    fast: int = 12,
    slow: int = 26,
) -> pd.Series:
    """MACD line: EMA(fast) - EMA(slow).

    Warmup: first ``max(fast, slow) - 1`` values are NaN.

    Reference: Gerald Appel, "Technical Analysis: Power Tools for Active Investors".
    """
    result: pd.Series = ema(close, period=fast) - ema(close, period=slow)
    return result
