"""Technical indicators for the signal scanner.

Pure math module: pandas Series in, pandas Series out.
No API calls, no Pydantic models, no I/O.
"""

import math

import pandas as pd

from Signal_Sentry.indicators.moving_averages import ema, sma
from Signal_Sentry.indicators.oscillators import rsi
from Signal_Sentry.indicators.trend import macd, momentum


def latest(series: pd.Series) -> float | None:
    """Return the most recent value of *series*, or None when it is undefined.

    Empty series, NaN and infinite values all map to None.
    """
    if series.empty:
        return None
    value = float(series.iloc[-1])
    if not math.isfinite(value):
        return None
    return value


__all__ = [
    "ema",
    "latest",
    "macd",
    "momentum",
    "rsi",
    "sma",
]
