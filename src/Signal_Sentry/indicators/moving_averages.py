"""Moving average indicators: SMA, EMA.

All functions take pandas Series in, return pandas Series out.
NaN for warmup period, never filled or dropped. Too-short input yields an
all-NaN result rather than an error.
"""

import numpy as np
import pandas as pd


def sma(
    close: pd.Series,
    period: int = 10,
) -> pd.Series:
    """Simple moving average: mean of the last ``period`` closes.

    Warmup: first ``period - 1`` values are NaN.
    """
    result: pd.Series = close.astype(float).rolling(window=period).mean()
    return result


def ema(
    close: pd.Series,
    period: int = 12,
) -> pd.Series:
    """Exponential moving average seeded with the SMA of the first window.

    Formula:
        seed  = mean(close[0:period])              (placed at index period - 1)
        ema_t = (close_t - ema_{t-1}) * k + ema_{t-1},  k = 2 / (period + 1)

    The recurrence folds over the whole history after the seed window, so the
    result depends on the order of every value, not only on a trailing slice.
    It is evaluated literally in the form above so that a flat series stays
    exactly flat.

    Warmup: first ``period - 1`` values are NaN.

    Reference: StockCharts "Moving Averages - Simple and Exponential".
    """
    values = close.to_numpy(dtype=float)
    n = len(values)
    out = np.full(n, np.nan)

    if n >= period:
        # Compute iteratively (cannot be vectorized exactly due to state)
        k = 2.0 / (period + 1)
        prev = float(values[:period].sum()) / period
        out[period - 1] = prev
        for i in range(period, n):
            prev = (values[i] - prev) * k + prev
            out[i] = prev

    result = pd.Series(out, index=close.index)
    return result
