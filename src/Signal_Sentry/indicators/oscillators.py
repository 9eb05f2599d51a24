"""Oscillator indicators: RSI.

All functions take pandas Series in, return pandas Series out.
NaN for warmup period, never filled or dropped.
"""

import numpy as np
import pandas as pd

RSI_MAX: float = 100.0
RSI_MIN: float = 0.0


def rsi(
    close: pd.Series,
    period: int = 14,
) -> pd.Series:
    """Relative Strength Index over a simple (non-smoothed) window.

    Formula:
        avg_gain = sum(positive deltas over last ``period`` deltas) / period
        avg_loss = sum(|negative deltas| over last ``period`` deltas) / period
        RSI      = 100 - (100 / (1 + avg_gain / avg_loss))

    When avg_loss = 0 (no negative delta in the window, flat windows
    included): RSI = 100.
    Warmup: first ``period`` values are NaN. Fewer than ``period + 1`` points
    produce an all-NaN result.

    Reference: Cutler's RSI (simple-average variant of Wilder 1978).
    """
    values = close.astype(float)
    delta = values.diff()

    gains = delta.clip(lower=0.0)
    losses = (-delta).clip(lower=0.0)

    avg_gain = gains.rolling(window=period).sum() / period
    avg_loss = losses.rolling(window=period).sum() / period

    # Rolling sums can leave float residue after a loss leaves the window,
    # so the zero-loss case is decided by counting negative deltas instead.
    loss_count = delta.lt(0.0).astype(float).rolling(window=period).sum()
    no_loss_mask = loss_count.eq(0.0) & avg_gain.notna()

    rs = avg_gain / avg_loss.replace(0.0, np.nan)
    rsi_values = RSI_MAX - (RSI_MAX / (1.0 + rs))
    rsi_values = rsi_values.clip(lower=RSI_MIN, upper=RSI_MAX)
    rsi_values[no_loss_mask] = RSI_MAX

    # Set warmup to NaN
    rsi_values.iloc[:period] = np.nan

    result: pd.Series = rsi_values
    return result
