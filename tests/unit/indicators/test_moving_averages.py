"""Tests for moving average indicators: sma, ema.

Every indicator is tested with:
1. Known-value test
2. Minimum data test
3. Insufficient data test (all NaN, never raises)
4. NaN warmup test
5. Edge cases (flat, order dependence, input not mutated)
"""

import numpy as np
import pandas as pd
import pytest

from Signal_Sentry.indicators import latest
from Signal_Sentry.indicators.moving_averages import ema, sma

# ---------------------------------------------------------------------------
# sma tests
# ---------------------------------------------------------------------------


class TestSMA:
    """Tests for the simple moving average."""

    def test_known_value(self) -> None:
        """Mean of the last 3 of [1..5] is (3 + 4 + 5) / 3 = 4."""
        close = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0])
        result = sma(close, period=3)
        assert result.iloc[-1] == pytest.approx(4.0)

    def test_minimum_data(self) -> None:
        """Exactly period points produce one valid output."""
        close = pd.Series(np.linspace(10, 20, 10))
        result = sma(close, period=10)
        assert len(result.dropna()) == 1

    def test_insufficient_data_returns_all_nan(self) -> None:
        """Shorter than the window: undefined, not an error."""
        close = pd.Series([10.0, 11.0, 12.0])
        result = sma(close, period=10)
        assert result.isna().all()
        assert latest(result) is None

    def test_nan_warmup_count(self) -> None:
        close = pd.Series(np.linspace(100, 120, 30))
        result = sma(close, period=10)
        assert result.iloc[:9].isna().all()
        assert result.iloc[9:].notna().all()

    def test_flat_series_equals_price(self) -> None:
        close = pd.Series([42.5] * 60)
        assert latest(sma(close, period=50)) == 42.5

    def test_empty_series(self) -> None:
        result = sma(pd.Series([], dtype=float), period=10)
        assert result.empty
        assert latest(result) is None


# ---------------------------------------------------------------------------
# ema tests
# ---------------------------------------------------------------------------


class TestEMA:
    """Tests for the SMA-seeded exponential moving average."""

    def test_known_value(self) -> None:
        """Hand-computed with period=3 (k = 0.5).

        seed  = mean(2, 4, 6) = 4
        t=3:  (8 - 4) * 0.5 + 4 = 6
        t=4:  (10 - 6) * 0.5 + 6 = 8
        """
        close = pd.Series([2.0, 4.0, 6.0, 8.0, 10.0])
        result = ema(close, period=3)
        assert result.iloc[2] == pytest.approx(4.0)
        assert result.iloc[3] == pytest.approx(6.0)
        assert result.iloc[4] == pytest.approx(8.0)

    def test_matches_explicit_recurrence(self) -> None:
        """Agrees with a plain loop over the recurrence on irregular data."""
        rng = np.random.default_rng(7)
        values = list(100 + rng.normal(0, 2, 90).cumsum())
        period = 12
        k = 2 / (period + 1)
        expected = sum(values[:period]) / period
        for value in values[period:]:
            expected = (value - expected) * k + expected

        assert latest(ema(pd.Series(values), period=period)) == pytest.approx(expected, rel=1e-12)

    def test_minimum_data_equals_seed(self) -> None:
        """Exactly period points: the value is the simple average."""
        close = pd.Series([1.0, 2.0, 3.0, 4.0])
        result = ema(close, period=4)
        assert len(result.dropna()) == 1
        assert result.iloc[-1] == pytest.approx(2.5)

    def test_insufficient_data_returns_all_nan(self) -> None:
        close = pd.Series([1.0, 2.0])
        result = ema(close, period=12)
        assert result.isna().all()
        assert len(result) == 2
        assert latest(result) is None

    def test_nan_warmup_count(self) -> None:
        close = pd.Series(np.linspace(1, 50, 50))
        result = ema(close, period=26)
        assert result.iloc[:25].isna().all()
        assert result.iloc[25:].notna().all()

    def test_order_dependent(self) -> None:
        """Reversing the tail beyond the seed window changes the result.

        A windowed average over the same values would be unchanged.
        """
        period = 12
        values = [float(v) for v in range(1, 41)]
        reversed_tail = values[:period] + values[period:][::-1]

        forward = latest(ema(pd.Series(values), period=period))
        backward = latest(ema(pd.Series(reversed_tail), period=period))
        assert forward is not None and backward is not None
        assert forward != pytest.approx(backward)

    def test_flat_series_equals_price(self) -> None:
        close = pd.Series([100.0] * 60)
        assert latest(ema(close, period=26)) == 100.0

    def test_does_not_mutate_input(self) -> None:
        close = pd.Series([5.0, 6.0, 7.0, 8.0, 9.0])
        snapshot = close.copy()
        ema(close, period=3)
        pd.testing.assert_series_equal(close, snapshot)

    def test_preserves_index(self) -> None:
        index = pd.date_range("2025-01-01", periods=5, freq="D")
        close = pd.Series([1.0, 2.0, 3.0, 4.0, 5.0], index=index)
        result = ema(close, period=2)
        assert list(result.index) == list(index)
