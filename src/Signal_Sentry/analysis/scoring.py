"""Weighted-rule signal scoring.

Each rule adds a fixed weight when its condition holds and all of its inputs
are defined. The sum is rounded to :data:`SCORE_DECIMALS` places. The
technical score is then combined with an external sentiment addend to give the
score compared against the alert threshold.
"""

import logging
import math

from Signal_Sentry.models.signals import IndicatorSet

logger = logging.getLogger(__name__)

# --- Rule Weights ---
WEIGHT_ABOVE_LONG_MA: float = 1.0
WEIGHT_MA_CROSSOVER: float = 1.0
WEIGHT_RSI_NOT_OVERBOUGHT: float = 0.5
WEIGHT_MACD_POSITIVE: float = 0.7
WEIGHT_MOMENTUM_POSITIVE: float = 0.5

# --- Thresholds ---
RSI_OVERBOUGHT: float = 70.0

MAX_SCORE: float = 3.7
MIN_SCORE: float = 0.0

SCORE_DECIMALS: int = 3
_SCORE_SCALE: int = 10**SCORE_DECIMALS


def round_score(value: float) -> float:
    """Round *value* to three decimals, halves rounding up.

    Computed as ``floor(value * 1000 + 0.5) / 1000``.
    """
    return math.floor(value * _SCORE_SCALE + 0.5) / _SCORE_SCALE


def score(
    last_close: float | None,
    short_ma: float | None,
    long_ma: float | None,
    oscillator: float | None,
    divergence: float | None,
    momentum: float | None,
) -> float:
    """Accumulate rule weights into a single bounded score.

    Rules:
        last_close > long_ma        -> +1.0
        short_ma   > long_ma        -> +1.0
        oscillator < 70             -> +0.5
        divergence > 0              -> +0.7
        momentum   > 0              -> +0.5

    Any rule with an undefined (``None``) input contributes nothing.

    Returns:
        Score in [0.0, 3.7], rounded to three decimals.
    """
    total = 0.0

    if last_close is not None and long_ma is not None and last_close > long_ma:
        total += WEIGHT_ABOVE_LONG_MA
    if short_ma is not None and long_ma is not None and short_ma > long_ma:
        total += WEIGHT_MA_CROSSOVER
    if oscillator is not None and oscillator < RSI_OVERBOUGHT:
        total += WEIGHT_RSI_NOT_OVERBOUGHT
    if divergence is not None and divergence > 0.0:
        total += WEIGHT_MACD_POSITIVE
    if momentum is not None and momentum > 0.0:
        total += WEIGHT_MOMENTUM_POSITIVE

    return round_score(total)


def signal_score(indicators: IndicatorSet) -> float:
    """Score an :class:`IndicatorSet` with the weighted rules of :func:`score`."""
    return score(
        indicators.last_close,
        indicators.sma_short,
        indicators.sma_long,
        indicators.rsi,
        indicators.macd,
        indicators.momentum,
    )


def combined_score(signal: float, sentiment: float = 0.0) -> float:
    """Add the sentiment addend to the technical score and round the sum."""
    return round_score(signal + sentiment)
