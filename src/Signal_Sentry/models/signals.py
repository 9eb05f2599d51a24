"""Indicator snapshot model: the latest indicator values for one symbol."""

from pydantic import BaseModel, ConfigDict


class IndicatorSet(BaseModel):
    """Indicator values evaluated at the most recent close.

    Frozen because it is recomputed from scratch on every scan and never
    mutated. ``None`` means the indicator is undefined for the series
    (usually too short for its window); scoring treats it as a rule that
    does not hold, never as zero.
    """

    model_config = ConfigDict(frozen=True)

    last_close: float | None = None
    sma_short: float | None = None
    sma_long: float | None = None
    rsi: float | None = None
    macd: float | None = None
    momentum: float | None = None
