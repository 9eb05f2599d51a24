"""Formatting of alert messages and indicator values.

All functions accept typed models from ``Signal_Sentry.models`` and return
plain strings or an :class:`AlertMessage` ready for the notifier.
"""

from __future__ import annotations

import datetime
import logging

from Signal_Sentry.models.alert import ALERT_COLOR, AlertMessage
from Signal_Sentry.models.signals import IndicatorSet

logger = logging.getLogger(__name__)

# --- Display precision ---
PRICE_DIGITS: int = 2
INDICATOR_DIGITS: int = 2
MACD_DIGITS: int = 4
MOMENTUM_DIGITS: int = 4

UNDEFINED_TEXT: str = "n/a"
ALERT_EMOJI: str = "\N{POLICE CARS REVOLVING LIGHT}"


def format_indicator(value: float | None, digits: int = INDICATOR_DIGITS) -> str:
    """Render an optional indicator value with fixed precision, ``n/a`` if undefined."""
    if value is None:
        return UNDEFINED_TEXT
    return f"{value:.{digits}f}"


def format_score(value: float) -> str:
    """Render a score without trailing zeros (``3.7``, ``2.5``, ``0``)."""
    return f"{value:g}"


def format_alert_title(symbol: str, combined: float) -> str:
    return f"{ALERT_EMOJI} {symbol} alert \N{EM DASH} combined {format_score(combined)}"


def format_alert_description(signal: float, indicators: IndicatorSet) -> str:
    """Multi-line body listing the close, the signal score and each indicator."""
    lines = [
        f"Close: ${format_indicator(indicators.last_close, PRICE_DIGITS)}",
        f"Signal: {format_score(signal)}",
        f"RSI: {format_indicator(indicators.rsi)}",
        (
            f"SMA10: {format_indicator(indicators.sma_short, PRICE_DIGITS)} "
            f"SMA50: {format_indicator(indicators.sma_long, PRICE_DIGITS)}"
        ),
        f"MACD: {format_indicator(indicators.macd, MACD_DIGITS)}",
        f"MOM5: {format_indicator(indicators.momentum, MOMENTUM_DIGITS)}",
    ]
    return "\n".join(lines)


def build_alert_message(
    symbol: str,
    combined: float,
    signal: float,
    indicators: IndicatorSet,
    now: datetime.datetime,
) -> AlertMessage:
    """Assemble the notification for a symbol whose combined score qualified."""
    return AlertMessage(
        title=format_alert_title(symbol, combined),
        description=format_alert_description(signal, indicators),
        color=ALERT_COLOR,
        timestamp=now,
    )
