"""Rich-based terminal output for scan summaries, indicator snapshots and the ledger.

Uses ``rich.console.Console`` for all output. Color scheme:
green = condition met / qualifying, red = not met, yellow = cooling down.
"""

from __future__ import annotations

import datetime
import logging

from rich.console import Console
from rich.table import Table

from Signal_Sentry.analysis.scoring import RSI_OVERBOUGHT
from Signal_Sentry.data.ledger import AlertLedger
from Signal_Sentry.models.scan import ScanRun
from Signal_Sentry.models.signals import IndicatorSet
from Signal_Sentry.reporting.formatters import (
    MACD_DIGITS,
    MOMENTUM_DIGITS,
    PRICE_DIGITS,
    format_indicator,
    format_score,
)

logger = logging.getLogger(__name__)

# Shared console instance for terminal output
console = Console()

# --- Color scheme ---
COLOR_MET: str = "green"
COLOR_NOT_MET: str = "red"
COLOR_COOLDOWN: str = "yellow"
COLOR_MUTED: str = "dim"


def _flag(condition: bool | None) -> str:
    """Colored yes/no marker; ``None`` means the rule could not be evaluated."""
    if condition is None:
        return f"[{COLOR_MUTED}]n/a[/{COLOR_MUTED}]"
    if condition:
        return f"[{COLOR_MET}]yes[/{COLOR_MET}]"
    return f"[{COLOR_NOT_MET}]no[/{COLOR_NOT_MET}]"


def _gt(left: float | None, right: float | None) -> bool | None:
    if left is None or right is None:
        return None
    return left > right


def render_indicators(
    symbol: str,
    indicators: IndicatorSet,
    signal: float,
    combined: float,
    threshold: float,
    *,
    out: Console | None = None,
) -> None:
    """Render one symbol's indicator snapshot with the rule each one feeds."""
    target = out if out is not None else console

    table = Table(title=f"{symbol} indicators", show_lines=False)
    table.add_column("Indicator", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Rule")
    table.add_column("Met", justify="center")

    rsi_ok = None if indicators.rsi is None else indicators.rsi < RSI_OVERBOUGHT

    table.add_row(
        "Close",
        format_indicator(indicators.last_close, PRICE_DIGITS),
        "close > SMA50",
        _flag(_gt(indicators.last_close, indicators.sma_long)),
    )
    table.add_row(
        "SMA10",
        format_indicator(indicators.sma_short, PRICE_DIGITS),
        "SMA10 > SMA50",
        _flag(_gt(indicators.sma_short, indicators.sma_long)),
    )
    table.add_row("SMA50", format_indicator(indicators.sma_long, PRICE_DIGITS), "", "")
    table.add_row(
        "RSI14",
        format_indicator(indicators.rsi),
        f"RSI < {RSI_OVERBOUGHT:g}",
        _flag(rsi_ok),
    )
    table.add_row(
        "MACD",
        format_indicator(indicators.macd, MACD_DIGITS),
        "MACD > 0",
        _flag(_gt(indicators.macd, 0.0)),
    )
    table.add_row(
        "MOM5",
        format_indicator(indicators.momentum, MOMENTUM_DIGITS),
        "MOM5 > 0",
        _flag(_gt(indicators.momentum, 0.0)),
    )
    target.print(table)

    color = COLOR_MET if combined >= threshold else COLOR_NOT_MET
    target.print(
        f"Signal score: [bold]{format_score(signal)}[/bold]   "
        f"Combined: [{color}]{format_score(combined)}[/{color}] "
        f"(threshold {format_score(threshold)})"
    )


def render_scan_summary(run: ScanRun, *, out: Console | None = None) -> None:
    """Render the end-of-run counts and the list of alerted symbols."""
    target = out if out is not None else console
    elapsed = (run.completed_at - run.started_at).total_seconds()
    mode = " (dry run)" if run.dry_run else ""

    target.print(
        f"\n[bold]Scan complete{mode}[/bold]: {len(run.symbols_scanned)} symbols "
        f"in {elapsed:.1f}s, alerts sent: [bold]{run.alert_count}[/bold]"
    )
    if run.alerted:
        target.print("  " + " ".join(run.alerted))


def render_ledger(
    ledger: AlertLedger,
    cooldown: datetime.timedelta,
    now: datetime.datetime,
    *,
    out: Console | None = None,
) -> None:
    """Render ledger entries newest first, marking symbols still cooling down."""
    target = out if out is not None else console

    if len(ledger) == 0:
        target.print(f"[{COLOR_MUTED}]Ledger is empty.[/{COLOR_MUTED}]")
        return

    table = Table(title="Alert ledger")
    table.add_column("Symbol", style="bold")
    table.add_column("Last alert (UTC)")
    table.add_column("Status")

    for symbol, last in sorted(ledger.items(), key=lambda item: item[1], reverse=True):
        if ledger.may_alert(symbol, cooldown, now):
            status = f"[{COLOR_MET}]ready[/{COLOR_MET}]"
        else:
            remaining = cooldown - (now - last)
            hours = remaining.total_seconds() / 3600
            status = f"[{COLOR_COOLDOWN}]cooldown {hours:.1f}h[/{COLOR_COOLDOWN}]"
        table.add_row(symbol, last.astimezone(datetime.UTC).strftime("%Y-%m-%d %H:%M:%S"), status)

    target.print(table)
