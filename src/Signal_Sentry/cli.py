"""CLI entry point for Signal Sentry: technical signal scanner with webhook alerts.

Provides the ``signal-sentry`` command with subcommands for running a scan,
inspecting a single symbol's indicators, and viewing the alert ledger.

This is the ONLY module where console output is allowed. All other modules use
``logging``. Async internals are bridged to typer's synchronous interface via
``asyncio.run()``.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from Signal_Sentry.config import DEFAULT_COOLDOWN_HOURS, ScannerConfig
from Signal_Sentry.data.ledger import DEFAULT_LEDGER_PATH, LedgerStore
from Signal_Sentry.logging_config import configure_logging
from Signal_Sentry.models.scan import ScanRun
from Signal_Sentry.reporting.terminal import render_indicators, render_ledger, render_scan_summary
from Signal_Sentry.utils.exceptions import ConfigurationError, DataFetchError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(name="signal-sentry", help="Technical signal scanner with webhook alerts")

# Rich console for formatted output
console = Console()

# ---------------------------------------------------------------------------
# Default constants
# ---------------------------------------------------------------------------

EXIT_FATAL: int = 1


def _load_config(required: tuple[str, ...] | None = None) -> ScannerConfig:
    """Build the configuration or exit with code 1 before doing any work."""
    try:
        if required is None:
            return ScannerConfig.from_env()
        return ScannerConfig.from_env(required=required)
    except ConfigurationError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=EXIT_FATAL) from exc


# ---------------------------------------------------------------------------
# scan command
# ---------------------------------------------------------------------------


@app.command()
def scan(
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Score symbols but send no alerts and keep the ledger")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress info logging")] = False,
) -> None:
    """Scan the symbol universe and send alerts for qualifying signals."""
    configure_logging(verbose=verbose, quiet=quiet)

    required = ("FINNHUB_API_KEY",) if dry_run else None
    config = _load_config(required)

    try:
        scan_run = asyncio.run(_scan_async(config, dry_run=dry_run))
    except Exception as exc:
        logger.exception("Fatal error")
        console.print(f"[red]Fatal error: {exc}[/red]")
        raise typer.Exit(code=EXIT_FATAL) from exc

    render_scan_summary(scan_run, out=console)


async def _scan_async(config: ScannerConfig, *, dry_run: bool = False) -> ScanRun:
    """Wire the collaborators from *config* and run one scan."""
    from Signal_Sentry.scanner import Scanner
    from Signal_Sentry.services import DiscordNotifier, FinnhubService, RateLimiter

    rate_limiter = RateLimiter(delay_seconds=config.batch_delay_seconds)
    async with (
        FinnhubService(api_key=config.finnhub_api_key, rate_limiter=rate_limiter) as finnhub,
        DiscordNotifier(webhook_url=config.discord_webhook) as notifier,
    ):
        scanner = Scanner(
            config=config,
            symbols=finnhub,
            prices=finnhub,
            notifier=notifier,
            ledger_store=LedgerStore(config.alerts_file),
            rate_limiter=rate_limiter,
            dry_run=dry_run,
        )
        return await scanner.run()


# ---------------------------------------------------------------------------
# inspect command
# ---------------------------------------------------------------------------


@app.command("inspect")
def inspect_symbol(
    symbol: Annotated[str, typer.Argument(help="Ticker symbol, e.g. AAPL")],
    days: Annotated[int | None, typer.Option(help="History window in days")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Show the indicator snapshot and scores for a single symbol."""
    configure_logging(verbose=verbose, quiet=not verbose)
    config = _load_config(("FINNHUB_API_KEY",))
    history_days = days if days is not None else config.history_days

    try:
        closes = asyncio.run(_fetch_closes_async(config, symbol.upper().strip(), history_days))
    except DataFetchError as exc:
        console.print(f"[red]Could not fetch {exc.ticker} from {exc.source}: {exc}[/red]")
        raise typer.Exit(code=EXIT_FATAL) from exc

    from Signal_Sentry.analysis import combined_score, compute_indicators, signal_score
    from Signal_Sentry.scanner import MIN_HISTORY_POINTS

    if len(closes) < MIN_HISTORY_POINTS:
        console.print(
            f"[yellow]{symbol.upper()}: only {len(closes)} closes "
            f"(scanner skips below {MIN_HISTORY_POINTS}).[/yellow]"
        )

    indicators = compute_indicators(closes)
    signal = signal_score(indicators)
    render_indicators(
        symbol.upper(),
        indicators,
        signal,
        combined_score(signal),
        config.threshold,
        out=console,
    )


async def _fetch_closes_async(config: ScannerConfig, symbol: str, days: int) -> list[float]:
    from Signal_Sentry.services import FinnhubService, RateLimiter

    rate_limiter = RateLimiter(delay_seconds=0.0)
    async with FinnhubService(api_key=config.finnhub_api_key, rate_limiter=rate_limiter) as finnhub:
        return await finnhub.get_closes(symbol, days=days)


# ---------------------------------------------------------------------------
# ledger command
# ---------------------------------------------------------------------------


@app.command()
def ledger(
    path: Annotated[
        Path | None, typer.Option(help="Ledger file (defaults to ALERTS_FILE or alerts_history.json)")
    ] = None,
    cooldown_hours: Annotated[
        float, typer.Option(help="Cooldown used to mark symbols as ready")
    ] = DEFAULT_COOLDOWN_HOURS,
) -> None:
    """List the alert ledger, newest alert first."""
    configure_logging(quiet=True)
    ledger_path = path if path is not None else _default_ledger_path()
    if not ledger_path.exists():
        console.print(f"[dim]No ledger at {ledger_path}.[/dim]")
        return

    entries = LedgerStore(ledger_path).load()
    render_ledger(
        entries,
        datetime.timedelta(hours=cooldown_hours),
        datetime.datetime.now(datetime.UTC),
        out=console,
    )


def _default_ledger_path() -> Path:
    configured = os.environ.get("ALERTS_FILE", "").strip()
    return Path(configured) if configured else DEFAULT_LEDGER_PATH
