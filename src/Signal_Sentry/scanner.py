"""Scan orchestrator: the per-symbol fetch, score, alert loop.

Symbols are processed strictly one after another: fetch closes, compute the
indicator snapshot, score it, consult the alert ledger, maybe notify, then
pause before the next symbol. Failures for one symbol are logged and never
abort the run; failing to obtain the symbol universe does.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Callable
from typing import Final, Protocol

from Signal_Sentry.analysis.scoring import combined_score, signal_score
from Signal_Sentry.analysis.sentiment import NeutralSentiment, SentimentSource
from Signal_Sentry.analysis.signals import compute_indicators
from Signal_Sentry.config import ScannerConfig
from Signal_Sentry.data.ledger import AlertLedger, LedgerStore
from Signal_Sentry.models.scan import ScanRun
from Signal_Sentry.reporting.formatters import build_alert_message
from Signal_Sentry.services.notifier import Notifier
from Signal_Sentry.services.rate_limiter import RateLimiter
from Signal_Sentry.utils.exceptions import DataFetchError

logger = logging.getLogger(__name__)

# Series shorter than this are skipped without scoring
MIN_HISTORY_POINTS: Final[int] = 30


class SymbolSource(Protocol):
    """Provides the symbol universe of an exchange."""

    async def get_symbols(self, exchange: str) -> list[str]: ...


class PriceSource(Protocol):
    """Provides daily closing prices, oldest first."""

    async def get_closes(self, symbol: str, days: int) -> list[float]: ...


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class Scanner:
    """Run one scan over the symbol universe.

    Usage::

        scanner = Scanner(
            config=config,
            symbols=finnhub,
            prices=finnhub,
            notifier=notifier,
            ledger_store=LedgerStore(config.alerts_file),
            rate_limiter=RateLimiter(delay_seconds=config.batch_delay_seconds),
        )
        scan_run = await scanner.run()
    """

    def __init__(
        self,
        config: ScannerConfig,
        symbols: SymbolSource,
        prices: PriceSource,
        notifier: Notifier,
        ledger_store: LedgerStore,
        rate_limiter: RateLimiter,
        sentiment: SentimentSource | None = None,
        clock: Callable[[], datetime.datetime] = utc_now,
        dry_run: bool = False,
    ) -> None:
        self._config = config
        self._symbols = symbols
        self._prices = prices
        self._notifier = notifier
        self._ledger_store = ledger_store
        self._rate_limiter = rate_limiter
        self._sentiment: SentimentSource = sentiment if sentiment is not None else NeutralSentiment()
        self._clock = clock
        self._dry_run = dry_run

    async def run(self) -> ScanRun:
        """Scan every symbol of the universe once.

        Returns:
            ScanRun with the processed and alerted symbols.

        Raises:
            DataFetchError: If the symbol universe cannot be fetched.
            OSError: If the ledger cannot be saved at the end of the run.
        """
        started_at = self._clock()
        logger.info("Scanner starting at %s", started_at.isoformat())

        universe = await self._load_universe()
        ledger = self._ledger_store.load()

        scanned: list[str] = []
        alerted: list[str] = []

        for symbol in universe:
            try:
                if await self._process_symbol(symbol, ledger):
                    alerted.append(symbol)
            except Exception:
                logger.exception("Error while processing %s", symbol)
            scanned.append(symbol)

            await self._rate_limiter.wait()

        if self._dry_run:
            logger.info("Dry run: ledger not saved.")
        else:
            self._ledger_store.save(ledger)

        completed_at = self._clock()
        logger.info("Done. Symbols scanned: %d, alerts sent: %d", len(scanned), len(alerted))
        return ScanRun(
            started_at=started_at,
            completed_at=completed_at,
            symbols_scanned=scanned,
            alerted=alerted,
            dry_run=self._dry_run,
        )

    async def _load_universe(self) -> list[str]:
        """Fetch the symbol universe and truncate it to ``max_symbols``."""
        symbols = await self._symbols.get_symbols(self._config.exchange)
        truncated = symbols[: self._config.max_symbols]
        logger.info(
            "Fetched %d symbols; truncating to %d",
            len(symbols),
            self._config.max_symbols,
        )
        return truncated

    async def _process_symbol(self, symbol: str, ledger: AlertLedger) -> bool:
        """Run the pipeline for one symbol.

        Returns:
            True if an alert was delivered and recorded.
        """
        try:
            closes = await self._prices.get_closes(symbol, self._config.history_days)
        except DataFetchError as exc:
            logger.warning("Candle fetch failed for %s: %s", symbol, exc)
            return False

        if len(closes) < MIN_HISTORY_POINTS:
            logger.debug("Skipping %s: only %d closes", symbol, len(closes))
            return False

        indicators = compute_indicators(closes)
        signal = signal_score(indicators)
        sentiment = await self._sentiment.sentiment(symbol)
        combined = combined_score(signal, sentiment)

        if combined < self._config.threshold:
            logger.debug("%s scored %.3f, below threshold", symbol, combined)
            return False

        now = self._clock()
        if not ledger.may_alert(symbol, self._config.cooldown, now):
            logger.info("%s qualifies (%.3f) but is within cooldown", symbol, combined)
            return False

        if self._dry_run:
            logger.info("Dry run: %s would alert with combined %.3f", symbol, combined)
            return False

        message = build_alert_message(symbol, combined, signal, indicators, now)
        if not await self._notifier.send(message):
            logger.warning("Failed to alert %s", symbol)
            return False

        ledger.record(symbol, now)
        logger.info("Alerted %s %.3f", symbol, combined)
        return True
