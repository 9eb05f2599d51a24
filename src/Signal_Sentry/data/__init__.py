"""Persistence layer for Signal Sentry.

Re-exports the main public API: AlertLedger for cooldown bookkeeping,
LedgerStore for loading and saving it.
"""

from Signal_Sentry.data.ledger import DEFAULT_LEDGER_PATH, AlertLedger, LedgerStore

__all__ = ["DEFAULT_LEDGER_PATH", "AlertLedger", "LedgerStore"]
