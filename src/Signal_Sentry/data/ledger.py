"""Alert ledger: last-alert timestamps per symbol with JSON file persistence.

The ledger is loaded once at the start of a scan, mutated in memory after
every delivered alert, and written back once when the scan finishes. A
missing file is created empty; a corrupt or unreadable file is replaced by an
empty ledger and overwritten on the next save.
"""

from __future__ import annotations

import datetime
import json
import logging
from collections.abc import ItemsView
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

DEFAULT_LEDGER_PATH: Final[Path] = Path("alerts_history.json")
DEFAULT_COOLDOWN: Final[datetime.timedelta] = datetime.timedelta(hours=24)


def _parse_timestamp(raw: object) -> datetime.datetime | None:
    """Parse an ISO-8601 string into an aware UTC datetime, or None if invalid."""
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.UTC)
    return parsed.astimezone(datetime.UTC)


class AlertLedger:
    """In-memory mapping of symbol to the instant of its last delivered alert.

    Usage::

        ledger = AlertLedger()
        if ledger.may_alert("AAPL", cooldown, now):
            ...  # deliver
            ledger.record("AAPL", now)
    """

    def __init__(
        self,
        entries: dict[str, datetime.datetime] | None = None,
    ) -> None:
        self._entries: dict[str, datetime.datetime] = dict(entries or {})

    def may_alert(
        self,
        symbol: str,
        cooldown: datetime.timedelta,
        now: datetime.datetime,
    ) -> bool:
        """Return True if *symbol* was never alerted or its cooldown has elapsed."""
        recorded = self._entries.get(symbol)
        if recorded is None:
            return True
        return now - recorded >= cooldown

    def record(self, symbol: str, now: datetime.datetime) -> None:
        """Set the last-alert instant for *symbol* to *now*. Does not persist."""
        self._entries[symbol] = now

    def last_alerted(self, symbol: str) -> datetime.datetime | None:
        return self._entries.get(symbol)

    def items(self) -> ItemsView[str, datetime.datetime]:
        return self._entries.items()

    def to_json_dict(self) -> dict[str, str]:
        """Serialize as ``symbol -> ISO-8601`` strings."""
        return {symbol: ts.isoformat() for symbol, ts in self._entries.items()}

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class LedgerStore:
    """Load and save an :class:`AlertLedger` as a single JSON object on disk.

    Usage::

        store = LedgerStore(Path("alerts_history.json"))
        ledger = store.load()
        ...
        store.save(ledger)
    """

    def __init__(self, path: Path | str = DEFAULT_LEDGER_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AlertLedger:
        """Return the persisted ledger, or an empty one if absent or corrupt.

        A missing file is created with ``{}``. Parse failures and non-object
        payloads are logged and swallowed; entries with unparseable
        timestamps are dropped individually.
        """
        if not self._path.exists():
            logger.info("Ledger file %s not found, creating an empty ledger.", self._path)
            self._write({})
            return AlertLedger()

        try:
            raw_text = self._path.read_text(encoding="utf-8")
            data = json.loads(raw_text or "{}")
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read ledger file %s, starting empty: %s", self._path, exc)
            return AlertLedger()

        if not isinstance(data, dict):
            logger.warning(
                "Ledger file %s does not hold a JSON object (%s), starting empty.",
                self._path,
                type(data).__name__,
            )
            return AlertLedger()

        entries: dict[str, datetime.datetime] = {}
        for symbol, raw_ts in data.items():
            parsed = _parse_timestamp(raw_ts)
            if parsed is None:
                logger.warning("Dropping ledger entry %s with invalid timestamp %r", symbol, raw_ts)
                continue
            entries[symbol] = parsed

        logger.info("Loaded %d ledger entries from %s", len(entries), self._path)
        return AlertLedger(entries)

    def save(self, ledger: AlertLedger) -> None:
        """Persist the full ledger, overwriting any previous file.

        Raises:
            OSError: If the file cannot be written.
        """
        self._write(ledger.to_json_dict())
        logger.info("Saved %d ledger entries to %s", len(ledger), self._path)

    def _write(self, payload: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
