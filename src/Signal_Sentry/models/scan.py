"""Scan models: the outcome of one scanner invocation."""

import datetime

from pydantic import BaseModel, ConfigDict, computed_field


class ScanRun(BaseModel):
    """Summary of a single scan execution.

    Tracks timing, the symbols that went through the pipeline and the
    symbols for which an alert was delivered. Used only for end-of-run
    reporting; nothing here is persisted.
    """

    model_config = ConfigDict(frozen=True)

    started_at: datetime.datetime
    completed_at: datetime.datetime
    symbols_scanned: list[str]
    alerted: list[str]
    dry_run: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def alert_count(self) -> int:
        """Number of alerts successfully dispatched during the run."""
        return len(self.alerted)
