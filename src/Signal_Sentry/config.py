"""Process configuration sourced from environment variables.

``ScannerConfig.from_env()`` is called once at startup; the resulting frozen
model is passed explicitly to the scanner and its collaborators.
"""

from __future__ import annotations

import datetime
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from Signal_Sentry.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_THRESHOLD: Final[float] = 2.5
DEFAULT_MAX_SYMBOLS: Final[int] = 500
DEFAULT_BATCH_DELAY_MS: Final[int] = 1200
DEFAULT_HISTORY_DAYS: Final[int] = 120
DEFAULT_COOLDOWN_HOURS: Final[float] = 24.0
DEFAULT_ALERTS_FILE: Final[str] = "alerts_history.json"
DEFAULT_EXCHANGE: Final[str] = "US"

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = ("FINNHUB_API_KEY", "DISCORD_WEBHOOK")

# Environment variable -> model field
_ENV_FIELDS: Final[dict[str, str]] = {
    "FINNHUB_API_KEY": "finnhub_api_key",
    "DISCORD_WEBHOOK": "discord_webhook",
    "THRESHOLD": "threshold",
    "MAX_SYMBOLS": "max_symbols",
    "BATCH_DELAY_MS": "batch_delay_ms",
    "DAYS": "history_days",
    "COOLDOWN_HOURS": "cooldown_hours",
    "ALERTS_FILE": "alerts_file",
    "EXCHANGE": "exchange",
}


class ScannerConfig(BaseModel):
    """Immutable scanner configuration.

    One frozen instance is shared by every component of a run.
    """

    model_config = ConfigDict(frozen=True)

    finnhub_api_key: str = Field(min_length=1)
    discord_webhook: str = Field(min_length=1)
    threshold: float = DEFAULT_THRESHOLD
    max_symbols: int = Field(default=DEFAULT_MAX_SYMBOLS, ge=0)
    batch_delay_ms: int = Field(default=DEFAULT_BATCH_DELAY_MS, ge=0)
    history_days: int = Field(default=DEFAULT_HISTORY_DAYS, ge=1)
    cooldown_hours: float = Field(default=DEFAULT_COOLDOWN_HOURS, ge=0.0)
    alerts_file: Path = Path(DEFAULT_ALERTS_FILE)
    exchange: str = DEFAULT_EXCHANGE

    @property
    def cooldown(self) -> datetime.timedelta:
        """Minimum time between two alerts for the same symbol."""
        return datetime.timedelta(hours=self.cooldown_hours)

    @property
    def batch_delay_seconds(self) -> float:
        """Pause between symbols, in seconds."""
        return self.batch_delay_ms / 1000.0

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        required: tuple[str, ...] = REQUIRED_ENV_VARS,
    ) -> ScannerConfig:
        """Build the configuration from environment variables.

        Empty values are treated as unset. Variables listed in *required*
        must be present; for commands that do not notify, callers may pass a
        narrower tuple and an absent credential is filled with ``"unset"``.

        Raises:
            ConfigurationError: If a required variable is missing or a
                tunable cannot be parsed.
        """
        env = os.environ if environ is None else environ

        missing = tuple(name for name in required if not env.get(name, "").strip())
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}",
                missing=missing,
            )

        values: dict[str, str] = {}
        for env_name, field_name in _ENV_FIELDS.items():
            raw = env.get(env_name, "").strip()
            if raw:
                values[field_name] = raw
        for env_name in REQUIRED_ENV_VARS:
            if env_name not in required:
                values.setdefault(_ENV_FIELDS[env_name], "unset")

        try:
            config = cls.model_validate(values)
        except ValidationError as exc:
            field_to_env = {field: name for name, field in _ENV_FIELDS.items()}
            invalid = tuple(
                sorted(
                    {
                        field_to_env.get(str(error["loc"][0]), str(error["loc"][0]))
                        for error in exc.errors()
                        if error["loc"]
                    }
                )
            )
            raise ConfigurationError(
                f"Invalid value for environment variable(s): {', '.join(invalid)}",
                invalid=invalid,
            ) from exc

        logger.debug(
            "Configuration loaded: threshold=%.3f max_symbols=%d delay_ms=%d days=%d cooldown_h=%.1f",
            config.threshold,
            config.max_symbols,
            config.batch_delay_ms,
            config.history_days,
            config.cooldown_hours,
        )
        return config
