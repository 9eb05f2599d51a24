"""Alert message model delivered to the notification webhook."""

import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

ALERT_COLOR: int = 15158332
"""Embed accent color (Discord red, 0xE74C3C)."""


class AlertMessage(BaseModel):
    """A structured notification: title, body, accent color and timestamp.

    Built once per qualifying symbol and handed to the transport unchanged.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    color: int = ALERT_COLOR
    timestamp: datetime.datetime

    def to_embed(self) -> dict[str, Any]:
        """Render as a webhook embed object with an ISO-8601 timestamp."""
        return {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "timestamp": self.timestamp.isoformat(),
        }
