"""Discord webhook notification transport.

Posts an :class:`AlertMessage` as a single embed. Delivery failures are logged
and reported through the boolean return value; nothing is retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Final, Protocol

import httpx

from Signal_Sentry.models.alert import AlertMessage
from Signal_Sentry.services._helpers import EXTERNAL_CALL_TIMEOUT_SECONDS, build_client

logger = logging.getLogger(__name__)

WEBHOOK_TIMEOUT: Final[float] = EXTERNAL_CALL_TIMEOUT_SECONDS

# Maximum characters of an error body echoed to the log
_ERROR_BODY_PREVIEW: Final[int] = 300


class Notifier(Protocol):
    """Anything that can deliver an alert message."""

    async def send(self, message: AlertMessage) -> bool: ...


class DiscordNotifier:
    """Deliver alert messages to a Discord webhook.

    Usage::

        notifier = DiscordNotifier(webhook_url="https://discord.com/api/webhooks/...")
        delivered = await notifier.send(message)
        await notifier.aclose()
    """

    def __init__(
        self,
        webhook_url: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._client = client if client is not None else build_client()

    async def aclose(self) -> None:
        """Close the shared httpx client."""
        await self._client.aclose()

    async def __aenter__(self) -> DiscordNotifier:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def send(self, message: AlertMessage) -> bool:
        """POST *message* to the webhook.

        Returns:
            ``True`` on a 2xx response, ``False`` on any other status,
            transport error or timeout. Never raises for delivery problems.
        """
        payload = {"embeds": [message.to_embed()]}
        try:
            response = await asyncio.wait_for(
                self._client.post(self._webhook_url, json=payload),
                timeout=WEBHOOK_TIMEOUT,
            )
        except TimeoutError:
            logger.warning("Discord webhook timed out after %.0fs", WEBHOOK_TIMEOUT)
            return False
        except httpx.HTTPError as exc:
            logger.warning("Discord webhook request failed: %s", exc)
            return False

        if not response.is_success:
            logger.warning(
                "Discord webhook failed: %d %s",
                response.status_code,
                response.text[:_ERROR_BODY_PREVIEW],
            )
            return False

        logger.debug("Discord webhook accepted alert: %s", message.title)
        return True
