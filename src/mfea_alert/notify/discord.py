"""
MFEA ALERT - Discord Webhook Notifier

Thin webhook client. No business logic, no retries.
send() returns the platform message id so the caller can edit it later.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from mfea_alert.errors import NotificationDispatchFailure

logger = logging.getLogger(__name__)

SUBSCRIBE_ID = "mfea_subscribe"
UNSUBSCRIBE_ID = "mfea_unsubscribe"


def subscription_components() -> list[dict]:
    """One action row with subscribe / unsubscribe buttons."""
    return [
        {
            "type": 1,
            "components": [
                {"type": 2, "style": 3, "label": "Subscribe", "custom_id": SUBSCRIBE_ID},
                {"type": 2, "style": 4, "label": "Unsubscribe", "custom_id": UNSUBSCRIBE_ID},
            ],
        }
    ]


def build_payload(
    content: str,
    mentions: list[str] | None = None,
    components: list[dict] | None = None,
) -> dict:
    """Webhook body. Only the listed users may be pinged."""
    payload: dict = {
        "content": content,
        "allowed_mentions": {"parse": [], "users": list(mentions or [])},
    }
    if components:
        payload["components"] = components
    return payload


class DiscordWebhookNotifier:
    """Posts and edits messages through one webhook URL."""

    def __init__(self, webhook_url: Optional[str], timeout_seconds: float = 10.0) -> None:
        self.webhook_url = webhook_url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def send(
        self,
        content: str,
        mentions: list[str] | None = None,
        components: list[dict] | None = None,
    ) -> Optional[str]:
        """
        Post a message.

        Returns:
            Message id, or None when no webhook is configured.

        Raises:
            NotificationDispatchFailure: transport or HTTP error.
        """
        if not self.webhook_url:
            logger.warning(f"DISCORD_WEBHOOK_URL not set; message not sent: {content}")
            return None

        payload = build_payload(content, mentions, components)
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(
                    self.webhook_url, params={"wait": "true"}, json=payload
                ) as response:
                    response.raise_for_status()
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise NotificationDispatchFailure(f"Webhook send failed: {exc!r}") from exc

        message_id = data.get("id") if isinstance(data, dict) else None
        logger.info(f"Notification sent (message id {message_id})")
        return str(message_id) if message_id else None

    async def edit(self, message_id: str, content: str) -> None:
        """
        Replace the content of a previously sent message.

        Raises:
            NotificationDispatchFailure: transport or HTTP error.
        """
        if not self.webhook_url:
            return
        url = f"{self.webhook_url.rstrip('/')}/messages/{message_id}"
        payload = build_payload(content)
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.patch(url, json=payload) as response:
                    response.raise_for_status()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NotificationDispatchFailure(f"Webhook edit failed: {exc!r}") from exc
        logger.info(f"Message {message_id} edited")
