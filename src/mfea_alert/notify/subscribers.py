"""
MFEA ALERT - Subscriber Registries

Read-only views of the subscriber set. Adding and removing subscribers
happens elsewhere (chat commands, seeding scripts).
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class StaticSubscriberRegistry:
    """Subscribers from configuration, in configured order."""

    def __init__(self, ids: tuple[str, ...] | list[str] = ()) -> None:
        self._ids = list(dict.fromkeys(ids))

    async def get_subscribers(self) -> list[str]:
        return list(self._ids)


class RedisSubscriberRegistry:
    """Subscribers stored as a Redis set. Sorted for stable ordering."""

    def __init__(self, client: redis.Redis, key: str) -> None:
        self._client = client
        self._key = key

    async def get_subscribers(self) -> list[str]:
        members = await self._client.smembers(self._key)
        ids = sorted(str(m) for m in members)
        logger.debug(f"Resolved {len(ids)} subscribers from {self._key}")
        return ids
