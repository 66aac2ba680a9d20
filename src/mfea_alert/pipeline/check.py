"""
MFEA ALERT - Allocation Check Pipeline

Flow: fetch -> metrics -> classify -> compare -> (persist) -> notify

check_allocation() is the single async entry point. It is single-shot:
all truth that must survive between runs lives in the state store.
Fetch and metrics failures abort before any state is touched; storage
and notification failures are logged and the run continues.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as redis

from mfea_alert.classifier.engine import evaluate_allocations
from mfea_alert.config import MfeaConfig
from mfea_alert.errors import NotificationDispatchFailure
from mfea_alert.explain.generator import format_message, format_status, format_summary
from mfea_alert.features.snapshot import compute_metrics_snapshot
from mfea_alert.ingest.fetcher import MarketDataFetcher
from mfea_alert.notify.discord import DiscordWebhookNotifier, subscription_components
from mfea_alert.notify.subscribers import RedisSubscriberRegistry, StaticSubscriberRegistry
from mfea_alert.storage.store import StateStore, build_state_store
from mfea_alert.types import CheckResult, Evaluation, RawSeries

logger = logging.getLogger(__name__)


class AllocationChecker:
    """
    MFEA allocation change detector.

    Orchestrates: fetch -> metrics -> classify -> compare -> persist -> notify
    """

    def __init__(
        self,
        store: StateStore,
        notifier: DiscordWebhookNotifier,
        subscribers: StaticSubscriberRegistry | RedisSubscriberRegistry,
        fetcher: MarketDataFetcher | None = None,
        config: MfeaConfig | None = None,
        redis_client: redis.Redis | None = None,
    ) -> None:
        self.config = config or MfeaConfig()
        self.store = store
        self.notifier = notifier
        self.subscribers = subscribers
        self.fetcher = fetcher or MarketDataFetcher(self.config.fetch)
        self._redis = redis_client
        self._pending: set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: MfeaConfig | None = None) -> AllocationChecker:
        """Wire real collaborators from configuration (see MfeaConfig.from_env)."""
        config = config or MfeaConfig.from_env()
        client = None
        if config.storage.redis_url:
            client = redis.Redis.from_url(config.storage.redis_url, decode_responses=True)

        if client is not None:
            subscribers = RedisSubscriberRegistry(client, config.storage.subscribers_key)
        else:
            subscribers = StaticSubscriberRegistry(config.notify.subscriber_ids)

        return cls(
            store=build_state_store(config.storage, client),
            notifier=DiscordWebhookNotifier(
                config.notify.webhook_url, config.notify.timeout_seconds
            ),
            subscribers=subscribers,
            config=config,
            redis_client=client,
        )

    def evaluate(self, raw: RawSeries) -> Evaluation:
        """
        Synchronous metrics + strict and banded classification.

        Can be called independently for testing without network access.

        Raises:
            InsufficientData: series too short after filtering.
        """
        snapshot = compute_metrics_snapshot(raw, self.config)
        return evaluate_allocations(snapshot, self.config)

    async def check_allocation(
        self,
        force_notify: bool = False,
        title: str = "Allocation Update",
    ) -> CheckResult:
        """
        Run one check.

        Args:
            force_notify: Notify even when the allocation is unchanged.
            title: Notification heading.

        Returns:
            CheckResult(previous, current, changed).

        Raises:
            UpstreamUnavailable: market data fetch failed.
            InsufficientData: series too short.
        """
        # Step 1-2: Fetch and classify (fatal on failure, nothing persisted yet)
        raw = await self.fetcher.fetch()
        evaluation = self.evaluate(raw)
        current = evaluation.banded.allocation
        logger.info(
            f"MFEA {raw.as_of_date}: strict={evaluation.strict.category.value}, "
            f"banded={evaluation.banded.category.value} ({current})"
        )

        # Step 3-4: Compare
        previous = await self.store.read_last()
        changed = previous != current

        # Step 5: Persist
        mentions: list[str] = []
        if changed:
            logger.info(f"Allocation changed: {previous!r} -> {current!r}")
            await self.store.write_last(current)
            await self.store.append_snapshot(current, datetime.now(timezone.utc))
            mentions = await self._resolve_subscribers()

        # Step 6: Notify
        if changed or force_notify:
            await self._notify(title, format_status(current, changed), changed, mentions)

        return CheckResult(previous=previous, current=current, changed=changed)

    async def _resolve_subscribers(self) -> list[str]:
        try:
            return await self.subscribers.get_subscribers()
        except (redis.RedisError, OSError) as exc:
            logger.error(f"Subscriber lookup failed, notifying without mentions: {exc}")
            return []

    async def _notify(self, title: str, status: str, changed: bool, mentions: list[str]) -> None:
        content = format_message(title, status, mentions)
        try:
            message_id = await self.notifier.send(
                content, mentions=mentions, components=subscription_components()
            )
        except NotificationDispatchFailure as exc:
            logger.error(f"Notification failed: {exc}")
            return

        if message_id and changed:
            self._schedule_mention_cleanup(
                message_id, format_summary(title, status, len(mentions))
            )

    def _schedule_mention_cleanup(self, message_id: str, summary: str) -> None:
        """Spawn the deferred edit. Never awaited by check_allocation."""
        task = asyncio.create_task(self._edit_later(message_id, summary))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _edit_later(self, message_id: str, summary: str) -> None:
        await asyncio.sleep(self.config.notify.mention_edit_delay_seconds)
        try:
            await self.notifier.edit(message_id, summary)
        except NotificationDispatchFailure as exc:
            logger.error(f"Mention cleanup edit failed for {message_id}: {exc}")

    async def drain(self) -> None:
        """Wait for pending deferred edits (call before the event loop closes)."""
        if self._pending:
            await asyncio.gather(*self._pending)

    async def aclose(self) -> None:
        await self.drain()
        await self.store.aclose()
        if self._redis is not None:
            await self._redis.aclose()


async def run_check(
    force_notify: bool = False,
    title: str = "Allocation Update",
    config: Optional[MfeaConfig] = None,
) -> CheckResult:
    """One full check with real collaborators, closing them afterwards."""
    checker = AllocationChecker.from_config(config)
    try:
        return await checker.check_allocation(force_notify, title)
    finally:
        await checker.aclose()


def run_sync(force_notify: bool = False, title: str = "Allocation Update") -> CheckResult:
    """Synchronous convenience wrapper for CLI usage."""
    return asyncio.run(run_check(force_notify, title))
