"""
MFEA ALERT - State Store

Priority-ordered chain of independently optional tiers behind one
read / write / snapshot interface. Tier failures are logged and
aggregated, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

import redis.asyncio as redis

from mfea_alert.config import StorageConfig
from mfea_alert.errors import StorageTierFailure
from mfea_alert.storage.tiers import EdgeConfigTier, LocalFileTier, RedisTier, StateTier

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """Per-tier outcome of one write or snapshot."""

    attempted: list[str] = field(default_factory=list)
    failures: list[StorageTierFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        failed = {f.tier for f in self.failures}
        return [name for name in self.attempted if name not in failed]

    @property
    def all_failed(self) -> bool:
        return bool(self.attempted) and len(self.failures) == len(self.attempted)


class StateStore:
    """
    Last-allocation store over ordered tiers.

    Read: first well-typed value in priority order.
    Write: every tier, independently.
    Snapshot: every snapshot-capable tier, fire-and-forget.
    """

    def __init__(self, tiers: list[StateTier]) -> None:
        self.tiers = list(tiers)

    async def read_last(self) -> Optional[str]:
        for tier in self.tiers:
            try:
                value = await tier.read_last()
            except StorageTierFailure as exc:
                logger.error(f"State read failed, trying next tier: {exc}")
                continue
            if isinstance(value, str) and value:
                logger.debug(f"Last allocation read from {tier.name}")
                return value
        return None

    async def write_last(self, value: str) -> WriteReport:
        report = WriteReport()
        for tier in self.tiers:
            report.attempted.append(tier.name)
            try:
                await tier.write_last(value)
            except StorageTierFailure as exc:
                logger.error(f"State write failed: {exc}")
                report.failures.append(exc)

        if report.all_failed:
            logger.error("Every state tier failed; allocation not persisted")
        else:
            logger.info(f"Allocation persisted to {', '.join(report.succeeded)}")
        return report

    async def append_snapshot(self, value: str, timestamp: datetime) -> WriteReport:
        report = WriteReport()
        for tier in self.tiers:
            if not tier.supports_snapshots:
                continue
            report.attempted.append(tier.name)
            try:
                await tier.append_snapshot(value, timestamp)
            except StorageTierFailure as exc:
                logger.error(f"Snapshot append failed: {exc}")
                report.failures.append(exc)
        return report

    def tier(self, name: str) -> Optional[StateTier]:
        return next((t for t in self.tiers if t.name == name), None)

    async def aclose(self) -> None:
        for tier in self.tiers:
            await tier.close()


def build_state_store(
    config: StorageConfig,
    redis_client: redis.Redis | None = None,
) -> StateStore:
    """
    Build the tier chain from configuration.

    Order: redis (if a client is given), edge config (if an id is set),
    local file (always, last).
    """
    tiers: list[StateTier] = []
    if redis_client is not None:
        tiers.append(RedisTier(redis_client, config.last_key, config.history_key))
    if config.edge_config_id:
        tiers.append(
            EdgeConfigTier(
                config_id=config.edge_config_id,
                key=config.last_key,
                read_token=config.edge_config_read_token,
                api_token=config.vercel_api_token,
            )
        )
    tiers.append(LocalFileTier(config.state_file, config.history_file))

    logger.info(f"State store tiers: {[t.name for t in tiers]}")
    return StateStore(tiers)
