"""
MFEA ALERT - State Store Tiers

Each tier persists the last allocation as {"allocation": "..."} at a
well-known key or path. Every backend error is raised as
StorageTierFailure; the StateStore decides what to do with it.

Tiers:
- RedisTier: fast remote key-value (redis.asyncio)
- EdgeConfigTier: durable config store (Vercel Edge Config over HTTP)
- LocalFileTier: local JSON file + Parquet snapshot history
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

import aiohttp
import pandas as pd
import redis.asyncio as redis

from mfea_alert.errors import StorageTierFailure
from mfea_alert.types import PersistedState

logger = logging.getLogger(__name__)


class StateTier:
    """Base class for one persistence backend."""

    name = "tier"
    supports_snapshots = True

    async def read_last(self) -> Optional[str]:
        raise NotImplementedError

    async def write_last(self, value: str) -> None:
        raise NotImplementedError

    async def append_snapshot(self, value: str, timestamp: datetime) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class RedisTier(StateTier):
    """
    Last allocation under `last_key`, history LPUSHed to `history_key`.

    The client is shared with the subscriber registry; its owner closes it.
    """

    name = "redis"

    def __init__(self, client: redis.Redis, last_key: str, history_key: str) -> None:
        self._client = client
        self._last_key = last_key
        self._history_key = history_key

    async def read_last(self) -> Optional[str]:
        try:
            raw = await self._client.get(self._last_key)
        except (redis.RedisError, OSError) as exc:
            raise StorageTierFailure(self.name, "read", exc) from exc
        if raw is None:
            return None
        state = PersistedState.from_value(raw)
        return state.allocation if state else None

    async def write_last(self, value: str) -> None:
        try:
            await self._client.set(self._last_key, PersistedState(value).to_json())
        except (redis.RedisError, OSError) as exc:
            raise StorageTierFailure(self.name, "write", exc) from exc

    async def append_snapshot(self, value: str, timestamp: datetime) -> None:
        entry = PersistedState(value, timestamp).to_json()
        try:
            await self._client.lpush(self._history_key, entry)
        except (redis.RedisError, OSError) as exc:
            raise StorageTierFailure(self.name, "snapshot", exc) from exc


class EdgeConfigTier(StateTier):
    """
    Vercel Edge Config item.

    Reads go to the edge endpoint with the read token; writes go through
    the management API as a single upsert, so an item is replaced whole.
    Edge Config has no append primitive: no snapshot capability.
    """

    name = "edge_config"
    supports_snapshots = False

    READ_URL = "https://edge-config.vercel.com/{config_id}/item/{key}"
    WRITE_URL = "https://api.vercel.com/v1/edge-config/{config_id}/items"

    def __init__(
        self,
        config_id: str,
        key: str,
        read_token: Optional[str],
        api_token: Optional[str],
        timeout_seconds: float = 10.0,
    ) -> None:
        self._config_id = config_id
        self._key = key
        self._read_token = read_token
        self._api_token = api_token
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def read_last(self) -> Optional[str]:
        if not self._read_token:
            return None
        url = self.READ_URL.format(config_id=self._config_id, key=self._key)
        headers = {"Authorization": f"Bearer {self._read_token}"}
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(url, headers=headers) as response:
                    if response.status == 404:
                        return None
                    response.raise_for_status()
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise StorageTierFailure(self.name, "read", exc) from exc
        state = PersistedState.from_value(data)
        return state.allocation if state else None

    async def write_last(self, value: str) -> None:
        if not self._api_token:
            raise StorageTierFailure(self.name, "write", "VERCEL_API_TOKEN not set")
        url = self.WRITE_URL.format(config_id=self._config_id)
        headers = {"Authorization": f"Bearer {self._api_token}"}
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.patch(
                    url, headers=headers, json=upsert_payload(self._key, value)
                ) as response:
                    response.raise_for_status()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise StorageTierFailure(self.name, "write", exc) from exc

    async def append_snapshot(self, value: str, timestamp: datetime) -> None:
        return None


def upsert_payload(key: str, value: str) -> dict:
    """Edge Config management API body for replacing one item."""
    return {
        "items": [
            {"operation": "upsert", "key": key, "value": PersistedState(value).to_dict()}
        ]
    }


class LocalFileTier(StateTier):
    """
    Local JSON state file, ground truth for same-process continuity.

    Writes go to a temp file in the same directory and are renamed over
    the target, so a reader never sees a partial document. Snapshots are
    appended to a Parquet history file.
    """

    name = "local_file"

    def __init__(self, state_file: Path, history_file: Path) -> None:
        self.state_file = Path(state_file)
        self.history_file = Path(history_file)

    async def read_last(self) -> Optional[str]:
        if not self.state_file.exists():
            return None
        try:
            text = self.state_file.read_text()
        except UnicodeDecodeError:
            logger.warning(f"Ignoring undecodable state file {self.state_file}")
            return None
        except OSError as exc:
            raise StorageTierFailure(self.name, "read", exc) from exc
        state = PersistedState.from_value(text)
        if state is None:
            logger.warning(f"Ignoring malformed state file {self.state_file}")
            return None
        return state.allocation

    async def write_last(self, value: str) -> None:
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.state_file.parent, prefix=".state-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w") as handle:
                    handle.write(PersistedState(value).to_json())
                os.replace(tmp_name, self.state_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageTierFailure(self.name, "write", exc) from exc

    async def append_snapshot(self, value: str, timestamp: datetime) -> None:
        new_row = pd.DataFrame([{"timestamp": timestamp.isoformat(), "allocation": value}])
        try:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            if self.history_file.exists():
                existing = pd.read_parquet(self.history_file)
                df = pd.concat([existing, new_row], ignore_index=True)
            else:
                df = new_row
            df.to_parquet(self.history_file, index=False)
        except (OSError, ValueError) as exc:
            raise StorageTierFailure(self.name, "snapshot", exc) from exc

    def read_history(self) -> pd.DataFrame:
        """Snapshot history, oldest first. Empty frame if none recorded."""
        if not self.history_file.exists():
            return pd.DataFrame(columns=["timestamp", "allocation"])
        df = pd.read_parquet(self.history_file)
        df["timestamp"] = pd.to_datetime(df["timestamp"])
        return df.sort_values("timestamp")
