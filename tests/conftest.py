"""Shared fixtures for MFEA ALERT tests."""

import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional
from unittest.mock import AsyncMock

import pytest

# Ensure mfea_alert is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mfea_alert.config import MfeaConfig, NotifyConfig
from mfea_alert.errors import StorageTierFailure
from mfea_alert.storage.tiers import StateTier
from mfea_alert.types import MetricsSnapshot, PriceStatus, RawSeries

AS_OF = date(2026, 1, 15)


class MemoryTier(StateTier):
    """In-memory tier recording every call."""

    def __init__(self, name: str, value: Optional[str] = None, fail: bool = False) -> None:
        self.name = name
        self.value = value
        self.fail = fail
        self.writes: list[str] = []
        self.snapshots: list[tuple[str, datetime]] = []

    async def read_last(self) -> Optional[str]:
        if self.fail:
            raise StorageTierFailure(self.name, "read", "boom")
        return self.value

    async def write_last(self, value: str) -> None:
        self.writes.append(value)
        if self.fail:
            raise StorageTierFailure(self.name, "write", "boom")
        self.value = value

    async def append_snapshot(self, value: str, timestamp: datetime) -> None:
        self.snapshots.append((value, timestamp))
        if self.fail:
            raise StorageTierFailure(self.name, "snapshot", "boom")


def make_snapshot(
    price: float = 110.0,
    average: float = 100.0,
    vol: float = 10.0,
    delta: float = 0.0,
) -> MetricsSnapshot:
    return MetricsSnapshot(
        as_of_date=AS_OF,
        reference_price=price,
        long_average=average,
        price_status=PriceStatus.OVER if price > average else PriceStatus.UNDER,
        annualized_volatility_pct=vol,
        short_rate=4.0,
        short_rate_delta=delta,
        rate_falling=delta < -0.0001,
    )


@pytest.fixture
def config() -> MfeaConfig:
    return MfeaConfig(notify=NotifyConfig(mention_edit_delay_seconds=0.0))


@pytest.fixture
def rising_raw() -> RawSeries:
    """Steady uptrend, near-zero volatility, flat rate -> RISK ON."""
    return RawSeries(
        as_of_date=AS_OF,
        prices=[100.0 + i * 0.1 for i in range(260)],
        rates=[4.0] * 30,
    )


@pytest.fixture
def falling_raw() -> RawSeries:
    """Steady downtrend, flat rate -> RISK OFF."""
    return RawSeries(
        as_of_date=AS_OF,
        prices=[200.0 - i * 0.1 for i in range(260)],
        rates=[4.0] * 30,
    )


@pytest.fixture
def short_raw() -> RawSeries:
    """Too few prices for the long average."""
    return RawSeries(
        as_of_date=AS_OF,
        prices=[100.0] * 100,
        rates=[4.0] * 30,
    )


@pytest.fixture
def notifier() -> AsyncMock:
    mock = AsyncMock()
    mock.send.return_value = "msg-1"
    return mock


@pytest.fixture
def subscribers() -> AsyncMock:
    mock = AsyncMock()
    mock.get_subscribers.return_value = ["111", "222"]
    return mock
