"""
MFEA ALERT - Configuration & Thresholds

Single source of truth for all numerical thresholds.
Deployment settings (storage, webhook) are read from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class TrendThresholds:
    """Price vs long moving average."""

    long_window: int = 220  # Valid trading days in the long average


@dataclass(frozen=True)
class VolatilityThresholds:
    """Realized volatility thresholds (annualized %)."""

    window: int = 21  # Daily returns, needs window + 1 prices
    annualization_days: int = 252
    low: float = 14.0  # vol < 14 -> 3x leverage eligible
    high: float = 24.0  # vol < 24 -> 2x leverage eligible


@dataclass(frozen=True)
class RateThresholds:
    """Short-rate trend thresholds."""

    lookback: int = 21  # Valid points between latest and comparison rate
    falling_dead_zone: float = -0.0001  # delta < this -> falling (noise filter)


@dataclass(frozen=True)
class BandConfig:
    """Hysteresis bands for the banded recommendation."""

    price_band_pct: float = 0.02  # +/-2% around the long average
    vol_band_points: float = 1.0  # +/-1 percentage point around 14 and 24
    rate_falling_threshold: float = -0.001  # Stricter bar, no band


@dataclass(frozen=True)
class FetchConfig:
    """Yahoo Finance chart endpoints."""

    base_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    price_symbol: str = "SPY"
    rate_symbol: str = "^IRX"  # 13-week T-bill yield
    price_range: str = "1y"  # Must yield >= 220 trading days
    rate_range: str = "3mo"
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class StorageConfig:
    """State store tiers. A tier is configured only if its settings exist."""

    redis_url: Optional[str] = None
    last_key: str = "lastAllocation"
    history_key: str = "allocationHistory"
    subscribers_key: str = "allocationSubscribers"
    edge_config_id: Optional[str] = None
    edge_config_read_token: Optional[str] = None
    vercel_api_token: Optional[str] = None
    state_file: Path = _DATA_DIR / "last_allocation.json"
    history_file: Path = _DATA_DIR / "allocation_history.parquet"

    @classmethod
    def from_env(cls) -> StorageConfig:
        defaults = cls()
        return cls(
            redis_url=os.environ.get("REDIS_URL") or os.environ.get("KV_URL"),
            edge_config_id=os.environ.get("EDGE_CONFIG_ID"),
            edge_config_read_token=os.environ.get("EDGE_CONFIG_READ_TOKEN"),
            vercel_api_token=os.environ.get("VERCEL_API_TOKEN"),
            state_file=Path(os.environ.get("STATE_FILE") or defaults.state_file),
            history_file=Path(os.environ.get("HISTORY_FILE") or defaults.history_file),
        )


@dataclass(frozen=True)
class NotifyConfig:
    """Webhook notification settings."""

    webhook_url: Optional[str] = None
    subscriber_ids: tuple[str, ...] = ()
    mention_edit_delay_seconds: float = 5.0
    timeout_seconds: float = 10.0

    @classmethod
    def from_env(cls) -> NotifyConfig:
        raw_ids = os.environ.get("SUBSCRIBER_IDS", "")
        delay = os.environ.get("MENTION_EDIT_DELAY")
        return cls(
            webhook_url=os.environ.get("DISCORD_WEBHOOK_URL"),
            subscriber_ids=tuple(i.strip() for i in raw_ids.split(",") if i.strip()),
            mention_edit_delay_seconds=float(delay) if delay else cls.mention_edit_delay_seconds,
        )


@dataclass(frozen=True)
class MfeaConfig:
    """Master configuration for MFEA ALERT."""

    trend: TrendThresholds = TrendThresholds()
    volatility: VolatilityThresholds = VolatilityThresholds()
    rates: RateThresholds = RateThresholds()
    bands: BandConfig = BandConfig()
    fetch: FetchConfig = FetchConfig()
    storage: StorageConfig = field(default_factory=StorageConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)

    @classmethod
    def from_env(cls) -> MfeaConfig:
        return cls(storage=StorageConfig.from_env(), notify=NotifyConfig.from_env())
