"""
MFEA ALERT - Core Type Definitions

All dataclasses and enums used across the system.
No logic beyond serialization.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Category(Enum):
    """MFEA risk categories."""

    RISK_ON = "Risk On"
    RISK_MID = "Risk Mid"
    RISK_ALT = "Risk Alt"
    RISK_OFF = "Risk Off"


class PriceStatus(Enum):
    """Reference price relative to its long average."""

    OVER = "Over"
    UNDER = "Under"


@dataclass(frozen=True)
class RawSeries:
    """Raw aligned series from the data provider. May contain gaps."""

    as_of_date: date
    prices: list[Optional[float]] = field(default_factory=list)
    price_dates: list[date] = field(default_factory=list)
    rates: list[Optional[float]] = field(default_factory=list)


@dataclass(frozen=True)
class MetricsSnapshot:
    """Decision inputs computed fresh for one run."""

    as_of_date: date
    reference_price: float
    long_average: float
    price_status: PriceStatus
    annualized_volatility_pct: float
    short_rate: float
    short_rate_delta: float
    rate_falling: bool


@dataclass(frozen=True)
class DecisionInputs:
    """The four booleans the decision tree branches on."""

    above_average: bool
    vol_below_14: bool
    vol_below_24: bool
    rate_falling: bool


@dataclass(frozen=True)
class BandInfo:
    """Diagnostic detail for a banded evaluation. Never affects the category."""

    price_lower: float
    price_upper: float
    price_in_band: bool
    vol14_lower: float
    vol14_upper: float
    vol14_in_band: bool
    vol24_lower: float
    vol24_upper: float
    vol24_in_band: bool
    rate_threshold: float
    rate_in_band: bool
    effective: DecisionInputs

    def any_in_band(self) -> bool:
        return self.price_in_band or self.vol14_in_band or self.vol24_in_band or self.rate_in_band


@dataclass(frozen=True)
class AllocationResult:
    """Classifier output."""

    category: Category
    allocation: str
    band_info: Optional[BandInfo] = None


@dataclass(frozen=True)
class Evaluation:
    """Strict and banded results computed from one shared snapshot."""

    snapshot: MetricsSnapshot
    strict: AllocationResult
    banded: AllocationResult

    @property
    def differs(self) -> bool:
        return self.strict.allocation != self.banded.allocation


@dataclass(frozen=True)
class PersistedState:
    """Stored allocation record. Timestamp is set on history snapshots only."""

    allocation: str
    timestamp: Optional[datetime] = None

    def to_dict(self) -> dict:
        data: dict = {"allocation": self.allocation}
        if self.timestamp is not None:
            data["timestamp"] = self.timestamp.isoformat()
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_value(cls, value: object) -> Optional[PersistedState]:
        """
        Parse a stored value.

        Accepts the JSON object layout, an already-decoded dict, or a bare
        allocation string. Returns None for anything not well-typed.
        """
        if isinstance(value, str):
            try:
                decoded = json.loads(value)
            except ValueError:
                return cls(allocation=value) if value else None
            if isinstance(decoded, str):
                return cls(allocation=decoded) if decoded else None
            value = decoded
        if isinstance(value, dict):
            allocation = value.get("allocation")
            if isinstance(allocation, str) and allocation:
                return cls(allocation=allocation)
        return None


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check_allocation run."""

    previous: Optional[str]
    current: str
    changed: bool

    def to_dict(self) -> dict:
        return {
            "previous": self.previous,
            "current": self.current,
            "changed": self.changed,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
