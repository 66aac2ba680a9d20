"""
MFEA ALERT - Price Trend Feature Engineering

Computes:
- Valid price filtering (drops None, NaN, inf, non-positive)
- LongAverage = mean of the last 220 valid prices
- PriceStatus = Over iff latest > LongAverage (ties -> Under)
"""

from __future__ import annotations

import math
from typing import Optional

from mfea_alert.config import TrendThresholds
from mfea_alert.errors import InsufficientData
from mfea_alert.types import PriceStatus


def valid_prices(prices: list[Optional[float]]) -> list[float]:
    """Keep finite, strictly positive prices in their original order."""
    return [
        float(p)
        for p in prices
        if p is not None and math.isfinite(p) and p > 0
    ]


def compute_long_average(prices: list[float], thresholds: TrendThresholds) -> float:
    """
    Mean of the most recent `long_window` valid prices.

    Args:
        prices: Already-filtered valid prices, oldest first.
        thresholds: Trend configuration.

    Raises:
        InsufficientData: fewer than `long_window` points.
    """
    window = thresholds.long_window
    if len(prices) < window:
        raise InsufficientData(
            f"Need {window} valid prices for the long average, got {len(prices)}"
        )
    recent = prices[-window:]
    return sum(recent) / window


def compute_price_status(price: float, long_average: float) -> PriceStatus:
    return PriceStatus.OVER if price > long_average else PriceStatus.UNDER
