"""
MFEA ALERT - Short-Rate Trend Feature Engineering

Computes:
- RateDelta_t = rate_t - rate_{t-21} over valid points (clamped to oldest)
- RateFalling_t = 1{RateDelta_t < -0.0001}
"""

from __future__ import annotations

import math
from typing import Optional

from mfea_alert.config import RateThresholds
from mfea_alert.errors import InsufficientData


def valid_rates(rates: list[Optional[float]]) -> list[float]:
    """Keep finite rates. Zero and negative yields are valid."""
    return [float(r) for r in rates if r is not None and math.isfinite(r)]


def compute_rate_trend(rates: list[float], thresholds: RateThresholds) -> dict:
    """
    Compute the latest short rate and its trend.

    Args:
        rates: Already-filtered valid rates, oldest first.
        thresholds: Rate configuration.

    Returns:
        {"short_rate": float, "short_rate_delta": float, "rate_falling": bool}

    Raises:
        InsufficientData: no valid rate at all.
    """
    if not rates:
        raise InsufficientData("No valid short-rate observations")

    latest_idx = len(rates) - 1
    past_idx = max(0, latest_idx - thresholds.lookback)
    delta = rates[latest_idx] - rates[past_idx]

    return {
        "short_rate": rates[latest_idx],
        "short_rate_delta": delta,
        "rate_falling": delta < thresholds.falling_dead_zone,
    }
