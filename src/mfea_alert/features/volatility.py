"""
MFEA ALERT - Volatility Feature Engineering

Annualized realized volatility from the last 21 simple daily returns.
"""

from __future__ import annotations

import math

from mfea_alert.config import VolatilityThresholds
from mfea_alert.errors import InsufficientData


def compute_volatility(prices: list[float], thresholds: VolatilityThresholds) -> float:
    """
    Annualized volatility in percent, rounded to 2 decimals.

    vol = pstdev(returns) * sqrt(252) * 100, where returns are the
    `window` simple returns of the last `window + 1` valid prices.

    Args:
        prices: Already-filtered valid prices, oldest first.
        thresholds: Volatility configuration.

    Raises:
        InsufficientData: fewer than `window + 1` points.
    """
    needed = thresholds.window + 1
    if len(prices) < needed:
        raise InsufficientData(
            f"Need {needed} valid prices for volatility, got {len(prices)}"
        )

    recent = prices[-needed:]
    returns = [recent[i] / recent[i - 1] - 1.0 for i in range(1, len(recent))]

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    annualized = math.sqrt(variance) * math.sqrt(thresholds.annualization_days) * 100.0

    return round(annualized, 2)
