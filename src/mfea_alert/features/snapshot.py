"""
MFEA ALERT - Metrics Snapshot

Combines the price, volatility and rate features into the single
immutable MetricsSnapshot the classifier consumes. Pure function.
"""

from __future__ import annotations

import logging

from mfea_alert.config import MfeaConfig
from mfea_alert.features.price import compute_long_average, compute_price_status, valid_prices
from mfea_alert.features.rates import compute_rate_trend, valid_rates
from mfea_alert.features.volatility import compute_volatility
from mfea_alert.types import MetricsSnapshot, RawSeries

logger = logging.getLogger(__name__)


def compute_metrics_snapshot(raw: RawSeries, config: MfeaConfig) -> MetricsSnapshot:
    """
    Build the decision-input snapshot from raw series.

    Raises:
        InsufficientData: price or rate series too short after filtering.
    """
    prices = valid_prices(raw.prices)
    dropped = len(raw.prices) - len(prices)
    if dropped:
        logger.debug(f"Dropped {dropped} invalid price points")

    long_average = compute_long_average(prices, config.trend)
    volatility = compute_volatility(prices, config.volatility)
    rate = compute_rate_trend(valid_rates(raw.rates), config.rates)

    reference_price = prices[-1]
    return MetricsSnapshot(
        as_of_date=raw.as_of_date,
        reference_price=reference_price,
        long_average=long_average,
        price_status=compute_price_status(reference_price, long_average),
        annualized_volatility_pct=volatility,
        short_rate=rate["short_rate"],
        short_rate_delta=rate["short_rate_delta"],
        rate_falling=rate["rate_falling"],
    )
