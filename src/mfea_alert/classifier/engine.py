"""
MFEA ALERT - Deterministic Allocation Classifier

Decision tree (shared by both modes):
1. Above average and vol < 14      -> RISK ON  (3x equity)
2. Above average and vol < 24      -> RISK MID (2x equity)
3. Rate falling (either side)      -> RISK ALT (3x equity + long bonds)
4. Otherwise                       -> RISK OFF (unleveraged equity)

Strict mode compares raw metrics against thresholds.
Banded mode only flips a boolean once the metric clears a tolerance band;
inside the band it falls back to the strict comparison. Stateless.
"""

from __future__ import annotations

import logging

from mfea_alert.config import BandConfig, MfeaConfig, RateThresholds, VolatilityThresholds
from mfea_alert.types import (
    AllocationResult,
    BandInfo,
    Category,
    DecisionInputs,
    Evaluation,
    MetricsSnapshot,
)

logger = logging.getLogger(__name__)

ALLOCATIONS = {
    Category.RISK_ON: "100% 3x-leveraged equity",
    Category.RISK_MID: "100% 2x-leveraged equity",
    Category.RISK_ALT: "25% 3x-leveraged equity + 75% long-duration bonds",
    Category.RISK_OFF: "100% unleveraged equity",
}


def allocate(inputs: DecisionInputs) -> AllocationResult:
    """
    Map decision booleans to a category. Total and deterministic.

    Args:
        inputs: Strict or effective (post-band) booleans.

    Returns:
        AllocationResult without band info.
    """
    if inputs.above_average:
        if inputs.vol_below_14:
            category = Category.RISK_ON
        elif inputs.vol_below_24:
            category = Category.RISK_MID
        elif inputs.rate_falling:
            category = Category.RISK_ALT
        else:
            category = Category.RISK_OFF
    elif inputs.rate_falling:
        category = Category.RISK_ALT
    else:
        category = Category.RISK_OFF

    return AllocationResult(category=category, allocation=ALLOCATIONS[category])


def strict_inputs(snapshot: MetricsSnapshot, vol: VolatilityThresholds) -> DecisionInputs:
    return DecisionInputs(
        above_average=snapshot.reference_price > snapshot.long_average,
        vol_below_14=snapshot.annualized_volatility_pct < vol.low,
        vol_below_24=snapshot.annualized_volatility_pct < vol.high,
        rate_falling=snapshot.rate_falling,
    )


def _banded(value: float, lower: float, upper: float, below_wins: bool, strict: bool) -> bool:
    """Three-way resolution: clear of the band on either side, else strict."""
    if value < lower:
        return below_wins
    if value > upper:
        return not below_wins
    return strict


def band_info(
    snapshot: MetricsSnapshot,
    vol: VolatilityThresholds,
    rates: RateThresholds,
    bands: BandConfig,
) -> BandInfo:
    """
    Compute effective booleans plus in-band diagnostics.

    Bounds are inclusive for the in-band flags. The rate is "in band" when
    the strict dead zone says falling but the stricter threshold does not.
    """
    strict = strict_inputs(snapshot, vol)
    price = snapshot.reference_price
    vol_pct = snapshot.annualized_volatility_pct
    delta = snapshot.short_rate_delta

    price_lower = snapshot.long_average * (1 - bands.price_band_pct)
    price_upper = snapshot.long_average * (1 + bands.price_band_pct)
    vol14_lower = vol.low - bands.vol_band_points
    vol14_upper = vol.low + bands.vol_band_points
    vol24_lower = vol.high - bands.vol_band_points
    vol24_upper = vol.high + bands.vol_band_points

    effective = DecisionInputs(
        above_average=_banded(price, price_lower, price_upper, False, strict.above_average),
        vol_below_14=_banded(vol_pct, vol14_lower, vol14_upper, True, strict.vol_below_14),
        vol_below_24=_banded(vol_pct, vol24_lower, vol24_upper, True, strict.vol_below_24),
        rate_falling=delta < bands.rate_falling_threshold,
    )

    logger.debug(
        f"Bands: price [{price_lower:.2f}-{price_upper:.2f}], "
        f"vol14 [{vol14_lower}-{vol14_upper}], vol24 [{vol24_lower}-{vol24_upper}], "
        f"rate < {bands.rate_falling_threshold}"
    )

    return BandInfo(
        price_lower=price_lower,
        price_upper=price_upper,
        price_in_band=price_lower <= price <= price_upper,
        vol14_lower=vol14_lower,
        vol14_upper=vol14_upper,
        vol14_in_band=vol14_lower <= vol_pct <= vol14_upper,
        vol24_lower=vol24_lower,
        vol24_upper=vol24_upper,
        vol24_in_band=vol24_lower <= vol_pct <= vol24_upper,
        rate_threshold=bands.rate_falling_threshold,
        rate_in_band=bands.rate_falling_threshold <= delta < rates.falling_dead_zone,
        effective=effective,
    )


def banded_inputs(snapshot: MetricsSnapshot, config: MfeaConfig) -> DecisionInputs:
    """Effective booleans after the hysteresis bands."""
    return band_info(snapshot, config.volatility, config.rates, config.bands).effective


def classify_strict(snapshot: MetricsSnapshot, config: MfeaConfig) -> AllocationResult:
    """Strict MFEA: raw thresholds, no smoothing."""
    return allocate(strict_inputs(snapshot, config.volatility))


def classify_banded(snapshot: MetricsSnapshot, config: MfeaConfig) -> AllocationResult:
    """Banded recommendation: effective booleans, band info attached."""
    info = band_info(snapshot, config.volatility, config.rates, config.bands)
    result = allocate(info.effective)
    return AllocationResult(
        category=result.category,
        allocation=result.allocation,
        band_info=info,
    )


def evaluate_allocations(snapshot: MetricsSnapshot, config: MfeaConfig) -> Evaluation:
    """Both modes from the same snapshot."""
    return Evaluation(
        snapshot=snapshot,
        strict=classify_strict(snapshot, config),
        banded=classify_banded(snapshot, config),
    )
