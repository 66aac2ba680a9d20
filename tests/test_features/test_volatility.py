"""Tests for volatility feature engineering."""

import math
import statistics

import pytest

from mfea_alert.config import VolatilityThresholds
from mfea_alert.errors import InsufficientData
from mfea_alert.features.volatility import compute_volatility


class TestComputeVolatility:
    def test_constant_prices_zero_vol(self):
        assert compute_volatility([100.0] * 30, VolatilityThresholds()) == 0.0

    def test_constant_growth_zero_vol(self):
        prices = [100.0 * 1.01**i for i in range(30)]
        assert compute_volatility(prices, VolatilityThresholds()) == pytest.approx(0.0, abs=0.01)

    def test_matches_population_stddev(self):
        prices = [100.0, 101.0] * 15
        recent = prices[-22:]
        returns = [recent[i] / recent[i - 1] - 1 for i in range(1, 22)]
        expected = round(statistics.pstdev(returns) * math.sqrt(252) * 100, 2)
        assert compute_volatility(prices, VolatilityThresholds()) == expected

    def test_uses_only_last_22_prices(self):
        calm_tail = [100.0 + i * 0.01 for i in range(22)]
        wild_head = [50.0, 150.0] * 20
        assert compute_volatility(wild_head + calm_tail, VolatilityThresholds()) == (
            compute_volatility(calm_tail, VolatilityThresholds())
        )

    def test_rounded_to_two_decimals(self):
        prices = [100.0, 100.7, 99.9, 101.3] * 8
        vol = compute_volatility(prices, VolatilityThresholds())
        assert vol == round(vol, 2)

    def test_insufficient_data(self):
        with pytest.raises(InsufficientData):
            compute_volatility([100.0] * 21, VolatilityThresholds())
