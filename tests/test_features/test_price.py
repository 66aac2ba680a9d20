"""Tests for price trend feature engineering."""

import pytest

from mfea_alert.config import TrendThresholds
from mfea_alert.errors import InsufficientData
from mfea_alert.features.price import compute_long_average, compute_price_status, valid_prices
from mfea_alert.types import PriceStatus


class TestValidPrices:
    def test_drops_gaps_and_non_positive(self):
        raw = [100.0, None, float("nan"), 0.0, -5.0, float("inf"), 101.5]
        assert valid_prices(raw) == [100.0, 101.5]

    def test_preserves_order(self):
        assert valid_prices([3.0, 1.0, 2.0]) == [3.0, 1.0, 2.0]


class TestComputeLongAverage:
    def test_mean_of_last_220(self):
        prices = [float(i) for i in range(1, 301)]  # 1..300
        # Last 220: 81..300
        assert compute_long_average(prices, TrendThresholds()) == pytest.approx(190.5)

    def test_independent_of_earlier_history(self):
        tail = [100.0 + (i % 7) for i in range(220)]
        a = compute_long_average([1.0] * 50 + tail, TrendThresholds())
        b = compute_long_average([9999.0] * 500 + tail, TrendThresholds())
        assert a == pytest.approx(b)
        assert a == pytest.approx(sum(tail) / 220)

    def test_gaps_do_not_count_toward_window(self):
        raw = [50.0] * 10 + [None, float("nan")] * 20 + [100.0] * 220
        assert compute_long_average(valid_prices(raw), TrendThresholds()) == 100.0

    def test_exactly_220_points(self):
        assert compute_long_average([10.0] * 220, TrendThresholds()) == 10.0

    def test_insufficient_data(self):
        with pytest.raises(InsufficientData):
            compute_long_average([10.0] * 219, TrendThresholds())

    def test_gaps_can_cause_insufficient_data(self):
        raw = [10.0] * 219 + [None] * 40
        with pytest.raises(InsufficientData):
            compute_long_average(valid_prices(raw), TrendThresholds())


class TestComputePriceStatus:
    def test_over(self):
        assert compute_price_status(101.0, 100.0) == PriceStatus.OVER

    def test_under(self):
        assert compute_price_status(99.0, 100.0) == PriceStatus.UNDER

    def test_equality_is_under(self):
        assert compute_price_status(100.0, 100.0) == PriceStatus.UNDER
