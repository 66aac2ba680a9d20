"""Tests for short-rate trend feature engineering."""

import pytest

from mfea_alert.config import RateThresholds
from mfea_alert.errors import InsufficientData
from mfea_alert.features.rates import compute_rate_trend, valid_rates


class TestComputeRateTrend:
    def test_delta_over_21_valid_points(self):
        rates = [5.0] * 10 + [4.0] + [4.5] * 21  # latest idx 31, past idx 10
        result = compute_rate_trend(rates, RateThresholds())
        assert result["short_rate"] == 4.5
        assert result["short_rate_delta"] == pytest.approx(0.5)
        assert result["rate_falling"] is False

    def test_falling(self):
        rates = [4.0 - i * 0.01 for i in range(30)]
        result = compute_rate_trend(rates, RateThresholds())
        assert result["short_rate_delta"] == pytest.approx(-0.21)
        assert result["rate_falling"] is True

    def test_clamps_to_oldest_when_short(self):
        rates = [4.2, 4.1, 4.0]
        result = compute_rate_trend(rates, RateThresholds())
        assert result["short_rate_delta"] == pytest.approx(-0.2)

    def test_dead_zone(self):
        rates = [4.0] + [4.0] * 20 + [4.0 - 0.00005]
        result = compute_rate_trend(rates, RateThresholds())
        assert result["rate_falling"] is False

    def test_just_past_dead_zone(self):
        rates = [4.0] * 21 + [4.0 - 0.0002]
        result = compute_rate_trend(rates, RateThresholds())
        assert result["rate_falling"] is True

    def test_gaps_filtered_before_lookback(self):
        raw = [3.0] + [None, float("nan")] * 10 + [4.0] * 21
        rates = valid_rates(raw)
        assert len(rates) == 22
        result = compute_rate_trend(rates, RateThresholds())
        assert result["short_rate_delta"] == pytest.approx(1.0)

    def test_negative_rates_are_valid(self):
        assert valid_rates([-0.1, None, 0.0]) == [-0.1, 0.0]

    def test_no_rates(self):
        with pytest.raises(InsufficientData):
            compute_rate_trend([], RateThresholds())
