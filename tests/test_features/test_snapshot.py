"""Tests for the combined metrics snapshot."""

from datetime import date

import pytest

from mfea_alert.errors import InsufficientData
from mfea_alert.features.snapshot import compute_metrics_snapshot
from mfea_alert.types import PriceStatus, RawSeries


class TestComputeMetricsSnapshot:
    def test_rising_market(self, rising_raw, config):
        snap = compute_metrics_snapshot(rising_raw, config)
        assert snap.reference_price == pytest.approx(125.9)
        assert snap.long_average == pytest.approx(114.95)
        assert snap.price_status == PriceStatus.OVER
        assert snap.annualized_volatility_pct < 1.0
        assert snap.short_rate == 4.0
        assert snap.rate_falling is False

    def test_falling_market(self, falling_raw, config):
        snap = compute_metrics_snapshot(falling_raw, config)
        assert snap.price_status == PriceStatus.UNDER
        assert snap.long_average == pytest.approx(185.05)

    def test_reference_price_skips_trailing_gap(self, config):
        raw = RawSeries(
            as_of_date=date(2026, 1, 1),
            prices=[100.0] * 230 + [None],
            rates=[4.0] * 22,
        )
        assert compute_metrics_snapshot(raw, config).reference_price == 100.0

    def test_short_prices(self, short_raw, config):
        with pytest.raises(InsufficientData):
            compute_metrics_snapshot(short_raw, config)

    def test_missing_rates(self, config):
        raw = RawSeries(as_of_date=date(2026, 1, 1), prices=[100.0] * 230, rates=[None] * 5)
        with pytest.raises(InsufficientData):
            compute_metrics_snapshot(raw, config)
