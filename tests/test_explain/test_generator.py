"""Tests for the explanation generator."""

from conftest import make_snapshot

from mfea_alert.classifier.engine import evaluate_allocations
from mfea_alert.config import MfeaConfig, RateThresholds
from mfea_alert.explain.generator import (
    BAND_LEGEND,
    describe_band_influence,
    describe_rate_trend,
    format_message,
    format_status,
    format_summary,
)


class TestFormatStatus:
    def test_changed(self):
        assert format_status("100% 3x-leveraged equity", True) == (
            "Allocation changed to: 100% 3x-leveraged equity"
        )

    def test_unchanged(self):
        assert format_status("100% unleveraged equity", False) == (
            "No change in allocation: 100% unleveraged equity"
        )


class TestDescribeRateTrend:
    def test_rising(self):
        text = describe_rate_trend(0.123, RateThresholds())
        assert text.startswith("⬆️")
        assert "0.123%" in text

    def test_falling(self):
        assert describe_rate_trend(-0.05, RateThresholds()).startswith("⬇️")

    def test_dead_zone_is_flat(self):
        assert describe_rate_trend(-0.00005, RateThresholds()).startswith("↔️")
        assert "21 trading days" in describe_rate_trend(0.0, RateThresholds())


class TestDescribeBandInfluence:
    def _describe(self, **kwargs):
        return describe_band_influence(evaluate_allocations(make_snapshot(**kwargs), MfeaConfig()))

    def test_all_clear(self):
        text = self._describe(price=110.0, vol=5.0)
        assert text.startswith("All factors clear of bands. Recommendation aligns.")
        assert text.endswith(BAND_LEGEND)

    def test_aligned_with_factors_in_band(self):
        text = self._describe(price=101.0, vol=14.5)
        assert "Factors within bands" in text
        assert "Price within ±2% of average" in text
        assert "Vol within 13-15%" in text

    def test_vol24_reported_only_without_vol14(self):
        text = self._describe(price=110.0, vol=23.5)
        assert "Vol within 23-25%" in text
        assert "13-15%" not in text

    def test_differs_on_rate_band(self):
        text = self._describe(price=90.0, delta=-0.0005)
        assert text.startswith("Recommendation differs.")
        assert "Rate change between strict and banded thresholds" in text


class TestMessages:
    def test_message_with_mentions(self):
        msg = format_message("Allocation Update", "Allocation changed to: X", ["1", "2"])
        assert msg == "**Allocation Update**\nAllocation changed to: X\n<@1> <@2>"

    def test_message_without_mentions(self):
        assert format_message("T", "S") == "**T**\nS"

    def test_summary_replaces_mentions(self):
        summary = format_summary("T", "S", 2)
        assert summary == "**T**\nS\n2 subscribers notified"
        assert "<@" not in summary

    def test_summary_singular(self):
        assert format_summary("T", "S", 1).endswith("1 subscriber notified")
