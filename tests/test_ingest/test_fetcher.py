"""Tests for chart payload parsing."""

import pytest

from mfea_alert.errors import UpstreamUnavailable
from mfea_alert.ingest.fetcher import parse_chart


def _chart(close=None, adjclose=None, timestamps=None):
    indicators = {"quote": [{"close": close or []}]}
    if adjclose is not None:
        indicators["adjclose"] = [{"adjclose": adjclose}]
    return {
        "chart": {
            "result": [{"timestamp": timestamps or [1, 2, 3], "indicators": indicators}],
            "error": None,
        }
    }


class TestParseChart:
    def test_prefers_adjusted_close(self):
        ts, values = parse_chart(_chart(close=[1.0, 2.0, 3.0], adjclose=[0.9, 1.9, 2.9]), True)
        assert ts == [1, 2, 3]
        assert values == [0.9, 1.9, 2.9]

    def test_falls_back_to_close(self):
        _, values = parse_chart(_chart(close=[1.0, 2.0, 3.0]), True)
        assert values == [1.0, 2.0, 3.0]

    def test_unadjusted_ignores_adjclose(self):
        _, values = parse_chart(_chart(close=[4.1, 4.2, 4.3], adjclose=[9.0, 9.0, 9.0]), False)
        assert values == [4.1, 4.2, 4.3]

    def test_gaps_become_none(self):
        _, values = parse_chart(_chart(close=[1.0, None, "x", True, 5]), False)
        assert values == [1.0, None, None, None, 5.0]

    def test_chart_error(self):
        data = {"chart": {"result": None, "error": {"description": "No data found"}}}
        with pytest.raises(UpstreamUnavailable, match="No data found"):
            parse_chart(data, True)

    def test_missing_prices(self):
        data = {"chart": {"result": [{"timestamp": [1], "indicators": {}}]}}
        with pytest.raises(UpstreamUnavailable):
            parse_chart(data, False)

    @pytest.mark.parametrize("data", [None, [], [{"chart": {}}], "chart", {"chart": []}])
    def test_non_object_payload(self, data):
        with pytest.raises(UpstreamUnavailable):
            parse_chart(data, True)
