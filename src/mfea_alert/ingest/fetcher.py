"""
MFEA ALERT - Async Data Fetcher

Pulls the reference price series and the short-rate series from the
Yahoo Finance chart API. Both requests run concurrently; either failing
fails the whole fetch, never a partial result.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional
from urllib.parse import quote

import aiohttp

from mfea_alert.config import FetchConfig
from mfea_alert.errors import UpstreamUnavailable
from mfea_alert.types import RawSeries

logger = logging.getLogger(__name__)

_HEADERS = {"User-Agent": "Mozilla/5.0 (mfea-alert)"}


class MarketDataFetcher:
    """
    Async fetcher for the MFEA input series.

    Price: adjusted close of `price_symbol`.
    Rate: close of `rate_symbol` (13-week T-bill yield, percent).
    """

    def __init__(self, config: FetchConfig | None = None) -> None:
        self.config = config or FetchConfig()

    async def fetch(self, as_of_date: date | None = None) -> RawSeries:
        """
        Fetch both series concurrently.

        Raises:
            UpstreamUnavailable: transport error, timeout, HTTP error,
                or a payload without the expected chart structure.
        """
        as_of_date = as_of_date or date.today()
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=_HEADERS) as session:
                price_chart, rate_chart = await asyncio.gather(
                    self._fetch_chart(session, self.config.price_symbol, self.config.price_range),
                    self._fetch_chart(session, self.config.rate_symbol, self.config.rate_range),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise UpstreamUnavailable(f"Market data fetch failed: {exc!r}") from exc

        timestamps, prices = parse_chart(price_chart, adjusted=True)
        _, rates = parse_chart(rate_chart, adjusted=False)
        logger.info(
            f"Fetched {len(prices)} {self.config.price_symbol} prices, "
            f"{len(rates)} {self.config.rate_symbol} rates"
        )

        return RawSeries(
            as_of_date=as_of_date,
            prices=prices,
            price_dates=[datetime.fromtimestamp(ts, tz=timezone.utc).date() for ts in timestamps],
            rates=rates,
        )

    async def _fetch_chart(
        self, session: aiohttp.ClientSession, symbol: str, range_: str
    ) -> dict:
        url = f"{self.config.base_url}/{quote(symbol)}"
        params = {"interval": "1d", "range": range_}
        async with session.get(url, params=params) as response:
            if response.status != 200:
                body = await response.text()
                raise UpstreamUnavailable(
                    f"{symbol} chart request returned HTTP {response.status}: {body[:200]}"
                )
            return await response.json()


def parse_chart(data: dict, adjusted: bool) -> tuple[list[int], list[Optional[float]]]:
    """
    Extract (timestamps, values) from a chart payload.

    Keeps gaps as None so the metrics layer does the filtering. Uses
    adjusted close when requested and present, else plain close.

    Raises:
        UpstreamUnavailable: payload is not an object, or lacks a result or price arrays.
    """
    if not isinstance(data, dict):
        raise UpstreamUnavailable(f"Chart payload is not an object: {type(data).__name__}")
    chart = data.get("chart") or {}
    if not isinstance(chart, dict):
        raise UpstreamUnavailable("Chart payload has no result: malformed")
    error = chart.get("error")
    results = chart.get("result") or []
    if error or not results:
        description = error.get("description") if isinstance(error, dict) else None
        raise UpstreamUnavailable(f"Chart payload has no result: {description or 'empty'}")

    result = results[0]
    timestamps = result.get("timestamp") or []
    indicators = result.get("indicators") or {}

    values: Any = None
    if adjusted:
        values = _first_series(indicators.get("adjclose"), "adjclose")
    if values is None:
        values = _first_series(indicators.get("quote"), "close")
    if values is None:
        raise UpstreamUnavailable("Chart payload has no close prices")

    cleaned = [_to_float(v) for v in values]
    return list(timestamps[: len(cleaned)]), cleaned


def _first_series(blocks: Any, key: str) -> Optional[list]:
    if not blocks or not isinstance(blocks, list):
        return None
    series = blocks[0].get(key)
    return series if isinstance(series, list) and series else None


def _to_float(value: Any) -> Optional[float]:
    """Numbers pass through; anything else becomes a gap."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
