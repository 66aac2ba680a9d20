"""
MFEA ALERT - Explanation Generator

Produces the human-readable text attached to notifications and the
dashboard: status line, rate trend, band influence analysis, and the
mention / summary variants of a notification message.
Factual statements only.
"""

from __future__ import annotations

from mfea_alert.config import RateThresholds
from mfea_alert.types import Evaluation

BAND_LEGEND = "*Bands: ±2% average, ±1% vol, <-0.1% rate*"


def format_status(current: str, changed: bool) -> str:
    if changed:
        return f"Allocation changed to: {current}"
    return f"No change in allocation: {current}"


def describe_rate_trend(delta: float, thresholds: RateThresholds) -> str:
    """Arrow summary of the short-rate change over the lookback window."""
    timeframe = f"last {thresholds.lookback} trading days"
    dead_zone = abs(thresholds.falling_dead_zone)
    if delta > dead_zone:
        return f"⬆️ Increasing by {abs(delta):.3f}% over {timeframe}"
    if delta < -dead_zone:
        return f"⬇️ {abs(delta):.3f}% over {timeframe}"
    return f"↔️ No change over {timeframe}"


def describe_band_influence(evaluation: Evaluation) -> str:
    """
    Explain how the bands relate the banded result to the strict one.

    Args:
        evaluation: Strict and banded results from one snapshot.

    Returns:
        Multi-line description ending with the band legend.
    """
    info = evaluation.banded.band_info
    influences: list[str] = []

    if info is not None:
        if info.price_in_band:
            influences.append("Price within ±2% of average")
        if info.vol14_in_band:
            influences.append("Vol within 13-15%")
        elif info.vol24_in_band:
            influences.append("Vol within 23-25%")
        if info.rate_in_band:
            influences.append("Rate change between strict and banded thresholds")
        elif evaluation.differs and not influences and info.effective.rate_falling:
            influences.append("Rate change crossed banded threshold (<-0.1%)")

    if not evaluation.differs:
        if influences:
            text = f"Factors within bands: {'; '.join(influences)}. Recommendation aligns."
        else:
            text = "All factors clear of bands. Recommendation aligns."
    else:
        text = f"Recommendation differs. Influences: {'; '.join(influences)}."

    return f"{text}\n{BAND_LEGEND}"


def format_message(title: str, status: str, mentions: list[str] | None = None) -> str:
    """Notification body, with raw subscriber mentions when given."""
    message = f"**{title}**\n{status}"
    if mentions:
        message += "\n" + " ".join(f"<@{m}>" for m in mentions)
    return message


def format_summary(title: str, status: str, notified: int) -> str:
    """Notification body after mentions are replaced by a count."""
    noun = "subscriber" if notified == 1 else "subscribers"
    return f"**{title}**\n{status}\n{notified} {noun} notified"
