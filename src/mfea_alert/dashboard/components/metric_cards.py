"""
MFEA ALERT - Metric Cards Component

Displays the four decision inputs as cards in a row.
"""

import streamlit as st

from mfea_alert.config import MfeaConfig
from mfea_alert.explain.generator import describe_rate_trend
from mfea_alert.types import Evaluation, PriceStatus

GOOD = "#22c55e"
BAD = "#ef4444"


def render_metric_cards(evaluation: Evaluation, config: MfeaConfig) -> None:
    """Render price, average, volatility and rate cards."""
    snap = evaluation.snapshot
    cols = st.columns(4)

    vol = snap.annualized_volatility_pct
    if vol < config.volatility.low:
        vol_label = "Below 14%"
    elif vol < config.volatility.high:
        vol_label = "Below 24%"
    else:
        vol_label = "Above 24%"

    metrics = [
        (
            config.fetch.price_symbol,
            f"${snap.reference_price:,.2f}",
            f"{snap.price_status.value} the {config.trend.long_window}-day average",
            GOOD if snap.price_status == PriceStatus.OVER else BAD,
        ),
        (
            f"{config.trend.long_window}-day Average",
            f"${snap.long_average:,.2f}",
            f"Gap: {(snap.reference_price / snap.long_average - 1) * 100:+.2f}%",
            "#6b7280",
        ),
        (
            "Volatility",
            f"{vol:.2f}%",
            vol_label,
            GOOD if vol < config.volatility.high else BAD,
        ),
        (
            "Short Rate",
            f"{snap.short_rate:.3f}%",
            describe_rate_trend(snap.short_rate_delta, config.rates),
            GOOD if snap.rate_falling else "#6b7280",
        ),
    ]

    for i, (name, value, detail, color) in enumerate(metrics):
        with cols[i]:
            st.markdown(
                f"""
                <div style="
                    background: linear-gradient(135deg, {color}20, {color}10);
                    border-left: 4px solid {color};
                    padding: 1rem; border-radius: 0.5rem;
                ">
                    <div style="font-weight:bold; font-size:0.9rem;">{name}</div>
                    <div style="color:{color}; font-size:1.2rem; font-weight:bold;">{value}</div>
                    <div style="font-size:0.75rem; color:#6b7280;">{detail}</div>
                </div>
                """,
                unsafe_allow_html=True,
            )
