"""
MFEA ALERT Streamlit Dashboard.

Run with: streamlit run src/mfea_alert/dashboard/app.py
"""

import sys
from pathlib import Path

# Ensure mfea_alert is importable when run via `streamlit run`
_SRC_DIR = str(Path(__file__).resolve().parents[2])
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

import asyncio

import pandas as pd
import streamlit as st

from mfea_alert.classifier.engine import evaluate_allocations
from mfea_alert.config import MfeaConfig
from mfea_alert.dashboard.components.allocation_indicator import render_allocation_indicator
from mfea_alert.dashboard.components.band_panel import render_band_panel
from mfea_alert.dashboard.components.metric_cards import render_metric_cards
from mfea_alert.dashboard.components.price_chart import render_price_chart
from mfea_alert.errors import MfeaError
from mfea_alert.explain.generator import describe_band_influence
from mfea_alert.features.snapshot import compute_metrics_snapshot
from mfea_alert.ingest.fetcher import MarketDataFetcher
from mfea_alert.storage.tiers import LocalFileTier


def main() -> None:
    st.set_page_config(
        page_title="MFEA ALERT",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    st.title("MFEA ALERT")
    st.markdown("**Market-Timing Allocation Status & Recommendation**")

    config = MfeaConfig.from_env()

    with st.sidebar:
        st.header("About MFEA")
        st.markdown(
            """
            **Categories:**
            - **Risk On**: 100% 3x-leveraged equity
            - **Risk Mid**: 100% 2x-leveraged equity
            - **Risk Alt**: 25% 3x equity + 75% long bonds
            - **Risk Off**: 100% unleveraged equity

            **Modes:**
            - *Strict*: raw thresholds
            - *Recommended*: ±2% average, ±1% vol, <-0.1% rate bands
            """
        )

        st.divider()

        st.markdown(
            f"""
            **Data Sources:**
            - Price: Yahoo ({config.fetch.price_symbol} adjusted close)
            - Rate: Yahoo ({config.fetch.rate_symbol})
            """
        )

    try:
        raw = asyncio.run(MarketDataFetcher(config.fetch).fetch())
        evaluation = evaluate_allocations(compute_metrics_snapshot(raw, config), config)
    except MfeaError as exc:
        st.error(f"Unable to compute allocation: {exc}")
        return

    # Row 1: Strict vs recommended
    col1, col2 = st.columns(2)
    with col1:
        render_allocation_indicator(
            evaluation.strict.category.value, evaluation.strict.allocation, "MFEA (strict)"
        )
    with col2:
        render_allocation_indicator(
            evaluation.banded.category.value, evaluation.banded.allocation, "Recommended (banded)"
        )

    render_band_panel(describe_band_influence(evaluation), evaluation.differs)

    # Row 2: Metric cards
    st.markdown("### Decision Inputs")
    render_metric_cards(evaluation, config)

    # Row 3: Price chart
    st.markdown("### Price vs Long Average")
    prices = pd.DataFrame(
        [
            {"date": d, "price": p}
            for d, p in zip(raw.price_dates, raw.prices)
            if p is not None and p > 0
        ]
    ).tail(config.trend.long_window)
    render_price_chart(prices, evaluation.snapshot.long_average, evaluation.banded.band_info)

    # Snapshot history
    with st.expander("Allocation History"):
        history = LocalFileTier(config.storage.state_file, config.storage.history_file).read_history()
        if history.empty:
            st.info("No allocation changes recorded yet.")
        else:
            st.dataframe(history.tail(20))


if __name__ == "__main__":
    main()
