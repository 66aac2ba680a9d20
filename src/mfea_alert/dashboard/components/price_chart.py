"""
MFEA ALERT - Price Chart Component

Reference price against its long average and the ±band.
"""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from mfea_alert.types import BandInfo


def render_price_chart(prices: pd.DataFrame, long_average: float, band: BandInfo | None) -> None:
    """Render price line with average and band overlays."""
    fig = go.Figure()
    x = prices["date"].astype(str)

    fig.add_trace(go.Scatter(x=x, y=prices["price"], mode="lines", name="Price"))
    fig.add_trace(
        go.Scatter(
            x=x,
            y=[long_average] * len(prices),
            mode="lines",
            name="Long average",
            line=dict(color="#f97316", dash="dash"),
        )
    )
    if band is not None:
        for bound, name in ((band.price_upper, "Upper band"), (band.price_lower, "Lower band")):
            fig.add_trace(
                go.Scatter(
                    x=x,
                    y=[bound] * len(prices),
                    mode="lines",
                    name=name,
                    line=dict(color="#9ca3af", dash="dot", width=1),
                )
            )

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Price",
        height=350,
        margin=dict(l=0, r=0, t=30, b=0),
        showlegend=True,
    )

    st.plotly_chart(fig, use_container_width=True)
