"""
MFEA ALERT - Allocation Indicator Component

Semicircular gauge showing RISK OFF / ALT / MID / ON.
"""

import plotly.graph_objects as go
import streamlit as st

CATEGORY_COLORS = {
    "Risk Off": "#ef4444",
    "Risk Alt": "#eab308",
    "Risk Mid": "#3b82f6",
    "Risk On": "#22c55e",
}

CATEGORY_VALUES = {"Risk Off": 12.5, "Risk Alt": 37.5, "Risk Mid": 62.5, "Risk On": 87.5}


def render_allocation_indicator(category: str, allocation: str, label: str) -> None:
    """Render semicircular gauge for one allocation result."""
    value = CATEGORY_VALUES.get(category, 50.0)
    color = CATEGORY_COLORS.get(category, "#6b7280")

    fig = go.Figure(
        go.Indicator(
            mode="gauge",
            value=value,
            title={"text": label, "font": {"size": 14}},
            gauge={
                "axis": {"range": [0, 100], "visible": False},
                "bar": {"color": "rgba(0,0,0,0)"},
                "bgcolor": "#f3f4f6",
                "steps": [
                    {"range": [0, 25], "color": CATEGORY_COLORS["Risk Off"]},
                    {"range": [25, 50], "color": CATEGORY_COLORS["Risk Alt"]},
                    {"range": [50, 75], "color": CATEGORY_COLORS["Risk Mid"]},
                    {"range": [75, 100], "color": CATEGORY_COLORS["Risk On"]},
                ],
                "threshold": {
                    "line": {"color": "#1f2937", "width": 4},
                    "thickness": 0.8,
                    "value": value,
                },
            },
        )
    )

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        height=220,
        margin=dict(l=20, r=20, t=50, b=10),
    )

    st.plotly_chart(fig, use_container_width=True)

    st.markdown(
        f"<h3 style='text-align:center; color:{color};'>{category.upper()}</h3>"
        f"<p style='text-align:center; color:#6b7280;'>{allocation}</p>",
        unsafe_allow_html=True,
    )
