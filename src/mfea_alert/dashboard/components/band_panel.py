"""
MFEA ALERT - Band Panel Component

Displays the band influence analysis.
"""

import streamlit as st


def render_band_panel(description: str, differs: bool) -> None:
    """Render the band influence text."""
    st.markdown("### Band Influence")

    if differs:
        st.warning(description)
    else:
        st.success(description)
