"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd


def render_status_table(df: pd.DataFrame, status_column: str = "Status"):
    """Render an attendance table with colour-coded statuses."""
    def color_status(val):
        if val == "PRESENT":
            return "background-color: #d4edda; color: #155724; font-weight: bold"
        elif val == "ABSENT":
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        elif val == "LEAVE":
            return "background-color: #e0e7ff; color: #3730a3; font-weight: bold"
        return ""

    if status_column in df.columns:
        styled = df.style.map(color_status, subset=[status_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


def render_percentage_table(df: pd.DataFrame, pct_column: str, target_pct: float):
    """Render a table highlighting percentages under the target."""
    def color_pct(val):
        try:
            v = float(val)
            if v < target_pct:
                return "color: #cc0000; font-weight: bold"
            return "color: #155724; font-weight: bold"
        except (ValueError, TypeError):
            pass
        return ""

    if pct_column in df.columns:
        styled = df.style.map(color_pct, subset=[pct_column])
        st.dataframe(styled, use_container_width=True, hide_index=True)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)
