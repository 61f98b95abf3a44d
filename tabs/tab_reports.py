"""Tab 5: Reports — remarks and proofs attached to logged days."""

import streamlit as st
import pandas as pd

from data.session_store import get_days
from components.tables import render_status_table
from engine.aggregator import remark_reports


def render(sidebar_state):
    """Render the Reports tab."""
    st.header("Reports")
    st.caption("Reasons and proofs with dates")

    reports = remark_reports(get_days())
    if not reports:
        st.info("No reports. Add a remark or attach proof while marking attendance.")
        return

    df = pd.DataFrame([
        {
            "Date": r.date,
            "Status": r.status.value,
            "Classes": f"{r.attended_classes}/{r.total_classes}",
            "Remark": r.remark,
            "Proof": r.proof_ref,
        }
        for r in reports
    ])
    render_status_table(df)
