"""Attendance Forecast Planner — Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.logging_setup import setup_logging
from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_dashboard,
    tab_attendance_log,
    tab_leave_planner,
    tab_forecast,
    tab_reports,
    tab_data_profile,
)


def main():
    setup_logging()
    st.set_page_config(
        page_title="Attendance Planner",
        page_icon="📅",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4, tab5, tab6 = st.tabs([
        "📊 Dashboard",
        "📝 Attendance Log",
        "🧮 Leave Planner",
        "🔮 Forecast",
        "📎 Reports",
        "⚙️ Data & Profile",
    ])

    with tab1:
        tab_dashboard.render(sidebar_state)
    with tab2:
        tab_attendance_log.render(sidebar_state)
    with tab3:
        tab_leave_planner.render(sidebar_state)
    with tab4:
        tab_forecast.render(sidebar_state)
    with tab5:
        tab_reports.render(sidebar_state)
    with tab6:
        tab_data_profile.render(sidebar_state)


if __name__ == "__main__":
    main()
