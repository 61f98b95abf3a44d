"""Tab 4: Forecast — semester and current-month recovery outlook."""

import streamlit as st

from data.session_store import get_days, get_semester, has_days
from components.metrics_cards import render_metric_row
from engine.forecast_engine import (
    explain_forecast, month_forecast, semester_forecast, semester_summary,
)
from engine.calendar_utils import current_month_key, today_iso


def render(sidebar_state):
    """Render the Forecast tab."""
    st.header("Forecast")

    if not has_days():
        st.info("No attendance logged yet.")
        return

    target = sidebar_state.target_pct
    days = get_days()
    semester = get_semester()
    today = today_iso()

    forecasts = [
        ("Semester", semester_forecast(days, semester, today, target)),
        (current_month_key(today), month_forecast(days, semester, today, target)),
    ]

    for label, forecast in forecasts:
        st.subheader(label)
        if forecast is None:
            st.info("Set semester dates in Data & Profile to see this forecast.")
            continue
        render_metric_row([
            {"label": "Attendance", "value": f"{forecast.percentage:.1f}%"},
            {"label": "Gap to Target", "value": f"{forecast.gap:.1f} pts",
             "delta_color": "off"},
            {"label": "Recover In", "value": f"{forecast.recover_days} day(s)"},
            {"label": "Working Days Left", "value": str(forecast.remaining_days)},
        ])
        with st.expander("Details"):
            for step in explain_forecast(label, forecast, target):
                st.write(step)
        st.divider()

    sem = semester_summary(days, semester, today, target)
    if sem.configured:
        st.metric(
            "Leave days you can still take",
            sem.possible_leaves,
            help=f"Based on {sem.total_attended}/{sem.total_classes} classes ({sem.percentage}%) "
                 f"and the calendar days left until {sem.end_date}.",
        )
