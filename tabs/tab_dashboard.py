"""Tab 1: Dashboard — semester totals, monthly breakdown and month health."""

import streamlit as st
import pandas as pd

from data.session_store import get_days, get_semester, has_days
from components.metrics_cards import render_metric_row, render_health_card
from components.charts import monthly_attendance_bar, attendance_donut
from components.tables import render_percentage_table
from engine.aggregator import aggregate, aggregate_in_range
from engine.forecast_engine import attendance_health, semester_summary
from engine.calendar_utils import current_month_key, today_iso


def render(sidebar_state):
    """Render the Dashboard tab."""
    st.header("Dashboard")

    if not has_days():
        st.info("No attendance logged yet. Mark a day in the Attendance Log tab or upload a file in Data & Profile.")
        return

    target = sidebar_state.target_pct
    days = get_days()
    semester = get_semester()
    today = today_iso()

    if semester.is_configured:
        summary = aggregate_in_range(days, semester.start_iso, semester.end_iso)
        scope = f"Semester {semester.start_iso} → {semester.end_iso}"
    else:
        summary = aggregate(days)
        scope = "All time (semester dates not set)"
    st.caption(scope)

    sem = semester_summary(days, semester, today, target)

    # --- KPI Metrics ---
    gap = summary.overall_percentage - target
    render_metric_row([
        {"label": "Overall Attendance", "value": f"{summary.overall_percentage}%",
         "delta": f"{gap:+g} pts vs target", "delta_color": "normal"},
        {"label": "Classes Attended", "value": f"{summary.total_attended} / {summary.total_classes}"},
        {"label": "Days Logged", "value": str(summary.total_days),
         "delta": f"{summary.present_days}P · {summary.absent_days}A · {summary.leave_days}L",
         "delta_color": "off"},
        {"label": "Safe Leaves Left", "value": str(sem.possible_leaves) if sem.configured else "—"},
    ])

    st.divider()

    col1, col2 = st.columns([3, 2])
    with col1:
        if summary.monthly_stats:
            st.plotly_chart(monthly_attendance_bar(summary.monthly_stats, target), use_container_width=True)
    with col2:
        st.plotly_chart(attendance_donut(summary.total_attended, summary.total_classes), use_container_width=True)

    st.divider()

    # --- Current month health ---
    month_label = current_month_key(today)
    st.subheader(f"Health — {month_label}")
    health = attendance_health(summary.monthly_stats.get(month_label), target)
    render_health_card(health, target)
    render_metric_row([
        {"label": "Conducted", "value": str(health.conducted)},
        {"label": "Attended", "value": str(health.attended)},
        {"label": "Missed", "value": str(health.missed)},
        {"label": f"Required for {target:g}%", "value": str(health.required_for_target)},
    ])

    st.divider()

    rows = [
        {"Month": label, "Held": s.total, "Attended": s.present, "Percentage": s.percentage}
        for label, s in summary.monthly_stats.items()
    ]
    st.subheader("Monthly Breakdown")
    render_percentage_table(pd.DataFrame(rows), "Percentage", target)
