"""Tab 3: Leave Planner — project end-of-period % under planned leave days."""

import streamlit as st

from data.session_store import get_days, get_semester, get_forecast_config, has_days
from components.metrics_cards import render_metric_row
from components.charts import projection_gauge, leave_sensitivity_line
from engine.aggregator import days_in_range
from engine.forecast_engine import (
    fallback_classes_per_day, project_leaves, quick_percentage, resolve_period,
)
from engine.calendar_utils import today_iso
from config.defaults import MIN_ACTIVE_DAYS_FOR_AVERAGE


def render(sidebar_state):
    """Render the Leave Planner tab."""
    st.header("Leave Planner")

    target = sidebar_state.target_pct
    semester = get_semester()
    cfg = get_forecast_config()

    if has_days():
        _render_projection(sidebar_state, semester, cfg, target)
    else:
        st.info("Log some attendance first to project the rest of the period.")

    st.divider()
    _render_quick_calculator(target)


def _render_projection(sidebar_state, semester, cfg, target):
    days = get_days()
    baseline_days = (
        days_in_range(days, semester.start_iso, semester.end_iso)
        if semester.is_configured else days
    )
    month_label = sidebar_state.selected_month if sidebar_state.baseline_mode == "MONTH" else None
    fallback = fallback_classes_per_day(baseline_days, month_label)
    start, end = resolve_period(sidebar_state.baseline_mode, semester, month_label)

    if not start:
        if sidebar_state.baseline_mode == "SEMESTER":
            st.info("Set semester start and end dates in Data & Profile, or switch the baseline to Month.")
        else:
            st.info("Pick a logged month in the sidebar.")
        return

    st.caption(f"Baseline period: {start} → {end}")
    today = today_iso()
    min_active = cfg.get("min_active_days", MIN_ACTIVE_DAYS_FOR_AVERAGE)

    # Probe with zero leaves to learn how many working days remain
    probe = project_leaves(baseline_days, start, end, today, target, 0, fallback, min_active)
    max_leaves = probe.remaining_working_days
    planned = st.slider(
        "Planned leave days",
        min_value=0, max_value=max(1, max_leaves),
        value=0, step=1,
        disabled=max_leaves == 0,
        key="planner_leaves",
    )
    projection = project_leaves(baseline_days, start, end, today, target, planned, fallback, min_active)

    render_metric_row([
        {"label": "Current", "value": f"{projection.current_percentage:.1f}%"},
        {"label": "Projected", "value": f"{projection.projected_percentage:.1f}%",
         "delta": f"{projection.projected_percentage - projection.current_percentage:+.1f}",
         "delta_color": "normal"},
        {"label": "Working Days Left", "value": str(projection.remaining_working_days)},
        {"label": "Safe Leaves", "value": str(projection.safe_leaves)},
    ])

    if projection.is_safe:
        st.success(f"Safe: projected {projection.projected_percentage:.1f}% ≥ {target:g}%")
    else:
        st.error(
            f"Below target: projected {projection.projected_percentage:.1f}% < {target:g}%. "
            f"Recovery needs ~{projection.recover_days} fully attended day(s)."
        )

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(projection_gauge(projection), use_container_width=True)
    with col2:
        rows = []
        for leaves in range(0, max_leaves + 1):
            p = project_leaves(baseline_days, start, end, today, target, leaves, fallback, min_active)
            rows.append({"Leaves": leaves, "Projected %": round(p.projected_percentage, 1)})
        if rows:
            st.plotly_chart(leave_sensitivity_line(rows, target), use_container_width=True)

    with st.expander("How this was calculated"):
        for step in projection.explanation_steps:
            st.write(step)


def _render_quick_calculator(target):
    st.subheader("Quick Calculator")
    col1, col2, col3 = st.columns(3)
    with col1:
        total = st.text_input("Classes held", value="50", key="calc_total")
    with col2:
        attended = st.text_input("Classes attended", value="40", key="calc_attended")
    with col3:
        pct = quick_percentage(total, attended)
        st.metric("Attendance", f"{pct}%")
    if pct >= target:
        st.success("Meets target")
    else:
        st.error("Below target")
