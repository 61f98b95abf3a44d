"""Global sidebar controls for user, target and forecast baseline."""

import streamlit as st
from dataclasses import dataclass
from data.session_store import (
    get_days, get_semester, get_forecast_config, set_forecast_config, switch_user, has_days,
)
from engine.forecast_engine import baseline_months
from config.defaults import BASELINE_MODES, DEFAULT_BASELINE_MODE, DEFAULT_TARGET_PCT


@dataclass
class SidebarState:
    user_id: str
    target_pct: float
    baseline_mode: str
    selected_month: str


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    with st.sidebar:
        st.title("Attendance Planner")
        st.divider()

        user_id = st.text_input("Profile ID", value=st.session_state.get("user_id", ""), key="sidebar_user")
        switch_user(user_id)

        cfg = dict(get_forecast_config())
        target = st.slider(
            "Target Attendance %",
            min_value=50, max_value=100,
            value=int(cfg.get("target_pct", DEFAULT_TARGET_PCT)),
            step=1,
            key="sidebar_target",
        )
        if target != cfg.get("target_pct"):
            cfg["target_pct"] = target
            set_forecast_config(cfg)

        baseline_mode = st.selectbox(
            "Forecast Baseline",
            options=BASELINE_MODES,
            index=BASELINE_MODES.index(DEFAULT_BASELINE_MODE),
            format_func=lambda m: "Semester" if m == "SEMESTER" else "Month",
            key="sidebar_baseline",
        )

        month_labels = baseline_months(get_days(), get_semester())
        selected_month = ""
        if baseline_mode == "MONTH":
            if month_labels:
                selected_month = st.selectbox(
                    "Month",
                    options=month_labels,
                    index=len(month_labels) - 1,
                    key="sidebar_month",
                )
            else:
                st.caption("No months logged yet.")

        st.divider()

        if has_days():
            st.success(f"{len(get_days())} day(s) logged")
        else:
            st.warning("No attendance logged, use the Attendance Log tab")

        semester = get_semester()
        if semester.is_configured:
            st.caption(f"Semester: {semester.start_iso} → {semester.end_iso}")
        else:
            st.caption("Semester dates not set, see Data & Profile")

    return SidebarState(
        user_id=st.session_state.get("user_id", ""),
        target_pct=target,
        baseline_mode=baseline_mode,
        selected_month=selected_month,
    )
