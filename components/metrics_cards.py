"""KPI metric cards and attendance health banners."""

import streamlit as st

from models.forecast import AttendanceHealth

_HEALTH_STYLE = {
    "AT_RISK": (st.error, "🔴"),
    "SAFE": (st.warning, "🟡"),
    "EXCELLENT": (st.success, "🟢"),
}


def render_metric_row(metrics: list[dict]):
    """One st.metric per dict: label and value, optional delta, delta_color and help."""
    for col, m in zip(st.columns(len(metrics)), metrics):
        col.metric(
            m["label"],
            m["value"],
            delta=m.get("delta"),
            delta_color=m.get("delta_color", "normal"),
            help=m.get("help"),
        )


def render_health_card(health: AttendanceHealth, target_pct: float):
    """Month health verdict with margin against the target."""
    if health.conducted == 0:
        st.info("No classes logged this month yet.", icon="🔵")
        return

    if health.level == "AT_RISK":
        message = (
            f"At risk: {health.percentage}% is below {target_pct:g}%. "
            f"{-health.margin} more attended class(es) needed this month."
        )
    else:
        message = (
            f"{health.level.title()}: {health.percentage}% with a margin of "
            f"{health.margin} class(es) over the {health.required_for_target} required."
        )
    show, icon = _HEALTH_STYLE.get(health.level, (st.info, "🔵"))
    show(message, icon=icon)
