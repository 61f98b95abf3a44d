"""Plotly chart builders for the Attendance Forecast Planner."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Dict

from models.forecast import LeaveProjection, MonthStats
from config.defaults import COLOR_ATTENDED, COLOR_MISSED, COLOR_TARGET


def monthly_attendance_bar(
    monthly_stats: Dict[str, MonthStats],
    target_pct: float,
    title: str = "Monthly Attendance %",
) -> go.Figure:
    """Bar per month with the target drawn as a horizontal line."""
    df = pd.DataFrame([
        {"Month": label, "Percentage": s.percentage, "Attended": s.present, "Held": s.total}
        for label, s in monthly_stats.items()
    ], columns=["Month", "Percentage", "Attended", "Held"])
    fig = px.bar(
        df, x="Month", y="Percentage",
        hover_data=["Attended", "Held"],
        title=title,
        color="Percentage",
        color_continuous_scale=[COLOR_MISSED, COLOR_TARGET, COLOR_ATTENDED],
        range_color=[0, 100],
    )
    fig.add_hline(y=target_pct, line_dash="dash", line_color=COLOR_TARGET,
                  annotation_text=f"Target {target_pct:g}%")
    fig.update_layout(height=380, yaxis_range=[0, 100], coloraxis_showscale=False)
    return fig


def attendance_donut(attended: int, total: int, title: str = "Classes Attended") -> go.Figure:
    """Donut chart of attended vs missed classes."""
    missed = max(0, total - attended)
    fig = go.Figure(data=[go.Pie(
        labels=["Attended", "Missed"],
        values=[attended, missed],
        hole=0.6,
        marker_colors=[COLOR_ATTENDED, COLOR_MISSED],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{attended}/{total}", x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def projection_gauge(projection: LeaveProjection) -> go.Figure:
    """Gauge of projected % with current % as the reference delta."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number+delta",
        value=projection.projected_percentage,
        number={"suffix": "%", "valueformat": ".1f"},
        delta={"reference": projection.current_percentage, "valueformat": ".1f"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": COLOR_ATTENDED if projection.is_safe else COLOR_MISSED},
            "threshold": {
                "line": {"color": COLOR_TARGET, "width": 4},
                "thickness": 0.8,
                "value": projection.target_pct,
            },
        },
        title={"text": "Projected End-of-Period %"},
    ))
    fig.update_layout(height=320)
    return fig


def leave_sensitivity_line(rows: list, target_pct: float) -> go.Figure:
    """Projected % against number of planned leave days."""
    df = pd.DataFrame(rows, columns=["Leaves", "Projected %"])
    fig = px.line(df, x="Leaves", y="Projected %", markers=True,
                  title="Projected % by Planned Leave Days")
    fig.add_hline(y=target_pct, line_dash="dash", line_color=COLOR_TARGET)
    fig.update_traces(line_color=COLOR_ATTENDED)
    fig.update_layout(height=350, yaxis_range=[0, 100])
    return fig
