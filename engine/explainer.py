"""Generates human-readable explanations for attendance forecasts."""

from typing import List


def explain_projection(
    period_start: str,
    period_end: str,
    base_total: int,
    base_attended: int,
    current_percentage: float,
    active_day_count: int,
    min_active_days: int,
    avg_classes_per_day: float,
    used_fallback_avg: bool,
    remaining_working_days: int,
    requested_leaves: int,
    bounded_leaves: int,
    projected_future_classes: int,
    projected_leave_classes: int,
    projected_total: int,
    projected_attended: int,
    projected_percentage: float,
    target_pct: float,
    is_safe: bool,
    needed_classes: int,
    recover_days: int,
    safe_leaves: int,
) -> List[str]:
    """Produce step-by-step explanation for a leave projection."""
    if not (period_start and period_end and period_start <= period_end):
        return ["No baseline period configured => nothing to project."]

    steps = []

    steps.append(
        f"Step 1 - Baseline: {base_attended} of {base_total} classes attended "
        f"from {period_start} to date => {current_percentage:.1f}%"
    )

    if used_fallback_avg:
        steps.append(
            f"Step 2 - Load: only {active_day_count} active day(s) logged (< {min_active_days}) "
            f"=> using fallback of {avg_classes_per_day:.2f} classes/day"
        )
    else:
        steps.append(
            f"Step 2 - Load: {base_total} classes over {active_day_count} active days "
            f"=> {avg_classes_per_day:.2f} classes/day"
        )

    steps.append(
        f"Step 3 - Remaining: {remaining_working_days} working day(s) until {period_end} (Sundays excluded)"
    )

    if requested_leaves != bounded_leaves:
        steps.append(
            f"Step 4 - Leaves: {requested_leaves} requested, capped at {bounded_leaves} remaining working days"
        )
    else:
        steps.append(f"Step 4 - Leaves: {bounded_leaves} planned leave day(s)")

    steps.append(
        f"Step 5 - Projection: {projected_future_classes} future classes, {projected_leave_classes} missed on leave "
        f"=> {projected_attended} / {projected_total} = {projected_percentage:.1f}%"
    )

    verdict = "SAFE" if is_safe else "BELOW TARGET"
    steps.append(f"Step 6 - Verdict: {projected_percentage:.1f}% vs target {target_pct:g}% => {verdict}")

    if needed_classes > 0:
        steps.append(
            f"Step 7 - Recovery: attend {needed_classes} more classes in a row "
            f"(~{recover_days} full day(s)) to reach {target_pct:g}%"
        )
    else:
        steps.append("Step 7 - Recovery: already at or above target")

    steps.append(f"Step 8 - Safe leaves: {safe_leaves} day(s) can still be skipped while staying at target")

    return steps


def explain_range_forecast(
    label: str,
    percentage: float,
    target_pct: float,
    gap: float,
    recover_days: int,
    remaining_days: int,
) -> List[str]:
    """Produce a short explanation for a semester/month forecast card."""
    steps = [f"{label}: {percentage:.1f}% attended so far (target {target_pct:g}%)"]
    if gap > 0:
        steps.append(
            f"Behind by {gap:.1f} points => {recover_days} fully attended day(s) needed to recover"
        )
    else:
        steps.append("On target => no recovery needed")
    steps.append(f"{remaining_days} working day(s) remain in this range")
    return steps
