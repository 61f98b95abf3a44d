"""Attendance forecasting: projection under planned leave, recovery and safe-leave sizing.

Every function here is a pure function of its arguments. Missing or
malformed data never raises; it degrades to zeroed results.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

from models.attendance import AttendanceDay
from models.profile import SemesterWindow
from models.forecast import (
    AttendanceHealth, BaseTotals, LeaveProjection, MonthStats,
    RangeForecast, SemesterSummary, ToDateEstimate,
)
from engine.aggregator import aggregate, aggregate_in_range, days_in_range, monthly_stats
from engine.calendar_utils import (
    add_days, clamp_to_iso_date, count_working_days, month_key, month_range,
    remaining_calendar_days, round_half_up, today_iso, year_month,
)
from engine.explainer import explain_projection, explain_range_forecast
from config.defaults import (
    DEFAULT_TARGET_PCT, MIN_ACTIVE_DAYS_FOR_AVERAGE, DEFAULT_CLASSES_PER_DAY,
    MIN_CLASSES_PER_LEAVE_DAY, RANGE_FORECAST_MIN_ACTIVE_DAYS, HEALTH_EXCELLENT_PCT,
)

logger = logging.getLogger(__name__)


def _clamp_pct(value: float) -> float:
    return max(0.0, min(100.0, value))


def compute_base(days: Iterable[AttendanceDay], fallback_avg: float) -> BaseTotals:
    """Totals over active days (at least one class held)."""
    active = [d for d in days if d.is_active]
    total = max(0, sum(d.total_classes for d in active))
    attended = max(0, sum(d.attended_classes or 0 for d in active))
    pct = attended / total * 100 if total > 0 else 0.0
    avg = total / len(active) if active else fallback_avg
    return BaseTotals(
        total=total,
        attended=attended,
        percentage=pct,
        avg_classes_per_day=avg,
        active_day_count=len(active),
    )


def fallback_classes_per_day(days: Iterable[AttendanceDay], month_label: Optional[str] = None) -> float:
    """Default load used when too few days are logged to trust their average.

    Semester baseline: classes per logged day across all days given.
    Month baseline: classes per logged day in that month, or the semester
    figure when the month has nothing logged.
    """
    days = list(days)
    summary = aggregate(days)
    per_day = (
        summary.total_classes / summary.total_days
        if summary.total_days > 0 else DEFAULT_CLASSES_PER_DAY
    )

    if month_label:
        month_days = [d for d in days if month_key(d.date) == month_label]
        stats = summary.monthly_stats.get(month_label)
        if stats and month_days:
            per_day = stats.total / len(month_days)

    return max(MIN_CLASSES_PER_LEAVE_DAY, per_day)


def resolve_period(
    mode: str,
    semester: Optional[SemesterWindow],
    month_label: Optional[str] = None,
) -> Tuple[str, str]:
    """Baseline period for a mode; ('', '') when it cannot be resolved."""
    semester = semester or SemesterWindow()
    sem_start = semester.start_iso if semester.is_configured else ""
    sem_end = semester.end_iso if semester.is_configured else ""

    if mode == "MONTH":
        rng = month_range(month_label) if month_label else None
        if not rng:
            return "", ""
        start, end = rng
        if sem_end and sem_end < end:
            end = sem_end
        return start, end

    return sem_start, sem_end


def baseline_months(days: Iterable[AttendanceDay], semester: Optional[SemesterWindow]) -> List[str]:
    """Logged month labels offered for the MONTH baseline, oldest first.

    Scoped to the semester when one is configured.
    """
    days = list(days)
    if semester and semester.is_configured:
        days = days_in_range(days, semester.start_iso, semester.end_iso)
    return sorted(monthly_stats(days).keys(), key=year_month)


def needed_classes(total: int, attended: int, target_pct: float) -> int:
    """Fewest extra attended classes (total grows by the same) to reach the target."""
    p = target_pct / 100
    current = attended / total * 100 if total > 0 else 0.0
    if current >= target_pct or p >= 1:
        return 0
    return int(math.ceil(max(0.0, (p * total - attended) / (1 - p))))


def recover_days(needed: int, avg_classes_per_day: float) -> int:
    if avg_classes_per_day <= 0:
        return 0
    return int(math.ceil(needed / avg_classes_per_day))


def safe_leave_budget(
    total: int,
    attended: int,
    target_pct: float,
    avg_classes_per_day: float,
    remaining_days: int,
) -> int:
    """Whole leave days affordable before dropping under target, within remaining_days."""
    remaining_days = max(0, remaining_days)
    if avg_classes_per_day <= 0:
        return 0
    if target_pct <= 0:
        return remaining_days
    by_classes = math.floor((attended / (target_pct / 100) - total) / avg_classes_per_day)
    return max(0, min(int(by_classes), remaining_days))


def project_leaves(
    days: Iterable[AttendanceDay],
    period_start: str,
    period_end: str,
    today: Optional[str] = None,
    target_pct: float = DEFAULT_TARGET_PCT,
    planned_leaves: int = 0,
    fallback_avg: Optional[float] = None,
    min_active_days: int = MIN_ACTIVE_DAYS_FOR_AVERAGE,
) -> LeaveProjection:
    """Project the end-of-period percentage if every remaining working day
    except the planned leave days is attended.
    """
    days = list(days)
    today = clamp_to_iso_date(today or today_iso())
    start = clamp_to_iso_date(period_start)
    end = clamp_to_iso_date(period_end)
    if fallback_avg is None:
        fallback_avg = fallback_classes_per_day(days)

    has_period = bool(start and end and start <= end)
    to_date_end = end if end and today > end else today

    period_days = days_in_range(days, start, to_date_end) if has_period else []
    base = compute_base(period_days, fallback_avg)
    used_fallback = base.active_day_count < min_active_days
    avg = fallback_avg if used_fallback else base.avg_classes_per_day

    # First date to project from
    today_in_period = has_period and start <= today <= end
    has_today_marked = today_in_period and any(d.date == today for d in period_days)
    if not has_period:
        future_start = ""
    elif to_date_end < start:
        future_start = start
    elif today_in_period and not has_today_marked:
        future_start = today
    else:
        future_start = add_days(to_date_end, 1)

    remaining = (
        count_working_days(future_start, end)
        if has_period and future_start and future_start <= end else 0
    )

    try:
        requested = int(planned_leaves or 0)
    except (TypeError, ValueError):
        requested = 0
    bounded = max(0, min(requested, remaining))

    future_classes = max(0, round_half_up(remaining * avg))
    leave_classes = max(0, round_half_up(bounded * avg))
    projected_total = base.total + future_classes
    projected_attended = base.attended + max(0, future_classes - leave_classes)
    projected_pct = (
        projected_attended / projected_total * 100 if projected_total > 0 else base.percentage
    )

    current = _clamp_pct(base.percentage)
    projected = _clamp_pct(projected_pct)
    is_safe = projected >= target_pct

    needed = needed_classes(base.total, base.attended, target_pct)
    recovery = recover_days(needed, avg)
    calendar_left = remaining_calendar_days(today, end) if has_period else 0
    safe = safe_leave_budget(base.total, base.attended, target_pct, avg, calendar_left)

    logger.debug(
        "Projection %s..%s: base %d/%d, avg %.2f, remaining %d, leaves %d => %.1f%%",
        start, end, base.attended, base.total, avg, remaining, bounded, projected,
    )

    projection = LeaveProjection(
        period_start=start,
        period_end=end,
        target_pct=target_pct,
        base_total=base.total,
        base_attended=base.attended,
        current_percentage=current,
        avg_classes_per_day=avg,
        remaining_working_days=remaining,
        requested_leaves=requested,
        bounded_leaves=bounded,
        projected_future_classes=future_classes,
        projected_leave_classes=leave_classes,
        projected_total=projected_total,
        projected_attended=projected_attended,
        projected_percentage=projected,
        is_safe=is_safe,
        needed_classes=needed,
        recover_days=recovery,
        safe_leaves=safe,
    )
    projection.explanation_steps = explain_projection(
        period_start=start,
        period_end=end,
        base_total=base.total,
        base_attended=base.attended,
        current_percentage=current,
        active_day_count=base.active_day_count,
        min_active_days=min_active_days,
        avg_classes_per_day=avg,
        used_fallback_avg=used_fallback,
        remaining_working_days=remaining,
        requested_leaves=requested,
        bounded_leaves=bounded,
        projected_future_classes=future_classes,
        projected_leave_classes=leave_classes,
        projected_total=projected_total,
        projected_attended=projected_attended,
        projected_percentage=projected,
        target_pct=target_pct,
        is_safe=is_safe,
        needed_classes=needed,
        recover_days=recovery,
        safe_leaves=safe,
    )
    return projection


def range_forecast(
    days: Iterable[AttendanceDay],
    start_iso: str,
    end_iso: str,
    today: Optional[str] = None,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> RangeForecast:
    """Percentage, gap to target, recovery days and remaining working days for a range."""
    projection = project_leaves(
        days, start_iso, end_iso,
        today=today,
        target_pct=target_pct,
        planned_leaves=0,
        fallback_avg=DEFAULT_CLASSES_PER_DAY,
        min_active_days=RANGE_FORECAST_MIN_ACTIVE_DAYS,
    )
    pct = projection.current_percentage
    return RangeForecast(
        percentage=pct,
        gap=max(0.0, target_pct - pct),
        recover_days=projection.recover_days,
        remaining_days=projection.remaining_working_days,
    )


def semester_forecast(
    days: Iterable[AttendanceDay],
    semester: Optional[SemesterWindow],
    today: Optional[str] = None,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> Optional[RangeForecast]:
    if not semester or not semester.is_configured:
        return None
    return range_forecast(days, semester.start_iso, semester.end_iso, today, target_pct)


def month_forecast(
    days: Iterable[AttendanceDay],
    semester: Optional[SemesterWindow],
    today: Optional[str] = None,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> Optional[RangeForecast]:
    """Forecast for the current month, clipped to the semester end."""
    today = clamp_to_iso_date(today or today_iso())
    start, end = resolve_period("MONTH", semester, month_key(today))
    if not start:
        return None
    return range_forecast(days, start, end, today, target_pct)


def explain_forecast(label: str, forecast: RangeForecast, target_pct: float) -> List[str]:
    return explain_range_forecast(
        label=label,
        percentage=forecast.percentage,
        target_pct=target_pct,
        gap=forecast.gap,
        recover_days=forecast.recover_days,
        remaining_days=forecast.remaining_days,
    )


def semester_summary(
    days: Iterable[AttendanceDay],
    semester: Optional[SemesterWindow],
    today: Optional[str] = None,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> SemesterSummary:
    """Semester totals plus how many leave days are still affordable.

    Without a configured semester the all-time totals are reported and no
    leave budget is offered.
    """
    days = list(days)
    semester = semester or SemesterWindow()
    start, end = semester.start_iso, semester.end_iso

    if not semester.is_configured:
        a = aggregate(days)
        return SemesterSummary(
            configured=False,
            start_date=start,
            end_date=end,
            total_classes=a.total_classes,
            total_attended=a.total_attended,
            percentage=a.overall_percentage,
            possible_leaves=0,
        )

    a = aggregate_in_range(days, start, end)
    avg = a.total_classes / a.total_days if a.total_days > 0 else DEFAULT_CLASSES_PER_DAY
    today = clamp_to_iso_date(today or today_iso())
    possible = safe_leave_budget(
        a.total_classes, a.total_attended, target_pct, avg,
        remaining_calendar_days(today, end),
    )
    return SemesterSummary(
        configured=True,
        start_date=start,
        end_date=end,
        total_classes=a.total_classes,
        total_attended=a.total_attended,
        percentage=a.overall_percentage,
        possible_leaves=possible,
    )


def estimate_to_date(days: Iterable[AttendanceDay], working_days: int) -> ToDateEstimate:
    """To-date totals where unlogged working days are filled with the average load."""
    active = [d for d in days if d.is_active]
    logged_total = sum(d.total_classes for d in active)
    present = max(0, sum(d.attended_classes or 0 for d in active))
    avg = logged_total / len(active) if active else DEFAULT_CLASSES_PER_DAY
    missing = max(0, working_days - len(active))
    estimated = round_half_up(logged_total + missing * avg)
    total = max(0, logged_total, estimated)
    return ToDateEstimate(
        working_days=working_days,
        total_classes=total,
        present=present,
        absent=max(0, total - present),
        percentage=present / total * 100 if total > 0 else 0.0,
        avg_classes_per_day=avg,
        logged_days=len(active),
    )


def attendance_health(stats: Optional[MonthStats], target_pct: float = DEFAULT_TARGET_PCT) -> AttendanceHealth:
    """Month-level health: how far attended classes sit above what the target requires."""
    conducted = stats.total if stats else 0
    attended = stats.present if stats else 0
    pct = stats.percentage if stats else 0
    required = int(math.ceil(conducted * target_pct / 100)) if conducted > 0 else 0

    if pct >= HEALTH_EXCELLENT_PCT:
        level = "EXCELLENT"
    elif pct >= target_pct:
        level = "SAFE"
    else:
        level = "AT_RISK"

    return AttendanceHealth(
        conducted=conducted,
        attended=attended,
        missed=max(0, conducted - attended),
        percentage=pct,
        required_for_target=required,
        margin=attended - required,
        level=level,
    )


def quick_percentage(total, attended) -> int:
    """Manual what-if calculator; 0 for a missing or zero total."""
    try:
        t = float(total)
        a = float(attended)
    except (TypeError, ValueError):
        return 0
    if math.isnan(t) or math.isnan(a) or t == 0:
        return 0
    return round_half_up(a / t * 100)
