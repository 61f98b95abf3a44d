"""Attendance aggregation: totals by status, overall % and monthly buckets."""

import logging
from typing import Dict, Iterable, List, Optional

from models.attendance import AttendanceDay, AttendanceStatus
from models.forecast import AttendanceSummary, MonthStats
from engine.calendar_utils import (
    clamp_to_iso_date, month_key, round_half_up, today_iso,
)
from config.defaults import DEFAULT_DAY_CLASSES

logger = logging.getLogger(__name__)


def percentage(attended: int, total: int) -> int:
    """Rounded whole percentage, 0 when nothing was held."""
    if total <= 0:
        return 0
    return round_half_up(attended / total * 100)


def implied_attended(status: AttendanceStatus, total: int, leave_counted: bool = False) -> int:
    """Attended classes the status stands for: PRESENT or a counted LEAVE attend all, anything else none."""
    if status == AttendanceStatus.PRESENT:
        return total
    if status == AttendanceStatus.LEAVE and leave_counted:
        return total
    return 0


def normalize_day(day: AttendanceDay, today: Optional[str] = None) -> Optional[AttendanceDay]:
    """Apply the write policy to a record before it is stored.

    Returns None for records with no date or a date after today. Attended
    classes are derived from the status: PRESENT attends everything, a LEAVE
    attends everything only when the leave is counted, anything else attends
    nothing.
    """
    date_iso = clamp_to_iso_date(day.date)
    today = today or today_iso()
    if not date_iso or date_iso > today:
        logger.warning("Rejected attendance record dated %r (today is %s)", day.date, today)
        return None

    total = day.total_classes if day.total_classes is not None else DEFAULT_DAY_CLASSES
    total = max(0, int(total))
    status = AttendanceStatus.parse(day.status)
    leave_counted = bool(day.leave_counted)

    attended = implied_attended(status, total, leave_counted)

    return AttendanceDay(
        date=date_iso,
        total_classes=total,
        attended_classes=attended,
        status=status,
        leave_counted=leave_counted if status == AttendanceStatus.LEAVE else None,
        remark=day.remark or "",
        proof_ref=day.proof_ref or "",
    )


def days_in_range(days: Iterable[AttendanceDay], start_iso: str, end_iso: str) -> List[AttendanceDay]:
    """Days with start <= date <= end (inclusive, ISO string comparison)."""
    start = clamp_to_iso_date(start_iso)
    end = clamp_to_iso_date(end_iso)
    if not start or not end:
        return []
    return [d for d in days if start <= clamp_to_iso_date(d.date) <= end]


def monthly_stats(days: Iterable[AttendanceDay]) -> Dict[str, MonthStats]:
    """Bucket days by YYYY-MM, keyed by month label, in chronological order."""
    buckets = {}
    for day in days:
        date_iso = clamp_to_iso_date(day.date)
        ym = date_iso[:7]
        if ym not in buckets:
            buckets[ym] = {"label": month_key(date_iso), "total": 0, "present": 0}
        buckets[ym]["total"] += day.total_classes or 0
        buckets[ym]["present"] += day.attended_classes or 0

    stats = {}
    for ym in sorted(buckets):
        b = buckets[ym]
        stats[b["label"]] = MonthStats(
            total=b["total"],
            present=b["present"],
            percentage=percentage(b["present"], b["total"]),
        )
    return stats


def aggregate(days: Iterable[AttendanceDay]) -> AttendanceSummary:
    """Totals, status counts, overall % and monthly stats for a set of days."""
    days = list(days)
    total_classes = sum(d.total_classes or 0 for d in days)
    total_attended = sum(d.attended_classes or 0 for d in days)

    return AttendanceSummary(
        total_days=len(days),
        present_days=sum(1 for d in days if d.status == AttendanceStatus.PRESENT),
        absent_days=sum(1 for d in days if d.status == AttendanceStatus.ABSENT),
        leave_days=sum(1 for d in days if d.status == AttendanceStatus.LEAVE),
        total_classes=total_classes,
        total_attended=total_attended,
        overall_percentage=percentage(total_attended, total_classes),
        monthly_stats=monthly_stats(days),
    )


def aggregate_in_range(days: Iterable[AttendanceDay], start_iso: str, end_iso: str) -> AttendanceSummary:
    return aggregate(days_in_range(days, start_iso, end_iso))


def remark_reports(days: Iterable[AttendanceDay]) -> List[AttendanceDay]:
    """Days carrying a remark or proof, newest first."""
    reports = [d for d in days if d.has_report]
    return sorted(reports, key=lambda d: d.date, reverse=True)
