"""Tests for the forecast engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date, timedelta

from models.attendance import AttendanceDay, AttendanceStatus
from models.forecast import MonthStats
from models.profile import SemesterWindow
from engine.forecast_engine import (
    attendance_health,
    baseline_months,
    compute_base,
    estimate_to_date,
    fallback_classes_per_day,
    month_forecast,
    needed_classes,
    project_leaves,
    quick_percentage,
    range_forecast,
    recover_days,
    resolve_period,
    safe_leave_budget,
    semester_forecast,
    semester_summary,
)


def make_day(date_iso, total=4, present=True):
    status = AttendanceStatus.PRESENT if present else AttendanceStatus.ABSENT
    return AttendanceDay(date_iso, total, total if present else 0, status)


def working_dates(start="2024-01-01", count=50):
    """First `count` non-Sunday dates from start."""
    out = []
    current = date.fromisoformat(start)
    while len(out) < count:
        if current.weekday() != 6:
            out.append(current.isoformat())
        current += timedelta(days=1)
    return out


# Mon 1 Jan .. Sat 13 Jan 2024: 12 working days (Sun 7 Jan excluded)
PERIOD_START = "2024-01-01"
PERIOD_END = "2024-01-13"


class TestProjection:
    def test_fully_attended_period_projects_hundred(self):
        dates = working_dates(count=50)
        days = [make_day(d) for d in dates[:40]]

        result = project_leaves(
            days, dates[0], dates[49], today=dates[39], target_pct=75, planned_leaves=0,
        )
        assert result.base_total == 160
        assert result.base_attended == 160
        assert result.avg_classes_per_day == 4
        assert result.remaining_working_days == 10
        assert result.projected_total == 200
        assert result.projected_percentage == 100.0
        assert result.is_safe

    def test_leaves_clamped_to_remaining_days(self):
        days = [make_day(d) for d in working_dates(count=7)]  # 1..6 and 8 Jan
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-08", planned_leaves=8)
        assert result.remaining_working_days == 5
        assert result.requested_leaves == 8
        assert result.bounded_leaves == 5

    def test_more_leaves_never_raise_projection(self):
        days = [make_day(d, present=i % 3 != 0) for i, d in enumerate(working_dates(count=6))]
        previous = None
        for leaves in range(0, 8):
            result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-06",
                                    planned_leaves=leaves, fallback_avg=4)
            if previous is not None:
                assert result.projected_percentage <= previous
            previous = result.projected_percentage

    def test_same_inputs_same_output(self):
        days = [make_day(d) for d in working_dates(count=6)]
        a = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-06", planned_leaves=2)
        b = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-06", planned_leaves=2)
        assert a == b

    def test_unmarked_today_is_projected(self):
        days = [make_day(d) for d in working_dates(count=6)]  # logged through Sat 6 Jan
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-08")
        # Mon 8 .. Sat 13
        assert result.remaining_working_days == 6

    def test_marked_today_starts_tomorrow(self):
        days = [make_day(d) for d in working_dates(count=6)]
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-06")
        # Sun 7 skipped, Mon 8 .. Sat 13
        assert result.remaining_working_days == 6
        days.append(make_day("2024-01-08"))
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-08")
        assert result.remaining_working_days == 5

    def test_zero_class_record_marks_today(self):
        days = [make_day(d) for d in working_dates(count=6)]
        days.append(AttendanceDay("2024-01-08", 0, 0, AttendanceStatus.NONE))
        result = range_forecast(days, PERIOD_START, PERIOD_END, today="2024-01-08")
        # Tue 9 .. Sat 13
        assert result.remaining_days == 5

    def test_few_active_days_use_fallback(self):
        days = [make_day(d, total=6) for d in working_dates(count=3)]
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-03", fallback_avg=4)
        assert result.avg_classes_per_day == 4
        assert "fallback" in result.explanation_steps[1]

    def test_enough_active_days_use_logged_average(self):
        days = [make_day(d, total=6) for d in working_dates(count=5)]
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-05", fallback_avg=4)
        assert result.avg_classes_per_day == 6

    def test_zero_class_days_are_not_active(self):
        days = [make_day(d) for d in working_dates(count=5)]
        days.append(AttendanceDay("2024-01-06", 0, 0, AttendanceStatus.NONE))
        base = compute_base(days, fallback_avg=4)
        assert base.active_day_count == 5
        assert base.total == 20

    def test_period_in_future(self):
        result = project_leaves([], PERIOD_START, PERIOD_END, today="2023-12-20")
        assert result.base_total == 0
        assert result.remaining_working_days == 12
        assert result.current_percentage == 0

    def test_period_in_past(self):
        days = [make_day(d, present=i % 2 == 0) for i, d in enumerate(working_dates(count=12))]
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-02-01", planned_leaves=3)
        assert result.remaining_working_days == 0
        assert result.bounded_leaves == 0
        assert result.projected_percentage == result.current_percentage == 50.0

    def test_no_period_is_neutral(self):
        days = [make_day(d) for d in working_dates(count=6)]
        result = project_leaves(days, "", "", today="2024-01-06", planned_leaves=3)
        assert not result.has_period
        assert result.remaining_working_days == 0
        assert result.projected_percentage == 0
        assert result.current_percentage == 0
        assert result.explanation_steps == ["No baseline period configured => nothing to project."]

    def test_reversed_period_is_neutral(self):
        result = project_leaves([make_day("2024-01-02")], PERIOD_END, PERIOD_START, today="2024-01-05")
        assert result.remaining_working_days == 0
        assert result.base_total == 0

    def test_recovery_sized_when_behind(self):
        days = [make_day(d, present=i < 3) for i, d in enumerate(working_dates(count=6))]
        result = project_leaves(days, PERIOD_START, PERIOD_END, today="2024-01-06", target_pct=75)
        # 12/24 attended => (18 - 12) / 0.25 = 24 classes => 6 days at 4/day
        assert result.needed_classes == 24
        assert result.recover_days == 6
        assert result.safe_leaves == 0


class TestRecovery:
    def test_example_recovery(self):
        needed = needed_classes(total=100, attended=60, target_pct=75)
        assert needed == 60
        assert recover_days(needed, 4) == 15

    def test_at_target_needs_nothing(self):
        assert needed_classes(100, 75, 75) == 0

    def test_full_target_needs_nothing(self):
        assert needed_classes(10, 9, 100) == 0

    def test_zero_average(self):
        assert recover_days(10, 0) == 0


class TestSafeLeaveBudget:
    def test_budget_from_surplus(self):
        assert safe_leave_budget(100, 90, 75, 4, 30) == 5

    def test_budget_capped_by_remaining_days(self):
        assert safe_leave_budget(100, 90, 75, 4, 3) == 3

    def test_budget_zero_when_behind(self):
        assert safe_leave_budget(100, 60, 75, 4, 30) == 0

    def test_zero_target_means_all_remaining(self):
        assert safe_leave_budget(100, 60, 0, 4, 7) == 7

    def test_zero_average(self):
        assert safe_leave_budget(100, 90, 75, 0, 30) == 0


class TestRangeForecast:
    def test_behind_target(self):
        days = [make_day(d, present=i < 3) for i, d in enumerate(working_dates(count=6))]
        result = range_forecast(days, PERIOD_START, PERIOD_END, today="2024-01-06", target_pct=75)
        assert result.percentage == 50.0
        assert result.gap == 25.0
        assert result.recover_days == 6
        assert result.remaining_days == 6

    def test_invalid_range(self):
        result = range_forecast([], PERIOD_END, PERIOD_START, today="2024-01-06", target_pct=75)
        assert (result.percentage, result.gap, result.recover_days, result.remaining_days) == (0, 75, 0, 0)

    def test_range_not_started(self):
        result = range_forecast([], PERIOD_START, PERIOD_END, today="2023-12-01", target_pct=75)
        assert result.percentage == 0
        assert result.gap == 75
        assert result.recover_days == 0
        assert result.remaining_days == 12

    def test_semester_forecast_requires_window(self):
        assert semester_forecast([], SemesterWindow(), "2024-01-06") is None
        window = SemesterWindow(PERIOD_START, PERIOD_END)
        # Nothing logged, so Sat 6 Jan itself is still ahead
        assert semester_forecast([], window, "2024-01-06").remaining_days == 7

    def test_month_forecast_clipped_to_semester_end(self):
        window = SemesterWindow("2024-01-01", "2024-01-20")
        result = month_forecast([], window, today="2024-01-10")
        # Wed 10 .. Sat 20 minus Sun 14
        assert result.remaining_days == 10

    def test_month_forecast_without_semester(self):
        result = month_forecast([], None, today="2024-01-30")
        # Tue 30, Wed 31
        assert result.remaining_days == 2


class TestResolvePeriod:
    def test_semester_mode(self):
        window = SemesterWindow("2024-01-01", "2024-05-31")
        assert resolve_period("SEMESTER", window) == ("2024-01-01", "2024-05-31")

    def test_semester_mode_unconfigured(self):
        assert resolve_period("SEMESTER", SemesterWindow("2024-05-31", "2024-01-01")) == ("", "")

    def test_month_mode_clipped(self):
        window = SemesterWindow("2024-01-01", "2024-05-15")
        assert resolve_period("MONTH", window, "May 2024") == ("2024-05-01", "2024-05-15")

    def test_month_mode_without_month(self):
        assert resolve_period("MONTH", None, "") == ("", "")


class TestBaselineMonths:
    def test_scoped_to_semester(self):
        days = [make_day("2023-12-11"), make_day("2024-02-05"), make_day("2024-01-10"), make_day("2024-06-03")]
        window = SemesterWindow("2024-01-01", "2024-05-31")
        assert baseline_months(days, window) == ["January 2024", "February 2024"]

    def test_every_picked_month_resolves_forward(self):
        days = [make_day("2023-12-11"), make_day("2024-01-10"), make_day("2024-05-10")]
        window = SemesterWindow("2024-01-01", "2024-05-15")
        for label in baseline_months(days, window):
            start, end = resolve_period("MONTH", window, label)
            assert start and start <= end

    def test_all_months_without_semester(self):
        days = [make_day("2024-02-05"), make_day("2023-12-11")]
        assert baseline_months(days, SemesterWindow()) == ["December 2023", "February 2024"]
        assert baseline_months([], None) == []


class TestFallbackClassesPerDay:
    def test_nothing_logged(self):
        assert fallback_classes_per_day([]) == 4

    def test_semester_average_counts_every_logged_day(self):
        days = [make_day("2024-01-01", total=6), AttendanceDay("2024-01-02", 0, 0, AttendanceStatus.NONE)]
        assert fallback_classes_per_day(days) == 3

    def test_month_average(self):
        days = [make_day("2024-01-02", total=2), make_day("2024-02-01", total=6)]
        assert fallback_classes_per_day(days, "February 2024") == 6
        assert fallback_classes_per_day(days, "March 2024") == 4

    def test_floored_at_one(self):
        days = [AttendanceDay("2024-01-02", 0, 0, AttendanceStatus.NONE)]
        assert fallback_classes_per_day(days) == 1


class TestSemesterSummary:
    def test_unconfigured_uses_all_time(self):
        days = [make_day("2024-01-01"), make_day("2024-01-02", present=False)]
        result = semester_summary(days, SemesterWindow(), today="2024-01-02")
        assert not result.configured
        assert result.percentage == 50
        assert result.possible_leaves == 0

    def test_configured_budget(self):
        days = [make_day(d) for d in working_dates(count=6)]
        window = SemesterWindow("2024-01-01", "2024-01-31")
        result = semester_summary(days, window, today="2024-01-06", target_pct=75)
        assert result.configured
        assert result.total_classes == 24
        # (24 / 0.75 - 24) / 4 = 2
        assert result.possible_leaves == 2


class TestSmallCalculators:
    def test_estimate_fills_missing_days(self):
        days = [make_day("2024-01-01"), make_day("2024-01-02")]
        result = estimate_to_date(days, working_days=5)
        assert result.total_classes == 20
        assert result.present == 8
        assert result.absent == 12
        assert result.percentage == 40.0

    def test_health_levels(self):
        assert attendance_health(MonthStats(20, 15, 75), 75).level == "SAFE"
        assert attendance_health(MonthStats(20, 18, 90), 75).level == "EXCELLENT"
        assert attendance_health(MonthStats(20, 10, 50), 75).level == "AT_RISK"

    def test_health_margin(self):
        health = attendance_health(MonthStats(10, 6, 60), 75)
        assert health.required_for_target == 8
        assert health.margin == -2
        assert health.missed == 4

    def test_health_without_data(self):
        health = attendance_health(None, 75)
        assert health.conducted == 0
        assert health.required_for_target == 0

    def test_quick_percentage(self):
        assert quick_percentage("50", "40") == 80
        assert quick_percentage("0", "1") == 0
        assert quick_percentage("abc", "1") == 0
        assert quick_percentage(8, 1) == 13


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
