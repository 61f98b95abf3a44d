"""Tests for the attendance aggregator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.attendance import AttendanceDay, AttendanceStatus
from engine.aggregator import (
    aggregate,
    aggregate_in_range,
    days_in_range,
    monthly_stats,
    normalize_day,
    percentage,
    remark_reports,
)

TODAY = "2024-06-30"


def make_day(date="2024-01-01", total=4, status=AttendanceStatus.PRESENT, attended=None, **kwargs):
    if attended is None:
        attended = total if status == AttendanceStatus.PRESENT else 0
    return AttendanceDay(date, total, attended, status, **kwargs)


class TestAggregate:
    def test_empty(self):
        result = aggregate([])
        assert result.total_days == 0
        assert result.overall_percentage == 0
        assert result.monthly_stats == {}

    def test_zero_classes_everywhere(self):
        days = [make_day("2024-01-01", total=0), make_day("2024-01-02", total=0)]
        result = aggregate(days)
        assert result.total_classes == 0
        assert result.overall_percentage == 0
        assert result.monthly_stats["January 2024"].percentage == 0

    def test_counts_by_status(self):
        days = [
            make_day("2024-01-01"),
            make_day("2024-01-02", status=AttendanceStatus.ABSENT),
            make_day("2024-01-03", status=AttendanceStatus.LEAVE),
            make_day("2024-01-04", status=AttendanceStatus.NONE, total=0),
        ]
        result = aggregate(days)
        assert result.total_days == 4
        assert result.present_days == 1
        assert result.absent_days == 1
        assert result.leave_days == 1
        assert result.total_classes == 12
        assert result.total_attended == 4
        assert result.overall_percentage == 33

    def test_attended_never_exceeds_total(self):
        days = [make_day(f"2024-01-0{i}", total=i) for i in range(1, 6)]
        result = aggregate(days)
        assert result.total_attended <= result.total_classes

    def test_half_rounds_up(self):
        # 1/8 = 12.5% => 13, not banker's 12
        assert percentage(1, 8) == 13
        assert percentage(2, 3) == 67
        assert percentage(5, 0) == 0


class TestMonthlyStats:
    def test_sorted_chronologically(self):
        days = [
            make_day("2024-02-05"),
            make_day("2024-01-10", status=AttendanceStatus.ABSENT),
            make_day("2023-12-11"),
        ]
        stats = monthly_stats(days)
        assert list(stats.keys()) == ["December 2023", "January 2024", "February 2024"]
        assert stats["January 2024"].percentage == 0
        assert stats["February 2024"].present == 4

    def test_buckets_sum_per_month(self):
        days = [
            make_day("2024-03-01", total=4),
            make_day("2024-03-02", total=2, status=AttendanceStatus.ABSENT),
        ]
        march = monthly_stats(days)["March 2024"]
        assert march.total == 6
        assert march.present == 4
        assert march.percentage == 67


class TestRange:
    def test_inclusive_bounds(self):
        days = [make_day("2024-01-01"), make_day("2024-01-05"), make_day("2024-01-10")]
        in_range = days_in_range(days, "2024-01-01", "2024-01-05")
        assert [d.date for d in in_range] == ["2024-01-01", "2024-01-05"]

    def test_empty_bound_gives_nothing(self):
        assert days_in_range([make_day()], "", "2024-12-31") == []

    def test_aggregate_in_range(self):
        days = [
            make_day("2024-01-01"),
            make_day("2024-02-01", status=AttendanceStatus.ABSENT),
        ]
        result = aggregate_in_range(days, "2024-01-01", "2024-01-31")
        assert result.total_days == 1
        assert result.overall_percentage == 100


class TestNormalizeDay:
    def test_future_date_rejected(self):
        assert normalize_day(make_day("2024-07-01"), TODAY) is None

    def test_missing_date_rejected(self):
        assert normalize_day(make_day(""), TODAY) is None

    def test_present_attends_everything(self):
        day = normalize_day(make_day(total=5, attended=1), TODAY)
        assert day.attended_classes == 5

    def test_counted_leave_attends_everything(self):
        day = normalize_day(make_day(status=AttendanceStatus.LEAVE, leave_counted=True), TODAY)
        assert day.attended_classes == 4
        assert day.leave_counted is True

    def test_uncounted_leave_attends_nothing(self):
        day = normalize_day(make_day(status=AttendanceStatus.LEAVE), TODAY)
        assert day.attended_classes == 0
        assert day.leave_counted is False

    def test_absent_ignores_supplied_attended(self):
        day = normalize_day(make_day(status=AttendanceStatus.ABSENT, attended=3), TODAY)
        assert day.attended_classes == 0

    def test_leave_flag_dropped_for_other_statuses(self):
        day = normalize_day(make_day(leave_counted=True), TODAY)
        assert day.leave_counted is None

    def test_negative_total_clamped(self):
        day = normalize_day(make_day(total=-3), TODAY)
        assert day.total_classes == 0
        assert day.attended_classes == 0

    def test_date_is_clamped(self):
        day = normalize_day(make_day("2024-01-05T08:30:00"), TODAY)
        assert day.date == "2024-01-05"


class TestRemarkReports:
    def test_newest_first_and_filtered(self):
        days = [
            make_day("2024-01-01", remark="Fever"),
            make_day("2024-01-02", remark="   "),
            make_day("2024-01-03", proof_ref="note.pdf"),
            make_day("2024-01-04"),
        ]
        reports = remark_reports(days)
        assert [r.date for r in reports] == ["2024-01-03", "2024-01-01"]


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
