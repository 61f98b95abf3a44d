from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class MonthStats:
    total: int
    present: int
    percentage: int


@dataclass
class AttendanceSummary:
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    total_classes: int = 0
    total_attended: int = 0
    overall_percentage: int = 0
    monthly_stats: Dict[str, MonthStats] = field(default_factory=dict)  # label -> stats, chronological


@dataclass
class BaseTotals:
    """To-date baseline over active days."""
    total: int
    attended: int
    percentage: float
    avg_classes_per_day: float
    active_day_count: int


@dataclass
class RangeForecast:
    percentage: float
    gap: float            # Percentage points below target (0 when at/above)
    recover_days: int     # Fully attended days needed to reach target
    remaining_days: int   # Working days left in the range


@dataclass
class LeaveProjection:
    period_start: str
    period_end: str
    target_pct: float
    base_total: int = 0
    base_attended: int = 0
    current_percentage: float = 0.0     # Clamped to [0, 100]
    avg_classes_per_day: float = 0.0
    remaining_working_days: int = 0
    requested_leaves: int = 0
    bounded_leaves: int = 0
    projected_future_classes: int = 0
    projected_leave_classes: int = 0
    projected_total: int = 0
    projected_attended: int = 0
    projected_percentage: float = 0.0   # Clamped to [0, 100]
    is_safe: bool = False
    needed_classes: int = 0
    recover_days: int = 0
    safe_leaves: int = 0
    explanation_steps: List[str] = field(default_factory=list)

    @property
    def has_period(self) -> bool:
        return bool(self.period_start and self.period_end and self.period_start <= self.period_end)


@dataclass
class SemesterSummary:
    configured: bool
    start_date: str
    end_date: str
    total_classes: int
    total_attended: int
    percentage: int
    possible_leaves: int


@dataclass
class ToDateEstimate:
    working_days: int
    total_classes: int
    present: int
    absent: int
    percentage: float
    avg_classes_per_day: float
    logged_days: int


@dataclass
class AttendanceHealth:
    conducted: int
    attended: int
    missed: int
    percentage: float
    required_for_target: int
    margin: int            # attended - required (negative = behind)
    level: str             # "EXCELLENT", "SAFE", "AT_RISK"
