from models.attendance import AttendanceDay, AttendanceStatus
from models.profile import SemesterWindow, StudentProfile
from models.forecast import (
    AttendanceHealth, AttendanceSummary, BaseTotals, LeaveProjection,
    MonthStats, RangeForecast, SemesterSummary, ToDateEstimate,
)
