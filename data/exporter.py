"""Full attendance audit export (JSON)."""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Optional

from models.attendance import AttendanceDay
from models.profile import StudentProfile, SemesterWindow
from engine.aggregator import aggregate, aggregate_in_range, days_in_range
from engine.forecast_engine import estimate_to_date
from engine.calendar_utils import round_half_up, today_iso


def build_audit_payload(
    days: List[AttendanceDay],
    profile: Optional[StudentProfile],
    today: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> dict:
    """Semester-to-date snapshot: profile, window, estimate, analytics and raw days."""
    today = today or today_iso()
    semester = profile.semester_window if profile else SemesterWindow()
    configured = semester.is_configured
    start = semester.start_iso if configured else ""
    end = semester.end_iso if configured else ""
    to_date_end = end if end and today > end else today

    to_date_days = days_in_range(days, start, to_date_end) if start else list(days)
    estimate = estimate_to_date(to_date_days, len(to_date_days))
    analytics = aggregate_in_range(days, start, end) if configured else aggregate(days)

    return {
        "generatedAt": (generated_at or datetime.now(timezone.utc)).isoformat(),
        "profile": profile.to_dict() if profile else None,
        "semester": {
            "configured": configured,
            "startDate": start,
            "endDate": end,
            "toDateEnd": to_date_end,
        },
        "semToDate": {
            "workingDays": estimate.working_days,
            "totalClasses": estimate.total_classes,
            "present": estimate.present,
            "absent": estimate.absent,
            "percentage": round_half_up(estimate.percentage * 10) / 10,
        },
        "analytics": asdict(analytics),
        "attendanceDays": [d.to_dict() for d in to_date_days],
    }


def export_audit_json(days: List[AttendanceDay], profile: Optional[StudentProfile], today: Optional[str] = None) -> str:
    return json.dumps(build_audit_payload(days, profile, today), indent=2)


def audit_file_name(today: Optional[str] = None) -> str:
    return f"attendance-audit-{today or today_iso()}.json"
