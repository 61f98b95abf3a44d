"""Schema validation for uploaded attendance files."""

from dataclasses import dataclass, field
from typing import List
import pandas as pd

from data.loader import parse_attendance_days
from engine.aggregator import implied_attended
from engine.calendar_utils import parse_utc
from config.defaults import ATTENDANCE_STATUSES


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


ATTENDANCE_REQUIRED_COLUMNS = [
    "Date",
    "Total Classes",
]


def _check_required_columns(df: pd.DataFrame, required: List[str], file_label: str) -> ValidationResult:
    result = ValidationResult()
    missing = [col for col in required if col not in df.columns]
    if missing:
        result.is_valid = False
        result.errors.append(f"{file_label}: Missing required columns: {', '.join(missing)}")
    if df.empty:
        result.is_valid = False
        result.errors.append(f"{file_label}: File contains no data rows.")
    return result


def _overridden_attended_dates(df: pd.DataFrame) -> List[str]:
    """Dates whose supplied Attended Classes differs from what the stored status implies."""
    supplied = pd.to_numeric(df["Attended Classes"], errors="coerce")
    dates = []
    for day, given in zip(parse_attendance_days(df), supplied):
        if pd.isna(given):
            continue
        implied = implied_attended(day.status, max(0, day.total_classes), bool(day.leave_counted))
        if int(given) != implied:
            dates.append(day.date)
    return dates


def validate_attendance_days(df: pd.DataFrame, today: str = None) -> ValidationResult:
    result = _check_required_columns(df, ATTENDANCE_REQUIRED_COLUMNS, "Attendance Log")
    if not result.is_valid:
        return result

    totals = pd.to_numeric(df["Total Classes"], errors="coerce")
    if totals.isna().any():
        result.is_valid = False
        result.errors.append("Attendance Log: Total Classes must be a whole number on every row.")
        return result

    if (totals < 0).any():
        result.is_valid = False
        result.errors.append("Attendance Log: Total Classes cannot be negative.")

    if "Attended Classes" in df.columns:
        coerced = pd.to_numeric(df["Attended Classes"], errors="coerce")
        if (coerced.isna() & df["Attended Classes"].notna()).any():
            result.is_valid = False
            result.errors.append("Attendance Log: Attended Classes must be a whole number where given.")
        attended = coerced.fillna(0)
        if (attended < 0).any():
            result.is_valid = False
            result.errors.append("Attendance Log: Attended Classes cannot be negative.")
        if (attended > totals).any():
            result.is_valid = False
            result.errors.append("Attendance Log: Attended Classes cannot exceed Total Classes.")

    dates = df["Date"].astype(str).str.strip().str[:10]
    bad_dates = [d for d in dates if parse_utc(d) is None]
    if bad_dates:
        result.is_valid = False
        result.errors.append(f"Attendance Log: Unparseable dates: {', '.join(bad_dates[:5])}")

    dupes = dates[dates.duplicated(keep=False)]
    if not dupes.empty:
        result.is_valid = False
        result.errors.append(f"Attendance Log: Duplicate dates: {sorted(dupes.unique().tolist())}")

    if "Status" in df.columns:
        statuses = df["Status"].dropna().astype(str).str.strip().str.upper()
        unknown = sorted(set(statuses) - set(ATTENDANCE_STATUSES))
        if unknown:
            result.warnings.append(
                f"Attendance Log: Unknown statuses {unknown} will be stored as NONE."
            )
    else:
        result.warnings.append(
            "Attendance Log: No Status column. Days with every class attended are marked PRESENT, others ABSENT."
        )

    if result.is_valid and "Attended Classes" in df.columns:
        overridden = _overridden_attended_dates(df)
        if overridden:
            shown = ", ".join(overridden[:5]) + (" ..." if len(overridden) > 5 else "")
            result.warnings.append(
                f"Attendance Log: Attended Classes on {len(overridden)} row(s) will be replaced by the "
                f"count their status implies (all classes for PRESENT or a counted LEAVE, none otherwise): {shown}"
            )

    if today:
        future = [d for d in dates if d > today]
        if future:
            result.warnings.append(
                f"Attendance Log: {len(future)} future-dated row(s) will be skipped."
            )

    return result
