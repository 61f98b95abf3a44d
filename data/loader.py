"""File upload parsing — CSV/XLSX into AttendanceDay lists, and CSV export."""

import logging
import pandas as pd
from typing import List
from models.attendance import AttendanceDay, AttendanceStatus

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "Date",
    "Total Classes",
    "Attended Classes",
    "Status",
    "Leave Counted",
    "Remark",
    "Proof",
]


def _optional_text(row, df: pd.DataFrame, column: str) -> str:
    if column in df.columns and pd.notna(row.get(column)):
        return str(row[column]).strip()
    return ""


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "y", "1")
    return bool(value)


def parse_attendance_days(df: pd.DataFrame) -> List[AttendanceDay]:
    """Convert an attendance DataFrame into AttendanceDay objects.

    When there is no Status column the status is inferred from the counts:
    everything attended => PRESENT, otherwise ABSENT.
    """
    days = []
    has_attended = "Attended Classes" in df.columns
    for _, row in df.iterrows():
        total = int(row["Total Classes"])
        attended = int(row["Attended Classes"]) if has_attended and pd.notna(row.get("Attended Classes")) else 0

        if "Status" in df.columns and pd.notna(row.get("Status")):
            status = AttendanceStatus.parse(row["Status"])
        else:
            status = AttendanceStatus.PRESENT if total > 0 and attended >= total else AttendanceStatus.ABSENT

        leave_counted = None
        if status == AttendanceStatus.LEAVE and "Leave Counted" in df.columns and pd.notna(row.get("Leave Counted")):
            leave_counted = _parse_bool(row["Leave Counted"])

        days.append(AttendanceDay(
            date=str(row["Date"]).strip()[:10],
            total_classes=total,
            attended_classes=attended,
            status=status,
            leave_counted=leave_counted,
            remark=_optional_text(row, df, "Remark"),
            proof_ref=_optional_text(row, df, "Proof"),
        ))
    logger.debug("Parsed %d attendance rows", len(days))
    return days


def days_to_dataframe(days: List[AttendanceDay]) -> pd.DataFrame:
    """Tabular view of records, one row per date, oldest first."""
    rows = []
    for d in sorted(days, key=lambda d: d.date):
        rows.append({
            "Date": d.date,
            "Total Classes": d.total_classes,
            "Attended Classes": d.attended_classes,
            "Status": d.status.value,
            "Leave Counted": "" if d.leave_counted is None else d.leave_counted,
            "Remark": d.remark,
            "Proof": d.proof_ref,
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_csv(days: List[AttendanceDay]) -> str:
    return days_to_dataframe(days).to_csv(index=False)


def load_file(uploaded_file) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) into a DataFrame."""
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        return pd.read_csv(uploaded_file)
    elif name.endswith(".xlsx") or name.endswith(".xls"):
        return pd.read_excel(uploaded_file, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")
