"""Generate a synthetic semester attendance log for demos and tests."""

import pandas as pd
import random
import os
from datetime import date, timedelta

from engine.calendar_utils import parse_utc
from config.defaults import NON_WORKING_WEEKDAY


def generate_attendance_df(
    start_date: str,
    end_date: str,
    attendance_rate: float = 0.85,
    leave_rate: float = 0.03,
    seed: int = 42,
) -> pd.DataFrame:
    """One row per working day in [start, end]: 3-6 classes, mostly attended."""
    random.seed(seed)
    start = parse_utc(start_date)
    end = parse_utc(end_date)
    rows = []
    if start is None or end is None:
        return pd.DataFrame(rows)

    current = start
    while current <= end:
        if current.weekday() != NON_WORKING_WEEKDAY:
            total = random.choice([3, 4, 4, 5, 6])
            roll = random.random()
            if roll < leave_rate:
                status, attended, remark = "LEAVE", 0, "Medical leave"
            elif roll < attendance_rate + leave_rate:
                status, attended, remark = "PRESENT", total, ""
            else:
                status, attended, remark = "ABSENT", 0, ""
            rows.append({
                "Date": current.isoformat(),
                "Total Classes": total,
                "Attended Classes": attended,
                "Status": status,
                "Remark": remark,
            })
        current += timedelta(days=1)
    return pd.DataFrame(rows)


def default_sample_window(today: date = None):
    """Semester that started ~10 weeks ago and ends ~8 weeks from today."""
    today = today or date.today()
    return (today - timedelta(weeks=10)).isoformat(), (today + timedelta(weeks=8)).isoformat()


def generate_sample_csv(output_dir: str):
    """Write a sample attendance CSV (logged up to today) to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    start, _ = default_sample_window()
    generate_attendance_df(start, date.today().isoformat()).to_csv(
        os.path.join(output_dir, "attendance.csv"), index=False,
    )


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csv(out)
    print("Sample attendance CSV generated in sample_files/")
