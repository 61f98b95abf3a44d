"""ISO date helpers: UTC-safe day arithmetic, working days and month buckets.

Dates travel through the app as ``YYYY-MM-DD`` strings. Lexical order of
those strings equals chronological order, so range filters compare strings
directly and only day arithmetic goes through ``datetime.date``.
"""

import math
from datetime import date, timedelta
from typing import Optional, Tuple

from config.defaults import MONTH_NAMES, NON_WORKING_WEEKDAY


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side, like Math.round."""
    return int(math.floor(value + 0.5))


def clamp_to_iso_date(value) -> str:
    """Truncate any date-like value to its first 10 characters."""
    return str(value or "")[:10]


def _to_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except (TypeError, ValueError):
        return None


def parse_utc(iso) -> Optional[date]:
    """Parse an ISO date into a calendar date, or None.

    Only the naive ranges are checked (month 1-12, day 1-31); a day past the
    end of its month rolls into the next month instead of failing.
    """
    s = clamp_to_iso_date(iso)
    if len(s) != 10:
        return None
    y, m, d = _to_int(s[0:4]), _to_int(s[5:7]), _to_int(s[8:10])
    if y is None or m is None or d is None:
        return None
    if m < 1 or m > 12 or d < 1 or d > 31:
        return None
    try:
        return date(y, m, 1) + timedelta(days=d - 1)
    except (ValueError, OverflowError):
        return None


def to_iso(d: date) -> str:
    return d.isoformat()


def today_iso() -> str:
    """Local calendar date as YYYY-MM-DD."""
    return date.today().isoformat()


def add_days(iso: str, days: int) -> str:
    """Shift an ISO date by whole days; unparseable input is returned unchanged."""
    dt = parse_utc(iso)
    if dt is None:
        return iso
    try:
        return to_iso(dt + timedelta(days=days))
    except OverflowError:
        return iso


def count_working_days(start_iso: str, end_iso: str) -> int:
    """Inclusive count of days in [start, end] that are not Sundays."""
    start = parse_utc(start_iso)
    end = parse_utc(end_iso)
    if start is None or end is None or start > end:
        return 0

    span = (end - start).days + 1
    weeks, rest = divmod(span, 7)
    count = weeks * 6
    for offset in range(rest):
        if (start + timedelta(days=offset)).weekday() != NON_WORKING_WEEKDAY:
            count += 1
    return count


def remaining_calendar_days(today: str, end_iso: str) -> int:
    """Calendar days from today through end inclusive; 0 once end has passed."""
    today_dt = parse_utc(today)
    end_dt = parse_utc(end_iso)
    if today_dt is None or end_dt is None or clamp_to_iso_date(today) > clamp_to_iso_date(end_iso):
        return 0
    return (end_dt - today_dt).days + 1


def month_key(iso: str) -> str:
    """Display bucket for a date, e.g. '2025-03-14' -> 'March 2025'."""
    s = str(iso or "")
    year = _to_int(s[0:4])
    month = _to_int(s[5:7])
    if year is None:
        year = date.today().year
    month_index = min(12, max(1, month)) - 1 if month is not None else 0
    return f"{MONTH_NAMES[month_index]} {year}"


def current_month_key(today: Optional[str] = None) -> str:
    return month_key(today or today_iso())


def year_month(key: str) -> str:
    """Inverse of month_key for sorting: 'March 2025' -> '2025-03'.

    Unknown month names map to '00' and an unparseable year to '0000'.
    """
    raw = str(key or "").strip()
    if not raw:
        return "0000-00"
    parts = raw.split(" ")
    year = _to_int(parts[-1])
    month_name = " ".join(parts[:-1]).lower()
    lowered = [m.lower() for m in MONTH_NAMES]
    month_num = lowered.index(month_name) + 1 if month_name in lowered else 0
    return f"{(year if year is not None else 0):04d}-{month_num:02d}"


def month_range(key: str) -> Optional[Tuple[str, str]]:
    """First and last calendar day of a month label, or None."""
    ym = year_month(key)
    year = _to_int(ym[0:4])
    month = _to_int(ym[5:7])
    if year is None or month is None or month < 1 or month > 12 or year < 1:
        return None
    start = date(year, month, 1)
    if month == 12:
        end = date(year, 12, 31)
    else:
        end = date(year, month + 1, 1) - timedelta(days=1)
    return to_iso(start), to_iso(end)
