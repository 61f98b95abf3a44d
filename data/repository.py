"""Attendance record and profile store, JSON-file backed and scoped per user."""

import json
import logging
import os
from typing import Callable, Dict, List, Optional

from models.attendance import AttendanceDay
from models.profile import StudentProfile
from engine.aggregator import days_in_range, normalize_day
from engine.calendar_utils import clamp_to_iso_date
from config.defaults import (
    GUEST_USER_ID, STORE_FILE_PREFIX,
    EVENT_ATTENDANCE_UPDATED, EVENT_PROFILE_UPDATED,
)

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class AttendanceStore:
    """One record per date plus an optional profile for a single user.

    With ``data_dir`` set, every write is flushed to
    ``<data_dir>/attendance__<user_id>.json``; without it the store lives in
    memory only. Listeners registered with ``subscribe`` are called with the
    event name after each successful write.
    """

    def __init__(self, data_dir: Optional[str] = None, user_id: Optional[str] = None):
        self.data_dir = data_dir
        self.user_id = user_id or GUEST_USER_ID
        self._days: Dict[str, AttendanceDay] = {}
        self._profile: Optional[StudentProfile] = None
        self._listeners: List[Listener] = []
        self._load()

    # --- Persistence ---

    @property
    def path(self) -> Optional[str]:
        if not self.data_dir:
            return None
        return os.path.join(self.data_dir, f"{STORE_FILE_PREFIX}__{self.user_id}.json")

    def _load(self):
        path = self.path
        if not path or not os.path.exists(path):
            return
        try:
            with open(path, "r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.error("Could not read %s, starting empty: %s", path, exc)
            return
        self._apply_payload(payload)
        logger.info("Loaded %d attendance days for user %s", len(self._days), self.user_id)

    def _flush(self):
        path = self.path
        if not path:
            return
        os.makedirs(self.data_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(self._payload(), fh, indent=2)

    def _payload(self) -> dict:
        return {
            "userProfile": self._profile.to_dict() if self._profile else None,
            "attendanceDays": [d.to_dict() for d in self.get_all()],
        }

    def _apply_payload(self, payload: dict, today: Optional[str] = None) -> List[str]:
        """Replace stored sections present in payload; returns events to emit.

        Restored days pass through the same write policy as upserts, so
        future-dated records are dropped and attended counts re-derived.
        """
        events = []
        if isinstance(payload.get("attendanceDays"), list):
            days = {}
            for raw in payload["attendanceDays"]:
                if not isinstance(raw, dict):
                    continue
                day = normalize_day(AttendanceDay.from_dict(raw), today)
                if day is not None:
                    days[day.date] = day
            self._days = days
            events.append(EVENT_ATTENDANCE_UPDATED)
        if isinstance(payload.get("userProfile"), dict):
            self._profile = StudentProfile.from_dict(payload["userProfile"])
            events.append(EVENT_PROFILE_UPDATED)
        return events

    # --- Notification ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str):
        for listener in list(self._listeners):
            listener(event)

    # --- Attendance days ---

    def get_all(self) -> List[AttendanceDay]:
        return [self._days[k] for k in sorted(self._days)]

    def get(self, date_iso: str) -> Optional[AttendanceDay]:
        return self._days.get(clamp_to_iso_date(date_iso))

    def get_in_range(self, start_iso: str, end_iso: str) -> List[AttendanceDay]:
        return days_in_range(self.get_all(), start_iso, end_iso)

    def upsert(self, day: AttendanceDay, today: Optional[str] = None) -> Optional[AttendanceDay]:
        """Normalise and store a record, overwriting any record on that date."""
        normalized = normalize_day(day, today)
        if normalized is None:
            return None
        self._days[normalized.date] = normalized
        self._flush()
        self._notify(EVENT_ATTENDANCE_UPDATED)
        return normalized

    def update(self, date_iso: str, today: Optional[str] = None, **changes) -> Optional[AttendanceDay]:
        """Merge field changes into an existing record; None if there is none."""
        existing = self.get(date_iso)
        if existing is None:
            return None
        merged = AttendanceDay(**{**existing.__dict__, **changes, "date": existing.date})
        return self.upsert(merged, today)

    def delete(self, date_iso: str) -> bool:
        key = clamp_to_iso_date(date_iso)
        if not key or key not in self._days:
            return False
        del self._days[key]
        self._flush()
        self._notify(EVENT_ATTENDANCE_UPDATED)
        return True

    # --- Profile ---

    def get_profile(self) -> Optional[StudentProfile]:
        return self._profile

    def save_profile(self, profile: StudentProfile):
        self._profile = profile
        self._flush()
        self._notify(EVENT_PROFILE_UPDATED)

    # --- Bulk ---

    def replace_days(self, days: List[AttendanceDay], today: Optional[str] = None) -> int:
        """Normalise and store many records at once; returns how many were kept."""
        kept = 0
        for day in days:
            normalized = normalize_day(day, today)
            if normalized is not None:
                self._days[normalized.date] = normalized
                kept += 1
        self._flush()
        self._notify(EVENT_ATTENDANCE_UPDATED)
        return kept

    def clear(self):
        self._days = {}
        self._profile = None
        self._flush()
        self._notify(EVENT_ATTENDANCE_UPDATED)
        self._notify(EVENT_PROFILE_UPDATED)

    def export_json(self) -> str:
        return json.dumps(self._payload(), indent=2)

    def import_json(self, raw: str, today: Optional[str] = None) -> bool:
        """Restore from a backup; sections missing from the backup are left as-is."""
        try:
            payload = json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            logger.error("Import failed: %s", exc)
            return False
        if not isinstance(payload, dict):
            logger.error("Import failed: expected a JSON object, got %s", type(payload).__name__)
            return False

        events = self._apply_payload(payload, today)
        self._flush()
        for event in events:
            self._notify(event)
        logger.info("Imported backup (%s)", ", ".join(events) or "nothing")
        return True
