"""Default configuration constants for the Attendance Forecast Planner."""

import os

# Target attendance % a student must stay at or above
DEFAULT_TARGET_PCT = 75

# Forecast averaging
MIN_ACTIVE_DAYS_FOR_AVERAGE = 5   # Fewer logged days than this => use fallback load
DEFAULT_CLASSES_PER_DAY = 4       # Last-resort classes per working day
MIN_CLASSES_PER_LEAVE_DAY = 1     # Fallback load is never below this

# Range forecast (semester / month cards) averages over any logged day
RANGE_FORECAST_MIN_ACTIVE_DAYS = 1

# Health thresholds (percent)
HEALTH_EXCELLENT_PCT = 85

# Baseline modes for the leave planner
BASELINE_MODES = ["SEMESTER", "MONTH"]
DEFAULT_BASELINE_MODE = "SEMESTER"

# Attendance statuses offered in the log form
ATTENDANCE_STATUSES = ["PRESENT", "ABSENT", "LEAVE", "NONE"]

# Default classes for a newly marked day
DEFAULT_DAY_CLASSES = 1

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Working-day policy: Python weekday() index that is never a working day
NON_WORKING_WEEKDAY = 6  # Sunday

# Storage
DATA_DIR = os.environ.get("ATTENDANCE_DATA_DIR", ".attendance_data")
GUEST_USER_ID = "guest"
STORE_FILE_PREFIX = "attendance"

# Logging
LOG_LEVEL = os.environ.get("ATTENDANCE_LOG_LEVEL", "INFO")

# Store notification events
EVENT_ATTENDANCE_UPDATED = "attendance_updated"
EVENT_PROFILE_UPDATED = "profile_updated"

# Chart colours
COLOR_ATTENDED = "#4A90D9"
COLOR_MISSED = "#E8734A"
COLOR_TARGET = "#F5C542"
