"""Typed wrapper around st.session_state for application data."""

import logging
import streamlit as st
from typing import List, Optional
from models.attendance import AttendanceDay
from models.profile import SemesterWindow, StudentProfile
from data.repository import AttendanceStore
from config.defaults import (
    DATA_DIR, GUEST_USER_ID, DEFAULT_TARGET_PCT, MIN_ACTIVE_DAYS_FOR_AVERAGE,
)

logger = logging.getLogger(__name__)


def _on_store_event(event: str):
    # Forecasts are recomputed from the store on every rerun; only the
    # revision counter is needed to show that data changed.
    st.session_state["data_revision"] = st.session_state.get("data_revision", 0) + 1
    logger.debug("Store event %s (revision %d)", event, st.session_state["data_revision"])


def initialize_session_state():
    """Initialize all session state keys with defaults."""
    defaults = {
        "user_id": GUEST_USER_ID,
        "data_revision": 0,
        "forecast_config": {
            "target_pct": DEFAULT_TARGET_PCT,
            "min_active_days": MIN_ACTIVE_DAYS_FOR_AVERAGE,
        },
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default

    if "store" not in st.session_state:
        store = AttendanceStore(DATA_DIR, st.session_state["user_id"])
        store.subscribe(_on_store_event)
        st.session_state["store"] = store


# --- Getters ---

def get_store() -> AttendanceStore:
    return st.session_state["store"]


def get_days() -> List[AttendanceDay]:
    return get_store().get_all()


def get_profile() -> Optional[StudentProfile]:
    return get_store().get_profile()


def get_semester() -> SemesterWindow:
    profile = get_profile()
    return profile.semester_window if profile else SemesterWindow()


def get_forecast_config() -> dict:
    return st.session_state.get("forecast_config", {})


def has_days() -> bool:
    return bool(get_days())


# --- Setters ---

def set_forecast_config(config: dict):
    st.session_state["forecast_config"] = config


def switch_user(user_id: str):
    """Point the session at another user's store."""
    user_id = (user_id or "").strip() or GUEST_USER_ID
    if user_id == st.session_state.get("user_id") and "store" in st.session_state:
        return
    store = AttendanceStore(DATA_DIR, user_id)
    store.subscribe(_on_store_event)
    st.session_state["user_id"] = user_id
    st.session_state["store"] = store
    _on_store_event("user_switched")
