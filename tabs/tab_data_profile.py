"""Tab 6: Data & Profile — semester window, upload, backup and export."""

import logging
import streamlit as st
from datetime import date

from data.loader import load_file, parse_attendance_days, export_csv
from data.validator import validate_attendance_days
from data.sample_data import generate_attendance_df, default_sample_window
from data.exporter import export_audit_json, audit_file_name
from data.session_store import get_store, get_days, get_profile
from engine.calendar_utils import parse_utc, today_iso
from models.profile import SemesterWindow, StudentProfile

logger = logging.getLogger(__name__)


def _load_and_validate(df, today: str) -> bool:
    """Validate and store an uploaded attendance log."""
    result = validate_attendance_days(df, today)
    if not result.is_valid:
        for e in result.errors:
            st.error(e)
        return False

    for w in result.warnings:
        st.warning(w)

    days = parse_attendance_days(df)
    kept = get_store().replace_days(days, today)
    logger.info("Uploaded %d rows, stored %d", len(days), kept)
    st.success(f"Data loaded: {kept} day(s) stored ({len(days) - kept} skipped)")
    return True


def _render_profile():
    st.subheader("Profile & Semester")
    profile = get_profile() or StudentProfile()
    window = profile.semester_window

    col1, col2, col3 = st.columns(3)
    with col1:
        name = st.text_input("Name", value=profile.name, key="profile_name")
        university = st.text_input("University", value=profile.university, key="profile_university")
    with col2:
        course = st.text_input("Course", value=profile.course, key="profile_course")
        semester_no = st.number_input("Semester", min_value=1, max_value=12,
                                      value=profile.semester, step=1, key="profile_semester")
    with col3:
        start = st.date_input("Semester start", value=parse_utc(window.start_iso), key="profile_sem_start")
        end = st.date_input("Semester end", value=parse_utc(window.end_iso), key="profile_sem_end")

    if st.button("Save Profile", type="primary", key="btn_save_profile"):
        if start and end and start > end:
            st.error("Semester start must be on or before the end date.")
            return
        get_store().save_profile(StudentProfile(
            name=name,
            university=university,
            course=course,
            semester=int(semester_no),
            department=profile.department,
            section=profile.section,
            roll_number=profile.roll_number,
            semester_window=SemesterWindow(
                start_date=start.isoformat() if start else None,
                end_date=end.isoformat() if end else None,
            ),
        ))
        st.success("Profile saved.")


def render(sidebar_state):
    """Render the Data & Profile tab."""
    st.header("Data & Profile")
    today = today_iso()

    _render_profile()
    st.divider()

    # --- Data Upload Section ---
    st.subheader("Upload Attendance Log")
    st.caption(
        "CSV or XLSX with columns **Date**, **Total Classes** and optionally "
        "**Attended Classes**, **Status**, **Leave Counted**, **Remark**, **Proof**. "
        "Stored attended counts follow the status: PRESENT or a counted LEAVE attends every class."
    )
    uploaded = st.file_uploader("Attendance log", type=["csv", "xlsx"], key="upload_attendance")

    col_upload, col_sample = st.columns(2)
    with col_upload:
        if st.button("Upload & Validate", type="primary", key="btn_upload"):
            if uploaded:
                try:
                    _load_and_validate(load_file(uploaded), today)
                except Exception as e:
                    logger.exception("Upload failed")
                    st.error(f"Error loading file: {e}")
            else:
                st.warning("Please upload a file.")

    with col_sample:
        if st.button("Load Sample Data", key="btn_sample"):
            start, end = default_sample_window()
            profile = get_profile() or StudentProfile(name="Sample Student")
            profile.semester_window = SemesterWindow(start, end)
            get_store().save_profile(profile)
            _load_and_validate(generate_attendance_df(start, today), today)

    st.divider()

    # --- Backup / Export ---
    st.subheader("Backup & Export")
    store = get_store()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.download_button(
            "Download Backup (JSON)",
            data=store.export_json(),
            file_name=f"attendance-backup-{today}.json",
            mime="application/json",
        )
    with col2:
        st.download_button(
            "Download Log (CSV)",
            data=export_csv(get_days()),
            file_name=f"attendance-{today}.csv",
            mime="text/csv",
        )
    with col3:
        st.download_button(
            "Download Audit (JSON)",
            data=export_audit_json(get_days(), get_profile(), today),
            file_name=audit_file_name(today),
            mime="application/json",
        )

    backup = st.file_uploader("Restore from backup", type=["json"], key="upload_backup")
    if st.button("Restore", key="btn_restore") and backup:
        if store.import_json(backup.getvalue().decode("utf-8")):
            st.success("Backup restored.")
        else:
            st.error("Backup could not be read.")

    st.divider()
    st.subheader("Danger Zone")
    confirm = st.checkbox("I understand this deletes every logged day and the profile", key="confirm_clear")
    if st.button("Clear All Data", disabled=not confirm, key="btn_clear"):
        store.clear()
        st.success(f"Cleared data for {store.user_id} on {date.today().isoformat()}.")
