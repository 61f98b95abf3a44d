"""Tab 2: Attendance Log — mark, edit and delete daily records."""

import streamlit as st
from datetime import date

from data.session_store import get_store, get_days
from data.loader import days_to_dataframe
from components.tables import render_status_table
from models.attendance import AttendanceDay, AttendanceStatus
from config.defaults import ATTENDANCE_STATUSES, DEFAULT_DAY_CLASSES


def render(sidebar_state):
    """Render the Attendance Log tab."""
    st.header("Attendance Log")
    store = get_store()

    # --- Mark a day ---
    st.subheader("Mark a Day")
    picked = st.date_input("Date", value=date.today(), max_value=date.today(), key="log_date")
    date_iso = picked.isoformat()
    existing = store.get(date_iso)

    col1, col2, col3 = st.columns(3)
    with col1:
        status = st.selectbox(
            "Status",
            ATTENDANCE_STATUSES,
            index=ATTENDANCE_STATUSES.index(existing.status.value) if existing else 0,
            key=f"log_status_{date_iso}",
        )
    with col2:
        total = st.number_input(
            "Classes Held",
            min_value=0, max_value=24,
            value=existing.total_classes if existing else DEFAULT_DAY_CLASSES,
            step=1,
            key=f"log_total_{date_iso}",
        )
    with col3:
        leave_counted = st.checkbox(
            "Leave counts as attended",
            value=bool(existing.leave_counted) if existing else False,
            disabled=status != AttendanceStatus.LEAVE.value,
            key=f"log_leave_{date_iso}",
        )

    remark = st.text_input("Remark", value=existing.remark if existing else "", key=f"log_remark_{date_iso}")
    proof = st.text_input("Proof (file name or link)", value=existing.proof_ref if existing else "",
                          key=f"log_proof_{date_iso}")

    col_save, col_delete = st.columns(2)
    with col_save:
        if st.button("Save Day", type="primary", use_container_width=True):
            saved = store.upsert(AttendanceDay(
                date=date_iso,
                total_classes=int(total),
                attended_classes=0,
                status=AttendanceStatus.parse(status),
                leave_counted=leave_counted,
                remark=remark,
                proof_ref=proof,
            ))
            if saved:
                st.success(f"Saved {saved.date}: {saved.attended_classes}/{saved.total_classes} attended")
            else:
                st.error("Future dates cannot be logged.")
    with col_delete:
        if st.button("Delete Day", use_container_width=True, disabled=existing is None):
            store.delete(date_iso)
            st.success(f"Deleted {date_iso}")

    st.divider()

    # --- History ---
    st.subheader("History")
    days = get_days()
    if not days:
        st.info("Nothing logged yet.")
        return
    df = days_to_dataframe(days).sort_values("Date", ascending=False)
    render_status_table(df)
