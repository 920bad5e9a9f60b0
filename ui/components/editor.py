"""Forms for creating and editing notes."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import streamlit as st

from sticky_notes.exc import NoteNotFoundError, NoteValidationError
from sticky_notes.models import Note, date_to_epoch_ms
from ui import api


def _reminder_fields(note: Optional[Note]) -> tuple[bool, date]:
    has_reminder = note is not None and note.reminder_at is not None
    initial = date.today()
    if has_reminder:
        initial = datetime.fromtimestamp(note.reminder_at / 1000).date()
    set_reminder = st.checkbox("Set reminder", value=has_reminder)
    picked = st.date_input("Reminder date", value=initial)
    return set_reminder, picked


def render_new() -> None:
    """New note page."""
    st.title("➕ New note")
    with st.form("new_note", clear_on_submit=True):
        title = st.text_input("Title")
        content = st.text_area("Note", height=180)
        set_reminder, picked = _reminder_fields(None)
        submitted = st.form_submit_button("Save", type="primary")

    if submitted:
        reminder_at = date_to_epoch_ms(picked) if set_reminder else None
        try:
            api.service().add_note(title, content, reminder_at)
        except NoteValidationError:
            st.error("Please fill in both fields!")
            return
        st.success(f"Note '{title}' saved.")


def render_edit(created_at: int) -> None:
    """Edit form for an existing note; shown in place of the Home list."""
    st.title("✏️ Edit note")
    try:
        note = api.service().get_note(created_at)
    except NoteNotFoundError:
        st.error("Note not found!")
        if st.button("Back"):
            st.session_state.pop("editing", None)
            st.rerun()
        return

    with st.form(f"edit_{created_at}"):
        title = st.text_input("Title", value=note.title)
        content = st.text_area("Note", value=note.content, height=180)
        set_reminder, picked = _reminder_fields(note)
        col_save, col_cancel = st.columns(2)
        saved = col_save.form_submit_button("Save", type="primary", use_container_width=True)
        cancelled = col_cancel.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        st.session_state.pop("editing", None)
        st.rerun()
    if saved:
        reminder_at = date_to_epoch_ms(picked) if set_reminder else None
        try:
            api.service().edit_note(created_at, title, content, reminder_at)
        except NoteValidationError:
            st.error("Please fill in both fields!")
            return
        except NoteNotFoundError:
            st.error("Note not found!")
            return
        st.session_state.pop("editing", None)
        st.rerun()
