"""Home page: all notes in the preferred order, with edit and delete."""

from __future__ import annotations

import streamlit as st

from sticky_notes.exc import NoteNotFoundError
from sticky_notes.models import Note
from sticky_notes.preferences import DisplayPreferences
from ui import api
from ui.components import editor
from ui.components.cards import render_card


def _delete(created_at: int) -> None:
    try:
        api.service().delete_note(created_at)
        st.toast("Note deleted")
    except NoteNotFoundError:
        st.toast("Note not found!")


def _render_confirm_delete(note: Note) -> None:
    """Confirmation box shown when delete confirmation is enabled."""
    with st.container(border=True):
        st.markdown("**Delete note?**")
        st.write(f"'{note.title}' will be removed. This cannot be undone.")
        col_yes, col_no = st.columns(2)
        if col_yes.button("Delete", type="primary", key=f"confirm_{note.created_at}"):
            _delete(note.created_at)
            st.session_state.pop("pending_delete", None)
            st.rerun()
        if col_no.button("Cancel", key=f"cancel_{note.created_at}"):
            st.session_state.pop("pending_delete", None)
            st.rerun()


def _render_note(note: Note, prefs: DisplayPreferences) -> None:
    render_card(note, prefs)
    if st.session_state.get("pending_delete") == note.created_at:
        _render_confirm_delete(note)
        return

    col_edit, col_delete = st.columns(2)
    if col_edit.button("✏️ Edit", key=f"edit_{note.created_at}", use_container_width=True):
        st.session_state.editing = note.created_at
        st.rerun()
    if col_delete.button("🗑️ Delete", key=f"delete_{note.created_at}", use_container_width=True):
        if prefs.confirm_delete:
            st.session_state.pending_delete = note.created_at
        else:
            _delete(note.created_at)
        st.rerun()


def render() -> None:
    """Render the note list, or the edit form when a note is being edited."""
    prefs = api.preferences()

    if "editing" in st.session_state:
        editor.render_edit(st.session_state.editing)
        return

    st.title("📝 StickyNotes")
    notes = api.service().list_notes(prefs.sort_by)
    st.caption(f"{len(notes)} notes · sorted by {prefs.sort_by}")

    if not notes:
        st.info("No notes yet. Use **New note** to add one.")
        return

    if prefs.view_mode == "Grid":
        cols = st.columns(2)
        for i, note in enumerate(notes):
            with cols[i % 2]:
                _render_note(note, prefs)
    else:
        for note in notes:
            _render_note(note, prefs)
