"""Access to the StickyNotes core for the Streamlit pages.

The note service is built once per Streamlit server process from the
``STICKY_NOTES_*`` settings and shared by every session.
"""

from __future__ import annotations

import streamlit as st

from sticky_notes.config import configure_logging, settings
from sticky_notes.preferences import DisplayPreferences
from sticky_notes.service import NoteService, build_note_service


@st.cache_resource
def service() -> NoteService:
    """Process-wide note service."""
    configure_logging(settings)
    return build_note_service(settings)


def preferences() -> DisplayPreferences:
    """Display preferences as currently stored."""
    return service().preferences.load()
