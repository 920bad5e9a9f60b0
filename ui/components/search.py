"""Search page: notes whose title or content match the typed text."""

from __future__ import annotations

import streamlit as st

from ui import api
from ui.components.cards import render_card


def render() -> None:
    prefs = api.preferences()
    st.title("🔍 Search")
    query = st.text_input("Search notes", placeholder="Type to search titles and content")

    if not query.strip():
        st.caption("Start typing to search your notes.")
        return

    results = api.service().search(query, prefs.sort_by)
    if not results:
        st.info("No notes found.")
        return

    st.caption(f"{len(results)} matching notes")
    for note in results:
        render_card(note, prefs)
