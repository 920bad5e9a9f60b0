"""Settings page: font, view mode, sort order, delete confirmation and theme."""

from __future__ import annotations

import streamlit as st

from sticky_notes.preferences import PreferencesStore
from sticky_notes.themes import THEMES
from ui import api


def _swatches(name: str) -> str:
    theme = THEMES[name]
    cells = "".join(
        f'<span style="display:inline-block;width:22px;height:22px;margin-right:4px;'
        f'border-radius:4px;border:1px solid #ccc;background:{c}"></span>'
        for c in (theme.background, theme.note_background, theme.action, theme.highlight, theme.text)
    )
    return f"<div>{cells}</div>"


def render() -> None:
    store = api.service().preferences
    prefs = store.load()
    choices = PreferencesStore.choices()

    st.title("⚙️ Settings")

    st.subheader("Note font")
    font_size = st.selectbox(
        "Font size", choices["font_size"], index=_index(choices["font_size"], prefs.font_size)
    )
    font_style = st.selectbox(
        "Font style", choices["font_style"], index=_index(choices["font_style"], prefs.font_style)
    )

    st.subheader("View mode")
    view_mode = st.radio(
        "Show notes as",
        choices["view_mode"],
        index=_index(choices["view_mode"], prefs.view_mode),
        horizontal=True,
    )

    st.subheader("Sorting")
    sort_by = st.selectbox(
        "Sort your notes by", choices["sort_by"], index=_index(choices["sort_by"], prefs.sort_by)
    )

    st.subheader("Deleting")
    confirm_delete = st.toggle("Ask for confirmation before deleting", value=prefs.confirm_delete)

    st.subheader("Theme")
    theme = st.selectbox("Theme", choices["theme"], index=_index(choices["theme"], prefs.theme))
    st.caption(THEMES[theme].description)
    st.markdown(_swatches(theme), unsafe_allow_html=True)

    updated = dict(
        font_size=font_size,
        font_style=font_style,
        view_mode=view_mode,
        sort_by=sort_by,
        confirm_delete=confirm_delete,
        theme=theme,
    )
    if updated != {k: getattr(prefs, k) for k in updated}:
        store.update(**updated)
        st.rerun()


def _index(options: list[str], value: str) -> int:
    """Position of ``value``; stored values outside the options select the first."""
    return options.index(value) if value in options else 0
