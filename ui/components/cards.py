"""Note card rendering shared by the Home and Search pages."""

from __future__ import annotations

import html

import streamlit as st

from sticky_notes.models import Note, format_date
from sticky_notes.preferences import DisplayPreferences


def card_html(note: Note, prefs: DisplayPreferences) -> str:
    """HTML for one note card, styled with the theme and font preferences."""
    colors = prefs.theme_colors
    size = prefs.font_size_points
    reminder = ""
    if note.reminder_at is not None:
        reminder = (
            f'<div style="color:{colors.action};font-size:14px;margin-top:6px">'
            f"⏰ {format_date(note.reminder_at)}</div>"
        )
    return (
        f'<div style="background:{colors.note_background};color:{colors.text};'
        f"border-left:4px solid {colors.highlight};border-radius:10px;"
        f'padding:12px 14px;margin-bottom:6px;font-family:{prefs.font_family}">'
        f'<div style="font-weight:700;font-size:{size + 2}px">{html.escape(note.title)}</div>'
        f'<div style="font-size:{size}px;white-space:pre-wrap">{html.escape(note.content)}</div>'
        f"{reminder}"
        f'<div style="opacity:0.6;font-size:12px;margin-top:6px">'
        f"Created {format_date(note.created_at)}</div>"
        f"</div>"
    )


def render_card(note: Note, prefs: DisplayPreferences) -> None:
    st.markdown(card_html(note, prefs), unsafe_allow_html=True)
