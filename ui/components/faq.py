"""Frequently asked questions."""

from __future__ import annotations

import streamlit as st

FAQS: list[tuple[str, str]] = [
    (
        "How do I create a new note?",
        "Open **New note**, fill in the title and your text, and optionally set a reminder date.",
    ),
    (
        "Can I change the app theme?",
        "Yes. Pick a theme in **Settings**; every page follows it right away.",
    ),
    (
        "How do I change the note font size or style?",
        "In **Settings** you can adjust the font size and style used to display your notes.",
    ),
    (
        "How do I sort my notes?",
        "In **Settings**, choose an order: title, reminder date or creation date.",
    ),
    (
        "How does note deletion work?",
        "Use the delete button under a note. If confirmation is enabled in **Settings**, "
        "you will be asked before the note is removed.",
    ),
    (
        "Can I search my notes?",
        "Yes. **Search** finds notes by their title or content.",
    ),
    (
        "Are reminders notifications?",
        "No. A reminder is a date shown on the note; nothing is sent when it arrives.",
    ),
]


def render() -> None:
    st.title("❓ FAQ")
    for question, answer in FAQS:
        with st.expander(question):
            st.markdown(answer)
