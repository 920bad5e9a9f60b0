"""StickyNotes — Streamlit interface.

Run with:
    streamlit run ui/app.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so `ui.*` and `sticky_notes.*`
# imports resolve regardless of the working directory Streamlit uses.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

st.set_page_config(
    page_title="StickyNotes",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)

from ui import api  # noqa: E402
from ui.components import editor, faq, home, search, settings  # noqa: E402

# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

_colors = api.preferences().theme_colors
st.markdown(
    f"""<style>
    .stApp {{ background-color: {_colors.background}; color: {_colors.text}; }}
    .stApp h1, .stApp h2, .stApp h3 {{ color: {_colors.action}; }}
    </style>""",
    unsafe_allow_html=True,
)

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------

page = st.navigation(
    [
        st.Page(home.render, title="Home", icon="🏠", default=True, url_path="home"),
        st.Page(search.render, title="Search", icon="🔍", url_path="search"),
        st.Page(editor.render_new, title="New note", icon="➕", url_path="new"),
        st.Page(settings.render, title="Settings", icon="⚙️", url_path="settings"),
        st.Page(faq.render, title="FAQ", icon="❓", url_path="faq"),
    ]
)

page.run()

st.divider()
st.caption(f"StickyNotes | {api.service().count} notes | Theme: {_colors.name}")
