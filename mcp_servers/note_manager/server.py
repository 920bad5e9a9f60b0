"""
StickyNotes MCP Server

Exposes tools for adding, editing, deleting, listing and searching notes,
and for reading and changing display preferences, via the Model Context
Protocol.  Uses stdio transport unless configured otherwise.
"""

import logging
from datetime import UTC, datetime

from mcp.server.fastmcp import FastMCP

from sticky_notes.config import configure_logging, settings
from sticky_notes.models import Note, format_date, parse_date
from sticky_notes.preferences import PreferencesStore
from sticky_notes.service import build_note_service
from sticky_notes.themes import THEMES

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logger = logging.getLogger("note_manager")

# ---------------------------------------------------------------------------
# MCP server + service
# ---------------------------------------------------------------------------
mcp = FastMCP("sticky-notes", host=settings.mcp_host, port=settings.mcp_port)
service = build_note_service(settings)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _note_dict(note: Note) -> dict:
    """Stored shape plus human-readable dates."""
    data = note.to_wire()
    data["created"] = format_date(note.created_at)
    data["reminder"] = format_date(note.reminder_at)
    return data


def _reminder(reminder_date: str | None) -> int | None:
    if not reminder_date:
        return None
    return parse_date(reminder_date)


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
def add_note(title: str, content: str, reminder_date: str | None = None) -> dict:
    """Create a new note with a title, content and optional reminder date.

    Args:
        title: Short descriptive title for the note.
        content: The full text of the note.
        reminder_date: Optional reminder date as YYYY-MM-DD.

    Returns:
        Dictionary with the new note's createdAt key and a confirmation message.
    """
    note = service.add_note(title, content, _reminder(reminder_date))
    logger.info("Tool add_note invoked — createdAt=%d", note.created_at)
    return {
        "createdAt": note.created_at,
        "message": f"Note '{note.title}' saved successfully.",
    }


@mcp.tool()
def list_notes(sort_by: str | None = None) -> dict:
    """List every note in display order.

    Args:
        sort_by: Optional ordering: "Title (A-Z)", "Title (Z-A)",
            "Reminder Date", "Creation Date (Newest)" or
            "Creation Date (Oldest)". Defaults to the saved preference.

    Returns:
        Dictionary with the notes and their count.
    """
    notes = service.list_notes(sort_by)
    logger.info("Tool list_notes invoked — sort_by=%s, found=%d", sort_by, len(notes))
    return {"count": len(notes), "notes": [_note_dict(n) for n in notes]}


@mcp.tool()
def search_notes(query: str, sort_by: str | None = None) -> dict:
    """Search notes by keyword (case-insensitive match on title and content).

    An empty query returns no notes.

    Args:
        query: Text to look for.
        sort_by: Optional ordering of the results, as for list_notes.

    Returns:
        Dictionary with matching notes and their count.
    """
    results = service.search(query, sort_by)
    logger.info("Tool search_notes invoked — query='%s', found=%d", query, len(results))
    return {"count": len(results), "notes": [_note_dict(n) for n in results]}


@mcp.tool()
def get_note(created_at: int) -> dict:
    """Fetch a single note by its createdAt key."""
    return _note_dict(service.get_note(created_at))


@mcp.tool()
def edit_note(
    created_at: int,
    title: str,
    content: str,
    reminder_date: str | None = None,
) -> dict:
    """Replace the title, content and reminder of an existing note.

    Omitting reminder_date removes any reminder.

    Args:
        created_at: createdAt key of the note to edit.
        title: New title.
        content: New content.
        reminder_date: Optional reminder date as YYYY-MM-DD.
    """
    note = service.edit_note(created_at, title, content, _reminder(reminder_date))
    logger.info("Tool edit_note invoked — createdAt=%d", created_at)
    return {"note": _note_dict(note), "message": f"Note '{note.title}' updated."}


@mcp.tool()
def delete_note(created_at: int) -> dict:
    """Permanently delete the note with the given createdAt key."""
    note = service.delete_note(created_at)
    logger.info("Tool delete_note invoked — createdAt=%d", created_at)
    return {"createdAt": created_at, "message": f"Note '{note.title}' deleted."}


@mcp.tool()
def get_preferences() -> dict:
    """Return the current display preferences and the allowed choices."""
    return {
        "preferences": service.preferences.load().model_dump(),
        "choices": PreferencesStore.choices(),
    }


@mcp.tool()
def update_preferences(
    theme: str | None = None,
    font_size: str | None = None,
    font_style: str | None = None,
    view_mode: str | None = None,
    sort_by: str | None = None,
    confirm_delete: bool | None = None,
) -> dict:
    """Change one or more display preferences; omitted values are kept."""
    prefs = service.preferences.update(
        theme=theme,
        font_size=font_size,
        font_style=font_style,
        view_mode=view_mode,
        sort_by=sort_by,
        confirm_delete=confirm_delete,
    )
    logger.info("Tool update_preferences invoked")
    return {"preferences": prefs.model_dump()}


@mcp.tool()
def list_themes() -> dict:
    """List the available colour themes."""
    return {"themes": [t.model_dump() for t in THEMES.values()]}


@mcp.tool()
def health_check() -> dict:
    """Check whether the StickyNotes server is healthy.

    Returns:
        Dictionary with server status, note count, storage location and timestamp.
    """
    logger.info("Tool health_check invoked")
    return {
        "status": "healthy",
        "server": "sticky-notes",
        "total_notes": service.count,
        "storage": service.storage.kv.location,
        "timestamp": datetime.now(UTC).isoformat(),
    }


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    configure_logging(settings)
    logger.info("Starting StickyNotes MCP server (%s transport) ...", settings.mcp_transport)
    mcp.run(transport=settings.mcp_transport)
