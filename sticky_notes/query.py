"""Pure search and ordering helpers over in-memory note collections."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Optional

from sticky_notes.models import Note


class SortCriterion(str, Enum):
    """Display orderings. Values are the labels stored in the preferences."""

    TITLE_ASC = "Title (A-Z)"
    TITLE_DESC = "Title (Z-A)"
    REMINDER_DATE = "Reminder Date"
    CREATION_NEWEST = "Creation Date (Newest)"
    CREATION_OLDEST = "Creation Date (Oldest)"

    @classmethod
    def parse(cls, value: "SortCriterion | str | None") -> Optional["SortCriterion"]:
        """Resolve a member, label or member name; None when unrecognized."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        return None

    @classmethod
    def labels(cls) -> list[str]:
        return [m.value for m in cls]


def filter_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Notes whose title or content contains ``query`` (case-insensitive).

    A blank query matches nothing, so a search with no input shows no results.
    """
    if not query or not query.strip():
        return []
    q = query.lower()
    return [n for n in notes if q in n.title.lower() or q in n.content.lower()]


def sort_notes(notes: Iterable[Note], criterion: SortCriterion | str | None) -> list[Note]:
    """Return ``notes`` ordered by ``criterion``.

    Unknown criteria leave the input order unchanged. All orderings are stable.
    """
    notes = list(notes)
    resolved = SortCriterion.parse(criterion)

    if resolved is SortCriterion.TITLE_ASC:
        return sorted(notes, key=lambda n: n.title.lower())
    if resolved is SortCriterion.TITLE_DESC:
        return sorted(notes, key=lambda n: n.title.lower(), reverse=True)
    if resolved is SortCriterion.REMINDER_DATE:
        # Notes without a reminder go last.
        return sorted(notes, key=lambda n: (n.reminder_at is None, n.reminder_at or 0))
    if resolved is SortCriterion.CREATION_NEWEST:
        return sorted(notes, key=lambda n: n.created_at, reverse=True)
    if resolved is SortCriterion.CREATION_OLDEST:
        return sorted(notes, key=lambda n: n.created_at)
    return notes
