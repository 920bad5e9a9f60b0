"""Exceptions raised by the StickyNotes core."""

from __future__ import annotations


class StickyNotesError(Exception):
    """Base class for every StickyNotes error."""


class StorageError(StickyNotesError):
    """A key-value backend could not be read or written."""


class CorruptNotesError(StorageError):
    """The stored notes blob could not be parsed."""

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Stored notes are corrupt: {reason}")


class NoteNotFoundError(StickyNotesError):
    """No stored note has the requested identity key."""

    def __init__(self, created_at: int):
        self.created_at = created_at
        super().__init__(f'Note with createdAt "{created_at}" does not exist')


class NoteValidationError(StickyNotesError):
    """A note is missing a required field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Note {field} must not be blank")


class CorruptTableError(StorageError):
    """A key-value table's backing data could not be parsed."""

    def __init__(self, table: str, raw: str, reason: str):
        self.table = table
        self.raw = raw
        self.reason = reason
        super().__init__(f"Table {table} is corrupt: {reason}")
