"""Pydantic models for StickyNotes notes and their stored JSON shape."""

from __future__ import annotations

import time
from datetime import date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class Note(BaseModel):
    """A single note.

    Field names on the wire follow the stored format: ``subtitle`` holds the
    content, ``createdAt`` / ``reminderAt`` are epoch milliseconds.
    ``createdAt`` is the identity key used by edit and delete.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field("", description="Note title")
    content: str = Field(
        "",
        validation_alias=AliasChoices("subtitle", "content"),
        serialization_alias="subtitle",
        description="Note body",
    )
    created_at: int = Field(
        0,
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Creation time in epoch milliseconds",
    )
    reminder_at: int | None = Field(
        None,
        validation_alias=AliasChoices("reminderAt", "reminder_at"),
        serialization_alias="reminderAt",
        description="Optional reminder time in epoch milliseconds",
    )

    @field_validator("created_at", mode="before")
    @classmethod
    def _null_created_at(cls, value):
        # A null createdAt is treated like a missing one; 0 marks the note for repair.
        return 0 if value is None else value

    @property
    def has_reminder(self) -> bool:
        return self.reminder_at is not None

    def to_wire(self) -> dict:
        """Dict in the stored shape; ``reminderAt`` is omitted when unset."""
        return self.model_dump(by_alias=True, exclude_none=True)


# The stored blob is a bare JSON array of notes.
NOTES_ADAPTER = TypeAdapter(list[Note])


def dump_notes(notes: list[Note]) -> str:
    """Serialize a collection to the stored JSON text."""
    return NOTES_ADAPTER.dump_json(list(notes), by_alias=True, exclude_none=True).decode(
        "utf-8"
    )


def parse_notes(raw: str) -> list[Note]:
    """Parse the stored JSON text. Raises ``pydantic.ValidationError`` on bad input."""
    return NOTES_ADAPTER.validate_json(raw)


def format_date(timestamp: int | None) -> str:
    """Render epoch milliseconds as ``YYYY-MM-DD`` in local time."""
    if timestamp is None:
        return ""
    return datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d")


def date_to_epoch_ms(day: date) -> int:
    """Local midnight of ``day`` in epoch milliseconds."""
    midnight = datetime(day.year, day.month, day.day)
    return int(midnight.timestamp() * 1000)


def parse_date(value: str) -> int:
    """Parse a ``YYYY-MM-DD`` string into local-midnight epoch milliseconds."""
    return date_to_epoch_ms(date.fromisoformat(value.strip()))
