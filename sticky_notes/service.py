"""Note add/edit/delete flows on top of ``NoteStorage``.

Each mutation loads the full collection, changes it in memory and saves it
back while holding the storage key lock.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from sticky_notes.config import Settings, build_key_value_store
from sticky_notes.exc import NoteNotFoundError, NoteValidationError
from sticky_notes.metrics import NOTE_MUTATIONS
from sticky_notes.models import Note, now_ms
from sticky_notes.preferences import PreferencesStore
from sticky_notes.query import SortCriterion, filter_notes, sort_notes
from sticky_notes.storage import NoteStorage

logger = logging.getLogger("sticky_notes.service")


def _index_of(notes: list[Note], created_at: int) -> int:
    for i, note in enumerate(notes):
        if note.created_at == created_at:
            return i
    return -1


class NoteService:
    """Data API consumed by the front ends."""

    def __init__(
        self,
        storage: NoteStorage,
        preferences: Optional[PreferencesStore] = None,
        require_non_blank: bool = True,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.storage = storage
        self.preferences = preferences or PreferencesStore(storage.kv)
        self._require_non_blank = require_non_blank
        self._clock = clock

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_notes(self, criterion: SortCriterion | str | None = None) -> list[Note]:
        """All notes, ordered by ``criterion`` or the stored default sort."""
        if criterion is None:
            criterion = self.preferences.load().sort_by
        return sort_notes(self.storage.load(), criterion)

    def search(self, query: str, criterion: SortCriterion | str | None = None) -> list[Note]:
        """Sorted notes matching ``query``; a blank query returns nothing."""
        if not query or not query.strip():
            return []
        return filter_notes(self.list_notes(criterion), query)

    def get_note(self, created_at: int) -> Note:
        for note in self.storage.load():
            if note.created_at == created_at:
                return note
        raise NoteNotFoundError(created_at)

    @property
    def count(self) -> int:
        return self.storage.count

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _validate(self, action: str, title: str, content: str) -> None:
        if not self._require_non_blank:
            return
        for field, value in (("title", title), ("content", content)):
            if not value or not value.strip():
                NOTE_MUTATIONS.labels(action=action, status="invalid").inc()
                raise NoteValidationError(field)

    def add_note(self, title: str, content: str, reminder_at: Optional[int] = None) -> Note:
        """Create a note stamped with the current time and persist it."""
        self._validate("add", title, content)
        with self.storage.transaction() as notes:
            used = {n.created_at for n in notes}
            created_at = self._clock()
            # createdAt is the identity key, so it must not collide.
            while created_at in used or created_at == 0:
                created_at += 1
            note = Note(
                title=title,
                content=content,
                created_at=created_at,
                reminder_at=reminder_at,
            )
            notes.append(note)
        NOTE_MUTATIONS.labels(action="add", status="success").inc()
        logger.info("Added note %d — '%s'", note.created_at, note.title)
        return note

    def edit_note(
        self,
        created_at: int,
        title: str,
        content: str,
        reminder_at: Optional[int] = None,
    ) -> Note:
        """Replace title, content and reminder of the note with ``created_at``.

        A ``reminder_at`` of None clears the reminder.
        """
        self._validate("edit", title, content)
        with self.storage.transaction() as notes:
            idx = _index_of(notes, created_at)
            if idx == -1:
                NOTE_MUTATIONS.labels(action="edit", status="not_found").inc()
                raise NoteNotFoundError(created_at)
            note = notes[idx].model_copy(
                update={"title": title, "content": content, "reminder_at": reminder_at}
            )
            notes[idx] = note
        NOTE_MUTATIONS.labels(action="edit", status="success").inc()
        logger.info("Edited note %d — '%s'", created_at, note.title)
        return note

    def delete_note(self, created_at: int) -> Note:
        """Remove the note with ``created_at`` and return it."""
        with self.storage.transaction() as notes:
            idx = _index_of(notes, created_at)
            if idx == -1:
                NOTE_MUTATIONS.labels(action="delete", status="not_found").inc()
                raise NoteNotFoundError(created_at)
            note = notes.pop(idx)
        NOTE_MUTATIONS.labels(action="delete", status="success").inc()
        logger.info("Deleted note %d — '%s'", created_at, note.title)
        return note


def build_note_service(config: Settings) -> NoteService:
    """Wire storage, preferences and service from settings."""
    kv = build_key_value_store(config)
    storage = NoteStorage(
        kv,
        table=config.notes_table,
        key=config.notes_key,
        on_corrupt=config.on_corrupt,
    )
    return NoteService(
        storage,
        PreferencesStore(kv),
        require_non_blank=config.require_non_blank,
    )
