"""Note persistence on top of a key-value backend.

The whole collection lives in one JSON array under a single key. Every write
replaces that value; there is no incremental update.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from pydantic import ValidationError

from sticky_notes.exc import CorruptNotesError, CorruptTableError, StorageError
from sticky_notes.kvstore import KeyValueStore, key_lock
from sticky_notes.metrics import (
    CORRUPT_LOADS,
    NOTES_STORED,
    PATCHED_NOTES,
    STORE_OPERATIONS,
)
from sticky_notes.models import Note, dump_notes, now_ms, parse_notes

logger = logging.getLogger("sticky_notes.storage")

NOTES_TABLE = "sticky_notes_prefs"
NOTES_KEY = "notes_json"

ON_CORRUPT_EMPTY = "empty"
ON_CORRUPT_RAISE = "raise"


@dataclass
class LoadResult:
    """Outcome of reading the stored collection."""

    notes: list[Note] = field(default_factory=list)
    corrupt: bool = False
    patched: int = 0


class NoteStorage:
    """Loads and saves the full note collection as a single blob."""

    def __init__(
        self,
        kv: KeyValueStore,
        table: str = NOTES_TABLE,
        key: str = NOTES_KEY,
        on_corrupt: str = ON_CORRUPT_EMPTY,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if on_corrupt not in (ON_CORRUPT_EMPTY, ON_CORRUPT_RAISE):
            raise ValueError(f"Unknown corrupt-data policy: {on_corrupt!r}")
        self._kv = kv
        self._table = table
        self._key = key
        self._on_corrupt = on_corrupt
        self._clock = clock
        self._lock = key_lock(kv, table, key)

    @property
    def kv(self) -> KeyValueStore:
        return self._kv

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self) -> list[Note]:
        """Return every stored note. Missing or corrupt data yields ``[]``."""
        return self.load_result().notes

    def load_result(self) -> LoadResult:
        """Like :meth:`load` but also reports corruption and repaired notes.

        Raises ``CorruptNotesError`` instead of recovering when the storage
        was created with ``on_corrupt="raise"``.
        """
        with self._lock:
            try:
                raw = self._kv.get(self._table, self._key)
            except CorruptTableError as exc:
                return self._recover_corrupt(exc.raw, exc.reason, exc)
            except StorageError:
                STORE_OPERATIONS.labels(operation="load", status="error").inc()
                raise

            if not raw or raw.strip() == "null":
                STORE_OPERATIONS.labels(operation="load", status="success").inc()
                NOTES_STORED.set(0)
                return LoadResult()

            try:
                notes = parse_notes(raw)
            except ValidationError as exc:
                reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
                return self._recover_corrupt(raw, reason, exc)

            notes, patched = self._patch_created_at(notes)
            if patched:
                self._write_back(notes)

            STORE_OPERATIONS.labels(operation="load", status="success").inc()
            NOTES_STORED.set(len(notes))
            logger.info("Loaded %d notes from %s/%s", len(notes), self._table, self._key)
            return LoadResult(notes=notes, patched=patched)

    def _recover_corrupt(self, raw: str, reason: str, cause: Exception) -> LoadResult:
        """Apply the corrupt-data policy: raise, or report an empty collection."""
        CORRUPT_LOADS.inc()
        if self._on_corrupt == ON_CORRUPT_RAISE:
            STORE_OPERATIONS.labels(operation="load", status="error").inc()
            raise CorruptNotesError(raw, reason) from cause
        logger.warning(
            "Stored notes under %s/%s are corrupt — returning no notes: %s",
            self._table,
            self._key,
            reason,
        )
        STORE_OPERATIONS.labels(operation="load", status="success").inc()
        NOTES_STORED.set(0)
        return LoadResult(corrupt=True)

    def _patch_created_at(self, notes: list[Note]) -> tuple[list[Note], int]:
        """Give notes with ``createdAt == 0`` distinct fresh timestamps."""
        if all(n.created_at != 0 for n in notes):
            return notes, 0

        used = {n.created_at for n in notes}
        stamp = self._clock()
        patched = 0
        result: list[Note] = []
        for note in notes:
            if note.created_at == 0:
                while stamp in used:
                    stamp += 1
                used.add(stamp)
                note = note.model_copy(update={"created_at": stamp})
                patched += 1
            result.append(note)

        PATCHED_NOTES.inc(patched)
        logger.warning("Assigned creation times to %d notes missing createdAt", patched)
        return result, patched

    def _write_back(self, notes: list[Note]) -> None:
        """Persist repaired timestamps so identity keys stay stable across loads."""
        try:
            self.save(notes)
        except StorageError as exc:
            logger.warning("Could not persist repaired creation times: %s", exc)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, notes: Iterable[Note]) -> None:
        """Replace the stored collection with ``notes``."""
        notes = list(notes)
        with self._lock:
            try:
                self._kv.put(self._table, self._key, dump_notes(notes))
            except StorageError:
                STORE_OPERATIONS.labels(operation="save", status="error").inc()
                raise
        STORE_OPERATIONS.labels(operation="save", status="success").inc()
        NOTES_STORED.set(len(notes))
        logger.info("Saved %d notes to %s/%s", len(notes), self._table, self._key)

    @contextmanager
    def transaction(self) -> Iterator[list[Note]]:
        """Hold the key lock for a load-mutate-save sequence.

        Yields the loaded list; mutate it in place. It is saved when the block
        exits normally and discarded if the block raises.
        """
        with self._lock:
            notes = self.load()
            yield notes
            self.save(notes)

    @property
    def count(self) -> int:
        """Number of stored notes."""
        return len(self.load())
