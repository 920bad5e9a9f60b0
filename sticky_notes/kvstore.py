"""Key-value backends for StickyNotes.

Data is grouped into named tables, each a flat mapping of string keys to
string values. Three backends are provided: JSON files on local disk (one file
per table), Redis hashes, and an in-process dict for tests and demos.
"""

from __future__ import annotations

import itertools
import json
import logging
import threading
import weakref
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import redis

from sticky_notes.exc import CorruptTableError, StorageError

logger = logging.getLogger("sticky_notes.kvstore")


class KeyValueStore(ABC):
    """Minimal table/key/value storage interface."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Stable identifier of the underlying storage, used to share locks."""

    @abstractmethod
    def get(self, table: str, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent.

        Raises ``CorruptTableError`` when the table itself cannot be parsed.
        """

    @abstractmethod
    def put(self, table: str, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, table: str, key: str) -> None:
        """Delete ``key``. Missing keys are ignored."""

    @abstractmethod
    def get_all(self, table: str) -> dict[str, str]:
        """Return every key/value pair in ``table``."""


# ---------------------------------------------------------------------------
# Local JSON files
# ---------------------------------------------------------------------------


class FileKeyValueStore(KeyValueStore):
    """One JSON object per table, stored as ``<directory>/<table>.json``."""

    def __init__(self, directory: Path) -> None:
        self._dir = Path(directory).expanduser()
        self._lock = threading.Lock()

    @property
    def location(self) -> str:
        return f"file:{self._dir.resolve()}"

    def _path(self, table: str) -> Path:
        return self._dir / f"{table}.json"

    def _read_table(self, table: str) -> dict[str, str]:
        path = self._path(table)
        if not path.exists():
            return {}
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {path}: {exc}") from exc
        if not text.strip():
            return {}
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CorruptTableError(table, text, f"{path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise CorruptTableError(table, text, f"{path} does not hold a JSON object")
        return {
            str(k): v if isinstance(v, str) else json.dumps(v) for k, v in raw.items()
        }

    def _write_table(self, table: str, data: dict[str, str]) -> None:
        path = self._path(table)
        tmp = path.with_name(path.name + ".tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as exc:
            raise StorageError(f"Cannot write {path}: {exc}") from exc

    def get(self, table: str, key: str) -> Optional[str]:
        return self._read_table(table).get(key)

    def _read_for_write(self, table: str) -> dict[str, str]:
        """Current table contents; a corrupt file is moved aside and replaced."""
        try:
            return self._read_table(table)
        except CorruptTableError as exc:
            path = self._path(table)
            backup = path.with_name(path.name + ".corrupt")
            try:
                path.replace(backup)
            except OSError as move_exc:
                raise StorageError(f"Cannot move aside {path}: {move_exc}") from move_exc
            logger.error("%s — moved to %s, starting fresh", exc.reason, backup)
            return {}

    def put(self, table: str, key: str, value: str) -> None:
        with self._lock:
            data = self._read_for_write(table)
            data[key] = value
            self._write_table(table, data)

    def remove(self, table: str, key: str) -> None:
        with self._lock:
            data = self._read_for_write(table)
            if data.pop(key, None) is not None:
                self._write_table(table, data)

    def get_all(self, table: str) -> dict[str, str]:
        return self._read_table(table)


# ---------------------------------------------------------------------------
# Redis hashes
# ---------------------------------------------------------------------------


class RedisKeyValueStore(KeyValueStore):
    """Each table is a Redis hash named ``<prefix><table>``."""

    def __init__(self, redis_url: str, prefix: str = "sticky_notes:") -> None:
        self._redis_url = redis_url
        self._prefix = prefix
        self._client: Optional[redis.Redis] = None

    @property
    def location(self) -> str:
        return f"redis:{self._redis_url}/{self._prefix}"

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis.from_url(self._redis_url, decode_responses=True)
        return self._client

    def _name(self, table: str) -> str:
        return f"{self._prefix}{table}"

    def get(self, table: str, key: str) -> Optional[str]:
        try:
            return self.client.hget(self._name(table), key)
        except redis.RedisError as exc:
            raise StorageError(f"Redis get failed: {exc}") from exc

    def put(self, table: str, key: str, value: str) -> None:
        try:
            self.client.hset(self._name(table), key, value)
        except redis.RedisError as exc:
            raise StorageError(f"Redis set failed: {exc}") from exc

    def remove(self, table: str, key: str) -> None:
        try:
            self.client.hdel(self._name(table), key)
        except redis.RedisError as exc:
            raise StorageError(f"Redis delete failed: {exc}") from exc

    def get_all(self, table: str) -> dict[str, str]:
        try:
            return dict(self.client.hgetall(self._name(table)))
        except redis.RedisError as exc:
            raise StorageError(f"Redis scan failed: {exc}") from exc

    def close(self) -> None:
        """Close the Redis connection pool."""
        if self._client is not None:
            self._client.close()
            self._client = None


# ---------------------------------------------------------------------------
# In-process
# ---------------------------------------------------------------------------


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; nothing survives the process."""

    _ids = itertools.count(1)

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, str]] = {}
        self._id = next(self._ids)

    @property
    def location(self) -> str:
        return f"memory:{self._id}"

    def get(self, table: str, key: str) -> Optional[str]:
        return self._tables.get(table, {}).get(key)

    def put(self, table: str, key: str, value: str) -> None:
        self._tables.setdefault(table, {})[key] = value

    def remove(self, table: str, key: str) -> None:
        self._tables.get(table, {}).pop(key, None)

    def get_all(self, table: str) -> dict[str, str]:
        return dict(self._tables.get(table, {}))


# ---------------------------------------------------------------------------
# Per-key locks
# ---------------------------------------------------------------------------

# Entries disappear once no storage holds the lock.
_locks: weakref.WeakValueDictionary[tuple[str, str, str], threading.RLock] = (
    weakref.WeakValueDictionary()
)
_locks_guard = threading.Lock()


def key_lock(store: KeyValueStore, table: str, key: str) -> threading.RLock:
    """Return the lock shared by every user of ``table``/``key`` in ``store``."""
    ident = (store.location, table, key)
    with _locks_guard:
        lock = _locks.get(ident)
        if lock is None:
            lock = _locks[ident] = threading.RLock()
        return lock
