"""Tests for sticky_notes.kvstore — file, Redis and in-memory backends."""

from __future__ import annotations

import gc
import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import redis

from sticky_notes import kvstore
from sticky_notes.exc import CorruptTableError, StorageError
from sticky_notes.kvstore import (
    FileKeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    key_lock,
)

# ---------------------------------------------------------------------------
# File backend
# ---------------------------------------------------------------------------


class TestFileKeyValueStore:
    def test_missing_table(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        assert kv.get("prefs", "k") is None
        assert kv.get_all("prefs") == {}

    def test_put_get(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        kv.put("prefs", "k", "v")
        assert kv.get("prefs", "k") == "v"
        assert json.loads((tmp_path / "prefs.json").read_text()) == {"k": "v"}

    def test_creates_directory(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path / "nested" / "dir")
        kv.put("prefs", "k", "v")
        assert (tmp_path / "nested" / "dir" / "prefs.json").exists()

    def test_no_temp_file_left(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        kv.put("prefs", "k", "v")
        assert sorted(p.name for p in tmp_path.iterdir()) == ["prefs.json"]

    def test_remove(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        kv.put("prefs", "a", "1")
        kv.put("prefs", "b", "2")
        kv.remove("prefs", "a")
        kv.remove("prefs", "missing")
        assert kv.get_all("prefs") == {"b": "2"}

    def test_tables_are_separate_files(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        kv.put("one", "k", "1")
        kv.put("two", "k", "2")
        assert kv.get("one", "k") == "1"
        assert kv.get("two", "k") == "2"

    def test_non_string_values_read_as_json(self, tmp_path: Path) -> None:
        (tmp_path / "prefs.json").write_text('{"confirm_delete": false, "n": 3}')
        kv = FileKeyValueStore(tmp_path)
        assert kv.get_all("prefs") == {"confirm_delete": "false", "n": "3"}

    def test_malformed_table_raises(self, tmp_path: Path) -> None:
        (tmp_path / "prefs.json").write_text("<xml/>")
        kv = FileKeyValueStore(tmp_path)
        with pytest.raises(CorruptTableError) as info:
            kv.get("prefs", "k")
        assert info.value.table == "prefs"
        assert info.value.raw == "<xml/>"

    def test_non_object_table_raises(self, tmp_path: Path) -> None:
        (tmp_path / "prefs.json").write_text('["a", "b"]')
        with pytest.raises(CorruptTableError):
            FileKeyValueStore(tmp_path).get_all("prefs")

    def test_put_moves_corrupt_table_aside(self, tmp_path: Path) -> None:
        (tmp_path / "prefs.json").write_text("{ truncated")
        kv = FileKeyValueStore(tmp_path)
        kv.put("prefs", "k", "v")
        assert kv.get_all("prefs") == {"k": "v"}
        assert (tmp_path / "prefs.json.corrupt").read_text() == "{ truncated"

    def test_write_failure_raises_storage_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        kv = FileKeyValueStore(blocker)
        with pytest.raises(StorageError):
            kv.put("prefs", "k", "v")

    def test_location_is_resolved_path(self, tmp_path: Path) -> None:
        other = FileKeyValueStore(tmp_path / "sub" / "..")
        assert FileKeyValueStore(tmp_path).location == other.location


# ---------------------------------------------------------------------------
# Redis backend
# ---------------------------------------------------------------------------


def _make_redis_store() -> tuple[RedisKeyValueStore, MagicMock]:
    """Create a RedisKeyValueStore with a mocked Redis client."""
    kv = RedisKeyValueStore("redis://localhost:6379/0", prefix="test:")
    client = MagicMock()
    kv._client = client
    return kv, client


class TestRedisKeyValueStore:
    def test_get_uses_prefixed_hash(self) -> None:
        kv, client = _make_redis_store()
        client.hget.return_value = "v"
        assert kv.get("prefs", "k") == "v"
        client.hget.assert_called_once_with("test:prefs", "k")

    def test_put(self) -> None:
        kv, client = _make_redis_store()
        kv.put("prefs", "k", "v")
        client.hset.assert_called_once_with("test:prefs", "k", "v")

    def test_remove(self) -> None:
        kv, client = _make_redis_store()
        kv.remove("prefs", "k")
        client.hdel.assert_called_once_with("test:prefs", "k")

    def test_get_all(self) -> None:
        kv, client = _make_redis_store()
        client.hgetall.return_value = {"a": "1"}
        assert kv.get_all("prefs") == {"a": "1"}

    def test_errors_become_storage_errors(self) -> None:
        kv, client = _make_redis_store()
        client.hget.side_effect = redis.ConnectionError("refused")
        with pytest.raises(StorageError):
            kv.get("prefs", "k")

    def test_client_created_lazily(self) -> None:
        kv = RedisKeyValueStore("redis://localhost:6379/0")
        mock_client = MagicMock()
        with patch(
            "sticky_notes.kvstore.redis.Redis.from_url", return_value=mock_client
        ) as from_url:
            assert kv.client is mock_client
            assert kv.client is mock_client
        from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)

    def test_close(self) -> None:
        kv, client = _make_redis_store()
        kv.close()
        client.close.assert_called_once()
        assert kv._client is None


# ---------------------------------------------------------------------------
# Memory backend and locks
# ---------------------------------------------------------------------------


class TestMemoryKeyValueStore:
    def test_put_get_remove(self) -> None:
        kv = MemoryKeyValueStore()
        kv.put("t", "k", "v")
        assert kv.get("t", "k") == "v"
        kv.remove("t", "k")
        assert kv.get("t", "k") is None

    def test_get_all_returns_copy(self) -> None:
        kv = MemoryKeyValueStore()
        kv.put("t", "k", "v")
        kv.get_all("t")["k"] = "changed"
        assert kv.get("t", "k") == "v"

    def test_instances_are_isolated(self) -> None:
        first, second = MemoryKeyValueStore(), MemoryKeyValueStore()
        first.put("t", "k", "v")
        assert second.get("t", "k") is None


class TestKeyLock:
    def test_same_location_shares_lock(self, tmp_path: Path) -> None:
        a = key_lock(FileKeyValueStore(tmp_path), "t", "k")
        b = key_lock(FileKeyValueStore(tmp_path), "t", "k")
        assert a is b

    def test_different_keys_do_not_share(self, tmp_path: Path) -> None:
        kv = FileKeyValueStore(tmp_path)
        assert key_lock(kv, "t", "a") is not key_lock(kv, "t", "b")

    def test_memory_stores_have_distinct_locations(self) -> None:
        locations = {MemoryKeyValueStore().location for _ in range(5)}
        assert len(locations) == 5

    def test_unused_lock_is_released(self) -> None:
        kv = MemoryKeyValueStore()
        lock = key_lock(kv, "t", "k")
        ident = (kv.location, "t", "k")
        assert kvstore._locks.get(ident) is lock
        del lock
        gc.collect()
        assert kvstore._locks.get(ident) is None
