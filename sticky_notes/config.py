"""StickyNotes configuration loaded from environment variables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

from sticky_notes.kvstore import (
    FileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
)

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class Settings(BaseSettings):
    """Application settings loaded from ``STICKY_NOTES_*`` variables or a .env file."""

    model_config = {
        "env_prefix": "STICKY_NOTES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Storage
    storage_backend: Literal["file", "redis", "memory"] = "file"
    storage_dir: Path = Path.home() / ".sticky_notes"
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "sticky_notes:"
    notes_table: str = "sticky_notes_prefs"
    notes_key: str = "notes_json"
    on_corrupt: Literal["empty", "raise"] = "empty"

    # Behaviour
    require_non_blank: bool = True

    # Logging
    log_level: str = "INFO"

    # MCP server
    mcp_transport: Literal["stdio", "sse", "streamable-http"] = "stdio"
    mcp_host: str = "127.0.0.1"
    mcp_port: int = 8001


def configure_logging(config: Settings) -> None:
    """Root logging setup shared by the entry points."""
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)


def build_key_value_store(config: Settings) -> KeyValueStore:
    """Instantiate the configured key-value backend."""
    if config.storage_backend == "redis":
        return RedisKeyValueStore(config.redis_url, prefix=config.redis_prefix)
    if config.storage_backend == "memory":
        return MemoryKeyValueStore()
    return FileKeyValueStore(config.storage_dir)


settings = Settings()
