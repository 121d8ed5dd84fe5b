"""Chunk persistence backends."""

from support_kb.storage.base import ChunkStore
from support_kb.storage.sqlite_store import SQLiteChunkStore

__all__ = ["ChunkStore", "SQLiteChunkStore"]
