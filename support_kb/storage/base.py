"""Chunk store interface."""

from typing import Protocol

from support_kb.models.chunk import StoredChunk


class ChunkStore(Protocol):
    """Persistence for embedded chunks, keyed by (source, chunk_index)."""

    def count_by_source(self, source: str) -> int: ...

    def delete_by_source(self, source: str) -> int: ...

    def insert(self, row: StoredChunk) -> None: ...

    def list_sources(self) -> list[str]: ...
