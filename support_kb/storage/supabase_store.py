"""Supabase-backed chunk store for the hosted ``document_chunks`` table."""

import json
import logging

from postgrest.exceptions import APIError
from supabase import Client, create_client

from support_kb.config import SupabaseConfig
from support_kb.errors import StorageError
from support_kb.models.chunk import StoredChunk

logger = logging.getLogger(__name__)


class SupabaseChunkStore:
    """Reads and writes chunk rows through the Supabase client.

    Args:
        config: SupabaseConfig with url, service_role_key and chunks_table.
        client: Optional pre-built client, mainly for tests.
    """

    def __init__(self, config: SupabaseConfig, client: Client | None = None) -> None:
        self._table = config.chunks_table
        self._client = client or create_client(config.url, config.service_role_key)

    def count_by_source(self, source: str) -> int:
        try:
            result = (
                self._client.table(self._table)
                .select("id", count="exact", head=True)
                .eq("source", source)
                .execute()
            )
        except APIError as e:
            raise StorageError(f"Failed to count chunks for {source}: {e.message}") from e
        return result.count or 0

    def delete_by_source(self, source: str) -> int:
        try:
            result = self._client.table(self._table).delete().eq("source", source).execute()
        except APIError as e:
            raise StorageError(f"Failed to delete chunks for {source}: {e.message}") from e
        deleted = len(result.data or [])
        logger.info("Deleted %d chunks for %s", deleted, source)
        return deleted

    def insert(self, row: StoredChunk) -> None:
        payload = {
            "source": row.source,
            "chunk_index": row.chunk_index,
            "content": row.content,
            "embedding": json.dumps(row.embedding),
        }
        try:
            self._client.table(self._table).insert(payload).execute()
        except APIError as e:
            raise StorageError(
                f"Failed to insert chunk {row.chunk_index} of {row.source}: {e.message}"
            ) from e

    def list_sources(self) -> list[str]:
        """List ingested sources via the ``get_available_sources`` RPC."""
        try:
            result = self._client.rpc("get_available_sources").execute()
        except APIError as e:
            raise StorageError(f"Failed to list sources: {e.message}") from e
        return [row["source"] for row in result.data or []]
