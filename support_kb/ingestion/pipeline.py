"""Batch ingestion: read, chunk, embed and persist support documents."""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from support_kb.ingestion.chunker import DocumentChunker
from support_kb.ingestion.parser import DocumentReader
from support_kb.models.chunk import Chunk, StoredChunk
from support_kb.models.document import Document
from support_kb.models.report import IngestionReport
from support_kb.storage.base import ChunkStore

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    """Turns one chunk text into an embedding vector, e.g. EdgeFunctionEmbedder."""

    def embed(self, text: str) -> list[float]: ...


class IngestionPipeline:
    """Replaces the stored chunks of a source with freshly embedded ones.

    Chunks are embedded and inserted one at a time, in order. Any
    embedding or storage error propagates and aborts the rest of that
    document; rerunning with ``force=True`` clears the partial rows.

    Args:
        chunker: DocumentChunker used to split document text.
        embedder: Anything with ``embed(text) -> list[float]``.
        store: ChunkStore that receives the rows.
        reader: DocumentReader for file-based ingestion.
    """

    def __init__(
        self,
        chunker: DocumentChunker,
        embedder: Embedder,
        store: ChunkStore,
        reader: DocumentReader | None = None,
    ) -> None:
        self._chunker = chunker
        self._embedder = embedder
        self._store = store
        self._reader = reader or DocumentReader()

    def ingest_document(self, document: Document, force: bool = False) -> IngestionReport:
        """Chunk, embed and persist one document.

        Args:
            document: The document to ingest.
            force: Delete and redo a source that already has chunks.

        Returns:
            IngestionReport with status "ingested" or "skipped".
        """
        replaced = self._clear_existing(document.source, force)
        if replaced is None:
            return IngestionReport(source=document.source, status="skipped")

        chunks = self._chunker.chunk_document(document)
        count = self._persist(document.source, chunks)
        return IngestionReport(
            source=document.source, status="ingested", chunk_count=count, replaced=replaced
        )

    def ingest_chunks(
        self, source: str, chunks: list[Chunk], force: bool = False
    ) -> IngestionReport:
        """Persist an already-chunked (possibly hand-edited) chunk list."""
        replaced = self._clear_existing(source, force)
        if replaced is None:
            return IngestionReport(source=source, status="skipped")

        count = self._persist(source, chunks)
        return IngestionReport(
            source=source, status="ingested", chunk_count=count, replaced=replaced
        )

    def ingest_paths(self, paths: Iterable[Path], force: bool = False) -> list[IngestionReport]:
        """Ingest each file in turn. Missing files are reported, not raised."""
        reports = []
        for path in paths:
            if not path.exists():
                logger.warning('"%s" not found, skipping', path.name)
                reports.append(IngestionReport(source=path.name, status="missing"))
                continue
            document = self._reader.read(path)
            reports.append(self.ingest_document(document, force=force))
        return reports

    def ingest_directory(
        self, docs_dir: str | Path, names: Iterable[str], force: bool = False
    ) -> list[IngestionReport]:
        """Ingest the named documents from a directory."""
        base = Path(docs_dir)
        return self.ingest_paths((base / name for name in names), force=force)

    def list_sources(self) -> list[str]:
        return self._store.list_sources()

    def delete_source(self, source: str) -> int:
        """Remove every stored chunk of a source."""
        return self._store.delete_by_source(source)

    def _clear_existing(self, source: str, force: bool) -> int | None:
        """Delete existing rows when forced.

        Returns:
            Number of rows removed, or None if the source should be skipped.
        """
        count = self._store.count_by_source(source)
        if count == 0:
            return 0
        if not force:
            logger.info('"%s" already ingested (%d chunks), skipping', source, count)
            return None
        logger.info('"%s" has %d chunks, deleting for re-ingestion', source, count)
        self._store.delete_by_source(source)
        return count

    def _persist(self, source: str, chunks: list[Chunk]) -> int:
        total = len(chunks)
        for i, chunk in enumerate(chunks):
            text = chunk.embedding_text
            embedding = self._embedder.embed(text)
            self._store.insert(
                StoredChunk(source=source, chunk_index=i, content=text, embedding=embedding)
            )
            logger.debug("Chunk %d/%d of %s stored", i + 1, total, source)
        logger.info('Done: "%s" (%d chunks ingested)', source, total)
        return total
