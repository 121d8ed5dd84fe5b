"""Pre-publish preview of a document's chunks.

An operator stages the chunks of a document, edits or deletes some of
them, then publishes the edited list. Nothing touches the chunk store
until ``publish``.
"""

import logging
from itertools import groupby

from support_kb.config import ChunkingConfig
from support_kb.errors import PreviewError
from support_kb.ingestion.chunker import DocumentChunker
from support_kb.ingestion.pipeline import IngestionPipeline
from support_kb.models.chunk import Chunk
from support_kb.models.report import IngestionReport

logger = logging.getLogger(__name__)


class PreviewSession:
    """An in-memory, editable chunk list for one source."""

    def __init__(self, source: str, chunks: list[Chunk]) -> None:
        self.source = source
        self._chunks = [c.model_copy() for c in chunks]
        self._renumber()

    @classmethod
    def from_text(
        cls, source: str, text: str, config: ChunkingConfig | None = None
    ) -> "PreviewSession":
        chunks = DocumentChunker(config).chunk(text)
        logger.info("Staged %d chunks for %s", len(chunks), source)
        return cls(source, chunks)

    @property
    def chunks(self) -> list[Chunk]:
        return [c.model_copy() for c in self._chunks]

    def __len__(self) -> int:
        return len(self._chunks)

    def edit(self, index: int, content: str) -> Chunk:
        """Replace the text of one staged chunk.

        Raises:
            PreviewError: If the index is out of range or the new text is
                blank. The staged list is left unchanged.
        """
        self._check_index(index)
        text = content.strip()
        if not text:
            raise PreviewError("Chunk content cannot be empty; delete the chunk instead")
        self._chunks[index] = self._chunks[index].model_copy(update={"content": text})
        return self._chunks[index].model_copy()

    def delete(self, index: int) -> Chunk:
        """Drop one staged chunk and renumber the rest."""
        self._check_index(index)
        removed = self._chunks.pop(index)
        self._renumber()
        return removed

    def publish(self, pipeline: IngestionPipeline, force: bool = True) -> IngestionReport:
        """Persist the staged chunks, replacing any stored for this source.

        Failures propagate; the staged list stays as it was so the
        operator can fix it and retry.
        """
        if not self._chunks:
            raise PreviewError(f"Nothing to publish for {self.source}")
        return pipeline.ingest_chunks(self.source, self.chunks, force=force)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._chunks):
            raise PreviewError(
                f"No chunk at index {index} ({len(self._chunks)} staged)"
            )

    def _renumber(self) -> None:
        for i, chunk in enumerate(self._chunks):
            chunk.index = i
            chunk.source = self.source

        fallback = [c for c in self._chunks if c.section is None]
        for n, chunk in enumerate(fallback, start=1):
            chunk.title = f"Section {n}"

        # Parts of a split section are numbered only while more than one remains.
        for name, group in groupby(self._chunks, key=lambda c: c.section):
            if name is None:
                continue
            parts = list(group)
            if len(parts) == 1:
                parts[0].title = name
                continue
            for n, chunk in enumerate(parts, start=1):
                chunk.title = f"{name} ({n})"
