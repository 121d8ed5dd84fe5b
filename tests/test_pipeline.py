"""Tests for the ingestion pipeline."""

from pathlib import Path

import pytest

from support_kb.errors import EmbeddingError
from support_kb.ingestion.chunker import DocumentChunker
from support_kb.ingestion.pipeline import IngestionPipeline
from support_kb.models.chunk import Chunk
from support_kb.models.document import Document
from support_kb.storage.sqlite_store import SQLiteChunkStore

from helpers import section


class FakeEmbedder:
    """Records every text it embeds; fails on the n-th call if asked to."""

    def __init__(self, fail_on: int | None = None) -> None:
        self.texts: list[str] = []
        self._fail_on = fail_on

    def embed(self, text: str) -> list[float]:
        if self._fail_on is not None and len(self.texts) == self._fail_on:
            raise EmbeddingError("Embed failed: 546", status_code=546)
        self.texts.append(text)
        return [float(len(text)), 1.0]


@pytest.fixture
def store(tmp_path: Path) -> SQLiteChunkStore:
    return SQLiteChunkStore(tmp_path / "chunks.db")


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def pipeline(
    chunker: DocumentChunker, embedder: FakeEmbedder, store: SQLiteChunkStore
) -> IngestionPipeline:
    return IngestionPipeline(chunker=chunker, embedder=embedder, store=store)


def _doc(source: str = "verification.txt") -> Document:
    content = section("KYC", "Upload a photo ID.") + section("Limits", "Daily limit is 10k.")
    return Document(source=source, content=content)


class TestIngestDocument:
    def test_persists_prefixed_content(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore, embedder: FakeEmbedder
    ) -> None:
        report = pipeline.ingest_document(_doc())

        assert report.status == "ingested"
        assert report.chunk_count == 2
        rows = store.fetch_by_source("verification.txt")
        assert [(r.chunk_index, r.content) for r in rows] == [
            (0, "[KYC]\n\nUpload a photo ID."),
            (1, "[Limits]\n\nDaily limit is 10k."),
        ]
        assert embedder.texts == [r.content for r in rows]
        assert rows[0].embedding == [float(len(rows[0].content)), 1.0]

    def test_fallback_chunks_have_no_prefix(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore
    ) -> None:
        doc = Document(source="plain.txt", content="n" * 80 + "\n\n" + "o" * 80)
        pipeline.ingest_document(doc)
        assert [r.content for r in store.fetch_by_source("plain.txt")] == ["n" * 80, "o" * 80]

    def test_existing_source_skipped_without_force(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore, embedder: FakeEmbedder
    ) -> None:
        pipeline.ingest_document(_doc())
        embedder.texts.clear()

        report = pipeline.ingest_document(_doc())
        assert report.status == "skipped"
        assert embedder.texts == []
        assert store.count_by_source("verification.txt") == 2

    def test_force_replaces_existing_rows(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore
    ) -> None:
        pipeline.ingest_document(_doc())
        smaller = Document(source="verification.txt", content=section("KYC", "Only this."))

        report = pipeline.ingest_document(smaller, force=True)
        assert report.replaced == 2
        assert report.chunk_count == 1
        assert [r.content for r in store.fetch_by_source("verification.txt")] == [
            "[KYC]\n\nOnly this."
        ]

    def test_embedding_failure_aborts_remaining_chunks(
        self, chunker: DocumentChunker, store: SQLiteChunkStore
    ) -> None:
        pipeline = IngestionPipeline(chunker=chunker, embedder=FakeEmbedder(fail_on=1), store=store)
        with pytest.raises(EmbeddingError):
            pipeline.ingest_document(_doc())
        assert store.count_by_source("verification.txt") == 1

    def test_forced_rerun_clears_partial_ingestion(
        self, chunker: DocumentChunker, store: SQLiteChunkStore
    ) -> None:
        failing = IngestionPipeline(chunker=chunker, embedder=FakeEmbedder(fail_on=1), store=store)
        with pytest.raises(EmbeddingError):
            failing.ingest_document(_doc())

        working = IngestionPipeline(chunker=chunker, embedder=FakeEmbedder(), store=store)
        report = working.ingest_document(_doc(), force=True)
        assert report.replaced == 1
        assert [r.chunk_index for r in store.fetch_by_source("verification.txt")] == [0, 1]

    def test_sentinel_only_document_stores_nothing(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore, embedder: FakeEmbedder
    ) -> None:
        doc = Document(source="trailer.txt", content=section("END OF DOCUMENT", "x" * 80))
        report = pipeline.ingest_document(doc)
        assert report.chunk_count == 0
        assert embedder.texts == []
        assert store.count_by_source("trailer.txt") == 0


class TestIngestChunks:
    def test_renumbers_edited_list(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore
    ) -> None:
        chunks = [
            Chunk(title="B", content="second", section="B", index=5),
            Chunk(title="Section 2", content="plain", index=9),
        ]
        pipeline.ingest_chunks("edited.txt", chunks)
        rows = store.fetch_by_source("edited.txt")
        assert [(r.chunk_index, r.content) for r in rows] == [(0, "[B]\n\nsecond"), (1, "plain")]


class TestIngestFiles:
    def test_ingest_directory(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore, tmp_path: Path
    ) -> None:
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "loyalty-program.txt").write_text(
            section("Tiers", "Bronze, Silver, Gold."), encoding="utf-8"
        )

        reports = pipeline.ingest_directory(docs, ["loyalty-program.txt", "questions.txt"])

        assert [(r.source, r.status) for r in reports] == [
            ("loyalty-program.txt", "ingested"),
            ("questions.txt", "missing"),
        ]
        assert store.list_sources() == ["loyalty-program.txt"]

    def test_list_and_delete_source(
        self, pipeline: IngestionPipeline, store: SQLiteChunkStore
    ) -> None:
        pipeline.ingest_document(_doc("a.txt"))
        pipeline.ingest_document(_doc("b.txt"))
        assert pipeline.list_sources() == ["a.txt", "b.txt"]

        assert pipeline.delete_source("a.txt") == 2
        assert pipeline.list_sources() == ["b.txt"]
