"""Shared fixtures."""

import pytest

from support_kb.config import ChunkingConfig
from support_kb.ingestion.chunker import DocumentChunker


@pytest.fixture
def config() -> ChunkingConfig:
    return ChunkingConfig()


@pytest.fixture
def chunker(config: ChunkingConfig) -> DocumentChunker:
    return DocumentChunker(config=config)
