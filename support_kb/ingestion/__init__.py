"""Document ingestion: reading, section extraction, chunking and embedding."""

from support_kb.ingestion.chunker import DocumentChunker, chunk
from support_kb.ingestion.parser import DocumentReader
from support_kb.ingestion.pipeline import IngestionPipeline
from support_kb.ingestion.sections import extract_sections, strip_delimiters

__all__ = [
    "DocumentChunker",
    "DocumentReader",
    "IngestionPipeline",
    "chunk",
    "extract_sections",
    "strip_delimiters",
]
