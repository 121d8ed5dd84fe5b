"""Data models for the support knowledge-base tooling."""

from support_kb.models.chunk import Chunk, StoredChunk, section_prefix
from support_kb.models.document import Document
from support_kb.models.parsed import Section, SectionScan
from support_kb.models.report import IngestionReport

__all__ = [
    "Chunk",
    "Document",
    "IngestionReport",
    "Section",
    "SectionScan",
    "StoredChunk",
    "section_prefix",
]
