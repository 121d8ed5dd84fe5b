"""Section-aware text chunker for support documents."""

import logging
import re

from support_kb.config import ChunkingConfig
from support_kb.ingestion.sections import extract_sections, strip_delimiters
from support_kb.models.chunk import Chunk, section_prefix
from support_kb.models.document import Document
from support_kb.models.parsed import Section

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = re.compile(r"\n{2,}")

# Joins two paragraphs packed into one chunk.
JOINER = "\n\n"


class DocumentChunker:
    """Splits document text into bounded, context-prefixed chunks.

    Chunking strategy:
    1. Sectioned: one chunk per SECTION; a section whose prefixed text
       exceeds ``max_chars`` is split greedily on paragraph boundaries.
    2. Fallback: with no usable sections, every paragraph longer than
       ``min_paragraph_chars`` becomes a chunk titled "Section N".

    A paragraph is never cut. One that alone exceeds ``max_chars``
    becomes its own oversized chunk.

    Args:
        config: ChunkingConfig with max_chars and min_paragraph_chars.
    """

    def __init__(self, config: ChunkingConfig | None = None) -> None:
        self._config = config or ChunkingConfig()

    def chunk(self, text: str) -> list[Chunk]:
        """Split document text into chunks.

        Args:
            text: Raw document text.

        Returns:
            Chunks in document order, indexed from 0. Empty when the text
            holds nothing but whitespace and delimiters.
        """
        scan = extract_sections(text)
        if scan.has_structure:
            chunks = []
            for section in scan.sections:
                chunks.extend(self._chunk_section(section))
        else:
            chunks = self._chunk_by_paragraphs(text)

        for i, item in enumerate(chunks):
            item.index = i
        return chunks

    def chunk_document(self, document: Document) -> list[Chunk]:
        """Chunk a Document and tag every chunk with its source."""
        chunks = self.chunk(document.content)
        for item in chunks:
            item.source = document.source
        logger.info("Split %s into %d chunks", document.source, len(chunks))
        return chunks

    def _chunk_section(self, section: Section) -> list[Chunk]:
        """Chunk one section, sub-splitting it when it is over budget."""
        prefix = section_prefix(section.name)
        limit = self._config.max_chars

        if len(prefix) + len(section.body) <= limit:
            return [Chunk(title=section.name, content=section.body, section=section.name)]

        paragraphs = [p.strip() for p in PARAGRAPH_BREAK.split(section.body)]
        paragraphs = [p for p in paragraphs if p]

        parts: list[str] = []
        current = ""
        for para in paragraphs:
            if current and len(prefix) + len(current) + len(JOINER) + len(para) > limit:
                parts.append(current)
                current = para
            else:
                current = current + JOINER + para if current else para
        if current:
            parts.append(current)

        oversized = [p for p in parts if len(prefix) + len(p) > limit]
        if oversized:
            logger.debug(
                "Keeping %d oversized paragraph(s) whole in %s",
                len(oversized),
                section.name,
            )

        if len(parts) == 1:
            return [Chunk(title=section.name, content=parts[0], section=section.name)]
        return [
            Chunk(title=f"{section.name} ({n})", content=part, section=section.name)
            for n, part in enumerate(parts, start=1)
        ]

    def _chunk_by_paragraphs(self, text: str) -> list[Chunk]:
        """Split unsectioned text on blank lines into "Section N" chunks."""
        cleaned = strip_delimiters(text)
        paragraphs = [
            p.replace("\n", " ").strip() for p in PARAGRAPH_BREAK.split(cleaned)
        ]
        kept = [p for p in paragraphs if len(p) > self._config.min_paragraph_chars]

        if not kept:
            if not cleaned:
                return []
            kept = [cleaned]

        return [
            Chunk(title=f"Section {n}", content=para)
            for n, para in enumerate(kept, start=1)
        ]


def chunk(text: str, config: ChunkingConfig | None = None) -> list[Chunk]:
    """Chunk document text with the given (or default) configuration."""
    return DocumentChunker(config).chunk(text)
