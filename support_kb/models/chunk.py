"""Chunk data models."""

from pydantic import BaseModel, Field


def section_prefix(section: str) -> str:
    """Return the context prefix stored ahead of a section's chunk text."""
    return f"[{section}]\n\n"


class Chunk(BaseModel):
    """A bounded-size unit of document text with a display title.

    ``content`` never carries the section prefix; ``embedding_text`` adds
    it back for the text that gets embedded and persisted.
    """

    title: str
    content: str
    section: str | None = None  # None for paragraph-fallback chunks
    source: str | None = None
    index: int = 0

    @property
    def embedding_text(self) -> str:
        if self.section is None:
            return self.content
        return section_prefix(self.section) + self.content


class StoredChunk(BaseModel):
    """A row in the chunk store, keyed by (source, chunk_index)."""

    source: str
    chunk_index: int
    content: str
    embedding: list[float] = Field(default_factory=list)
