"""Intermediate section models produced by the section extractor."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Section(BaseModel):
    """A named region of a document delimited by a SECTION header."""

    name: str
    body: str


class SectionScan(BaseModel):
    """The result of scanning a document for SECTION headers.

    ``kind`` is ``"no_structure"`` only when no header matched anywhere,
    which tells the chunker to fall back to paragraph splitting. Matched
    headers whose sections were all dropped still count as structure,
    with an empty ``sections`` list.
    """

    kind: Literal["sections", "no_structure"]
    sections: list[Section] = Field(default_factory=list)

    @classmethod
    def found(cls, sections: list[Section]) -> SectionScan:
        return cls(kind="sections", sections=sections)

    @classmethod
    def no_structure(cls) -> SectionScan:
        return cls(kind="no_structure")

    @property
    def has_structure(self) -> bool:
        return self.kind == "sections"
