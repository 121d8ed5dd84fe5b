"""SECTION header extraction for plain-text support documents.

Documents mark their structure with a three-line header::

    =====
    SECTION: Deposits
    =====

Everything up to the next header belongs to that section.
"""

import logging
import re

from support_kb.models.parsed import Section, SectionScan

logger = logging.getLogger(__name__)

# Five or more "=", a SECTION line, five or more "=".
SECTION_HEADER = re.compile(r"={5,}\nSECTION:\s*(.+)\n={5,}")

# A whole header block, or a bare run of "=" with trailing blanks.
DELIMITER_RESIDUE = re.compile(r"={5,}(?:\nSECTION:\s*.+\n={5,}|[ \t]*)")

END_SENTINEL = "END OF DOCUMENT"


def strip_delimiters(text: str) -> str:
    """Remove header blocks and stray "=" rules from text, then trim it."""
    return DELIMITER_RESIDUE.sub("", text).strip()


def extract_sections(text: str) -> SectionScan:
    """Split a document into its named sections.

    Each body runs from the end of its header to the start of the next
    header match, so no part of the following delimiter leaks in.

    Args:
        text: Raw document text.

    Returns:
        A SectionScan. It reports no structure only when no header matched;
        if every matched section was dropped (empty body or the
        END OF DOCUMENT sentinel) the section list is empty.
    """
    matches = list(SECTION_HEADER.finditer(text))
    if not matches:
        return SectionScan.no_structure()

    sections: list[Section] = []
    for i, match in enumerate(matches):
        name = match.group(1).strip()
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        body = strip_delimiters(text[match.end():end])

        if name == END_SENTINEL:
            logger.debug("Dropping %s sentinel section", END_SENTINEL)
            continue
        if not body:
            logger.debug("Dropping empty section: %s", name)
            continue
        sections.append(Section(name=name, body=body))

    return SectionScan.found(sections)
