"""Support document reader for plain-text and PDF sources."""

import logging
from pathlib import Path

import chardet

from support_kb.models.document import Document

logger = logging.getLogger(__name__)

# Supported file extensions mapped to format identifiers
SUPPORTED_FORMATS: dict[str, str] = {
    ".txt": "txt",
    ".md": "txt",
    ".pdf": "pdf",
}


class DocumentReader:
    """Reads support documents from disk into Document objects.

    The file name becomes the document's source, which is the key the
    chunk store groups rows under.
    """

    def read(self, file_path: str | Path) -> Document:
        """Read a document file.

        Args:
            file_path: Path to the document.

        Returns:
            A Document with the extracted text.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the file format is not supported.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        file_format = self._detect_format(path)
        if file_format == "pdf":
            content = self._read_pdf(path)
        else:
            content = self._read_txt(path)

        logger.info("Extracted %d characters from %s", len(content), path.name)
        return Document(source=path.name, content=content, file_format=file_format)

    def _detect_format(self, file_path: Path) -> str:
        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_FORMATS.keys())}"
            )
        return SUPPORTED_FORMATS[ext]

    def _read_pdf(self, file_path: Path) -> str:
        """Extract text from a PDF file using pymupdf (fitz).

        Pages are joined with a blank line so that page breaks act as
        paragraph breaks for the chunker.
        """
        import fitz  # type: ignore[import-untyped]

        with fitz.open(str(file_path)) as doc:
            pages = [page.get_text("text") for page in doc]
        return "\n\n".join(p for p in pages if p.strip())

    def _read_txt(self, file_path: Path) -> str:
        """Read a plain text file, detecting the encoding if not UTF-8."""
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            pass

        raw_bytes = file_path.read_bytes()
        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or "utf-8"
        confidence = detected.get("confidence", 0)

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.error("Failed to decode %s as %s, replacing bad bytes", file_path, encoding)
            return raw_bytes.decode("utf-8", errors="replace")
