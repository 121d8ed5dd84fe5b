"""Ingestion run report model."""

from pydantic import BaseModel


class IngestionReport(BaseModel):
    """Outcome of ingesting one source document."""

    source: str
    status: str  # "ingested", "skipped", "missing"
    chunk_count: int = 0
    replaced: int = 0  # pre-existing rows deleted before re-ingestion
