"""Knowledge-base chunking and ingestion for support documents."""

__version__ = "1.0.0"
