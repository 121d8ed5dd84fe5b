"""SQLite chunk store for local, offline ingestion runs."""

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from support_kb.errors import StorageError
from support_kb.models.chunk import StoredChunk

logger = logging.getLogger(__name__)


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Create a connection to the SQLite database.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A sqlite3 Connection with row_factory set to Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def initialize_database(db_path: str | Path) -> None:
    """Create the document_chunks table if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS document_chunks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                source TEXT NOT NULL,
                chunk_index INTEGER NOT NULL,
                content TEXT NOT NULL,
                embedding TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (source, chunk_index)
            );

            CREATE INDEX IF NOT EXISTS idx_document_chunks_source
                ON document_chunks (source);
            """
        )
        conn.commit()
    finally:
        conn.close()


class SQLiteChunkStore:
    """Stores chunk rows in a local SQLite file.

    Embeddings are stored as JSON text, the same shape the hosted table
    receives.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        initialize_database(self._db_path)

    def count_by_source(self, source: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM document_chunks WHERE source = ?", (source,)
            ).fetchone()
        return int(row[0])

    def delete_by_source(self, source: str) -> int:
        with self._connect() as conn:
            deleted = conn.execute(
                "DELETE FROM document_chunks WHERE source = ?", (source,)
            ).rowcount
        logger.info("Deleted %d chunks for %s", deleted, source)
        return deleted

    def insert(self, row: StoredChunk) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO document_chunks (source, chunk_index, content, embedding) "
                "VALUES (?, ?, ?, ?)",
                (row.source, row.chunk_index, row.content, json.dumps(row.embedding)),
            )

    def list_sources(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT DISTINCT source FROM document_chunks ORDER BY source"
            ).fetchall()
        return [r["source"] for r in rows]

    def fetch_by_source(self, source: str) -> list[StoredChunk]:
        """Return a source's rows in chunk_index order."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT source, chunk_index, content, embedding FROM document_chunks "
                "WHERE source = ? ORDER BY chunk_index",
                (source,),
            ).fetchall()
        return [
            StoredChunk(
                source=r["source"],
                chunk_index=r["chunk_index"],
                content=r["content"],
                embedding=json.loads(r["embedding"]),
            )
            for r in rows
        ]

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection that commits on success and always closes."""
        conn = get_connection(self._db_path)
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise StorageError(f"SQLite operation failed: {e}") from e
        finally:
            conn.close()
