"""SQLite-backed inverted index."""
from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Mapping

from domain.errors import IndexUnavailable
from domain.interfaces import TermIndex

logger = logging.getLogger(__name__)


class SqliteTermIndex(TermIndex):
    """Stores postings in a lightweight SQLite database."""

    backend = "sqlite"

    def __init__(self, db_path: str | Path = "termsearch.db") -> None:
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_schema(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS schema_version (
                        id INTEGER PRIMARY KEY CHECK (id = 1),
                        version INTEGER NOT NULL
                    )
                    """
                )
                conn.execute("INSERT OR IGNORE INTO schema_version (id, version) VALUES (1, 1)")
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS documents (
                        document_id TEXT PRIMARY KEY
                    )
                    """
                )
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS postings (
                        term TEXT NOT NULL,
                        document_id TEXT NOT NULL,
                        count INTEGER NOT NULL CHECK (count >= 0),
                        PRIMARY KEY (term, document_id)
                    )
                    """
                )
                conn.execute("CREATE INDEX IF NOT EXISTS idx_postings_document_id ON postings (document_id)")
        except sqlite3.Error as exc:
            logger.error("Cannot prepare term index at %s: %s", self._db_path, exc)
            raise IndexUnavailable(self.backend, str(exc)) from exc

    def lookup(self, term: str) -> dict[str, int]:
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT document_id, count FROM postings WHERE term = ?",
                    (term,),
                ).fetchall()
        except sqlite3.Error as exc:
            logger.exception("Lookup of term %r failed.", term)
            raise IndexUnavailable(self.backend, str(exc)) from exc
        return {row[0]: int(row[1]) for row in rows}

    def add_counts(self, document_id: str, counts: Mapping[str, int]) -> None:
        rows = [(term, document_id, int(count)) for term, count in counts.items() if count > 0]
        try:
            with self._connect() as conn:
                conn.execute("DELETE FROM postings WHERE document_id = ?", (document_id,))
                conn.execute("REPLACE INTO documents (document_id) VALUES (?)", (document_id,))
                conn.executemany(
                    "INSERT INTO postings (term, document_id, count) VALUES (?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as exc:
            logger.exception("Indexing of %s failed.", document_id)
            raise IndexUnavailable(self.backend, str(exc)) from exc

    def is_indexed(self, document_id: str) -> bool:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "SELECT 1 FROM documents WHERE document_id = ?",
                    (document_id,),
                ).fetchone()
        except sqlite3.Error as exc:
            raise IndexUnavailable(self.backend, str(exc)) from exc
        return row is not None

    def terms(self) -> set[str]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT DISTINCT term FROM postings").fetchall()
        except sqlite3.Error as exc:
            raise IndexUnavailable(self.backend, str(exc)) from exc
        return {row[0] for row in rows}


__all__ = ["SqliteTermIndex"]
