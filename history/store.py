"""
SQLite store for document analyses
"""

import os
import sqlite3
import threading
from contextlib import closing
from typing import List, Optional, Tuple

from document_geometry.models import DocumentAnalysis


class StoreError(Exception):
    """Raised when a history store operation fails."""
    pass


COLUMNS = (
    "imagePath",
    "paperSize",
    "fontSize",
    "topMargin",
    "bottomMargin",
    "leftMargin",
    "rightMargin",
    "createdAt",
)


class AnalysisStore:
    """Durable, id-keyed records of previous analyses."""

    def __init__(self, db_path: str):
        """
        Open (and create if needed) the database.

        Args:
            db_path: Path to the SQLite file, or ":memory:"
        """
        self.db_path = db_path
        self._memory_connection = None
        self._lock = threading.Lock()
        if db_path == ":memory:":
            # one shared connection; every use goes through self._lock
            self._memory_connection = sqlite3.connect(":memory:", check_same_thread=False)
            self._memory_connection.row_factory = sqlite3.Row
        else:
            directory = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(directory, exist_ok=True)
        self.create_tables()

    def _connect(self) -> sqlite3.Connection:
        if self._memory_connection is not None:
            return self._memory_connection
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _execute(self, sql: str, params: tuple = ()) -> Tuple[int, int]:
        """Run a write statement; returns (lastrowid, rowcount)."""
        with self._lock:
            conn = self._connect()
            try:
                with conn:
                    cursor = conn.execute(sql, params)
                    return cursor.lastrowid or 0, cursor.rowcount
            except sqlite3.Error as e:
                raise StoreError(f"Database error: {e}") from e
            finally:
                if conn is not self._memory_connection:
                    conn.close()

    def _query(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        with self._lock:
            conn = self._connect()
            try:
                with closing(conn.execute(sql, params)) as cursor:
                    return cursor.fetchall()
            except sqlite3.Error as e:
                raise StoreError(f"Database error: {e}") from e
            finally:
                if conn is not self._memory_connection:
                    conn.close()

    def create_tables(self):
        self._execute('''
            CREATE TABLE IF NOT EXISTS documents (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                imagePath TEXT NOT NULL,
                paperSize TEXT NOT NULL,
                fontSize REAL NOT NULL,
                topMargin REAL NOT NULL,
                bottomMargin REAL NOT NULL,
                leftMargin REAL NOT NULL,
                rightMargin REAL NOT NULL,
                createdAt INTEGER NOT NULL
            )
        ''')

    def create(self, analysis: DocumentAnalysis) -> int:
        """
        Store an analysis.

        Returns:
            The new record id
        """
        data = analysis.to_dict()
        placeholders = ", ".join("?" for _ in COLUMNS)
        record_id, _ = self._execute(
            f"INSERT INTO documents ({', '.join(COLUMNS)}) VALUES ({placeholders})",
            tuple(data[column] for column in COLUMNS),
        )
        return int(record_id)

    def list_all(self) -> List[DocumentAnalysis]:
        """All stored analyses, newest first."""
        rows = self._query("SELECT * FROM documents ORDER BY createdAt DESC, id DESC")
        return [DocumentAnalysis.from_dict(dict(row)) for row in rows]

    def get(self, record_id: int) -> Optional[DocumentAnalysis]:
        rows = self._query("SELECT * FROM documents WHERE id = ?", (record_id,))
        if not rows:
            return None
        return DocumentAnalysis.from_dict(dict(rows[0]))

    def delete(self, record_id: int) -> bool:
        """Delete one record; False if it did not exist."""
        _, removed = self._execute("DELETE FROM documents WHERE id = ?", (record_id,))
        return removed > 0

    def clear(self) -> int:
        """Delete every record; returns how many were removed."""
        _, removed = self._execute("DELETE FROM documents")
        return removed

    def close(self):
        with self._lock:
            if self._memory_connection is not None:
                self._memory_connection.close()
                self._memory_connection = None
