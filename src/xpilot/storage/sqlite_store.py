"""SQLite storage for key-value records."""

import sqlite3
from pathlib import Path

from .base import StorageError


class SQLiteStore:
    """Persistent key-value records in a local SQLite database.

    Each record is a single row; writing an existing key replaces its value
    and bumps updated_at.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize the store with a database path.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create {self.db_path.parent}: {e}") from e
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def init_db(self) -> None:
        """Create the records table if it doesn't exist."""
        try:
            conn = self._get_connection()
            conn.execute("""
                CREATE TABLE IF NOT EXISTS records (
                    key         TEXT PRIMARY KEY,
                    value       TEXT NOT NULL,
                    updated_at  TEXT NOT NULL DEFAULT (datetime('now'))
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialise {self.db_path}: {e}") from e

    def get(self, key: str) -> str | None:
        try:
            cursor = self._get_connection().execute(
                "SELECT value FROM records WHERE key = ?", (key,)
            )
            row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read {key!r}: {e}") from e
        return None if row is None else row["value"]

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._get_connection()
            conn.execute(
                """
                INSERT INTO records (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = datetime('now')
                """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write {key!r}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            conn = self._get_connection()
            conn.execute("DELETE FROM records WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot delete {key!r}: {e}") from e

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
