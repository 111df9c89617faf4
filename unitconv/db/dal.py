"""Data Access Layer over the SQLite key/value metadata table."""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Optional

from .schema import BASIC_UTC_NOW


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    # ------------------------------------------------------------------
    # Metadata key/value
    def get_value(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set_value(self, key: str, value: str) -> None:
        """Insert or overwrite ``key`` in a single statement."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    f"""
                    INSERT INTO metadata (key, value)
                    VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = ({BASIC_UTC_NOW})
                    """,
                    (key, value),
                )
        finally:
            conn.close()

    def delete_value(self, key: str) -> bool:
        conn = self._connect()
        try:
            with conn:
                cur = conn.execute("DELETE FROM metadata WHERE key = ?", (key,))
                return cur.rowcount > 0
        finally:
            conn.close()
