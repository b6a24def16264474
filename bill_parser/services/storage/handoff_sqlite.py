"""
SQLite-backed handoff store.

Keeps the handoff document across restarts of the API or between CLI runs.
Still one value per key and no history: a write replaces what was there.
"""

import sqlite3
from datetime import datetime, UTC
from typing import Optional
from .handoff_store_base import HandoffStoreBase


class SQLiteHandoffStore(HandoffStoreBase):
    """
    SQLite key-value store for handoff payloads.

    Features:
    - Persistent storage across application restarts
    - Last write wins (INSERT OR REPLACE on the key)
    - Records when each key was last written
    """

    def __init__(self, db_path: str = "handoff.db"):
        """
        Initialize store with database path.

        Args:
            db_path: Path to SQLite database file (default: handoff.db)
        """
        self.db_path = db_path
        self._init_database()

    def _init_database(self):
        """Create handoff table if it doesn't exist"""
        conn = sqlite3.connect(self.db_path)
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS handoff (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        conn.commit()
        conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory"""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("SELECT value FROM handoff WHERE key = ?", (key,))

        row = cursor.fetchone()
        conn.close()

        if row is None:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        conn = self._get_connection()
        cursor = conn.cursor()

        cursor.execute("""
            INSERT OR REPLACE INTO handoff (key, value, updated_at)
            VALUES (?, ?, ?)
        """, (key, value, datetime.now(UTC).isoformat()))

        conn.commit()
        conn.close()

    def clear(self) -> None:
        conn = self._get_connection()
        conn.execute("DELETE FROM handoff")
        conn.commit()
        conn.close()
