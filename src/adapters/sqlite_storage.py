"""SQLite preference backend.

Implements the core PreferenceBackend using a simple SQLite database.
"""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from core.errors import StorageError


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the PreferenceBackend contract."""

    def __init__(self, db_path: str, read_only: bool = False) -> None:
        self._db_path = db_path
        self._read_only = read_only

    def _connect(self) -> sqlite3.Connection:
        if self._read_only:
            uri = Path(self._db_path).resolve().as_uri() + "?mode=ro"
            conn = sqlite3.connect(uri, uri=True)
        else:
            conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create the user_settings table if it does not exist.

        Fields:
        - user_id: opaque platform user id (PRIMARY KEY)
        - enabled: whether links from this user are rewritten
        - created_at: when the user first toggled the setting
        """

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS user_settings (
                        user_id TEXT PRIMARY KEY,
                        enabled BOOLEAN NOT NULL DEFAULT 0,
                        created_at TIMESTAMP NOT NULL
                    )
                    """
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot initialize {self._db_path}: {exc}") from exc

    def load_enabled(self) -> set[str]:
        """Return every user id stored with enabled = 1."""

        if self._read_only and not os.path.exists(self._db_path):
            return set()
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT user_id FROM user_settings WHERE enabled = 1").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot load preferences from {self._db_path}: {exc}") from exc
        return {row["user_id"] for row in rows}

    def save(self, user_id: str, enabled: bool) -> None:
        """Upsert the preference; created_at keeps its first value."""

        created_at = datetime.now(timezone.utc)
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO user_settings (user_id, enabled, created_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET enabled = excluded.enabled
                    """,
                    (user_id, int(enabled), created_at.isoformat()),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot save preference for {user_id}: {exc}") from exc
