"""PostgreSQL preference backend.

Implements the core PreferenceBackend against the same user_settings table
as the SQLite adapter, for hosted deployments that provide DATABASE_URL.
"""

from __future__ import annotations

import psycopg

from core.errors import StorageError


class PostgresStorage:
    """Thin psycopg wrapper that satisfies the PreferenceBackend contract."""

    def __init__(self, dsn: str, read_only: bool = False) -> None:
        self._dsn = dsn
        self._read_only = read_only

    def _connect(self) -> psycopg.Connection:
        conn = psycopg.connect(self._dsn)
        if self._read_only:
            conn.read_only = True
        return conn

    def init_db(self) -> None:
        """Create the user_settings table if it does not exist."""

        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS user_settings (
                        user_id TEXT PRIMARY KEY,
                        enabled BOOLEAN NOT NULL DEFAULT FALSE,
                        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
        except psycopg.Error as exc:
            raise StorageError(f"Cannot initialize user_settings: {exc}") from exc

    def load_enabled(self) -> set[str]:
        try:
            with self._connect() as conn:
                rows = conn.execute("SELECT user_id FROM user_settings WHERE enabled = TRUE").fetchall()
        except psycopg.Error as exc:
            raise StorageError(f"Cannot load preferences: {exc}") from exc
        return {str(row[0]) for row in rows}

    def save(self, user_id: str, enabled: bool) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO user_settings (user_id, enabled, created_at)
                    VALUES (%s, %s, NOW())
                    ON CONFLICT (user_id) DO UPDATE SET enabled = EXCLUDED.enabled
                    """,
                    (user_id, enabled),
                )
        except psycopg.Error as exc:
            raise StorageError(f"Cannot save preference for {user_id}: {exc}") from exc
