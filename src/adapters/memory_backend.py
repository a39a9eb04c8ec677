"""In-memory preference backend.

Used when no database is configured; preferences are forgotten on restart.
"""

from __future__ import annotations

from typing import Iterable, Optional


class MemoryBackend:
    """Dict-backed adapter that satisfies the PreferenceBackend contract."""

    def __init__(self, initial: Optional[Iterable[str]] = None) -> None:
        self._records: dict[str, bool] = {user_id: True for user_id in initial or ()}

    def load_enabled(self) -> set[str]:
        return {user_id for user_id, enabled in self._records.items() if enabled}

    def save(self, user_id: str, enabled: bool) -> None:
        self._records[user_id] = enabled
