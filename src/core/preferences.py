"""Per-user preference store (core domain)."""

from __future__ import annotations

import logging
from typing import Optional

from core.errors import StorageError
from core.ports import PreferenceBackend

LOGGER = logging.getLogger(__name__)


class PreferenceStore:
    """In-memory set of enabled users, persisted through a backend.

    The set is authoritative while the process runs. Backend failures are
    logged and never propagate, so an outage only loses the latest toggles
    on the next restart.
    """

    def __init__(self, backend: PreferenceBackend) -> None:
        self._backend = backend
        self._enabled: Optional[set[str]] = None

    @property
    def loaded(self) -> bool:
        return self._enabled is not None

    def load(self) -> int:
        """Fill the cache from the backend and return the enabled count."""

        try:
            enabled = set(self._backend.load_enabled())
        except StorageError:
            LOGGER.exception("Failed to load user preferences; starting empty")
            enabled = set()
        self._enabled = enabled
        return len(enabled)

    def _require_loaded(self) -> set[str]:
        if self._enabled is None:
            raise RuntimeError("PreferenceStore.load() must run before use")
        return self._enabled

    def is_enabled(self, user_id: str) -> bool:
        return user_id in self._require_loaded()

    def set_enabled(self, user_id: str, enabled: bool) -> None:
        """Upsert the preference; the cache is updated even if saving fails."""

        cache = self._require_loaded()
        if enabled:
            cache.add(user_id)
        else:
            cache.discard(user_id)

        try:
            self._backend.save(user_id, enabled)
        except StorageError:
            LOGGER.exception("Failed to persist preference for user %s", user_id)

    def enabled_users(self) -> list[str]:
        return sorted(self._require_loaded())
