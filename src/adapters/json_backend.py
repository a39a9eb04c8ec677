"""Flat-file preference backend.

Stores the enabled user ids as ``{"enabledUsers": [...]}`` in a JSON file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Optional

from core.errors import StorageError

LOGGER = logging.getLogger(__name__)

ENABLED_USERS_KEY = "enabledUsers"


class JsonFileBackend:
    """JSON file adapter that satisfies the PreferenceBackend contract."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._enabled: Optional[set[str]] = None

    @property
    def path(self) -> str:
        return self._path

    def _read(self) -> set[str]:
        if not os.path.exists(self._path):
            LOGGER.info("Settings file %s not found, starting empty", self._path)
            return set()
        try:
            with open(self._path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc

        users = data.get(ENABLED_USERS_KEY, []) if isinstance(data, dict) else None
        if not isinstance(users, list):
            raise StorageError(f"{self._path}: '{ENABLED_USERS_KEY}' must be a list")
        return {str(user_id) for user_id in users}

    def _write(self, enabled: set[str]) -> None:
        # Readers only ever see a complete document: write a sibling temp file, then swap.
        directory = os.path.dirname(os.path.abspath(self._path))
        payload = {ENABLED_USERS_KEY: sorted(enabled)}
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".settings-", suffix=".json", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(payload, handle, indent=2)
                    handle.write("\n")
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc

    def load_enabled(self) -> set[str]:
        self._enabled = self._read()
        return set(self._enabled)

    def save(self, user_id: str, enabled: bool) -> None:
        if self._enabled is None:
            self._enabled = self._read()
        updated = set(self._enabled)
        if enabled:
            updated.add(user_id)
        else:
            updated.discard(user_id)
        self._write(updated)
        self._enabled = updated
