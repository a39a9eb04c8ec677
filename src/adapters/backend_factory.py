"""Select a preference backend from configuration."""

from __future__ import annotations

import logging
import os
from typing import Optional
from urllib.parse import urlsplit

from adapters.json_backend import JsonFileBackend
from adapters.memory_backend import MemoryBackend
from adapters.postgres_storage import PostgresStorage
from adapters.sqlite_storage import SQLiteStorage
from core.errors import StorageError
from core.ports import PreferenceBackend

LOGGER = logging.getLogger(__name__)

BACKENDS = ("auto", "memory", "json", "database")
POSTGRES_SCHEMES = {"postgres", "postgresql"}


def sqlite_path_from_url(database_url: str, project_root: str) -> str:
    """Return the file path of a ``sqlite:///path`` URL.

    ``sqlite:///data/vxbot.db`` is relative to the project root while
    ``sqlite:////var/lib/vxbot.db`` is absolute.
    """

    path = database_url[len("sqlite:///"):]
    if not path:
        raise RuntimeError("DATABASE_URL sqlite:/// requires a file path")
    if os.path.isabs(path):
        return path
    return os.path.join(project_root, path)


def _database_backend(database_url: str, project_root: str, read_only: bool) -> PreferenceBackend:
    scheme = urlsplit(database_url).scheme.lower()
    if scheme == "sqlite":
        path = sqlite_path_from_url(database_url, project_root)
        storage = SQLiteStorage(path, read_only=read_only)
        directory = os.path.dirname(path)
        if directory and not read_only:
            os.makedirs(directory, exist_ok=True)
    elif scheme in POSTGRES_SCHEMES:
        storage = PostgresStorage(database_url, read_only=read_only)
    else:
        raise RuntimeError(f"Unsupported DATABASE_URL scheme: {scheme or '<none>'}")
    if read_only:
        return storage
    try:
        storage.init_db()
    except StorageError:
        LOGGER.exception("Preference table setup failed; toggles will not survive a restart")
    return storage


def build_preference_backend(
    kind: str,
    *,
    settings_file: str,
    database_url: Optional[str],
    project_root: str,
    read_only: bool = False,
) -> PreferenceBackend:
    """Build the backend named by ``kind``.

    ``auto`` picks the database when a URL is configured and silently falls
    back to memory otherwise. With ``read_only`` no directory, file or table
    is created, for views that only list stored preferences.
    """

    if kind not in BACKENDS:
        raise RuntimeError(f"preferences.backend must be one of {', '.join(BACKENDS)}")

    if kind == "auto":
        kind = "database" if database_url else "memory"

    if kind == "memory":
        return MemoryBackend()
    if kind == "json":
        return JsonFileBackend(settings_file)
    if not database_url:
        raise RuntimeError("DATABASE_URL is required when preferences.backend=database")
    return _database_backend(database_url, project_root, read_only)


def describe_backend(backend: PreferenceBackend) -> str:
    """Short label used in startup logs and the config panel."""

    if isinstance(backend, JsonFileBackend):
        return f"json ({backend.path})"
    if isinstance(backend, SQLiteStorage):
        return "sqlite"
    if isinstance(backend, PostgresStorage):
        return "postgres"
    return "memory"
