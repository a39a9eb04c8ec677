from __future__ import annotations

import logging

import pytest

from core.errors import StorageError
from core.preferences import PreferenceStore


class FakeBackend:
    def __init__(self, enabled: "set[str] | None" = None) -> None:
        self.enabled = set(enabled or ())
        self.saves: list[tuple[str, bool]] = []
        self.fail_load = False
        self.fail_save = False

    def load_enabled(self) -> set[str]:
        if self.fail_load:
            raise StorageError("disk on fire")
        return set(self.enabled)

    def save(self, user_id: str, enabled: bool) -> None:
        if self.fail_save:
            raise StorageError("read-only")
        self.saves.append((user_id, enabled))


def test_load_fills_cache_from_backend() -> None:
    store = PreferenceStore(FakeBackend({"1", "2"}))
    assert store.load() == 2
    assert store.is_enabled("1")
    assert not store.is_enabled("3")


def test_set_enabled_round_trip() -> None:
    backend = FakeBackend()
    store = PreferenceStore(backend)
    store.load()

    store.set_enabled("7", True)
    assert store.is_enabled("7")
    store.set_enabled("7", False)
    assert not store.is_enabled("7")
    assert backend.saves == [("7", True), ("7", False)]


def test_repeated_toggle_is_observably_a_no_op() -> None:
    store = PreferenceStore(FakeBackend())
    store.load()
    store.set_enabled("7", True)
    store.set_enabled("7", True)
    assert store.is_enabled("7")
    assert store.enabled_users() == ["7"]


def test_save_failure_keeps_cache_authoritative(caplog: pytest.LogCaptureFixture) -> None:
    backend = FakeBackend()
    backend.fail_save = True
    store = PreferenceStore(backend)
    store.load()

    with caplog.at_level(logging.ERROR):
        store.set_enabled("9", True)

    assert store.is_enabled("9")
    assert "Failed to persist preference for user 9" in caplog.text


def test_load_failure_starts_empty(caplog: pytest.LogCaptureFixture) -> None:
    backend = FakeBackend({"1"})
    backend.fail_load = True
    store = PreferenceStore(backend)

    with caplog.at_level(logging.ERROR):
        assert store.load() == 0

    assert store.loaded
    assert not store.is_enabled("1")
    assert "Failed to load user preferences" in caplog.text


def test_use_before_load_is_rejected() -> None:
    store = PreferenceStore(FakeBackend())
    with pytest.raises(RuntimeError):
        store.is_enabled("1")
    with pytest.raises(RuntimeError):
        store.set_enabled("1", True)
