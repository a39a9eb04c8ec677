"""Users tab for viewing who has link replacement enabled."""

from __future__ import annotations

import os
from typing import Any

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from adapters.backend_factory import build_preference_backend, describe_backend
from core.errors import StorageError

from ..constants import PROJECT_ROOT


class UsersTab(Container):
    """Read-only list of enabled users from the configured backend.

    Toggles stay with the running bot; this view never writes preferences.
    """

    def compose(self):
        with Vertical(id="users-panel"):
            yield Static("Enabled users", id="users-title")
            yield DataTable(id="users-table", cursor_type="row")
            with Horizontal(id="users-actions"):
                yield Button("Refresh", id="users-refresh", variant="primary")
            yield Static("", id="users-output")

    def on_mount(self) -> None:
        table = self.query_one("#users-table", DataTable)
        table.add_column("#", key="index", width=6)
        table.add_column("user id", key="user_id", width=32)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#users-actions").styles.height = 3
        self.reload_users()

    @on(Button.Pressed, "#users-refresh")
    def _on_refresh(self) -> None:
        self.reload_users()

    def reload_users(self) -> None:
        table = self.query_one("#users-table", DataTable)
        table.clear()
        preferences = self.app.config_state.section("preferences")
        settings_file = str(preferences.get("settings_file", "data/settings.json"))
        if not os.path.isabs(settings_file):
            settings_file = str(PROJECT_ROOT / settings_file)
        try:
            backend = build_preference_backend(
                str(preferences.get("backend", "auto")),
                settings_file=settings_file,
                database_url=os.getenv("DATABASE_URL") or None,
                project_root=str(PROJECT_ROOT),
                read_only=True,
            )
            users = sorted(backend.load_enabled())
        except (RuntimeError, StorageError) as exc:
            self._set_output(f"backend error: {exc}")
            return

        for index, user_id in enumerate(users, start=1):
            table.add_row(str(index), user_id, key=user_id)
        self._set_output(f"{len(users)} enabled users in {describe_backend(backend)}")

    def _set_output(self, message: str) -> None:
        self.query_one("#users-output", Static).update(message)
