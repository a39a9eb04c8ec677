"""Textual config panel for vxbot's config.json."""

from __future__ import annotations

from typing import Any, Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Static, TabbedContent, TabPane

from .constants import CONFIG_PATH, DISCORD_BLURPLE
from .modals import reload_confirm_screen, unsaved_changes_screen
from .state import ConfigState
from .tabs.guide import GuideTab
from .tabs.settings import SettingsTab
from .tabs.users import UsersTab

STATUS_CLASSES = ("status-loaded", "status-modified", "status-error")


class ConfigPanelApp(App):
    """Edit config.json section by section and browse opted-in users."""

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    CSS_PATH = "app.tcss"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_state = ConfigState()

    def compose(self) -> ComposeResult:
        with Horizontal(id="header"):
            with Vertical(id="header-left"):
                yield Static(Text.assemble(("VX", DISCORD_BLURPLE), ("BOT > Config Panel", "bold")), id="title")
                yield Static(f"config: {CONFIG_PATH}", classes="subtle")
            yield Static("", id="header-status")
            yield Button("Save", id="save-btn")
            yield Button("Reload", id="reload-btn")

        with TabbedContent(id="content", initial="settings"):
            with TabPane("Settings", id="settings"):
                yield SettingsTab()
            with TabPane("Users", id="users"):
                yield UsersTab()
            with TabPane("Guide", id="guide"):
                yield GuideTab()
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> None:
        self.config_state.save(CONFIG_PATH)
        self._refresh_header()

    def action_reload_config(self) -> None:
        self._confirm_if_dirty(reload_confirm_screen(), self._load_config)

    def action_request_quit(self) -> None:
        self._confirm_if_dirty(unsaved_changes_screen(), self.exit)

    def _confirm_if_dirty(self, screen, proceed: Callable[[], Any]) -> None:
        """Run ``proceed`` now, or after the user picks save/discard/reload."""
        if not self.config_state.dirty:
            proceed()
            return

        def on_choice(choice: str | None) -> None:
            if choice == "save":
                saved = self.config_state.save(CONFIG_PATH)
                self._refresh_header()
                if saved:
                    proceed()
            elif choice in ("discard", "reload"):
                proceed()

        self.push_screen(screen, on_choice)

    def _load_config(self) -> None:
        self.config_state.load(CONFIG_PATH)
        self._refresh_header()
        for settings_tab in self.query(SettingsTab):
            settings_tab.reload_from_config()
        for users_tab in self.query(UsersTab):
            users_tab.reload_users()

    def update_config_section(self, section: str, value: Any) -> None:
        """Replace a config section in memory and mark the document dirty."""
        self.config_state.set_section(section, value)
        self._refresh_header()

    def _refresh_header(self) -> None:
        text, css_class = self.config_state.status()
        status = self.query_one("#header-status", Static)
        status.remove_class(*STATUS_CLASSES)
        status.add_class(css_class)
        status.update(text)
        self.query_one("#save-btn", Button).disabled = self.config_state.data is None or not self.config_state.dirty
