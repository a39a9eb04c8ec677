"""Settings tab implementation."""

from __future__ import annotations

from typing import Any

from textual import on
from textual.containers import Container, Horizontal, ScrollableContainer, Vertical
from textual.widgets import ContentSwitcher, DataTable, Input, Select, Static, Switch, TextArea

from ..validators import parse_host, parse_host_list, parse_port


class SettingsTab(Container):
    """Settings tab for editing rewrite, delivery, preferences, health and logging."""

    DELIVERY_MODES = ["reply", "repost"]
    BACKENDS = ["auto", "memory", "json", "database"]
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    SECTION_LABELS = [
        ("rewrite", "Rewrite", "Source hosts and target host"),
        ("delivery", "Delivery", "Reply or repost, opt-in gate"),
        ("preferences", "Preferences", "Where user toggles are stored"),
        ("health", "Health", "Liveness HTTP endpoint"),
        ("logging", "Logging", "Console/file logging + redaction"),
    ]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False

    def compose(self):
        with Vertical(id="settings-panel"):
            with Horizontal(id="settings-body"):
                with Container(id="settings-left"):
                    yield DataTable(id="settings-table", cursor_type="row")
                with Container(id="settings-right"):
                    with ContentSwitcher(id="settings-forms"):
                        with Container(id="settings-rewrite"):
                            yield Static("Rewrite", classes="settings-title")
                            yield Static("source_hosts (one per line)", classes="form-label")
                            yield TextArea(id="rewrite-source-hosts")
                            yield Static("target_host", classes="form-label")
                            yield Input(placeholder="vxtwitter.com", id="rewrite-target-host")
                            yield Static("", id="rewrite-error", classes="settings-error")

                        with Container(id="settings-delivery"):
                            yield Static("Delivery", classes="settings-title")
                            yield Static("mode", classes="form-label")
                            yield Select(
                                [(mode, mode) for mode in self.DELIVERY_MODES],
                                id="delivery-mode",
                                allow_blank=False,
                            )
                            yield Static("require_opt_in", classes="form-label")
                            yield Switch(id="delivery-opt-in")
                            yield Static("", id="delivery-error", classes="settings-error")

                        with Container(id="settings-preferences"):
                            yield Static("Preferences", classes="settings-title")
                            yield Static("backend", classes="form-label")
                            yield Select(
                                [(backend, backend) for backend in self.BACKENDS],
                                id="preferences-backend",
                                allow_blank=False,
                            )
                            yield Static("settings_file (json backend)", classes="form-label")
                            yield Input(placeholder="data/settings.json", id="preferences-file")
                            yield Static(
                                "database uses DATABASE_URL from the environment",
                                classes="subtle",
                            )
                            yield Static("", id="preferences-error", classes="settings-error")

                        with Container(id="settings-health"):
                            yield Static("Health", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="health-enabled")
                            yield Static("host", classes="form-label")
                            yield Input(placeholder="0.0.0.0", id="health-host")
                            yield Static("port (PORT env overrides)", classes="form-label")
                            yield Input(placeholder="8080", id="health-port")
                            yield Static("", id="health-error", classes="settings-error")

                        with ScrollableContainer(id="settings-logging"):
                            yield Static("Logging", classes="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="logging-enabled")
                            yield Static("level", classes="form-label")
                            yield Select(
                                [(level, level) for level in self.LOG_LEVELS],
                                id="logging-level",
                                allow_blank=False,
                            )
                            yield Static("console", classes="form-label")
                            yield Switch(id="logging-console")
                            yield Static("file.enabled", classes="form-label")
                            yield Switch(id="logging-file-enabled")
                            yield Static("file.path", classes="form-label")
                            yield Input(placeholder="logs/vxbot.log", id="logging-file-path")
                            yield Static("redact.enabled", classes="form-label")
                            yield Switch(id="logging-redact-enabled")
                            yield Static("redact.patterns (env var names, one per line)", classes="form-label")
                            yield TextArea(id="logging-redact-patterns")
                            yield Static("", id="logging-error", classes="settings-error")

    def on_mount(self) -> None:
        table = self.query_one("#settings-table", DataTable)
        table.add_column("section", key="section", width=14)
        table.add_column("description", key="description", width=32)
        for key, label, description in self.SECTION_LABELS:
            table.add_row(label, description, key=key)
        table.zebra_stripes = True
        self._select_section("rewrite")
        self.reload_from_config()

    def reload_from_config(self) -> None:
        self._loading_form = True
        try:
            self._load_rewrite()
            self._load_delivery()
            self._load_preferences()
            self._load_health()
            self._load_logging()
        finally:
            self._loading_form = False

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._select_section(self._coerce_row_key(event.row_key))

    def _select_section(self, section_id: str) -> None:
        switcher = self.query_one("#settings-forms", ContentSwitcher)
        switcher.current = f"settings-{section_id}"

    def _get_section(self, key: str) -> dict[str, Any]:
        return self.app.config_state.section(key)

    def _update_section(self, key: str, section: dict[str, Any]) -> None:
        self.app.update_config_section(key, section)

    def _load_rewrite(self) -> None:
        rewrite = self._get_section("rewrite")
        hosts = rewrite.get("source_hosts", ["twitter.com", "x.com"]) or []
        self.query_one("#rewrite-source-hosts", TextArea).text = "\n".join(hosts)
        self.query_one("#rewrite-target-host", Input).value = str(rewrite.get("target_host", "vxtwitter.com"))
        self._set_error("rewrite-error", "")

    def _load_delivery(self) -> None:
        delivery = self._get_section("delivery")
        self._set_select_value("#delivery-mode", delivery.get("mode", "reply"), self.DELIVERY_MODES, "delivery-error")
        self.query_one("#delivery-opt-in", Switch).value = bool(delivery.get("require_opt_in", True))

    def _load_preferences(self) -> None:
        preferences = self._get_section("preferences")
        backend = preferences.get("backend", "auto")
        self._set_select_value("#preferences-backend", backend, self.BACKENDS, "preferences-error")
        self.query_one("#preferences-file", Input).value = str(preferences.get("settings_file", "data/settings.json"))
        self._apply_preferences_state(backend)

    def _load_health(self) -> None:
        health = self._get_section("health")
        enabled = bool(health.get("enabled", True))
        self.query_one("#health-enabled", Switch).value = enabled
        self.query_one("#health-host", Input).value = str(health.get("host", "0.0.0.0"))
        self.query_one("#health-port", Input).value = str(health.get("port", 8080))
        self._apply_health_state(enabled)
        self._set_error("health-error", "")

    def _load_logging(self) -> None:
        logging = self._get_section("logging")
        file_cfg = self._get_subdict(logging, "file")
        redact_cfg = self._get_subdict(logging, "redact")
        file_enabled = bool(file_cfg.get("enabled", False))
        redact_enabled = bool(redact_cfg.get("enabled", False))

        self.query_one("#logging-enabled", Switch).value = bool(logging.get("enabled", False))
        self._set_select_value("#logging-level", logging.get("level", "INFO"), self.LOG_LEVELS, "logging-error")
        self.query_one("#logging-console", Switch).value = bool(logging.get("console", True))
        self.query_one("#logging-file-enabled", Switch).value = file_enabled
        self.query_one("#logging-file-path", Input).value = str(file_cfg.get("path", "logs/vxbot.log"))
        self.query_one("#logging-redact-enabled", Switch).value = redact_enabled
        self.query_one("#logging-redact-patterns", TextArea).text = "\n".join(redact_cfg.get("patterns", []) or [])
        self._apply_logging_state(file_enabled, redact_enabled)

    def _set_select_value(self, selector: str, value: str, allowed: list[str], error_id: str) -> None:
        select = self.query_one(selector, Select)
        if value in allowed:
            select.value = value
            self._set_error(error_id, "")
        else:
            select.value = allowed[0]
            self._set_error(error_id, f"Invalid value: {value}")

    def _set_error(self, error_id: str, message: str) -> None:
        self.query_one(f"#{error_id}", Static).update(message)

    def _apply_preferences_state(self, backend: str) -> None:
        self.query_one("#preferences-file", Input).disabled = backend != "json"

    def _apply_health_state(self, enabled: bool) -> None:
        self.query_one("#health-host", Input).disabled = not enabled
        self.query_one("#health-port", Input).disabled = not enabled

    def _apply_logging_state(self, file_enabled: bool, redact_enabled: bool) -> None:
        self.query_one("#logging-file-path", Input).disabled = not file_enabled
        self.query_one("#logging-redact-patterns", TextArea).disabled = not redact_enabled

    def _set_field(self, section: str, key: str, value: Any) -> dict[str, Any]:
        config = self._get_section(section)
        config[key] = value
        self._update_section(section, config)
        return config

    @on(TextArea.Changed, "#rewrite-source-hosts")
    def _on_source_hosts(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        hosts, error = parse_host_list(event.text_area.text)
        self._set_error("rewrite-error", error or "")
        if error:
            return
        self._set_field("rewrite", "source_hosts", hosts)

    @on(Input.Changed, "#rewrite-target-host")
    def _on_target_host(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        info = parse_host(event.value)
        self._set_error("rewrite-error", info.error or "")
        if info.normalized is None:
            return
        self._set_field("rewrite", "target_host", info.normalized)

    @on(Select.Changed, "#delivery-mode")
    def _on_delivery_mode(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._set_field("delivery", "mode", event.value)

    @on(Switch.Changed, "#delivery-opt-in")
    def _on_delivery_opt_in(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_field("delivery", "require_opt_in", bool(event.value))

    @on(Select.Changed, "#preferences-backend")
    def _on_preferences_backend(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._set_field("preferences", "backend", event.value)
        self._apply_preferences_state(str(event.value))

    @on(Input.Changed, "#preferences-file")
    def _on_preferences_file(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        value = event.value.strip()
        if not value:
            self._set_error("preferences-error", "settings_file is required")
            return
        self._set_error("preferences-error", "")
        self._set_field("preferences", "settings_file", value)

    @on(Switch.Changed, "#health-enabled")
    def _on_health_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_field("health", "enabled", bool(event.value))
        self._apply_health_state(bool(event.value))

    @on(Input.Changed, "#health-host")
    def _on_health_host(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        self._set_field("health", "host", event.value.strip() or "0.0.0.0")

    @on(Input.Changed, "#health-port")
    def _on_health_port(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        port, error = parse_port(event.value)
        self._set_error("health-error", error or "")
        if port is None:
            return
        self._set_field("health", "port", port)

    @on(Switch.Changed, "#logging-enabled")
    def _on_logging_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_field("logging", "enabled", bool(event.value))

    @on(Select.Changed, "#logging-level")
    def _on_logging_level(self, event: Select.Changed) -> None:
        if self._loading_form or event.value is Select.BLANK:
            return
        self._set_field("logging", "level", event.value)

    @on(Switch.Changed, "#logging-console")
    def _on_logging_console(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        self._set_field("logging", "console", bool(event.value))

    @on(Switch.Changed, "#logging-file-enabled")
    def _on_logging_file_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        logging = self._update_nested("logging", "file", "enabled", bool(event.value))
        redact_enabled = bool(self._get_subdict(logging, "redact").get("enabled", False))
        self._apply_logging_state(bool(event.value), redact_enabled)

    @on(Input.Changed, "#logging-file-path")
    def _on_logging_file_path(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        self._update_nested("logging", "file", "path", event.value)

    @on(Switch.Changed, "#logging-redact-enabled")
    def _on_logging_redact_enabled(self, event: Switch.Changed) -> None:
        if self._loading_form:
            return
        logging = self._update_nested("logging", "redact", "enabled", bool(event.value))
        file_enabled = bool(self._get_subdict(logging, "file").get("enabled", False))
        self._apply_logging_state(file_enabled, bool(event.value))

    @on(TextArea.Changed, "#logging-redact-patterns")
    def _on_logging_redact_patterns(self, event: TextArea.Changed) -> None:
        if self._loading_form:
            return
        patterns = [line.strip() for line in event.text_area.text.splitlines() if line.strip()]
        self._update_nested("logging", "redact", "patterns", patterns)

    def _update_nested(self, section: str, subsection: str, key: str, value: Any) -> dict[str, Any]:
        config = self._get_section(section)
        nested = dict(self._get_subdict(config, subsection))
        nested[key] = value
        config[subsection] = nested
        self._update_section(section, config)
        return config

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)

    @staticmethod
    def _get_subdict(parent: dict[str, Any], key: str) -> dict[str, Any]:
        value = parent.get(key)
        if isinstance(value, dict):
            return value
        return {}
