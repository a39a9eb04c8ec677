"""Config document state for the Textual panel."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass
class ConfigState:
    data: dict[str, Any] | None = None
    dirty: bool = False
    error: str | None = None

    def load(self, path: Path) -> None:
        """Replace the document with ``path``; failures land in ``error``."""
        self.data = None
        self.dirty = False
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self.error = f"{path.name} missing"
            return
        except json.JSONDecodeError as exc:
            self.error = f"{path.name} error: {exc.msg}"
            return
        if not isinstance(loaded, dict):
            self.error = "config root must be an object"
            return
        self.data = loaded
        self.error = None

    def save(self, path: Path) -> bool:
        if self.data is None:
            self.error = "Nothing to save"
            return False
        try:
            path.write_text(json.dumps(self.data, indent=2, ensure_ascii=True) + "\n", encoding="utf-8")
        except OSError as exc:
            self.error = f"save failed: {exc.strerror or exc}"
            return False
        self.dirty = False
        self.error = None
        return True

    def section(self, key: str) -> dict[str, Any]:
        """Return a copy of a top-level section, or an empty dict."""
        value = (self.data or {}).get(key)
        if isinstance(value, dict):
            return dict(value)
        return {}

    def set_section(self, key: str, value: dict[str, Any]) -> None:
        if self.data is None:
            self.data = {}
        self.data[key] = value
        self.dirty = True

    def status(self) -> tuple[str, str]:
        """Header text and its style class."""
        if self.error:
            return f"config: {self.error}", "status-error"
        if self.dirty:
            return "config: modified *", "status-modified"
        return "config: loaded", "status-loaded"
