"""Slash command handling for user preferences (core domain)."""

from __future__ import annotations

import logging

from core.models import InboundCommand
from core.preferences import PreferenceStore

LOGGER = logging.getLogger(__name__)

TOGGLE_COMMAND = "replace"
STATUS_COMMAND = "status"
SETTING_VALUES = {"on": True, "off": False}


def _state_label(enabled: bool) -> str:
    return "ON" if enabled else "OFF"


class CommandHandler:
    """Answer the toggle and status commands against the preference store."""

    def __init__(self, preferences: PreferenceStore, require_opt_in: bool = True) -> None:
        self._preferences = preferences
        self._require_opt_in = require_opt_in

    def handle(self, command: InboundCommand) -> str:
        """Apply ``command`` and return the text of the private reply."""

        if command.name == TOGGLE_COMMAND:
            return self._toggle(command)
        if command.name == STATUS_COMMAND:
            return self._status(command)
        LOGGER.warning("Unknown command %r from user %s", command.name, command.user_id)
        return f"Unknown command: {command.name}"

    def _toggle(self, command: InboundCommand) -> str:
        option = (command.option or "").strip().lower()
        if option not in SETTING_VALUES:
            return "Choose a setting: `on` or `off`."

        enabled = SETTING_VALUES[option]
        self._preferences.set_enabled(command.user_id, enabled)
        LOGGER.info("User %s turned link replacement %s", command.user_id, option)
        return f"Link replacement is now {_state_label(enabled)}."

    def _status(self, command: InboundCommand) -> str:
        enabled = self._preferences.is_enabled(command.user_id)
        reply = f"Link replacement is currently {_state_label(enabled)} for you."
        if not self._require_opt_in:
            reply += "\nOpt-in is not required here, so links are always replaced."
        return reply
