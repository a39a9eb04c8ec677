"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmScreen(ModalScreen[str]):
    """Ask a question and dismiss with the id of the chosen action.

    ``actions`` is a sequence of (choice, label, variant) tuples; the last
    one is treated as the cancel action when the dialog is escaped.
    """

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, title: str, body: str, actions: list[tuple[str, str, str]]) -> None:
        super().__init__()
        self._title = title
        self._body = body
        self._actions = actions

    def compose(self) -> ComposeResult:
        yield Container(
            Static(self._title, classes="modal-title"),
            Static(self._body, classes="modal-body"),
            Horizontal(
                *[
                    Button(label, id=f"confirm-{choice}", variant=variant)
                    for choice, label, variant in self._actions
                ],
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        self.dismiss(button_id.removeprefix("confirm-"))

    def action_cancel(self) -> None:
        self.dismiss(self._actions[-1][0])


def unsaved_changes_screen() -> ConfirmScreen:
    """Prompt when exiting with unsaved changes."""

    return ConfirmScreen(
        "Unsaved changes",
        "Save changes before exit?",
        [("save", "Save", "success"), ("discard", "Discard", "error"), ("cancel", "Cancel", "default")],
    )


def reload_confirm_screen() -> ConfirmScreen:
    """Prompt when reloading with unsaved changes."""

    return ConfirmScreen(
        "Reload config?",
        "Unsaved changes will be lost.",
        [("save", "Save", "primary"), ("reload", "Reload", "warning"), ("cancel", "Cancel", "default")],
    )
