from __future__ import annotations

from types import SimpleNamespace

from adapters.discord_mapper import build_inbound_command, build_inbound_message


class DummyAuthor:
    def __init__(self, user_id: int, *, bot: bool = False, display_name: "str | None" = None, name: str = "user") -> None:
        self.id = user_id
        self.bot = bot
        self.display_name = display_name
        self.global_name = None
        self.name = name


class DummyMessage:
    def __init__(self, author: DummyAuthor, content: "str | None", *, webhook_id: "int | None" = None) -> None:
        self.id = 42
        self.author = author
        self.content = content
        self.webhook_id = webhook_id
        self.channel = SimpleNamespace(id=9)


def test_build_inbound_message_fields() -> None:
    message = DummyMessage(DummyAuthor(1234, display_name="Alice"), "https://x.com/a")
    inbound = build_inbound_message(message)

    assert inbound.message_id == 42
    assert inbound.channel_id == 9
    assert inbound.author_id == "1234"
    assert inbound.author_name == "Alice"
    assert inbound.author_is_bot is False
    assert inbound.content == "https://x.com/a"
    assert inbound.raw is message


def test_author_name_falls_back_to_username() -> None:
    inbound = build_inbound_message(DummyMessage(DummyAuthor(1, name="bob"), "hi"))
    assert inbound.author_name == "bob"


def test_bots_and_webhooks_are_flagged() -> None:
    assert build_inbound_message(DummyMessage(DummyAuthor(1, bot=True), "x")).author_is_bot
    assert build_inbound_message(DummyMessage(DummyAuthor(1), "x", webhook_id=77)).author_is_bot


def test_missing_content_becomes_empty_string() -> None:
    assert build_inbound_message(DummyMessage(DummyAuthor(1), None)).content == ""


def test_build_inbound_command() -> None:
    interaction = SimpleNamespace(user=SimpleNamespace(id=555))
    command = build_inbound_command(interaction, "replace", "on")

    assert command.name == "replace"
    assert command.user_id == "555"
    assert command.option == "on"
    assert command.raw is interaction
