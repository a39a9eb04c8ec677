from __future__ import annotations

import asyncio
from types import SimpleNamespace

import discord
from discord import app_commands

from client import VxBotClient, build_intents, submit_command


class DummyDispatcher:
    def __init__(self, log: list[str]) -> None:
        self.events = []
        self._log = log

    async def submit(self, event) -> None:
        self._log.append("submit")
        self.events.append(event)


class DummyResponse:
    def __init__(self, log: list[str], error: "Exception | None" = None) -> None:
        self.kwargs: dict = {}
        self._log = log
        self._error = error

    async def defer(self, **kwargs) -> None:
        self._log.append("defer")
        self.kwargs = kwargs
        if self._error is not None:
            raise self._error


def _interaction(log: list[str], error: "Exception | None" = None) -> SimpleNamespace:
    return SimpleNamespace(user=SimpleNamespace(id=42), response=DummyResponse(log, error))


def test_command_is_acknowledged_before_it_is_queued() -> None:
    log: list[str] = []
    dispatcher = DummyDispatcher(log)
    interaction = _interaction(log)

    asyncio.run(submit_command(dispatcher, interaction, "replace", "on"))

    assert log == ["defer", "submit"]
    assert interaction.response.kwargs == {"ephemeral": True}
    command = dispatcher.events[0]
    assert (command.name, command.user_id, command.option) == ("replace", "42", "on")


def test_failed_acknowledgement_still_queues_the_command() -> None:
    log: list[str] = []
    dispatcher = DummyDispatcher(log)
    error = discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), "Unknown interaction")

    asyncio.run(submit_command(dispatcher, _interaction(log, error), "status"))

    assert log == ["defer", "submit"]
    assert dispatcher.events[0].name == "status"


def test_registered_slash_commands_defer_first() -> None:
    log: list[str] = []
    dispatcher = DummyDispatcher(log)
    client = VxBotClient(dispatcher, intents=build_intents())

    replace = client.tree.get_command("replace")
    status = client.tree.get_command("status")
    asyncio.run(replace.callback(_interaction(log), app_commands.Choice(name="off", value="off")))
    asyncio.run(status.callback(_interaction(log)))

    assert log == ["defer", "submit", "defer", "submit"]
    assert [event.option for event in dispatcher.events] == ["off", None]
