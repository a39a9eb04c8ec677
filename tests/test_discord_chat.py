from __future__ import annotations

import asyncio
from types import SimpleNamespace

import discord
import pytest

from adapters.discord_chat import DiscordChat
from core.errors import ChatDeliveryError, ChatPermissionError
from core.models import InboundCommand, InboundMessage, LinkMatch, RewrittenLink


def _http_error(cls, status: int, reason: str):
    return cls(SimpleNamespace(status=status, reason=reason), reason)


class DummyChannel:
    def __init__(self) -> None:
        self.sent: list[tuple[str, dict]] = []

    async def send(self, content: str, **kwargs) -> None:
        self.sent.append((content, kwargs))


class DummyDiscordMessage:
    def __init__(self, error: "Exception | None" = None) -> None:
        self.channel = DummyChannel()
        self.calls: list[tuple[str, tuple, dict]] = []
        self._error = error

    async def _record(self, name: str, *args, **kwargs) -> None:
        self.calls.append((name, args, kwargs))
        if self._error is not None:
            raise self._error

    async def reply(self, *args, **kwargs) -> None:
        await self._record("reply", *args, **kwargs)

    async def edit(self, *args, **kwargs) -> None:
        await self._record("edit", *args, **kwargs)

    async def delete(self, *args, **kwargs) -> None:
        await self._record("delete", *args, **kwargs)


def _message(raw: DummyDiscordMessage, content: str = "see https://x.com/a/status/1") -> InboundMessage:
    return InboundMessage(
        message_id=1,
        channel_id=2,
        author_id="3",
        author_name="alice",
        author_is_bot=False,
        content=content,
        raw=raw,
    )


def _links() -> list[RewrittenLink]:
    return [RewrittenLink(LinkMatch("https://x.com/a/status/1", 4), "https://vxtwitter.com/a/status/1")]


def test_reply_does_not_ping_author() -> None:
    raw = DummyDiscordMessage()
    asyncio.run(DiscordChat().reply(_message(raw), _links()))

    assert raw.calls == [("reply", ("https://vxtwitter.com/a/status/1",), {"mention_author": False})]


def test_suppress_embeds_edits_message() -> None:
    raw = DummyDiscordMessage()
    asyncio.run(DiscordChat().suppress_embeds(_message(raw)))
    assert raw.calls == [("edit", (), {"suppress": True})]


def test_repost_sends_rewritten_text_without_mentions() -> None:
    raw = DummyDiscordMessage()
    asyncio.run(DiscordChat().repost(_message(raw), _links()))

    content, kwargs = raw.channel.sent[0]
    assert content == "**alice**: see https://vxtwitter.com/a/status/1"
    assert isinstance(kwargs["allowed_mentions"], discord.AllowedMentions)


def test_forbidden_maps_to_permission_error() -> None:
    raw = DummyDiscordMessage(_http_error(discord.Forbidden, 403, "Missing Permissions"))
    with pytest.raises(ChatPermissionError):
        asyncio.run(DiscordChat().delete(_message(raw)))


def test_http_failure_maps_to_delivery_error() -> None:
    raw = DummyDiscordMessage(_http_error(discord.HTTPException, 500, "Internal Server Error"))
    with pytest.raises(ChatDeliveryError) as excinfo:
        asyncio.run(DiscordChat().reply(_message(raw), _links()))
    assert not isinstance(excinfo.value, ChatPermissionError)


class DummyResponse:
    def __init__(self, done: bool) -> None:
        self._done = done
        self.sent: list[tuple[str, dict]] = []

    def is_done(self) -> bool:
        return self._done

    async def send_message(self, content: str, **kwargs) -> None:
        self.sent.append((content, kwargs))


class DummyFollowup:
    def __init__(self) -> None:
        self.sent: list[tuple[str, dict]] = []

    async def send(self, content: str, **kwargs) -> None:
        self.sent.append((content, kwargs))


@pytest.mark.parametrize("done", [False, True])
def test_respond_is_ephemeral(done: bool) -> None:
    interaction = SimpleNamespace(response=DummyResponse(done), followup=DummyFollowup())
    command = InboundCommand(name="status", user_id="3", raw=interaction)

    asyncio.run(DiscordChat().respond(command, "hello"))

    sent = interaction.followup.sent if done else interaction.response.sent
    assert sent == [("hello", {"ephemeral": True})]
