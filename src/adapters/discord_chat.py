"""Discord delivery adapter.

Implements the core ChatPort with discord.py calls and maps discord.py
errors onto the core error taxonomy.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List

import discord

from adapters.reply_formatting import format_repost, format_reply
from core.errors import ChatDeliveryError, ChatPermissionError
from core.models import InboundCommand, InboundMessage, RewrittenLink


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except discord.Forbidden as exc:
        raise ChatPermissionError(f"{action}: {exc}") from exc
    except discord.HTTPException as exc:
        raise ChatDeliveryError(f"{action}: {exc}") from exc


class DiscordChat:
    """ChatPort adapter acting on the discord.py objects carried in events."""

    async def reply(self, message: InboundMessage, links: List[RewrittenLink]) -> None:
        """Reply under the original without pinging its author."""

        with _translate_errors("reply"):
            await message.raw.reply(format_reply(links), mention_author=False)

    async def suppress_embeds(self, message: InboundMessage) -> None:
        # Needs Manage Messages when the message belongs to someone else.
        with _translate_errors("suppress embeds"):
            await message.raw.edit(suppress=True)

    async def repost(self, message: InboundMessage, links: List[RewrittenLink]) -> None:
        content = format_repost(message.author_name, message.content, links)
        with _translate_errors("repost"):
            await message.raw.channel.send(content, allowed_mentions=discord.AllowedMentions.none())

    async def delete(self, message: InboundMessage) -> None:
        with _translate_errors("delete"):
            await message.raw.delete()

    async def respond(self, command: InboundCommand, content: str) -> None:
        """Answer a slash command privately to its invoker."""

        interaction = command.raw
        with _translate_errors(f"respond to /{command.name}"):
            if interaction.response.is_done():
                await interaction.followup.send(content, ephemeral=True)
            else:
                await interaction.response.send_message(content, ephemeral=True)
