"""Discord-to-core event mapping adapter.

This keeps discord.py-specific details out of the core pipeline.
"""

from __future__ import annotations

from typing import Any, Optional

from core.models import InboundCommand, InboundMessage


def _author_name(author: Any) -> str:
    for attribute in ("display_name", "global_name", "name"):
        value = getattr(author, attribute, None)
        if isinstance(value, str) and value:
            return value
    return str(getattr(author, "id", "unknown"))


def build_inbound_message(message: Any) -> InboundMessage:
    """Build a core InboundMessage from a discord.py Message."""

    author = message.author
    # Webhook posts carry a fake author without the bot flag.
    is_bot = bool(getattr(author, "bot", False)) or getattr(message, "webhook_id", None) is not None
    channel = getattr(message, "channel", None)

    return InboundMessage(
        message_id=message.id,
        channel_id=getattr(channel, "id", 0),
        author_id=str(author.id),
        author_name=_author_name(author),
        author_is_bot=is_bot,
        content=message.content or "",
        raw=message,
    )


def build_inbound_command(interaction: Any, name: str, option: Optional[str] = None) -> InboundCommand:
    """Build a core InboundCommand from a discord.py Interaction."""

    return InboundCommand(
        name=name,
        user_id=str(interaction.user.id),
        option=option,
        raw=interaction,
    )
