"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union


@dataclass(frozen=True)
class LinkMatch:
    """A source-host URL found in message text."""

    raw: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.raw)


@dataclass(frozen=True)
class RewrittenLink:
    """A matched link together with its embed-friendly replacement."""

    match: LinkMatch
    url: str

    @property
    def original(self) -> str:
        return self.match.raw


@dataclass(frozen=True)
class UserPreference:
    """Whether automatic rewriting applies to a user's messages."""

    user_id: str
    enabled: bool


@dataclass(frozen=True)
class InboundMessage:
    """Minimal message context used by the core processing pipeline.

    ``raw`` carries the platform object so the chat adapter can act on it;
    the core never inspects it.
    """

    message_id: int
    channel_id: int
    author_id: str
    author_name: str
    author_is_bot: bool
    content: str
    raw: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class InboundCommand:
    """A slash command invocation addressed to the bot."""

    name: str
    user_id: str
    option: Optional[str] = None
    raw: Any = field(default=None, compare=False, repr=False)


InboundEvent = Union[InboundMessage, InboundCommand]
