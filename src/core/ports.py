"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for preference storage and chat delivery
adapters so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import InboundCommand, InboundMessage, RewrittenLink


class PreferenceBackend(Protocol):
    """Persistence operations behind the preference store.

    Implementations raise ``core.errors.StorageError`` when their medium
    cannot be read or written.
    """

    def load_enabled(self) -> set[str]:
        ...

    def save(self, user_id: str, enabled: bool) -> None:
        ...


class ChatPort(Protocol):
    """Outbound chat operations required by the core pipeline.

    Implementations raise ``core.errors.ChatPermissionError`` when the bot
    lacks a permission and ``core.errors.ChatDeliveryError`` for any other
    platform rejection.
    """

    async def reply(self, message: InboundMessage, links: list[RewrittenLink]) -> None:
        ...

    async def suppress_embeds(self, message: InboundMessage) -> None:
        ...

    async def repost(self, message: InboundMessage, links: list[RewrittenLink]) -> None:
        ...

    async def delete(self, message: InboundMessage) -> None:
        ...

    async def respond(self, command: InboundCommand, content: str) -> None:
        ...
