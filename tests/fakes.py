from __future__ import annotations

from typing import Optional

from core.models import InboundCommand, InboundMessage, RewrittenLink


class FakeChat:
    """ChatPort double that records calls and can be told to fail."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.failures: dict[str, Exception] = {}

    def _record(self, action: str, *args) -> None:
        self.calls.append((action, *args))
        failure = self.failures.get(action)
        if failure is not None:
            raise failure

    def actions(self) -> list[str]:
        return [call[0] for call in self.calls]

    def urls(self, action: str) -> list[list[str]]:
        return [[link.url for link in call[2]] for call in self.calls if call[0] == action]

    async def reply(self, message: InboundMessage, links: list[RewrittenLink]) -> None:
        self._record("reply", message, list(links))

    async def suppress_embeds(self, message: InboundMessage) -> None:
        self._record("suppress_embeds", message)

    async def repost(self, message: InboundMessage, links: list[RewrittenLink]) -> None:
        self._record("repost", message, list(links))

    async def delete(self, message: InboundMessage) -> None:
        self._record("delete", message)

    async def respond(self, command: InboundCommand, content: str) -> None:
        self._record("respond", command, content)


class RecordingBackend:
    def __init__(self, enabled: Optional[set[str]] = None) -> None:
        self.enabled = set(enabled or ())
        self.saves: list[tuple[str, bool]] = []

    def load_enabled(self) -> set[str]:
        return set(self.enabled)

    def save(self, user_id: str, enabled: bool) -> None:
        self.saves.append((user_id, enabled))


def make_message(
    content: str,
    *,
    author_id: str = "100",
    author_name: str = "alice",
    author_is_bot: bool = False,
    message_id: int = 1,
) -> InboundMessage:
    return InboundMessage(
        message_id=message_id,
        channel_id=10,
        author_id=author_id,
        author_name=author_name,
        author_is_bot=author_is_bot,
        content=content,
    )
