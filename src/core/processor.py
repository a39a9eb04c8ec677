"""Core message processing pipeline.

This module is integration-agnostic. It only relies on ports for chat
delivery and on the preference store, enabling other platforms or adapters
without changes here.
"""

from __future__ import annotations

import logging
from typing import List

from core.config import MESSAGE_LIMIT, DeliveryConfig, RewriteConfig
from core.errors import ChatDeliveryError, ChatPermissionError, LinkParseError
from core.links import build_link_pattern, find_links, fit_links, rewrite_link
from core.models import InboundMessage, RewrittenLink
from core.ports import ChatPort
from core.preferences import PreferenceStore

LOGGER = logging.getLogger(__name__)


class MessageProcessor:
    """Orchestrates preference gating, rewriting and delivery."""

    def __init__(
        self,
        preferences: PreferenceStore,
        chat: ChatPort,
        rewrite_config: RewriteConfig,
        delivery_config: DeliveryConfig,
    ) -> None:
        self._preferences = preferences
        self._chat = chat
        self._pattern = build_link_pattern(rewrite_config.source_hosts)
        self._target_host = rewrite_config.target_host
        self._delivery = delivery_config

    def rewrite_all(self, text: str) -> List[RewrittenLink]:
        """Rewrite every source link in ``text``, skipping malformed ones."""

        rewritten: List[RewrittenLink] = []
        for match in find_links(text, self._pattern):
            try:
                url = rewrite_link(match.raw, self._target_host)
            except LinkParseError as exc:
                LOGGER.warning("Skipping malformed link at offset %s: %s", match.start, exc)
                continue
            rewritten.append(RewrittenLink(match=match, url=url))
        return rewritten

    async def handle(self, message: InboundMessage) -> None:
        """Process one inbound message through the core pipeline."""

        # Bots (including ourselves) never trigger a rewrite, which also
        # prevents reacting to our own replies.
        if message.author_is_bot:
            return

        if not message.content.strip():
            return

        if self._delivery.require_opt_in and not self._preferences.is_enabled(message.author_id):
            return

        links = self.rewrite_all(message.content)
        if not links:
            return

        if self._delivery.mode == "repost":
            await self._repost(message, links)
        else:
            await self._reply(message, links)

    async def _suppress(self, message: InboundMessage) -> None:
        try:
            await self._chat.suppress_embeds(message)
        except ChatPermissionError as exc:
            LOGGER.warning("Cannot suppress embeds on message %s: %s", message.message_id, exc)
        except ChatDeliveryError as exc:
            LOGGER.warning("Suppressing embeds failed for message %s: %s", message.message_id, exc)

    async def _reply(self, message: InboundMessage, links: List[RewrittenLink]) -> None:
        # The preview is only hidden when there is a reply to replace it.
        sendable = fit_links(links, MESSAGE_LIMIT)
        dropped = len(links) - len(sendable)
        if not sendable:
            LOGGER.warning(
                "Skipping message %s: no rewritten link fits in %s characters",
                message.message_id,
                MESSAGE_LIMIT,
            )
            return
        if dropped:
            LOGGER.warning("Dropped %s link(s) over the length limit in message %s", dropped, message.message_id)

        await self._suppress(message)
        try:
            await self._chat.reply(message, sendable)
        except ChatDeliveryError as exc:
            LOGGER.error("Reply to message %s failed: %s", message.message_id, exc)
            return
        LOGGER.info(
            "Rewrote %s link(s) in message %s: %s",
            len(sendable),
            message.message_id,
            ", ".join(link.url for link in sendable),
        )

    async def _repost(self, message: InboundMessage, links: List[RewrittenLink]) -> None:
        # Repost before deleting so the content survives a failed send.
        try:
            await self._chat.repost(message, links)
        except ChatDeliveryError as exc:
            LOGGER.error("Repost of message %s failed; original kept: %s", message.message_id, exc)
            return

        try:
            await self._chat.delete(message)
        except ChatPermissionError as exc:
            LOGGER.warning("Cannot delete message %s, suppressing embeds instead: %s", message.message_id, exc)
            await self._suppress(message)
        except ChatDeliveryError as exc:
            LOGGER.warning("Deleting message %s failed: %s", message.message_id, exc)
        LOGGER.info("Reposted message %s with %s rewritten link(s)", message.message_id, len(links))
