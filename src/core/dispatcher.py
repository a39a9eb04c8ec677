"""Single-consumer event dispatcher.

The chat library runs every gateway event in its own task. Funnelling them
through one queue and one consumer keeps handling sequential, so the
preference cache is only ever touched from a single task.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.commands import CommandHandler
from core.errors import ChatDeliveryError
from core.models import InboundCommand, InboundEvent, InboundMessage
from core.ports import ChatPort
from core.processor import MessageProcessor

LOGGER = logging.getLogger(__name__)


class EventDispatcher:
    """Queue inbound events and handle them one at a time in arrival order."""

    def __init__(self, processor: MessageProcessor, commands: CommandHandler, chat: ChatPort) -> None:
        self._processor = processor
        self._commands = commands
        self._chat = chat
        self._queue: "asyncio.Queue[InboundEvent]" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def submit(self, event: InboundEvent) -> None:
        await self._queue.put(event)

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.get_running_loop().create_task(self._consume(), name="event-dispatcher")

    async def join(self) -> None:
        """Wait until every queued event has been handled."""

        await self._queue.join()

    async def stop(self) -> None:
        if self._worker is None:
            return
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None

    async def _consume(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self.dispatch(event)
            except Exception:
                LOGGER.exception("Error while handling %s", type(event).__name__)
            finally:
                self._queue.task_done()

    async def dispatch(self, event: InboundEvent) -> None:
        if isinstance(event, InboundMessage):
            await self._processor.handle(event)
        elif isinstance(event, InboundCommand):
            await self._dispatch_command(event)
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

    async def _dispatch_command(self, command: InboundCommand) -> None:
        content = self._commands.handle(command)
        try:
            await self._chat.respond(command, content)
        except ChatDeliveryError as exc:
            LOGGER.error("Reply to /%s for user %s failed: %s", command.name, command.user_id, exc)
