"""Discord client factory for vxbot.

The client only translates gateway events into core events and hands them
to the dispatcher; all filtering and replies happen in the core.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import discord
from discord import app_commands
from dotenv import load_dotenv

from adapters.discord_mapper import build_inbound_command, build_inbound_message
from core.commands import STATUS_COMMAND, TOGGLE_COMMAND
from core.dispatcher import EventDispatcher

LOGGER = logging.getLogger(__name__)


def load_token() -> str:
    """Read DISCORD_TOKEN via python-dotenv to keep secrets out of the repo."""

    load_dotenv()
    token = os.getenv("DISCORD_TOKEN")
    # Fail fast on missing credentials instead of a confusing login error.
    if not token:
        raise RuntimeError("Missing DISCORD_TOKEN in environment")
    return token


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


async def submit_command(
    dispatcher: EventDispatcher,
    interaction: discord.Interaction,
    name: str,
    option: Optional[str] = None,
) -> None:
    """Acknowledge a slash command, then queue it for the dispatcher.

    Discord drops interactions that are not acknowledged within three
    seconds, and the queue may be busy for longer than that.
    """

    try:
        await interaction.response.defer(ephemeral=True)
    except discord.HTTPException as exc:
        LOGGER.warning("Could not acknowledge /%s for user %s: %s", name, interaction.user.id, exc)
    await dispatcher.submit(build_inbound_command(interaction, name, option))


class VxBotClient(discord.Client):
    """Gateway client with the two preference slash commands."""

    def __init__(self, dispatcher: EventDispatcher, *, intents: discord.Intents) -> None:
        super().__init__(intents=intents)
        self.tree = app_commands.CommandTree(self)
        self._dispatcher = dispatcher
        self._register_commands()

    def _register_commands(self) -> None:
        dispatcher = self._dispatcher

        @self.tree.command(name=TOGGLE_COMMAND, description="Turn automatic link replacement on or off")
        @app_commands.describe(setting="on to replace your links, off to leave them alone")
        @app_commands.choices(
            setting=[
                app_commands.Choice(name="on", value="on"),
                app_commands.Choice(name="off", value="off"),
            ]
        )
        async def _replace(interaction: discord.Interaction, setting: app_commands.Choice[str]) -> None:
            await submit_command(dispatcher, interaction, TOGGLE_COMMAND, setting.value)

        @self.tree.command(name=STATUS_COMMAND, description="Show whether link replacement is on for you")
        async def _status(interaction: discord.Interaction) -> None:
            await submit_command(dispatcher, interaction, STATUS_COMMAND)

    async def setup_hook(self) -> None:
        self._dispatcher.start()
        try:
            synced = await self.tree.sync()
        except discord.HTTPException:
            LOGGER.exception("Failed to register slash commands")
            return
        LOGGER.info("Registered %s slash commands", len(synced))

    async def on_ready(self) -> None:
        LOGGER.info("Logged in as %s", self.user)

    async def on_message(self, message: discord.Message) -> None:
        await self._dispatcher.submit(build_inbound_message(message))

    async def close(self) -> None:
        await self._dispatcher.stop()
        await super().close()


def build_client(dispatcher: EventDispatcher) -> VxBotClient:
    """Create the gateway client wired to ``dispatcher``."""

    LOGGER.info("Initializing Discord client")
    return VxBotClient(dispatcher, intents=build_intents())
