"""Application entry point for the vxbot link rewriter."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

from adapters.backend_factory import build_preference_backend, describe_backend
from adapters.discord_chat import DiscordChat
from client import build_client, load_token
from core.commands import CommandHandler
from core.dispatcher import EventDispatcher
from core.preferences import PreferenceStore
from core.processor import MessageProcessor
from health import start_health_server

NAME = "VXBOT"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _load_settings():
    """Import settings, which parses and validates config.json.

    The config panel never calls this, so it opens on a rejected config.
    """

    import settings

    return settings


def _configure_logging(settings) -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/vxbot.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    # discord.py's gateway chatter stays at INFO even when we debug.
    logging.getLogger("discord").setLevel(max(level, logging.INFO))


def _build_preference_store(settings, read_only: bool = False) -> PreferenceStore:
    backend = build_preference_backend(
        settings.PREFERENCES_BACKEND,
        settings_file=settings.SETTINGS_FILE,
        database_url=settings.DATABASE_URL,
        project_root=settings.PROJECT_ROOT,
        read_only=read_only,
    )
    logging.getLogger(__name__).info("Preference backend - %s", describe_backend(backend))
    return PreferenceStore(backend)


def _run() -> None:
    _print_banner()
    settings = _load_settings()
    _configure_logging(settings)
    logger = logging.getLogger(__name__)

    logger.info("Starting vxbot")
    token = load_token()

    # Preferences are fully loaded before any gateway traffic is accepted.
    preferences = _build_preference_store(settings)
    enabled_count = preferences.load()
    logger.info("%s users have link replacement enabled", enabled_count)

    chat = DiscordChat()
    processor = MessageProcessor(
        preferences=preferences,
        chat=chat,
        rewrite_config=settings.REWRITE,
        delivery_config=settings.DELIVERY,
    )
    commands = CommandHandler(preferences, require_opt_in=settings.DELIVERY.require_opt_in)
    dispatcher = EventDispatcher(processor, commands, chat)
    logger.info(
        "Rewriting %s -> %s (mode=%s, opt-in=%s)",
        ", ".join(settings.REWRITE.source_hosts),
        settings.REWRITE.target_host,
        settings.DELIVERY.mode,
        settings.DELIVERY.require_opt_in,
    )

    health_server = None
    if settings.HEALTH_ENABLED:
        health_server = start_health_server(settings.HEALTH_HOST, settings.HEALTH_PORT)

    client = build_client(dispatcher)
    try:
        # log_handler=None keeps discord.py on the handlers configured above.
        client.run(token, log_handler=None)
    finally:
        if health_server is not None:
            health_server.shutdown()
        logger.info("vxbot stopped")


def _setup() -> None:
    _print_banner()
    from frontend.app import ConfigPanelApp

    ConfigPanelApp().run()


def _list_users() -> None:
    preferences = _build_preference_store(_load_settings(), read_only=True)
    preferences.load()
    users = preferences.enabled_users()
    if not users:
        print("No users have link replacement enabled.")
        return
    for index, user_id in enumerate(users, start=1):
        print(f"{index}. {user_id}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="vxbot")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("config", help="Launch the config TUI")
    subparsers.add_parser("users", help="List users with link replacement enabled")

    args = parser.parse_args(argv)
    if args.command == "config":
        _setup()
        return
    if args.command == "users":
        _list_users()
        return
    _run()


if __name__ == "__main__":
    main()
