"""Exceptions shared between the core and its adapters."""

from __future__ import annotations


class LinkParseError(ValueError):
    """A matched link is not a structurally valid URL."""


class StorageError(Exception):
    """A preference backend failed to read or write its medium."""


class ChatDeliveryError(Exception):
    """The chat platform rejected an outbound action."""


class ChatPermissionError(ChatDeliveryError):
    """The bot lacks the permission required for an outbound action."""
