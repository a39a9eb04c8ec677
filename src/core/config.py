"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

DELIVERY_MODES = ("reply", "repost")

# Discord rejects messages longer than this many characters.
MESSAGE_LIMIT = 2000


@dataclass(frozen=True)
class RewriteConfig:
    """Which hosts are recognized and where their links are pointed."""

    source_hosts: Tuple[str, ...] = ("twitter.com", "x.com")
    target_host: str = "vxtwitter.com"


@dataclass(frozen=True)
class DeliveryConfig:
    """How rewritten links are delivered back to the channel."""

    mode: str = "reply"
    require_opt_in: bool = True

    def __post_init__(self) -> None:
        if self.mode not in DELIVERY_MODES:
            raise ValueError(f"Unsupported delivery mode: {self.mode}")
