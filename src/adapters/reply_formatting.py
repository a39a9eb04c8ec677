"""Shared reply formatting helpers.

Keeping formatting here prevents drift between delivery modes and keeps
every outbound message within Discord's length limit.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from discord.utils import escape_markdown

from core.config import MESSAGE_LIMIT
from core.links import fit_links
from core.models import RewrittenLink

ELLIPSIS = "..."


def format_reply(links: Sequence[RewrittenLink], limit: int = MESSAGE_LIMIT) -> str:
    """Join rewritten links one per line, dropping whole lines past ``limit``."""

    return "\n".join(link.url for link in fit_links(links, limit))


def substitute_links(content: str, links: Iterable[RewrittenLink]) -> str:
    """Return ``content`` with every rewritten link replaced in place.

    Links must be in match order; anything not rewritten stays verbatim.
    """

    pieces: List[str] = []
    cursor = 0
    for link in links:
        pieces.append(content[cursor : link.match.start])
        pieces.append(link.url)
        cursor = link.match.end
    pieces.append(content[cursor:])
    return "".join(pieces)


def format_repost(
    author_name: str,
    content: str,
    links: Iterable[RewrittenLink],
    limit: int = MESSAGE_LIMIT,
) -> str:
    """Create the repost body: bold author name, then the rewritten text."""

    text = f"**{escape_markdown(author_name)}**: {substitute_links(content, links)}"
    if len(text) > limit:
        text = text[: limit - len(ELLIPSIS)] + ELLIPSIS
    return text
