"""Link matching and rewriting (core domain)."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Sequence
from urllib.parse import urlsplit, urlunsplit

from core.errors import LinkParseError
from core.models import LinkMatch, RewrittenLink

_ALLOWED_SCHEMES = {"http", "https"}
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def build_link_pattern(source_hosts: Iterable[str]) -> re.Pattern:
    """Compile the matcher for ``http(s)://[www.]<host>/<path>`` links.

    Hosts are escaped literally and matched case-insensitively; the path runs
    until the next whitespace character.
    """

    hosts = [host.strip().lower() for host in source_hosts if host and host.strip()]
    if not hosts:
        raise ValueError("At least one source host is required")
    alternation = "|".join(re.escape(host) for host in hosts)
    return re.compile(rf"https?://(?:www\.)?(?:{alternation})/[^\s]+", re.IGNORECASE)


def find_links(text: str, pattern: re.Pattern) -> Iterator[LinkMatch]:
    """Yield source-host links in the order they appear in ``text``."""

    for found in pattern.finditer(text):
        yield LinkMatch(raw=found.group(0), start=found.start())


def _build_netloc(parts, target_host: str) -> str:
    netloc = target_host
    try:
        port = parts.port
    except ValueError as exc:
        raise LinkParseError(f"Invalid port in {parts.geturl()!r}") from exc
    if port is not None:
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    return netloc


def rewrite_link(url: str, target_host: str) -> str:
    """Point ``url`` at ``target_host`` and drop its query string.

    Scheme, path and fragment are kept as-is, so rewriting an already
    rewritten link returns it unchanged.
    """

    if _CONTROL_CHARS.search(url):
        raise LinkParseError(f"Control characters in {url!r}")
    try:
        parts = urlsplit(url)
    except ValueError as exc:
        raise LinkParseError(f"Cannot parse {url!r}: {exc}") from exc

    if parts.scheme not in _ALLOWED_SCHEMES:
        raise LinkParseError(f"Unsupported scheme in {url!r}")
    if not parts.hostname:
        raise LinkParseError(f"Missing host in {url!r}")

    netloc = _build_netloc(parts, target_host)
    return urlunsplit((parts.scheme, netloc, parts.path, "", parts.fragment))


def fit_links(links: Sequence[RewrittenLink], limit: int) -> List[RewrittenLink]:
    """Return the leading ``links`` whose URLs, one per line, fit in ``limit``."""

    fitted: List[RewrittenLink] = []
    length = 0
    for link in links:
        added = len(link.url) + (1 if fitted else 0)
        if length + added > limit:
            break
        fitted.append(link)
        length += added
    return fitted
