"""Validation helpers for config editing."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")


@dataclass
class HostInfo:
    normalized: str | None
    error: str | None = None


def parse_host(raw_value: str) -> HostInfo:
    """Validate a bare host name such as ``x.com``.

    Schemes, paths and ports are rejected: the rewriter only swaps hosts.
    """

    value = raw_value.strip().lower()
    if not value:
        return HostInfo(None, "host is required")
    if "://" in value or "/" in value:
        return HostInfo(None, "enter a host name without scheme or path")
    if ":" in value:
        return HostInfo(None, "ports are not supported")
    if value.startswith("www."):
        value = value[len("www."):]

    labels = value.split(".")
    if len(labels) < 2:
        return HostInfo(None, "host needs a domain suffix, e.g. x.com")
    if not all(_LABEL.match(label) for label in labels):
        return HostInfo(None, f"invalid host: {raw_value.strip()}")
    return HostInfo(value)


def parse_host_list(raw_value: str) -> tuple[list[str], str | None]:
    """Parse one host per line, dropping duplicates while keeping order."""

    hosts: list[str] = []
    for line in raw_value.splitlines():
        if not line.strip():
            continue
        info = parse_host(line)
        if info.error or info.normalized is None:
            return [], info.error
        if info.normalized not in hosts:
            hosts.append(info.normalized)
    if not hosts:
        return [], "at least one source host is required"
    return hosts, None


def parse_port(raw_value: str) -> tuple[int | None, str | None]:
    stripped = raw_value.strip()
    if not stripped:
        return None, None
    if not stripped.isdigit():
        return None, "port must be a number"
    port = int(stripped)
    if not 0 < port < 65536:
        return None, "port must be between 1 and 65535"
    return port, None
