from __future__ import annotations

from urllib.parse import urlsplit

import pytest

from core.errors import LinkParseError
from core.links import build_link_pattern, find_links, fit_links, rewrite_link
from core.models import RewrittenLink

TARGET = "vxtwitter.com"
PATTERN = build_link_pattern(["twitter.com", "x.com"])


def test_scenario_single_link_with_query() -> None:
    matches = list(find_links("check https://twitter.com/foo/status/123?s=20", PATTERN))
    assert [match.raw for match in matches] == ["https://twitter.com/foo/status/123?s=20"]
    assert matches[0].start == 6
    assert rewrite_link(matches[0].raw, TARGET) == "https://vxtwitter.com/foo/status/123"


def test_finds_every_link_in_order() -> None:
    text = "a https://x.com/a/status/1 b http://www.twitter.com/b c HTTPS://X.COM/c"
    raws = [match.raw for match in find_links(text, PATTERN)]
    assert raws == [
        "https://x.com/a/status/1",
        "http://www.twitter.com/b",
        "HTTPS://X.COM/c",
    ]


def test_ignores_other_hosts_and_bare_domains() -> None:
    text = "https://vxtwitter.com/a https://fixupx.com/b x.com/c https://example.com/x.com/d https://x.com"
    assert list(find_links(text, PATTERN)) == []


def test_find_links_is_lazy() -> None:
    found = find_links("https://x.com/a", PATTERN)
    assert iter(found) is found
    assert next(found).raw == "https://x.com/a"


def test_build_link_pattern_requires_a_host() -> None:
    with pytest.raises(ValueError):
        build_link_pattern([" ", ""])


def test_custom_source_hosts_are_escaped() -> None:
    pattern = build_link_pattern(["bsky.app"])
    assert [m.raw for m in find_links("https://bsky.app/p https://bskyxapp/p", pattern)] == ["https://bsky.app/p"]


@pytest.mark.parametrize(
    "url",
    [
        "https://x.com/user/status/1?s=20&t=abc",
        "http://www.twitter.com/user/status/2",
        "HTTPS://X.COM/User/Status/3#frag",
    ],
)
def test_rewrite_changes_only_host_and_query(url: str) -> None:
    result = rewrite_link(url, TARGET)
    before, after = urlsplit(url), urlsplit(result)
    assert after.hostname == TARGET
    assert after.query == ""
    assert after.scheme == before.scheme
    assert after.path == before.path
    assert after.fragment == before.fragment


def test_rewrite_is_idempotent() -> None:
    once = rewrite_link("https://x.com/a/status/9?ref=home", TARGET)
    assert rewrite_link(once, TARGET) == once


def test_rewrite_keeps_port() -> None:
    assert rewrite_link("https://x.com:8443/a?b=c", TARGET) == "https://vxtwitter.com:8443/a"


@pytest.mark.parametrize(
    "url",
    [
        "https://x.com/foo\x00bar",
        "ftp://x.com/a",
        "https:///no-host",
        "http://[::1/foo",
        "https://x.com:notaport/a",
    ],
)
def test_rewrite_rejects_malformed_urls(url: str) -> None:
    with pytest.raises(LinkParseError):
        rewrite_link(url, TARGET)


def test_fit_links_keeps_leading_links_within_limit() -> None:
    pattern = build_link_pattern(("x.com",))
    links = [
        RewrittenLink(match, rewrite_link(match.raw, "vxtwitter.com"))
        for match in find_links("https://x.com/a https://x.com/b https://x.com/c", pattern)
    ]

    # Each URL is 23 characters; two plus a newline is 47.
    assert [link.url for link in fit_links(links, 47)] == ["https://vxtwitter.com/a", "https://vxtwitter.com/b"]
    assert fit_links(links, 22) == []
