"""Guide tab with a short operator reference."""

from __future__ import annotations

from textual.containers import ScrollableContainer
from textual.widgets import Markdown

GUIDE = """\
# vxbot

Rewrites Twitter/X links posted in Discord to an embed-friendly host.

## Commands
- `/replace setting:on` opts you in, `/replace setting:off` opts out.
- `/status` shows your current setting. Both replies are only visible to you.

## Delivery modes
- **reply**: hides the original preview (needs *Manage Messages*) and replies
  with the rewritten links.
- **repost**: reposts the message with rewritten links under the author's
  name, then deletes the original. If deleting is not allowed the preview is
  hidden instead.

## Preferences
- **auto**: `DATABASE_URL` when set (`sqlite:///path` or `postgres://...`),
  otherwise memory only.
- **json**: `{"enabledUsers": [...]}` in `settings_file`.

## Environment
`DISCORD_TOKEN` (required), `DATABASE_URL`, `PORT`, `SETTINGS_FILE`.
"""


class GuideTab(ScrollableContainer):
    def compose(self):
        yield Markdown(GUIDE, id="guide-text")
