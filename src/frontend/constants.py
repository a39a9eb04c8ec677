"""Shared constants for the Textual UI."""

from __future__ import annotations

import os
from pathlib import Path

DISCORD_BLURPLE = "#5865F2"
PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = Path(os.getenv("VXBOT_CONFIG", str(PROJECT_ROOT / "config.json")))
