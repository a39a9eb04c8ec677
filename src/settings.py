"""Static configuration for vxbot.

All user-editable settings (hosts, delivery, preferences, health, logging)
live in a single JSON file for quick edits without touching Python. Secrets
and deployment overrides come from the environment.
"""

import json
import os

from dotenv import load_dotenv

from core.config import DeliveryConfig, RewriteConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

CONFIG_PATH = os.getenv("VXBOT_CONFIG", os.path.join(PROJECT_ROOT, "config.json"))


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Which links are rewritten and where they point.
_rewrite = _CONFIG.get("rewrite", {})
REWRITE = RewriteConfig(
    source_hosts=tuple(_rewrite.get("source_hosts", ["twitter.com", "x.com"])),
    target_host=_rewrite.get("target_host", "vxtwitter.com"),
)

# Delivery mode:
# - "reply": suppress the original preview and reply with the rewritten links
# - "repost": repost the rewritten text under the author's name, then delete
_delivery = _CONFIG.get("delivery", {})
DELIVERY = DeliveryConfig(
    mode=_delivery.get("mode", "reply"),
    require_opt_in=bool(_delivery.get("require_opt_in", True)),
)

# Preference persistence. "auto" uses DATABASE_URL when set, memory otherwise.
_preferences = _CONFIG.get("preferences", {})
PREFERENCES_BACKEND = _preferences.get("backend", "auto")
SETTINGS_FILE = _resolve_path(os.getenv("SETTINGS_FILE") or _preferences.get("settings_file", "data/settings.json"))
DATABASE_URL = os.getenv("DATABASE_URL") or None

# Liveness endpoint for hosting platforms; PORT wins over config.json.
_health = _CONFIG.get("health", {})
HEALTH_ENABLED = bool(_health.get("enabled", True))
HEALTH_HOST = _health.get("host", "0.0.0.0")
HEALTH_PORT = int(os.getenv("PORT") or _health.get("port", 8080))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
