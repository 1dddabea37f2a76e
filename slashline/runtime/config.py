"""Persistent JSON config helpers.

Stores quick-search preferences, the trigger character, the UI theme, and an
optional custom command list. All access is defensive: malformed or missing
config falls back to defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir

from ..quick_search import Item, QuickSearchConfig

APP_NAME = "slashline"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "SLASHLINE_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def config_path() -> Path:
    """Return the active config path, honoring ``SLASHLINE_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def load_quick_search_config(data: dict[str, object] | None = None) -> QuickSearchConfig:
    """Build a ``QuickSearchConfig`` from persisted values.

    ``limit`` must be a non-negative integer (booleans are rejected); other
    keys only accept explicit booleans.
    """
    if data is None:
        data = load_config()
    defaults = QuickSearchConfig()
    limit = data.get("limit")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        limit = defaults.limit
    return QuickSearchConfig(
        case_sensitive=_load_bool(data, "case_sensitive", defaults.case_sensitive),
        limit=limit,
        force_matching_query=_load_bool(data, "force_matching_query", defaults.force_matching_query),
    )


def load_trigger(default: str, data: dict[str, object] | None = None) -> str:
    if data is None:
        data = load_config()
    value = data.get("trigger")
    if isinstance(value, str) and len(value) == 1 and value.isprintable() and not value.isspace():
        return value
    return default


def load_theme_name(data: dict[str, object] | None = None) -> str | None:
    if data is None:
        data = load_config()
    value = data.get("theme")
    return value if isinstance(value, str) else None


def load_commands(data: dict[str, object] | None = None) -> list[Item] | None:
    """Return configured commands, or ``None`` when none are configured.

    Entries without a string ``label`` are skipped; ``value`` may be a string
    or integer and defaults to the label.
    """
    if data is None:
        data = load_config()
    raw = data.get("commands")
    if not isinstance(raw, list):
        return None
    commands: list[Item] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        label = entry.get("label")
        if not isinstance(label, str) or not label:
            continue
        value = entry.get("value", label)
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            continue
        commands.append(Item(label=label, value=value))
    return commands or None
