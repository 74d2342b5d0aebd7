"""Persistent JSON config helpers.

Stores the UI theme, box width, reflog branch limit, filter charset option,
and the stash prompt default. All access is defensive: malformed or missing
config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .git_branches import DEFAULT_RECENT_LIMIT
from .selector.config import DEFAULT_MIN_WIDTH, MIN_BOX_WIDTH

APP_NAME = "branchpicker"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Settings:
    """Effective user preferences after validation."""

    theme: str | None = None
    min_width: int = DEFAULT_MIN_WIDTH
    recent_limit: int = DEFAULT_RECENT_LIMIT
    allow_space: bool = False
    stash_default: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _coerce_int(value: object, default: int, minimum: int) -> int:
    """Booleans and non-integers are invalid; valid values are floored at ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return max(minimum, value)


def _coerce_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _coerce_name(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings() -> Settings:
    """Read config and validate each key independently."""
    data = load_config()
    return Settings(
        theme=_coerce_name(data.get("theme")),
        min_width=_coerce_int(data.get("min_width"), DEFAULT_MIN_WIDTH, MIN_BOX_WIDTH),
        recent_limit=_coerce_int(data.get("recent_limit"), DEFAULT_RECENT_LIMIT, 1),
        allow_space=_coerce_bool(data.get("allow_space"), False),
        stash_default=_coerce_bool(data.get("stash_default"), True),
    )


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
