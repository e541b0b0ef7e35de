"""Persistent JSON defaults.

Stores the preferred table border style and color mode. All access is
defensive: malformed or missing settings fall back to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .colors import COLOR_MODES
from .config import BORDER_STYLES

logger = logging.getLogger(__name__)

APP_NAME = "luhut"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_settings() -> dict[str, object]:
    """Load the persisted JSON settings object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable settings at %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_settings(data: dict[str, object]) -> None:
    """Persist settings as pretty-printed JSON.

    Write failures are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write settings to %s: %s", CONFIG_PATH, exc)


def _load_choice(key: str, choices: tuple[str, ...]) -> str | None:
    value = load_settings().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip().lower()
    return stripped if stripped in choices else None


def load_border_style() -> str | None:
    """Load the persisted border style, or ``None`` when unset/invalid."""
    return _load_choice("border_style", BORDER_STYLES)


def save_border_style(style: str) -> None:
    if style not in BORDER_STYLES:
        return
    settings = load_settings()
    settings["border_style"] = style
    save_settings(settings)


def load_color_mode() -> str | None:
    """Load the persisted color mode, or ``None`` when unset/invalid."""
    return _load_choice("color_mode", COLOR_MODES)


def save_color_mode(mode: str) -> None:
    if mode not in COLOR_MODES:
        return
    settings = load_settings()
    settings["color_mode"] = mode
    save_settings(settings)
