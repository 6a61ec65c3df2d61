"""JSON-based settings persistence for calendar layout options."""

from __future__ import annotations

import json
import os

from loguru import logger

from layout import HorizontalLayout, LayoutPolicy, VerticalLayout

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".calendar-slots-settings.json")
_ENV_VAR = "CALENDAR_SLOTS_SETTINGS"

ORIENTATIONS = ("vertical", "horizontal")

_DEFAULTS = {
    "orientation": "vertical",
    "pin_days_of_week_to_top": False,
    "generate_footers": False,
    "first_weekday": 0,
}


def settings_path(path: str | None = None) -> str:
    """Explicit path, else $CALENDAR_SLOTS_SETTINGS, else the home-directory file."""
    return path or os.environ.get(_ENV_VAR) or _SETTINGS_PATH


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    path = settings_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable settings file {path}: {e}")
        return settings
    if not isinstance(stored, dict):
        logger.warning(f"Ignoring settings file {path}: expected a JSON object")
        return settings

    if stored.get("orientation") in ORIENTATIONS:
        settings["orientation"] = stored["orientation"]
    for key in ("pin_days_of_week_to_top", "generate_footers"):
        if key in stored and isinstance(stored[key], bool):
            settings[key] = stored[key]
    weekday = stored.get("first_weekday")
    if isinstance(weekday, int) and not isinstance(weekday, bool) and 0 <= weekday <= 6:
        settings["first_weekday"] = weekday
    logger.debug(f"Loaded settings from {path}: {settings}")
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(settings_path(path), "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def parse_setting(key: str, value: str):
    """Convert a command-line string into the typed value for ``key``."""
    if key not in _DEFAULTS:
        raise ValueError(f"Unknown setting {key!r}; expected one of {', '.join(_DEFAULTS)}")
    if key == "orientation":
        if value not in ORIENTATIONS:
            raise ValueError(f"orientation must be one of {', '.join(ORIENTATIONS)}")
        return value
    if key == "first_weekday":
        weekday = int(value)
        if not 0 <= weekday <= 6:
            raise ValueError("first_weekday must be 0-6 (0 = Monday)")
        return weekday
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{key} must be true or false, got {value!r}")


def layout_from_settings(settings: dict) -> LayoutPolicy:
    orientation = settings.get("orientation", _DEFAULTS["orientation"])
    if orientation == "horizontal":
        return HorizontalLayout()
    if orientation == "vertical":
        return VerticalLayout(bool(settings.get("pin_days_of_week_to_top", False)))
    raise ValueError(f"Unknown orientation {orientation!r}")
