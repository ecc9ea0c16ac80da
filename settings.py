"""JSON-based settings for the day grid."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".daygrid-settings.json")

_DEFAULTS = {
    "first_day_of_week": None,
    "fixed_weeks": False,
    "class_names": {"selected": "selected", "disabled": "disabled"},
    "modifier_colors": {"today": "#0078D4", "selected": "#B3D7F2", "disabled": "#E0E0E0"},
}


def default_settings() -> dict:
    """Return a fresh copy of the defaults (nested dicts included)."""
    return {k: dict(v) if isinstance(v, dict) else v for k, v in _DEFAULTS.items()}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing or mistyped keys."""
    path = path or _SETTINGS_PATH
    settings = default_settings()
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: top level is not an object", path)
        return settings

    logger.debug("Loaded settings from %s", path)
    fdow = stored.get("first_day_of_week")
    # bool is an int subclass; a stray true/false must not become 1/0
    if isinstance(fdow, int) and not isinstance(fdow, bool) and 0 <= fdow <= 6:
        settings["first_day_of_week"] = fdow
    elif fdow is not None:
        logger.warning("Ignoring first_day_of_week %r in %s: expected 0 (Sunday) .. 6 (Saturday)",
                       fdow, path)
    if isinstance(stored.get("fixed_weeks"), bool):
        settings["fixed_weeks"] = stored["fixed_weeks"]
    for key in ("class_names", "modifier_colors"):
        if isinstance(stored.get(key), dict):
            settings[key].update(
                {k: v for k, v in stored[key].items() if isinstance(v, str)})
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    path = path or _SETTINGS_PATH
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)
    logger.debug("Saved settings to %s", path)


def first_day_of_week(
    settings: dict,
    locale_lookup: Callable[[str], int] | None = None,
    locale: str = "en",
) -> int:
    """Resolve the first weekday (0 = Sunday) for the grid.

    An explicit ``first_day_of_week`` setting wins. Otherwise *locale_lookup*
    is asked for *locale*. Without either, Sunday.
    """
    explicit = settings.get("first_day_of_week")
    if explicit is not None:
        return explicit
    if locale_lookup is not None:
        return locale_lookup(locale)
    return 0
