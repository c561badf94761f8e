"""User preferences: validation, persistence and explicit updates."""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from mindping.fileio import read_yaml, write_yaml_atomic
from mindping.models import Preferences
from mindping.workspace import preferences_path

logger = logging.getLogger(__name__)


THEME_COUNT = 5
TEXT_SIZES = ("Small", "Normal", "Large")
AVATARS = tuple(f"ava{i}" for i in range(1, 11))


def validate_preferences(data: dict[str, Any]) -> list[str]:
    """Validate preference fields (snake_case keys) and return errors."""
    errors = []
    if "username" in data and not str(data["username"]).strip():
        errors.append("username must not be blank")
    if "avatar" in data and data["avatar"] not in ("", *AVATARS):
        errors.append(f"Unknown avatar: {data['avatar']}")
    if "theme_index" in data:
        idx = data["theme_index"]
        if not isinstance(idx, int) or isinstance(idx, bool) or not 0 <= idx < THEME_COUNT:
            errors.append(f"theme_index must be integer 0-{THEME_COUNT - 1}")
    if "language" in data:
        code = data["language"]
        if not isinstance(code, str) or not code.isalpha() or not 2 <= len(code) <= 3:
            errors.append(f"Invalid language code: {code!r}")
    if "text_size" in data and data["text_size"] not in TEXT_SIZES:
        errors.append(f"Invalid text size: {data['text_size']}")
    if "timezone" in data:
        try:
            ZoneInfo(str(data["timezone"]))
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown timezone: {data['timezone']}")
    return errors


def load_preferences(root: Path | None = None) -> Preferences:
    """Load preferences.yaml; missing or unreadable files give defaults."""
    path = preferences_path(root)
    try:
        prefs = Preferences.from_dict(read_yaml(path))
    except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning("Could not read preferences from %s, using defaults: %s", path, e)
        return Preferences()
    return _reset_invalid(prefs, path)


def _reset_invalid(prefs: Preferences, path: Path) -> Preferences:
    """Replace each field that fails validation with its default."""
    defaults = Preferences()
    resets = {}
    for f in fields(Preferences):
        value = getattr(prefs, f.name)
        if validate_preferences({f.name: value}):
            logger.warning("Invalid %s=%r in %s, using default", f.name, value, path)
            resets[f.name] = getattr(defaults, f.name)
    return replace(prefs, **resets) if resets else prefs


def save_preferences(prefs: Preferences, root: Path | None = None) -> list[str]:
    path = preferences_path(root)
    try:
        write_yaml_atomic(path, prefs.to_dict())
    except OSError as e:
        logger.error("Failed to save preferences to %s: %s", path, e)
        return [f"Could not save preferences: {e}"]
    return []


def update_preferences(prefs: Preferences, **changes: Any) -> Preferences:
    """Return a copy with *changes* applied. Raises ValueError if invalid."""
    unknown = set(changes) - {f.name for f in fields(Preferences)}
    if unknown:
        raise ValueError(f"Unknown preference fields: {', '.join(sorted(unknown))}")
    errors = validate_preferences(changes)
    if errors:
        raise ValueError("; ".join(errors))
    return replace(prefs, **changes)


def ensure_first_launch(prefs: Preferences, now: datetime | None = None) -> Preferences:
    """Stamp the first-launch time once; later calls return prefs unchanged."""
    if prefs.first_launch:
        return prefs
    now = now or datetime.now(timezone.utc)
    return replace(prefs, first_launch=now.timestamp())


def reflecting_since(prefs: Preferences) -> str:
    """Informational 'member since' label, e.g. 'Reflecting since Jan 2024'."""
    if not prefs.first_launch:
        return ""
    try:
        tz = ZoneInfo(prefs.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        tz = ZoneInfo("UTC")
    when = datetime.fromtimestamp(prefs.first_launch, tz)
    return f"Reflecting since {when.strftime('%b %Y')}"
