"""Application settings read from a JSON file.

Settings are read from:
    ~/Library/Application Support/RingTimer/settings.json

The file is optional and only holds preferences; the countdown itself is
never written to disk.

Usage::

    settings = load_settings()
    engine.configure(settings.default_minutes, settings.default_seconds)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "RingTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    default_minutes: int = 25
    default_seconds: int = 0

    # ── alert ─────────────────────────────────────────────────────────
    alert_message: str = "Time is up!"
    alert_delay_ms: int = 500              # dialog follows the sound
    alert_sound_path: str | None = None    # None → synthesized chime

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 440
    window_height: int = 560


def _accepts(default, value) -> bool:
    """True when *value* has the same JSON type as the field *default*."""
    if default is None:
        return value is None or isinstance(value, str)
    if isinstance(default, bool) or isinstance(value, bool):
        return type(value) is type(default)
    return isinstance(value, type(default))


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored and values of the wrong type are dropped with
    a warning.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        defaults = {f.name: f.default for f in fields(Settings)}
        filtered = {}
        for key, value in data.items():
            if key not in defaults:
                continue
            if not _accepts(defaults[key], value):
                logger.warning(
                    "Ignoring setting %s=%r in %s: expected %s",
                    key, value, path, type(defaults[key]).__name__,
                )
                continue
            filtered[key] = value
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
