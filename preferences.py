"""Durable user preferences (API key, accent colour) stored in a local JSON file."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from config import ACCENT_COLORS, ACCENT_COLOR_PREFERENCE, API_KEY_PREFERENCE, PREFERENCES_PATH
from models import AccentColor, UserPreferences

logger = logging.getLogger(__name__)


def available_accent_colors() -> List[AccentColor]:
    """Return the fixed accent palette, default first."""
    return [AccentColor(name=name, value=value) for name, value in ACCENT_COLORS]


def find_accent_color(name: str) -> AccentColor:
    """Look up a palette entry by name. Unknown names fall back to the default."""
    palette = available_accent_colors()
    for accent in palette:
        if accent.name == name:
            return accent
    return palette[0]


class PreferenceStore:
    """Reads and writes the preference file. Values are stored verbatim."""

    def __init__(self, path: Path = PREFERENCES_PATH):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def load(self) -> UserPreferences:
        """Load preferences, using defaults for anything not stored."""
        data = self._read()
        api_key = data.get(API_KEY_PREFERENCE)
        return UserPreferences(
            api_key=api_key if isinstance(api_key, str) else "",
            accent_color=find_accent_color(data.get(ACCENT_COLOR_PREFERENCE)),
        )

    def save_api_key(self, api_key: str) -> None:
        self._write(API_KEY_PREFERENCE, api_key)

    def save_accent_color(self, accent: AccentColor) -> None:
        self._write(ACCENT_COLOR_PREFERENCE, accent.name)
