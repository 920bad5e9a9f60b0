"""Display preferences: theme, font, view mode, default sort and delete confirmation.

Preferences live in their own key-value tables, separate from the notes blob.
The query layer never reads them; callers resolve a ``DisplayPreferences`` and
pass plain values such as the sort criterion along.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel

from sticky_notes.exc import CorruptTableError
from sticky_notes.kvstore import KeyValueStore
from sticky_notes.query import SortCriterion
from sticky_notes.themes import (
    DEFAULT_FONT_SIZE,
    DEFAULT_FONT_STYLE,
    DEFAULT_THEME,
    FONT_SIZES,
    FONT_STYLES,
    THEMES,
    VIEW_MODES,
    ThemeColors,
    font_family,
    font_size_points,
    resolve_theme,
)

logger = logging.getLogger("sticky_notes.preferences")

THEME_TABLE = "theme_prefs"
THEME_KEY = "app_theme"
SETTINGS_TABLE = "settings_prefs"

# Field -> key in SETTINGS_TABLE
_SETTINGS_KEYS = {
    "font_size": "font_size",
    "font_style": "font_style",
    "view_mode": "view_mode",
    "sort_by": "sort_by",
    "confirm_delete": "confirm_delete",
}

_CHOICES: dict[str, list[str]] = {
    "theme": list(THEMES),
    "font_size": list(FONT_SIZES),
    "font_style": list(FONT_STYLES),
    "view_mode": list(VIEW_MODES),
    "sort_by": SortCriterion.labels(),
}


class DisplayPreferences(BaseModel):
    """Resolved display settings with their stored defaults."""

    theme: str = DEFAULT_THEME
    font_size: str = DEFAULT_FONT_SIZE
    font_style: str = DEFAULT_FONT_STYLE
    view_mode: str = "Grid"
    sort_by: str = SortCriterion.TITLE_ASC.value
    confirm_delete: bool = True

    @property
    def sort_criterion(self) -> Optional[SortCriterion]:
        return SortCriterion.parse(self.sort_by)

    @property
    def theme_colors(self) -> ThemeColors:
        return resolve_theme(self.theme)

    @property
    def font_size_points(self) -> float:
        return font_size_points(self.font_size)

    @property
    def font_family(self) -> str:
        return font_family(self.font_style)


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    text = value.strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    return default


class PreferencesStore:
    """Reads and writes ``DisplayPreferences`` through a key-value backend."""

    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def _table(self, table: str) -> dict[str, str]:
        try:
            return self._kv.get_all(table)
        except CorruptTableError as exc:
            logger.warning("Preferences table unreadable, using defaults: %s", exc.reason)
            return {}

    def load(self) -> DisplayPreferences:
        defaults = DisplayPreferences()
        stored = self._table(SETTINGS_TABLE)
        values: dict[str, Any] = {
            "theme": self._table(THEME_TABLE).get(THEME_KEY) or defaults.theme,
        }
        for field, key in _SETTINGS_KEYS.items():
            if field == "confirm_delete":
                values[field] = _parse_bool(stored.get(key), defaults.confirm_delete)
            else:
                values[field] = stored.get(key) or getattr(defaults, field)
        return DisplayPreferences(**values)

    def save(self, prefs: DisplayPreferences) -> None:
        self._kv.put(THEME_TABLE, THEME_KEY, prefs.theme)
        for field, key in _SETTINGS_KEYS.items():
            value = getattr(prefs, field)
            if isinstance(value, bool):
                value = "true" if value else "false"
            self._kv.put(SETTINGS_TABLE, key, value)
        logger.info("Saved display preferences: %s", prefs.model_dump())

    def update(self, **changes: Any) -> DisplayPreferences:
        """Apply ``changes`` (None values are ignored) and persist the result.

        Raises ValueError for unknown fields or values outside the offered choices.
        """
        changes = {k: v for k, v in changes.items() if v is not None}
        for field, value in changes.items():
            if field not in DisplayPreferences.model_fields:
                raise ValueError(f"Unknown preference: {field}")
            choices = _CHOICES.get(field)
            if choices is not None and value not in choices:
                raise ValueError(
                    f"Invalid {field} {value!r}; expected one of: {', '.join(choices)}"
                )
        prefs = DisplayPreferences.model_validate({**self.load().model_dump(), **changes})
        self.save(prefs)
        return prefs

    @staticmethod
    def choices() -> dict[str, list[str]]:
        """Allowed values for each choice-valued preference."""
        return {k: list(v) for k, v in _CHOICES.items()}
