"""Tests for sticky_notes.preferences and sticky_notes.themes."""

from __future__ import annotations

import pytest

from sticky_notes.kvstore import FileKeyValueStore, MemoryKeyValueStore
from sticky_notes.preferences import (
    SETTINGS_TABLE,
    THEME_KEY,
    THEME_TABLE,
    DisplayPreferences,
    PreferencesStore,
)
from sticky_notes.query import SortCriterion
from sticky_notes.themes import THEMES, font_family, font_size_points, resolve_theme


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv: MemoryKeyValueStore) -> PreferencesStore:
    return PreferencesStore(kv)


class TestDisplayPreferences:
    def test_defaults(self) -> None:
        prefs = DisplayPreferences()
        assert prefs.theme == "Serenity"
        assert prefs.font_size == "Medium"
        assert prefs.font_style == "Sans-serif"
        assert prefs.view_mode == "Grid"
        assert prefs.sort_criterion is SortCriterion.TITLE_ASC
        assert prefs.confirm_delete is True

    def test_resolved_values(self) -> None:
        prefs = DisplayPreferences(theme="Cotton", font_size="Extra Large", font_style="Serif")
        assert prefs.theme_colors.name == "Cotton"
        assert prefs.font_size_points == 22.0
        assert prefs.font_family == "serif"

    def test_unknown_sort_resolves_to_none(self) -> None:
        assert DisplayPreferences(sort_by="Colour").sort_criterion is None


class TestPreferencesStore:
    def test_load_defaults_from_empty_store(self, store: PreferencesStore) -> None:
        assert store.load() == DisplayPreferences()

    def test_reads_original_keys(self, kv, store: PreferencesStore) -> None:
        kv.put(THEME_TABLE, THEME_KEY, "Midnight Focus")
        kv.put(SETTINGS_TABLE, "font_size", "Small")
        kv.put(SETTINGS_TABLE, "view_mode", "List")
        kv.put(SETTINGS_TABLE, "sort_by", "Reminder Date")
        kv.put(SETTINGS_TABLE, "confirm_delete", "false")
        prefs = store.load()
        assert prefs.theme == "Midnight Focus"
        assert prefs.font_size == "Small"
        assert prefs.view_mode == "List"
        assert prefs.sort_criterion is SortCriterion.REMINDER_DATE
        assert prefs.confirm_delete is False

    def test_unparseable_bool_uses_default(self, kv, store: PreferencesStore) -> None:
        kv.put(SETTINGS_TABLE, "confirm_delete", "maybe")
        assert store.load().confirm_delete is True

    def test_save_and_load(self, kv, store: PreferencesStore) -> None:
        prefs = DisplayPreferences(theme="Sandstone", confirm_delete=False)
        store.save(prefs)
        assert store.load() == prefs
        assert kv.get(SETTINGS_TABLE, "confirm_delete") == "false"
        assert kv.get(THEME_TABLE, THEME_KEY) == "Sandstone"

    def test_update_changes_only_given_fields(self, store: PreferencesStore) -> None:
        prefs = store.update(font_style="Monospace", view_mode=None)
        assert prefs.font_style == "Monospace"
        assert prefs.view_mode == "Grid"
        assert store.load().font_style == "Monospace"

    def test_update_bool(self, store: PreferencesStore) -> None:
        assert store.update(confirm_delete=False).confirm_delete is False
        assert store.load().confirm_delete is False

    def test_update_rejects_unknown_choice(self, store: PreferencesStore) -> None:
        with pytest.raises(ValueError):
            store.update(theme="Neon")
        with pytest.raises(ValueError):
            store.update(sort_by="Colour")

    def test_update_rejects_unknown_field(self, store: PreferencesStore) -> None:
        with pytest.raises(ValueError):
            store.update(wallpaper="stars")

    def test_choices(self) -> None:
        choices = PreferencesStore.choices()
        assert choices["view_mode"] == ["Grid", "List"]
        assert len(choices["theme"]) == 5
        assert choices["sort_by"][0] == "Title (A-Z)"


class TestThemes:
    def test_five_themes(self) -> None:
        assert list(THEMES) == [
            "Serenity",
            "Midnight Focus",
            "Sandstone",
            "Minimal Black & White",
            "Cotton",
        ]

    def test_unknown_theme_falls_back_to_first(self) -> None:
        assert resolve_theme("Neon").name == "Serenity"
        assert resolve_theme(None).name == "Serenity"

    def test_font_size_fallback(self) -> None:
        assert font_size_points("Huge") == 16.0
        assert font_size_points("Extra Small") == 12.0

    def test_font_family_fallback(self) -> None:
        assert font_family("Cursive") == "cursive"
        assert font_family("Comic") == "inherit"


class TestCorruptPreferenceFiles:
    def test_unreadable_settings_file_uses_defaults(self, tmp_path) -> None:
        (tmp_path / f"{SETTINGS_TABLE}.json").write_text("{ truncated")
        (tmp_path / f"{THEME_TABLE}.json").write_text("[]")
        store = PreferencesStore(FileKeyValueStore(tmp_path))
        assert store.load() == DisplayPreferences()

    def test_update_replaces_unreadable_file(self, tmp_path) -> None:
        (tmp_path / f"{SETTINGS_TABLE}.json").write_text("{ truncated")
        store = PreferencesStore(FileKeyValueStore(tmp_path))
        store.update(view_mode="List")
        assert store.load().view_mode == "List"
