import json

import pytest

from autoclose_tags.core.exceptions import AppError, SettingsValueError
from autoclose_tags.core.settings_core import (
    AutoCloseSettings,
    CursorPlacement,
    SettingsManager,
    parse_excluded_tags,
)


def test_defaults_match_plugin_behaviour():
    settings = AutoCloseSettings()
    assert settings.excluded_tag_names == frozenset()
    assert settings.cursor_placement is CursorPlacement.BETWEEN
    assert settings.skip_fenced_code_blocks is False
    assert settings.skip_inline_code_spans is True


def test_parse_excluded_tags_trims_lowercases_and_drops_blanks():
    assert parse_excluded_tags(" Div, span ,, I ") == frozenset({"div", "span", "i"})
    assert parse_excluded_tags(None) == frozenset()


def test_from_payload_overlays_defaults_and_ignores_bad_values():
    settings = AutoCloseSettings.from_payload(
        {
            "excluded_tags": "p",
            "cursor_position": "AFTER",
            "ignore_in_code_blocks": "yes",
            "ignore_inline_code": "maybe",
        }
    )
    assert settings.excluded_tag_names == {"p"}
    assert settings.cursor_placement is CursorPlacement.AFTER
    assert settings.skip_fenced_code_blocks is True
    assert settings.skip_inline_code_spans is True

    fallback = AutoCloseSettings.from_payload({"excluded_tags": 5, "cursor_position": "middle"})
    assert fallback == AutoCloseSettings()
    assert AutoCloseSettings.from_payload(["not", "a", "dict"]) == AutoCloseSettings()


def test_payload_round_trip_keeps_every_field():
    settings = AutoCloseSettings("div, i", CursorPlacement.AFTER, True, False)
    assert AutoCloseSettings.from_payload(settings.to_payload()) == settings


def test_update_setting_notifies_listeners_with_new_snapshot(tmp_path):
    manager = SettingsManager(path=str(tmp_path / "settings.json"))
    seen = []
    manager.add_listener(seen.append)
    manager.update_setting("cursor_placement", "after")
    manager.update_setting("excluded_tags", ["DIV", " span "])
    manager.update_setting("skip_fenced_code_blocks", 1)
    assert seen[0] == AutoCloseSettings()
    assert seen[-1].cursor_placement is CursorPlacement.AFTER
    assert seen[-1].excluded_tag_names == {"div", "span"}
    assert seen[-1].skip_fenced_code_blocks is True
    assert manager.get_excluded_tags() == {"div", "span"}


@pytest.mark.parametrize(
    "name, value",
    [("colour", "red"), ("cursor_placement", "middle"), ("skip_inline_code_spans", "perhaps")],
)
def test_update_setting_rejects_unknown_names_and_bad_values(tmp_path, name, value):
    manager = SettingsManager(path=str(tmp_path / "settings.json"))
    with pytest.raises(SettingsValueError) as info:
        manager.update_setting(name, value)
    assert isinstance(info.value, AppError)
    assert manager.settings == AutoCloseSettings()


def test_save_then_load_restores_settings(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    manager = SettingsManager(path=str(path))
    manager.update_setting("excluded_tags", "i, b")
    manager.update_setting("skip_inline_code_spans", False)
    assert manager.save()
    assert json.loads(path.read_text(encoding="utf-8"))["excluded_tags"] == "i, b"

    reloaded = SettingsManager(path=str(path))
    seen = []
    reloaded.add_listener(seen.append)
    reloaded.load()
    assert reloaded.settings == manager.settings
    assert seen[-1] == manager.settings


def test_load_keeps_defaults_for_corrupt_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    manager = SettingsManager(path=str(path))
    assert manager.load() == AutoCloseSettings()
