import pytest

from autoclose_tags.core.domain_impl.infra import settings_store_service


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (0, False), (1.0, True), (" On ", True), ("no", False), ("?", None), (None, None)],
)
def test_parse_bool_token(value, expected):
    assert settings_store_service.parse_bool_token(value) is expected


def test_read_settings_payload_handles_missing_and_non_object(tmp_path):
    assert settings_store_service.read_settings_payload(str(tmp_path / "absent.json")) == {}
    listing = tmp_path / "list.json"
    listing.write_text("[1, 2]", encoding="utf-8")
    assert settings_store_service.read_settings_payload(str(listing)) == {}


def test_write_settings_payload_reports_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert not settings_store_service.write_settings_payload(str(blocker / "settings.json"), {"a": 1})


def test_settings_dir_uses_local_state_off_windows(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    target = settings_store_service.settings_dir("AutoCloseTags", "linux", {"LOCALAPPDATA": "/ignored"})
    assert target == str(tmp_path / ".local" / "state" / "AutoCloseTags")
    assert (tmp_path / ".local" / "state" / "AutoCloseTags").is_dir()


def test_settings_dir_prefers_localappdata_then_appdata_on_windows(tmp_path):
    local, roaming = tmp_path / "local", tmp_path / "roaming"
    assert settings_store_service.settings_dir(
        "AutoCloseTags", "win32", {"LOCALAPPDATA": str(local), "APPDATA": str(roaming)}, create=False
    ) == str(local / "AutoCloseTags")
    assert settings_store_service.settings_dir(
        "AutoCloseTags", "win32", {"APPDATA": str(roaming)}, create=False
    ) == str(roaming / "AutoCloseTags")


def test_write_text_atomic_replaces_file_and_leaves_no_temp(tmp_path):
    target = tmp_path / "out" / "doc.md"
    settings_store_service.write_text_atomic(str(target), "old")
    settings_store_service.write_text_atomic(str(target), "<div></div>\n")
    assert target.read_text(encoding="utf-8") == "<div></div>\n"
    assert [p.name for p in target.parent.iterdir()] == ["doc.md"]
