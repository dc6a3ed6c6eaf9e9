import json

import pytest

from launchpad import state
from launchpad.constants import (
    CUSTOM_PATHS_FILE_NAME,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    PORTABLE_APPS_FILE_NAME,
    PORTABLE_DEFAULT_PUBLISHER,
    REGISTRY_NAMESPACES,
    SETTINGS_FILE_NAME,
)
from launchpad.models import SourceKind
from launchpad.state import (
    ManualRegistry,
    Settings,
    add_portable_app,
    ensure_settings,
    load_custom_paths,
    load_portable_apps,
    load_settings,
    remove_portable_app,
    resolve_data_dir,
    save_custom_path,
    save_settings,
)


def test_resolve_data_dir_honours_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("LAUNCHPAD_DATA_DIR", str(tmp_path / "data"))
    assert resolve_data_dir() == tmp_path / "data"


def test_settings_defaults_when_missing(tmp_path) -> None:
    settings = load_settings(tmp_path)
    assert settings.collation_locale == ""
    assert settings.command_timeout == DEFAULT_COMMAND_TIMEOUT
    assert settings.max_workers == DEFAULT_MAX_WORKERS
    assert settings.registry_namespaces == list(REGISTRY_NAMESPACES)
    assert settings.extra_shortcut_dirs == []


def test_settings_corrupt_file_falls_back_to_defaults(tmp_path) -> None:
    (tmp_path / SETTINGS_FILE_NAME).write_text("{not json", encoding="utf-8")
    assert load_settings(tmp_path) == Settings()


def test_settings_invalid_values_are_ignored(tmp_path) -> None:
    (tmp_path / SETTINGS_FILE_NAME).write_text(
        json.dumps(
            {
                "collation_locale": " zh_CN ",
                "command_timeout": -1,
                "max_workers": True,
                "registry_namespaces": [],
                "extra_shortcut_dirs": ["D:\\Menu", 3, " "],
                "log_level": "debug",
            }
        ),
        encoding="utf-8",
    )
    settings = load_settings(tmp_path)
    assert settings.collation_locale == "zh_CN"
    assert settings.command_timeout == DEFAULT_COMMAND_TIMEOUT
    assert settings.max_workers == DEFAULT_MAX_WORKERS
    assert settings.registry_namespaces == list(REGISTRY_NAMESPACES)
    assert settings.extra_shortcut_dirs == ["D:\\Menu"]
    assert settings.log_level == "DEBUG"


def test_settings_round_trip(tmp_path) -> None:
    settings = Settings(collation_locale="en_US", command_timeout=5.0, max_workers=2, registry_namespaces=["NS"])
    save_settings(tmp_path, settings)
    assert load_settings(tmp_path) == settings


def test_custom_path_save_and_clear(tmp_path) -> None:
    save_custom_path(tmp_path, "Rm9v", "D:\\foo.exe")
    save_custom_path(tmp_path, "QmFy", "D:\\bar.exe")
    assert load_custom_paths(tmp_path) == {"Rm9v": "D:\\foo.exe", "QmFy": "D:\\bar.exe"}

    save_custom_path(tmp_path, "Rm9v", "")
    assert load_custom_paths(tmp_path) == {"QmFy": "D:\\bar.exe"}


def test_custom_paths_ignore_malformed_content(tmp_path) -> None:
    (tmp_path / CUSTOM_PATHS_FILE_NAME).write_text(json.dumps(["not", "a", "map"]), encoding="utf-8")
    assert load_custom_paths(tmp_path) == {}
    (tmp_path / CUSTOM_PATHS_FILE_NAME).write_text(json.dumps({"a": "", "b": 3, "c": "C:\\c.exe"}), encoding="utf-8")
    assert load_custom_paths(tmp_path) == {"c": "C:\\c.exe"}


def test_add_portable_app_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(state.time, "time", lambda: 1700000000.0)
    record = add_portable_app(tmp_path, " My Tool ", "E:\\tools\\mytool.exe")
    assert record.id == "portable_1700000000000"
    assert record.name == "My Tool"
    assert record.publisher == PORTABLE_DEFAULT_PUBLISHER
    assert record.install_location == "E:\\tools"
    assert load_portable_apps(tmp_path) == [record]


def test_portable_ids_stay_unique_within_one_millisecond(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(state.time, "time", lambda: 1700000000.0)
    first = add_portable_app(tmp_path, "One", "E:\\one.exe")
    second = add_portable_app(tmp_path, "Two", "E:\\two.exe", publisher="Acme")
    assert first.id != second.id
    assert second.publisher == "Acme"


def test_add_portable_app_rejects_blank_input(tmp_path) -> None:
    with pytest.raises(ValueError):
        add_portable_app(tmp_path, "  ", "E:\\x.exe")
    with pytest.raises(ValueError):
        add_portable_app(tmp_path, "X", "")
    assert not (tmp_path / PORTABLE_APPS_FILE_NAME).exists()


def test_remove_portable_app(tmp_path) -> None:
    record = add_portable_app(tmp_path, "Tool", "E:\\tool.exe")
    assert remove_portable_app(tmp_path, "portable_missing") is False
    assert remove_portable_app(tmp_path, record.id) is True
    assert load_portable_apps(tmp_path) == []


def test_load_portable_apps_drops_bad_records(tmp_path) -> None:
    (tmp_path / PORTABLE_APPS_FILE_NAME).write_text(
        json.dumps(
            [
                {"id": "portable_1", "name": "A", "path": "E:\\a.exe"},
                {"id": "portable_1", "name": "Dup", "path": "E:\\dup.exe"},
                {"id": "", "name": "NoId"},
                {"id": "portable_2"},
                "garbage",
                {"id": "portable_3", "name": "C", "path": "E:\\c.exe", "installLocation": "E:\\"},
            ]
        ),
        encoding="utf-8",
    )
    records = load_portable_apps(tmp_path)
    assert [r.name for r in records] == ["A", "C"]
    assert records[1].install_location == "E:\\"


def test_manual_registry_loads_overrides(tmp_path) -> None:
    save_custom_path(tmp_path, "Rm9v", "D:\\foo.exe")
    record = add_portable_app(tmp_path, "Tool", "E:\\tool.exe")

    registry = ManualRegistry(tmp_path)
    overrides = registry.load()
    assert overrides.custom_paths == {"Rm9v": "D:\\foo.exe"}
    assert overrides.portables == [record]

    candidates = registry.produce()
    assert [c.display_name for c in candidates] == ["Tool"]
    assert candidates[0].source_kind is SourceKind.MANUAL


def test_ensure_settings_seeds_defaults_once(tmp_path) -> None:
    settings = ensure_settings(tmp_path)
    assert settings == Settings()
    assert load_settings(tmp_path) == settings

    (tmp_path / SETTINGS_FILE_NAME).write_text(json.dumps({"max_workers": 2}), encoding="utf-8")
    assert ensure_settings(tmp_path).max_workers == 2
    assert json.loads((tmp_path / SETTINGS_FILE_NAME).read_text(encoding="utf-8")) == {"max_workers": 2}
