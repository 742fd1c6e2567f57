from __future__ import annotations

from pathlib import Path

import pytest

from tidytop.common import (
    AppDirectories,
    get_data_directory_from_dirs,
    get_default_desktop_dirs,
    get_global_config_root,
)


@pytest.fixture
def app_directories() -> AppDirectories:
    return AppDirectories(app_name="tidytop")


def test_global_config_root_prefers_xdg(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, app_directories: AppDirectories
) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))

    assert get_global_config_root(app_directories) == tmp_path / "cfg" / "tidytop"


def test_global_config_root_defaults_to_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, app_directories: AppDirectories
) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    assert get_global_config_root(app_directories) == tmp_path / ".config" / "tidytop"


def test_data_directory_prefers_xdg(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, app_directories: AppDirectories
) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    assert get_data_directory_from_dirs(app_directories) == tmp_path / "data" / "tidytop"


def test_default_desktop_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_DESKTOP_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert get_default_desktop_dirs() == [tmp_path / "Desktop"]

    monkeypatch.setenv("XDG_DESKTOP_DIR", str(tmp_path / "Schreibtisch"))
    assert get_default_desktop_dirs() == [tmp_path / "Schreibtisch"]
