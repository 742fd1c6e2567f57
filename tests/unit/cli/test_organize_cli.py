from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from tidytop.cli.main import app

runner = CliRunner()


def _env(base: Path) -> dict[str, str]:
    return {
        "HOME": str(base / "home"),
        "XDG_CONFIG_HOME": str(base / "xdg-config"),
        "XDG_DATA_HOME": str(base / "xdg-data"),
    }


def _desktop(base: Path) -> Path:
    desktop = base / "Desktop"
    desktop.mkdir()
    for name in ("steam.exe", "todo.txt", "mystery.qqq"):
        (desktop / name).write_text("x")
    return desktop


def test_organize_json_groups_icons() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()
        desktop = _desktop(base)

        result = runner.invoke(app, ["organize", str(desktop), "--format", "json"], env=_env(base))

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        fences = {fence["category_id"]: fence for fence in payload["fences"]}
        assert fences["games"]["icons"] == ["steam.exe"]
        assert fences["files-documents"]["icons"] == ["todo.txt"]
        assert payload["unassigned"] == ["mystery.qqq"]


def test_organize_text_output() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()
        desktop = _desktop(base)

        result = runner.invoke(app, ["organize", str(desktop)], env=_env(base))

        assert result.exit_code == 0
        assert "Games (1)" in result.stdout
        assert "Unassigned (1)" in result.stdout


def test_organize_uses_configured_desktop_dirs() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()
        desktop = _desktop(base)
        config = base / "xdg-config" / "tidytop" / "config.yaml"
        config.parent.mkdir(parents=True)
        config.write_text(f"desktop_dirs:\n  - {desktop}\n")

        result = runner.invoke(app, ["organize", "--format", "json"], env=_env(base))

        assert result.exit_code == 0
        assert "mystery.qqq" in json.loads(result.stdout)["unassigned"]


def test_organize_missing_directory_fails() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()

        result = runner.invoke(app, ["organize", str(base / "nope")], env=_env(base))

        assert result.exit_code == 1
        assert "Could not scan" in result.stderr


def test_categories_list_shows_system_and_user_entries() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()
        config = base / "xdg-config" / "tidytop" / "config.yaml"
        config.parent.mkdir(parents=True)
        config.write_text("categories:\n  - id: music\n    name: Music\n    extensions: [mp3]\n    enabled: false\n")

        result = runner.invoke(app, ["categories", "list"], env=_env(base))

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0].startswith("office-tools")
        assert "music" in lines[-1]
        assert "user (disabled)" in lines[-1]
