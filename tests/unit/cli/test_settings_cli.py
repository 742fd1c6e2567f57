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


def test_settings_show_defaults_as_json() -> None:
    with runner.isolated_filesystem():
        result = runner.invoke(app, ["settings", "show", "--format", "json"], env=_env(Path.cwd()))

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["grid_size"] == 10
        assert payload["version"] == 0


def test_settings_reset_persists_new_version() -> None:
    with runner.isolated_filesystem():
        base = Path.cwd()

        reset = runner.invoke(app, ["settings", "reset"], env=_env(base))
        assert reset.exit_code == 0
        assert "version 1" in reset.stdout

        shown = runner.invoke(app, ["settings", "show", "--format", "json"], env=_env(base))
        assert json.loads(shown.stdout)["version"] == 1
        assert (base / "xdg-data" / "tidytop" / "settings" / "desktop-settings.json").is_file()
