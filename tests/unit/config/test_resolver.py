from __future__ import annotations

import os

import pytest

from tidytop.config.resolver import apply_env_overrides, collect_env_overrides


@pytest.fixture(autouse=True)
def _clear_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ.keys()):
        if key.startswith("TIDYTOP_CONFIG__"):
            monkeypatch.delenv(key, raising=False)


def test_apply_env_overrides_updates_nested_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    base = {"logging": {"enabled": True, "log_level": "INFO"}, "desktop_dirs": ["/a"]}

    monkeypatch.setenv("TIDYTOP_CONFIG__LOGGING__ENABLED", "false")
    monkeypatch.setenv("TIDYTOP_CONFIG__LOGGING__LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TIDYTOP_CONFIG__DESKTOP_DIRS", "[/b, /c]")

    resolved = apply_env_overrides(base)

    assert resolved["logging"] == {"enabled": False, "log_level": "DEBUG"}
    assert resolved["desktop_dirs"] == ["/b", "/c"]
    assert base["logging"]["log_level"] == "INFO"


def test_apply_env_overrides_no_env_returns_copy() -> None:
    base = {"logging": {"enabled": True}}

    resolved = apply_env_overrides(base)

    assert resolved == base


def test_collect_env_overrides_parses_scalars_and_ignores_other_vars() -> None:
    overrides = collect_env_overrides(
        {
            "TIDYTOP_CONFIG__RESOLUTION__WIDTH": "1280",
            "TIDYTOP_CONFIG__": "ignored",
            "OTHER": "ignored",
            "TIDYTOP_CONFIG__LOGGING__FORMAT": "json: [",
        }
    )

    assert overrides == {"resolution": {"width": 1280}, "logging": {"format": "json: ["}}
