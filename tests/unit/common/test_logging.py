from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from tidytop.common import (
    AppDirectories,
    AppInfo,
    LoggingConfig,
    create_logger,
    disable_library_logging,
    setup_cli_logging,
)


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    yield
    logger.remove()
    disable_library_logging()


def test_default_log_file_lives_under_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    path = LoggingConfig().resolve_log_file(AppDirectories(app_name="tidytop"))

    assert path == tmp_path / "tidytop" / "logs" / "tidytop.log"


def test_explicit_log_file_wins(tmp_path: Path) -> None:
    config = LoggingConfig(log_file=str(tmp_path / "custom.log"))

    assert config.resolve_log_file(AppDirectories()) == tmp_path / "custom.log"


def test_json_logging_keeps_scope_and_extras(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "out.log"
    config = LoggingConfig(log_file=str(log_file), format="json", log_level="DEBUG")

    handler_id = setup_cli_logging(AppInfo(environment="test"), config, AppDirectories())
    create_logger("layouts").info("Layout captured", layout_id="abc")
    logger.remove(handler_id)

    records = [json.loads(line)["record"] for line in log_file.read_text().splitlines()]
    captured = next(record for record in records if record["message"] == "Layout captured")
    assert captured["extra"]["scope"] == "layouts"
    assert captured["extra"]["layout_id"] == "abc"


def test_text_logging_respects_level(tmp_path: Path) -> None:
    log_file = tmp_path / "out.log"
    config = LoggingConfig(log_file=str(log_file), log_level="WARNING")

    handler_id = setup_cli_logging(AppInfo(environment="test"), config, AppDirectories())
    create_logger("fences").info("quiet")
    create_logger("fences").warning("Fence locked", fence_id="f1")
    logger.remove(handler_id)

    content = log_file.read_text()
    assert "quiet" not in content
    assert "Fence locked" in content
    assert "fences" in content
