"""Configuration file loading and validation helpers."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError
from result import Err, Ok, Result

from tidytop.common import create_logger

from .models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigValidationError,
    ConfigYamlError,
    TidyTopConfig,
)

logger = create_logger("config")


def load_config(path: Path) -> Result[TidyTopConfig, ConfigError]:
    """Load and validate the configuration file at ``path``."""
    logger.debug("Loading config file", path=str(path))

    if not path.exists() or not path.is_file():
        return Err(
            ConfigNotFoundError(
                expected_path=path,
                message=f"Configuration file not found at '{path}'.",
            ),
        )

    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Config file read error", path=str(path), error=str(exc))
        return Err(ConfigIOError(path=path, message=str(exc)))

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        line = getattr(mark, "line", None)
        column = getattr(mark, "column", None)
        logger.error("Config YAML parse error", path=str(path), line=line, column=column, error=str(exc))
        return Err(
            ConfigYamlError(
                path=path,
                line=(line + 1) if line is not None else None,
                column=(column + 1) if column is not None else None,
                message=str(exc),
            ),
        )

    if data is None:
        data = {}

    if not isinstance(data, dict):
        logger.error("Config must be a mapping", path=str(path))
        return Err(
            ConfigValidationError(
                path=path,
                field=None,
                message="Configuration root must be a mapping of keys to values.",
            ),
        )

    return validate_config(data, path)


def validate_config(data: dict[str, object], path: Path) -> Result[TidyTopConfig, ConfigError]:
    try:
        model = TidyTopConfig.model_validate(data)
    except ValidationError as exc:
        error_details = exc.errors()
        field = None
        message = str(exc)
        if error_details:
            first = error_details[0]
            loc = first.get("loc") or ()
            field = ".".join(str(part) for part in loc) or None
            message = first.get("msg", message)
        logger.error("Config validation error", path=str(path), field=field, error=message)
        return Err(ConfigValidationError(path=path, field=field, message=message))

    return Ok(model)
