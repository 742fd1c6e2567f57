"""Loguru setup for TidyTop.

The package silences itself on import. The CLI routes records to a rotating
file under the data directory; embedding applications opt in with
``enable_library_logging``.
"""

import sys
from pathlib import Path
from typing import Any, Literal

import loguru
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from tidytop.constants import APP_NAME

from .models import AppDirectories, AppInfo
from .paths import get_data_directory_from_dirs

LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

TEXT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[scope]: <10} | {message} | {extra}\n{exception}"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True)
    log_level: LogLevel = Field(default="INFO")
    log_file: str | None = Field(default=None)
    rotation: str = Field(default="1 MB")
    retention: str = Field(default="7 days")
    format: Literal["json", "text"] = Field(default="text")

    def resolve_log_file(self, directories: AppDirectories) -> Path:
        if self.log_file:
            return Path(self.log_file).expanduser()
        return get_data_directory_from_dirs(directories) / "logs" / f"{APP_NAME}.log"


def setup_cli_logging(app_info: AppInfo, config: LoggingConfig, directories: AppDirectories) -> int:
    """Replace all sinks with the CLI's log file and return the handler id."""
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "cli", "env": app_info.environment})

    log_file = config.resolve_log_file(directories)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    options: dict[str, Any] = {
        "level": config.log_level,
        "rotation": config.rotation,
        "retention": config.retention,
        "diagnose": app_info.environment == "dev",
    }
    if config.format == "json":
        options["serialize"] = True
    else:
        options["format"] = TEXT_FORMAT

    handler_id = logger.add(log_file, **options)
    logger.debug("CLI logging initialized", log_file=str(log_file), level=config.log_level, format=config.format)
    return handler_id


def disable_library_logging() -> None:
    logger.disable(APP_NAME)


def enable_library_logging(level: LogLevel = "INFO") -> int:
    logger.enable(APP_NAME)
    logger.remove()
    logger.configure(extra={"scope": "library"})
    return logger.add(sys.stderr, level=level, format=TEXT_FORMAT, colorize=False)


def create_logger(scope: str) -> "loguru.Logger":
    return logger.bind(scope=scope)
