"""Shared plumbing for CLI commands."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Literal, NoReturn

import typer
import yaml
from result import is_err

from tidytop.common import get_default_desktop_dirs
from tidytop.config import ConfigError, FileConfigStore, TidyTopConfig
from tidytop.desktop import Desktop
from tidytop.icons import DirectoryScanner
from tidytop.settings import settings

FormatOption = Annotated[
    Literal["yaml", "json"],
    typer.Option("--format", "-f", show_default=True, case_sensitive=False, help="Output format (yaml or json)."),
]
DirsArgument = Annotated[
    list[Path] | None,
    typer.Argument(help="Desktop directories to scan (defaults to the configured ones)."),
]


def config_store() -> FileConfigStore:
    return FileConfigStore(settings.to_app_directories(), settings.paths.config_filename)


def load_config() -> TidyTopConfig:
    result = config_store().load()
    if is_err(result):
        handle_config_error(result.unwrap_err())
        raise typer.Exit(code=1)
    return result.unwrap()


def open_desktop(config: TidyTopConfig) -> Desktop:
    desktop = Desktop.from_config(config, settings.to_app_directories(), settings.paths)
    desktop.start()
    return desktop


def scan_into(desktop: Desktop, config: TidyTopConfig, dirs: Sequence[Path] | None) -> None:
    directories = list(dirs or config.desktop_dirs or get_default_desktop_dirs())
    result = desktop.refresh(DirectoryScanner(directories))
    if is_err(result):
        error = result.unwrap_err()
        fail(f"{error.message} ({error.path})")


def format_payload(payload: object, format: str) -> str:
    if format == "json":
        return json.dumps(payload, indent=2, sort_keys=True)
    return yaml.safe_dump(payload, sort_keys=True, allow_unicode=True)


def fail(message: str) -> NoReturn:
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def handle_config_error(error: ConfigError) -> None:
    message = error.message
    expected_path = getattr(error, "expected_path", None)
    error_path = getattr(error, "path", None)
    if expected_path is not None:
        message = f"{message} (expected at {expected_path})"
    elif error_path is not None:
        message = f"{message} ({error_path})"

    typer.secho(message, err=True, fg=typer.colors.RED)
