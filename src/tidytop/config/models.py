"""Pydantic models for the TidyTop configuration file and its errors."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from tidytop.categories import Category
from tidytop.common import LoggingConfig, Size


class ConfigNotFoundError(BaseModel):
    """Configuration file not found at expected location."""

    model_config = ConfigDict(extra="forbid")

    expected_path: Path
    message: str


class ConfigYamlError(BaseModel):
    """YAML parsing error in configuration file."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    line: int | None = None
    column: int | None = None
    message: str


class ConfigValidationError(BaseModel):
    """Schema validation error in configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    field: str | None = None
    message: str


class ConfigIOError(BaseModel):
    """File I/O error reading or writing configuration."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str


type ConfigError = ConfigNotFoundError | ConfigYamlError | ConfigValidationError | ConfigIOError


class TidyTopConfig(BaseModel):
    """User configuration (~/.config/tidytop/config.yaml).

    ``categories`` are user-defined and matched after the built-in ones;
    an empty ``desktop_dirs`` means the platform desktop folder.
    """

    model_config = ConfigDict(extra="allow")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    categories: list[Category] = []
    desktop_dirs: list[Path] = []
    resolution: Size = Field(default_factory=lambda: Size(width=1920, height=1080))
