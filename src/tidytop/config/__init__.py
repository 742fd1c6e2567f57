"""Public configuration API for TidyTop."""

from __future__ import annotations

from .loader import load_config
from .models import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    ConfigValidationError,
    ConfigYamlError,
    TidyTopConfig,
)
from .protocol import ConfigStore
from .resolver import apply_env_overrides
from .store import FileConfigStore

__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigNotFoundError",
    "ConfigStore",
    "ConfigValidationError",
    "ConfigYamlError",
    "FileConfigStore",
    "TidyTopConfig",
    "apply_env_overrides",
    "load_config",
]
