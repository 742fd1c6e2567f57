"""File-based configuration store implementation."""

from __future__ import annotations

from pathlib import Path

from result import Err, Ok, Result, is_err

from tidytop.common import AppDirectories, create_logger, get_global_config_root

from .loader import load_config, validate_config
from .models import ConfigError, ConfigNotFoundError, TidyTopConfig
from .protocol import ConfigStore
from .resolver import apply_env_overrides

logger = create_logger("config")


class FileConfigStore(ConfigStore):
    def __init__(self, directories: AppDirectories, filename: str = "config.yaml") -> None:
        self.directories = directories
        self.filename = filename

    @property
    def path(self) -> Path:
        return get_global_config_root(self.directories) / self.filename

    def load(self) -> Result[TidyTopConfig, ConfigError]:
        """Load the config file; a missing file means all defaults."""
        path = self.path
        loaded = load_config(path)

        if is_err(loaded):
            error = loaded.unwrap_err()
            if not isinstance(error, ConfigNotFoundError):
                logger.error("Config load failed", path=str(path), error=error.message)
                return loaded
            logger.debug("Config file not found, using defaults", path=str(path))
            loaded = Ok(TidyTopConfig())

        merged = apply_env_overrides(loaded.unwrap().model_dump(mode="json"))
        return validate_config(merged, path).inspect_err(
            lambda error: logger.error("Config overrides invalid", path=str(path), error=error.message)
        )

    def load_or_default(self) -> TidyTopConfig:
        match self.load():
            case Ok(config):
                return config
            case Err(error):
                logger.warning("Falling back to default config", error=error.message)
                return TidyTopConfig()
