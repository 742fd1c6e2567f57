"""Configuration storage protocol."""

from typing import Protocol

from result import Result

from .models import ConfigError, TidyTopConfig


class ConfigStore(Protocol):
    """Protocol for configuration storage and retrieval."""

    def load(self) -> Result[TidyTopConfig, ConfigError]:
        """Load the configuration with environment overrides applied."""
        ...
