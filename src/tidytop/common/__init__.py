"""Common models and types used across TidyTop modules."""

from .fields import HexColor, JsonDict, JsonValue, NonEmptyString, Opacity
from .geometry import Point, Size
from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_cli_logging
from .models import AppDirectories, AppInfo, AppPaths
from .paths import get_data_directory_from_dirs, get_default_desktop_dirs, get_global_config_root

__all__ = [
    "AppDirectories",
    "AppInfo",
    "AppPaths",
    "HexColor",
    "JsonDict",
    "JsonValue",
    "LoggingConfig",
    "NonEmptyString",
    "Opacity",
    "Point",
    "Size",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "get_data_directory_from_dirs",
    "get_default_desktop_dirs",
    "get_global_config_root",
    "setup_cli_logging",
]
