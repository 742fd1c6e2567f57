"""Common models used across TidyTop."""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

from tidytop.constants import APP_NAME


class AppInfo(BaseModel):
    project_name: str = APP_NAME
    version: str = "0.1.0"
    environment: Literal["test", "dev", "prod"] = "dev"


class AppPaths(BaseModel):
    config_dir_name: str = APP_NAME
    config_filename: str = "config.yaml"
    layouts_namespace: str = "layouts"
    settings_namespace: str = "settings"


@dataclass(frozen=True)
class AppDirectories:
    """Where TidyTop keeps its files relative to the XDG base directories.

    Attributes:
        app_name: Name used under ~/.config and ~/.local/share
    """

    app_name: str = APP_NAME
