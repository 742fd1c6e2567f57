"""User-facing desktop settings."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from tidytop.common import HexColor, Opacity, Size


class ApplicationTheme(str, Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"


class RuleType(str, Enum):
    """What an auto-organize rule's condition is tested against."""

    EXTENSION = "extension"
    NAME = "name"
    PATH = "path"
    SIZE = "size"
    DATE_CREATED = "date_created"
    DATE_MODIFIED = "date_modified"


class AutoOrganizeRule(BaseModel):
    """A user rule that sends matching icons to a specific fence.

    ``condition`` syntax depends on ``rule_type``: a comma-separated extension
    list, a substring for name/path, or ``<op><number>`` for size (bytes) and
    dates (age in days), e.g. ``>=1048576`` or ``<7``.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    condition: str = ""
    rule_type: RuleType = RuleType.EXTENSION
    target_fence_id: str = ""
    enabled: bool = True
    priority: int = 0


class DesktopSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default_fence_background_color: HexColor = "#C8F0F0F0"
    default_fence_border_color: HexColor = "#C8B4B4B4"
    default_fence_title_color: HexColor = "#FF000000"
    default_fence_opacity: Opacity = 0.8
    default_icon_size: Size = Field(default_factory=lambda: Size(width=32, height=32))
    default_icon_spacing: int = Field(default=5, ge=0)
    default_fence_corner_radius: int = Field(default=4, ge=0)
    default_fence_border_width: int = Field(default=1, ge=0)
    show_fence_titles: bool = True
    enable_quick_hide: bool = True
    quick_hide_hotkey: str = "Ctrl+Space"
    enable_auto_organize: bool = True
    auto_organize_interval: int = Field(default=30, ge=1)
    start_with_os: bool = False
    show_notifications: bool = True
    language: str = "en-US"
    theme: ApplicationTheme = ApplicationTheme.SYSTEM
    auto_organize_rules: list[AutoOrganizeRule] = Field(default_factory=list)
    enable_animations: bool = True
    animation_speed: int = Field(default=300, ge=0)
    enable_grid_snapping: bool = True
    grid_size: int = Field(default=10, ge=1)
    last_modified: datetime = Field(default_factory=datetime.now)
    version: int = Field(default=0, ge=0)


class SettingsPersistenceError(BaseModel):
    """Settings could not be written to (or read from) the storage collaborator."""

    model_config = ConfigDict(extra="forbid")

    message: str
