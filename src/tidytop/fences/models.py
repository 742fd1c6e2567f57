"""Fence models."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tidytop.common import HexColor, Opacity, Point, Size
from tidytop.icons import DesktopIcon


class IconSortRule(str, Enum):
    NONE = "none"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    SIZE_ASC = "size_asc"
    SIZE_DESC = "size_desc"
    TYPE_ASC = "type_asc"
    TYPE_DESC = "type_desc"

    @property
    def descending(self) -> bool:
        return self.value.endswith("_desc")

    def sort_key(self) -> Callable[[DesktopIcon], Any] | None:
        match self:
            case IconSortRule.NAME_ASC | IconSortRule.NAME_DESC:
                return lambda icon: icon.name.casefold()
            case IconSortRule.DATE_ASC | IconSortRule.DATE_DESC:
                return lambda icon: icon.created_at
            case IconSortRule.SIZE_ASC | IconSortRule.SIZE_DESC:
                return lambda icon: icon.file_size
            case IconSortRule.TYPE_ASC | IconSortRule.TYPE_DESC:
                return lambda icon: icon.extension.casefold()
            case _:
                return None


class IconLayoutType(str, Enum):
    GRID = "grid"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    FREEFORM = "freeform"


class FenceStyle(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    background_color: HexColor = "#C8F0F0F0"
    border_color: HexColor = "#C8B4B4B4"
    title_color: HexColor = "#FF000000"
    opacity: Opacity = 0.8
    corner_radius: int = Field(default=4, ge=0)
    border_width: int = Field(default=1, ge=0)
    show_title: bool = True


class Fence(BaseModel):
    """A movable container that owns an ordered list of icon paths."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = "New Fence"
    position: Point = Field(default_factory=Point)
    size: Size = Field(default_factory=lambda: Size(width=200, height=150))
    style: FenceStyle = Field(default_factory=FenceStyle)
    is_visible: bool = True
    is_locked: bool = False
    sort_rule: IconSortRule = IconSortRule.NONE
    layout_type: IconLayoutType = IconLayoutType.GRID
    icon_spacing: int = Field(default=5, ge=0)
    category_id: str | None = None
    icons: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    modified_at: datetime = Field(default_factory=datetime.now)


class FenceValidationError(BaseModel):
    """A fence operation was given values the fence cannot take."""

    model_config = ConfigDict(extra="forbid")

    fence_id: str
    field: str
    message: str


class FenceLockedError(BaseModel):
    """The fence is locked against moves and resizes."""

    model_config = ConfigDict(extra="forbid")

    fence_id: str
    message: str
