"""Layout snapshot models and errors."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from tidytop.common import Size
from tidytop.fences import Fence
from tidytop.icons import DesktopIcon
from tidytop.preferences import DesktopSettings

LAYOUT_FORMAT_VERSION = "1.0.0"
DEFAULT_LAYOUT_NAME = "Default Layout"


def _new_id() -> str:
    return uuid.uuid4().hex


class FenceSnapshot(Fence):
    """A fence as captured in a layout, owning copies of its icon records."""

    icon_records: list[DesktopIcon] = Field(default_factory=list)

    def clone(self) -> FenceSnapshot:
        fence_id = _new_id()
        return self.model_copy(
            deep=True,
            update={
                "id": fence_id,
                "icon_records": [icon.model_copy(deep=True, update={"fence_id": fence_id}) for icon in self.icon_records],
            },
        )

    def to_fence(self) -> Fence:
        return Fence.model_validate(self.model_dump(exclude={"icon_records"}))


class DesktopLayout(BaseModel):
    """A named snapshot of every fence and every unfenced icon."""

    model_config = ConfigDict(extra="ignore", ser_json_bytes="base64", val_json_bytes="base64")

    id: str = Field(default_factory=_new_id)
    name: str = DEFAULT_LAYOUT_NAME
    description: str = ""
    fences: list[FenceSnapshot] = Field(default_factory=list)
    unfenced_icons: list[DesktopIcon] = Field(default_factory=list)
    resolution: Size = Field(default_factory=Size)
    created_at: datetime = Field(default_factory=datetime.now)
    modified_at: datetime = Field(default_factory=datetime.now)
    is_default: bool = False
    version: str = LAYOUT_FORMAT_VERSION
    settings: DesktopSettings = Field(default_factory=DesktopSettings)

    def clone(self, name: str | None = None) -> DesktopLayout:
        """Deep copy with fresh identifiers for the layout and every fence."""
        now = datetime.now()
        return self.model_copy(
            deep=True,
            update={
                "id": _new_id(),
                "name": name if name is not None else f"{self.name} (Copy)",
                "fences": [fence.clone() for fence in self.fences],
                "unfenced_icons": [icon.model_copy(deep=True) for icon in self.unfenced_icons],
                "created_at": now,
                "modified_at": now,
                "is_default": False,
                "settings": self.settings.model_copy(deep=True),
            },
        )

    @property
    def icon_count(self) -> int:
        return len(self.unfenced_icons) + sum(len(fence.icon_records) for fence in self.fences)


class BaseLayoutError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str
    layout_id: str


class LayoutNotFoundError(BaseLayoutError):
    """No layout with this id is registered."""


class LayoutInvalidStateError(BaseLayoutError):
    """The layout disappeared while the operation was in flight."""


class LayoutPersistenceError(BaseLayoutError):
    """The layout storage collaborator failed."""


LayoutError = LayoutNotFoundError | LayoutInvalidStateError | LayoutPersistenceError


__all__ = [
    "DEFAULT_LAYOUT_NAME",
    "LAYOUT_FORMAT_VERSION",
    "BaseLayoutError",
    "DesktopLayout",
    "FenceSnapshot",
    "LayoutError",
    "LayoutInvalidStateError",
    "LayoutNotFoundError",
    "LayoutPersistenceError",
]
