"""Desktop icon models."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tidytop.common import NonEmptyString, Point

SHORTCUT_EXTENSIONS = frozenset({".lnk", ".url", ".desktop"})


def _normalize_extension(value: str) -> str:
    value = value.strip().lower()
    if value and not value.startswith("."):
        value = f".{value}"
    return value


class DesktopIcon(BaseModel):
    """A file or folder shown on the desktop, keyed by its absolute path."""

    model_config = ConfigDict(extra="ignore", ser_json_bytes="base64", val_json_bytes="base64")

    path: NonEmptyString
    name: str = ""
    extension: str = ""
    file_size: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    modified_at: datetime = Field(default_factory=datetime.now)
    position: Point = Field(default_factory=Point)
    is_directory: bool = False
    is_shortcut: bool = False
    fence_id: str | None = None
    thumbnail: bytes | None = None

    @field_validator("extension")
    @classmethod
    def _lower_extension(cls, value: str) -> str:
        return _normalize_extension(value)


class ScanEntry(BaseModel):
    """What the scan collaborator knows about one desktop entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: NonEmptyString
    name: str
    extension: str = ""
    file_size: int = Field(default=0, ge=0)
    created_at: datetime
    modified_at: datetime
    is_directory: bool = False
    is_shortcut: bool = False

    @field_validator("extension")
    @classmethod
    def _lower_extension(cls, value: str) -> str:
        return _normalize_extension(value)

    @classmethod
    def from_path(cls, path: Path) -> ScanEntry:
        """Build an entry from ``stat`` data; raises ``OSError`` if the path vanished."""
        stat = path.stat()
        is_directory = path.is_dir()
        extension = "" if is_directory else path.suffix
        created = getattr(stat, "st_birthtime", stat.st_ctime)
        return cls(
            path=str(path.absolute()),
            name=path.name if is_directory else path.stem,
            extension=extension,
            file_size=0 if is_directory else stat.st_size,
            created_at=datetime.fromtimestamp(created),
            modified_at=datetime.fromtimestamp(stat.st_mtime),
            is_directory=is_directory,
            is_shortcut=not is_directory and extension.lower() in SHORTCUT_EXTENSIONS,
        )

    def to_icon(self) -> DesktopIcon:
        return DesktopIcon(**self.model_dump())

    def differs_from(self, icon: DesktopIcon) -> bool:
        return any(getattr(icon, field) != value for field, value in self.model_dump().items())


class ScanError(BaseModel):
    """The scan collaborator could not read any desktop directory."""

    model_config = ConfigDict(extra="forbid")

    path: str
    message: str
