"""Icon registry operations and scan ingestion."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from result import Result, is_err

from tidytop.common import Point, create_logger
from tidytop.registry import EntityRegistry, RegistryError

from .models import DesktopIcon, ScanEntry

logger = create_logger("icons")

IconRegistry = EntityRegistry[str, DesktopIcon]
IconRemover = Callable[[str], Result[DesktopIcon, RegistryError]]


@dataclass
class IngestReport:
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.updated or self.removed)


def create_icon_registry() -> IconRegistry:
    return EntityRegistry("icon")


class IconService:
    """CRUD over desktop icons plus reconciliation with scan results.

    ``remover`` is how vanished icons leave the registry. The desktop wiring
    passes the membership index's removal so the icon is detached from its fence
    first; standalone use falls back to a plain registry removal.
    """

    def __init__(self, registry: IconRegistry, remover: IconRemover | None = None) -> None:
        self._registry = registry
        self._remover = remover or registry.remove

    @property
    def registry(self) -> IconRegistry:
        return self._registry

    def add(self, icon: DesktopIcon) -> Result[DesktopIcon, RegistryError]:
        """Register an unfenced icon; fence placement goes through the membership index."""
        return self._registry.add(icon.path, icon.model_copy(update={"fence_id": None}))

    def get(self, path: str) -> Result[DesktopIcon, RegistryError]:
        return self._registry.get(path)

    def update(self, icon: DesktopIcon) -> Result[DesktopIcon, RegistryError]:
        """Replace an icon's data, keeping the fence it currently belongs to."""
        return self._registry.modify(icon.path, lambda current: icon.model_copy(update={"fence_id": current.fence_id}))

    def remove(self, path: str) -> Result[DesktopIcon, RegistryError]:
        return self._remover(path)

    def list_icons(self) -> list[DesktopIcon]:
        return self._registry.list_all()

    def move(self, path: str, x: int, y: int) -> Result[DesktopIcon, RegistryError]:
        position = Point(x=x, y=y)
        return self._registry.modify(path, lambda icon: icon.model_copy(update={"position": position}))

    def set_thumbnail(self, path: str, thumbnail: bytes | None) -> Result[DesktopIcon, RegistryError]:
        return self._registry.modify(path, lambda icon: icon.model_copy(update={"thumbnail": thumbnail}))

    def ingest(self, entries: Iterable[ScanEntry]) -> IngestReport:
        """Reconcile the registry with a full scan.

        New paths are added, changed metadata is refreshed (position, fence and
        thumbnail are kept), and paths missing from the scan are removed.
        """
        report = IngestReport()
        seen: set[str] = set()

        for entry in entries:
            seen.add(entry.path)
            existing = self._registry.get(entry.path)
            if is_err(existing):
                if self._registry.add(entry.path, entry.to_icon()).is_ok():
                    report.added.append(entry.path)
                continue
            if entry.differs_from(existing.unwrap()):
                refreshed = self._registry.modify(entry.path, lambda icon, e=entry: icon.model_copy(update=e.model_dump()))
                if refreshed.is_ok():
                    report.updated.append(entry.path)

        for path in self._registry.keys():
            if path not in seen and self._remover(path).is_ok():
                report.removed.append(path)

        if report.changed:
            logger.info(
                "Icons ingested",
                added=len(report.added),
                updated=len(report.updated),
                removed=len(report.removed),
            )
        return report

