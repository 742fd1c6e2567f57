"""Explicit wiring of the organization engine."""

from __future__ import annotations

from collections.abc import Iterable

from result import Ok, Result, is_err

from tidytop.categories import Category, CategoryCatalog
from tidytop.common import AppDirectories, AppPaths, Size, create_logger
from tidytop.config import TidyTopConfig
from tidytop.datastore import DataStore, FileDataStore, MemoryDataStore
from tidytop.fences import FenceMembershipIndex, FenceService, create_fence_registry
from tidytop.icons import IconService, IconSource, IngestReport, ScanError, create_icon_registry
from tidytop.layouts import DesktopLayout, LayoutError, LayoutManager, LayoutStore, create_layout_registry
from tidytop.organize import AutoOrganizer, OrganizeReport
from tidytop.preferences import DataStoreSettingsStore, SettingsHolder, SettingsStore

logger = create_logger("desktop")


class Desktop:
    """Owns every registry and service of one desktop session.

    Services are built here and handed their collaborators directly; the
    layout manager follows settings changes through a holder subscription.
    """

    def __init__(
        self,
        settings_store: SettingsStore | None = None,
        layout_store: LayoutStore | None = None,
        *,
        user_categories: Iterable[Category] = (),
        resolution: Size | None = None,
    ) -> None:
        self.preferences = SettingsHolder(settings_store or DataStoreSettingsStore(MemoryDataStore("settings")))

        icon_registry = create_icon_registry()
        fence_registry = create_fence_registry()
        self.membership = FenceMembershipIndex(icon_registry, fence_registry)
        self.icons = IconService(icon_registry, remover=self.membership.remove_icon)
        self.fences = FenceService(fence_registry, self.membership, settings=self.preferences.get)
        self.categories = CategoryCatalog(user_categories)
        self.organizer = AutoOrganizer(self.membership, self.fences, self.categories, settings=self.preferences.get)
        self.layouts = LayoutManager(
            create_layout_registry(),
            fence_registry,
            self.membership,
            settings=self.preferences.get(),
            resolution=resolution,
            store=layout_store,
        )
        self.preferences.subscribe(self.layouts.on_settings_changed)

    @classmethod
    def from_config(
        cls,
        config: TidyTopConfig,
        directories: AppDirectories,
        paths: AppPaths | None = None,
    ) -> Desktop:
        """Desktop backed by JSON files under the XDG data directory."""
        paths = paths or AppPaths()
        settings_data: DataStore = FileDataStore(paths.settings_namespace, directories)
        layout_data: DataStore = FileDataStore(paths.layouts_namespace, directories)
        return cls(
            DataStoreSettingsStore(settings_data),
            LayoutStore(layout_data),
            user_categories=config.categories,
            resolution=config.resolution,
        )

    def start(self) -> None:
        """Load persisted settings and layouts."""
        settings = self.preferences.load()
        self.layouts.on_settings_changed(settings)
        loaded = self.layouts.load_persisted()
        if is_err(loaded):
            logger.warning("Persisted layouts unavailable", error=loaded.unwrap_err().message)

    def refresh(self, source: IconSource) -> Result[IngestReport, ScanError]:
        return source.scan().map(self.icons.ingest)

    def organize(self, *, force: bool = False) -> OrganizeReport:
        return self.organizer.organize(self.icons.list_icons(), force=force)

    def capture_layout(self, name: str, description: str = "") -> Result[str, LayoutError]:
        captured = self.layouts.capture_current(name, description)
        if is_err(captured) or not self.layouts.has_store:
            return captured
        return self.layouts.persist(captured.unwrap()).map(lambda layout: layout.id)

    def restore_layout(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        """Activate a layout and rebuild the live fences from it.

        Icons recorded in the layout but no longer on the desktop are skipped.
        """
        activated = self.layouts.set_active(layout_id)
        if is_err(activated):
            return activated
        layout = activated.unwrap()

        for fence in self.fences.list_fences():
            self.fences.remove(fence.id)

        restored_icons = 0
        for snapshot in layout.fences:
            added = self.fences.add(snapshot.to_fence())
            if is_err(added):
                logger.warning("Fence not restored", fence_id=snapshot.id, error=added.unwrap_err().message)
                continue
            for record in snapshot.icon_records:
                if self.membership.assign(record.path, snapshot.id).is_ok():
                    self.icons.move(record.path, record.position.x, record.position.y)
                    restored_icons += 1

        for record in layout.unfenced_icons:
            self.membership.detach(record.path)
            if self.icons.move(record.path, record.position.x, record.position.y).is_ok():
                restored_icons += 1

        logger.info("Layout restored", layout_id=layout.id, fences=len(layout.fences), icons=restored_icons)
        return Ok(layout)

    def remove_layout(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        return self.layouts.remove(layout_id)


__all__ = ["Desktop"]
