"""Capture, clone, activate and remove desktop layouts."""

from __future__ import annotations

import threading
from datetime import datetime

from result import Err, Ok, Result, is_err

from tidytop.common import Size, create_logger
from tidytop.fences import FenceMembershipIndex, FenceRegistry
from tidytop.preferences import DesktopSettings
from tidytop.registry import EntityRegistry

from .models import (
    DEFAULT_LAYOUT_NAME,
    DesktopLayout,
    FenceSnapshot,
    LayoutError,
    LayoutInvalidStateError,
    LayoutNotFoundError,
    LayoutPersistenceError,
)
from .store import LayoutStore

logger = create_logger("layouts")

LayoutRegistry = EntityRegistry[str, DesktopLayout]


def create_layout_registry() -> LayoutRegistry:
    return EntityRegistry("layout")


class ActiveLayoutPointer:
    """The single "active layout" id; ``None`` means explicitly unset."""

    def __init__(self, initial: str | None = None) -> None:
        self._value = initial
        self._lock = threading.Lock()

    def get(self) -> str | None:
        with self._lock:
            return self._value

    def set(self, value: str | None) -> str | None:
        with self._lock:
            previous, self._value = self._value, value
            return previous

    def compare_and_set(self, expected: str | None, new: str | None) -> bool:
        with self._lock:
            if self._value != expected:
                return False
            self._value = new
            return True


class LayoutManager:
    """Owns the layout registry and the active-layout pointer.

    The manager never picks a replacement when the active layout is removed;
    the pointer stays unset until ``set_active`` or ``get_current`` runs.
    Applying a layout to the live fences is left to the caller.
    """

    def __init__(
        self,
        layouts: LayoutRegistry,
        fences: FenceRegistry,
        membership: FenceMembershipIndex,
        *,
        settings: DesktopSettings | None = None,
        resolution: Size | None = None,
        store: LayoutStore | None = None,
    ) -> None:
        self._layouts = layouts
        self._fences = fences
        self._membership = membership
        self._settings = settings or DesktopSettings()
        self._resolution = resolution or Size()
        self._store = store
        self._active = ActiveLayoutPointer()
        self._bootstrap_lock = threading.Lock()

    @property
    def active_id(self) -> str | None:
        return self._active.get()

    @property
    def has_store(self) -> bool:
        return self._store is not None

    def on_settings_changed(self, settings: DesktopSettings) -> None:
        """Settings subscriber: later captures embed the new value."""
        self._settings = settings.model_copy(deep=True)
        logger.debug("Layout defaults refreshed", settings_version=settings.version)

    def capture_current(self, name: str, description: str = "") -> Result[str, LayoutError]:
        snapshots: list[FenceSnapshot] = []
        for fence in self._fences.list_all():
            members = self._membership.icons_of(fence.id)
            if is_err(members):
                # Removed between listing and reading; it is no longer part of the desktop.
                continue
            records = members.unwrap()
            snapshots.append(
                FenceSnapshot(
                    **fence.model_dump(exclude={"icons"}),
                    icons=[icon.path for icon in records],
                    icon_records=records,
                )
            )

        layout = DesktopLayout(
            name=name,
            description=description,
            fences=snapshots,
            unfenced_icons=self._membership.unfenced(),
            resolution=self._resolution,
            settings=self._settings.model_copy(deep=True),
        )
        added = self._layouts.add(layout.id, layout)
        if is_err(added):
            return Err(LayoutInvalidStateError(layout_id=layout.id, message=added.unwrap_err().message))

        logger.info(
            "Layout captured",
            layout_id=layout.id,
            name=name,
            fences=len(snapshots),
            unfenced=len(layout.unfenced_icons),
        )
        return Ok(layout.id)

    def set_active(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        found = self._layouts.get(layout_id)
        if is_err(found):
            return Err(self._not_found(layout_id))

        previous = self._active.set(layout_id)
        if not self._layouts.contains(layout_id):
            self._active.compare_and_set(layout_id, previous)
            logger.warning("Layout removed while being activated", layout_id=layout_id, restored=previous)
            return Err(
                LayoutInvalidStateError(
                    layout_id=layout_id,
                    message=f"Layout '{layout_id}' was removed while being activated",
                )
            )

        logger.info("Active layout changed", layout_id=layout_id, previous=previous)
        return Ok(found.unwrap())

    def get_current(self) -> DesktopLayout:
        while True:
            active_id = self._active.get()
            if active_id is not None:
                found = self._layouts.get(active_id)
                if found.is_ok():
                    return found.unwrap()
                self._active.compare_and_set(active_id, None)
                continue

            with self._bootstrap_lock:
                if self._active.get() is not None:
                    continue
                default = DesktopLayout(
                    name=DEFAULT_LAYOUT_NAME,
                    is_default=True,
                    resolution=self._resolution,
                    settings=self._settings.model_copy(deep=True),
                )
                self._layouts.add(default.id, default)
                if not self._active.compare_and_set(None, default.id):
                    # A concurrent set_active won; the default would never become active.
                    self._layouts.remove(default.id)
                    logger.debug("Default layout discarded", layout_id=default.id)
                    continue
                logger.info("Default layout bootstrapped", layout_id=default.id)

    def get(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        return self._layouts.get(layout_id).map_err(lambda _: self._not_found(layout_id))

    def list_layouts(self) -> list[DesktopLayout]:
        return sorted(self._layouts.list_all(), key=lambda layout: layout.created_at)

    def clone(self, layout_id: str, new_name: str) -> Result[str, LayoutError]:
        source = self._layouts.get(layout_id)
        if is_err(source):
            return Err(self._not_found(layout_id))

        copy = source.unwrap().clone(new_name)
        added = self._layouts.add(copy.id, copy)
        if is_err(added):
            return Err(LayoutInvalidStateError(layout_id=copy.id, message=added.unwrap_err().message))

        logger.info("Layout cloned", source_id=layout_id, layout_id=copy.id, name=new_name)
        return Ok(copy.id)

    def rename(self, layout_id: str, name: str, description: str | None = None) -> Result[DesktopLayout, LayoutError]:
        def _renamed(layout: DesktopLayout) -> DesktopLayout:
            update: dict[str, object] = {"name": name, "modified_at": datetime.now()}
            if description is not None:
                update["description"] = description
            return layout.model_copy(update=update)

        return self._layouts.modify(layout_id, _renamed).map_err(lambda _: self._not_found(layout_id))

    def remove(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        removed = self._layouts.remove(layout_id)
        if is_err(removed):
            return Err(self._not_found(layout_id))

        if self._active.compare_and_set(layout_id, None):
            logger.info("Active layout removed, no layout is active", layout_id=layout_id)

        if self._store is not None:
            deleted = self._store.delete(layout_id)
            if is_err(deleted):
                logger.error("Layout removed in memory but not from storage", layout_id=layout_id, error=deleted.unwrap_err().message)

        logger.info("Layout removed", layout_id=layout_id)
        return Ok(removed.unwrap())

    def persist(self, layout_id: str) -> Result[DesktopLayout, LayoutError]:
        if self._store is None:
            return Err(LayoutPersistenceError(layout_id=layout_id, message="No layout store configured"))

        found = self._layouts.get(layout_id)
        if is_err(found):
            return Err(self._not_found(layout_id))

        layout = found.unwrap()
        saved = self._store.save(layout)
        if is_err(saved):
            return saved
        if self._active.get() == layout_id:
            self._store.save_active(layout_id)
        return Ok(layout)

    def load_persisted(self) -> Result[int, LayoutError]:
        """Register every stored layout and restore the stored active pointer."""
        if self._store is None:
            return Ok(0)

        loaded = self._store.load_all()
        if is_err(loaded):
            return loaded

        count = 0
        for layout in loaded.unwrap():
            if self._layouts.add(layout.id, layout).is_ok():
                count += 1

        active = self._store.load_active()
        if active.is_ok() and active.unwrap() is not None and self._layouts.contains(active.unwrap()):
            self._active.compare_and_set(None, active.unwrap())

        logger.info("Persisted layouts loaded", count=count, active_id=self._active.get())
        return Ok(count)

    @staticmethod
    def _not_found(layout_id: str) -> LayoutNotFoundError:
        return LayoutNotFoundError(layout_id=layout_id, message=f"Layout '{layout_id}' not found")
