"""Fence lifecycle: create, move, resize, sort and remove."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from result import Err, Ok, Result, is_err

from tidytop.common import Point, Size, create_logger
from tidytop.preferences import DesktopSettings
from tidytop.registry import RegistryError

from .membership import FenceMembershipIndex, FenceRegistry
from .models import Fence, FenceLockedError, FenceStyle, FenceValidationError, IconSortRule

logger = create_logger("fences")

type FenceError = RegistryError | FenceValidationError | FenceLockedError

SettingsProvider = Callable[[], DesktopSettings]

DEFAULT_FENCE_TITLE = "Desktop"


def style_from_settings(settings: DesktopSettings) -> FenceStyle:
    return FenceStyle(
        background_color=settings.default_fence_background_color,
        border_color=settings.default_fence_border_color,
        title_color=settings.default_fence_title_color,
        opacity=settings.default_fence_opacity,
        corner_radius=settings.default_fence_corner_radius,
        border_width=settings.default_fence_border_width,
        show_title=settings.show_fence_titles,
    )


class FenceService:
    def __init__(
        self,
        fences: FenceRegistry,
        membership: FenceMembershipIndex,
        settings: SettingsProvider = DesktopSettings,
    ) -> None:
        self._fences = fences
        self._membership = membership
        self._settings = settings
        self._bootstrap_lock = threading.Lock()

    @property
    def registry(self) -> FenceRegistry:
        return self._fences

    def create(
        self,
        title: str,
        *,
        position: Point | None = None,
        size: Size | None = None,
        category_id: str | None = None,
    ) -> Result[Fence, FenceError]:
        settings = self._settings()
        fence = Fence(
            title=title,
            position=self._snap(position or Point(), settings),
            size=size or Size(width=200, height=150),
            style=style_from_settings(settings),
            icon_spacing=settings.default_icon_spacing,
            category_id=category_id,
        )
        return self.add(fence)

    def add(self, fence: Fence) -> Result[Fence, FenceError]:
        """Register a fence; icons are attached afterwards through the membership index."""
        if fence.size.width <= 0 or fence.size.height <= 0:
            return Err(self._invalid_size(fence.id))

        added = self._fences.add(fence.id, fence.model_copy(update={"icons": []}))
        if added.is_ok():
            logger.info("Fence created", fence_id=fence.id, title=fence.title)
        return added

    def get(self, fence_id: str) -> Result[Fence, FenceError]:
        return self._fences.get(fence_id)

    def list_fences(self) -> list[Fence]:
        return self._fences.list_all()

    def update(self, fence: Fence) -> Result[Fence, FenceError]:
        """Replace a fence's properties; membership is owned by the index and kept as is."""
        return self._fences.modify(
            fence.id,
            lambda current: fence.model_copy(
                update={"icons": current.icons, "created_at": current.created_at, "modified_at": datetime.now()}
            ),
        )

    def remove(self, fence_id: str) -> Result[Fence, FenceError]:
        removed = self._fences.remove(fence_id)
        if is_err(removed):
            return removed

        fence = removed.unwrap()
        released = self._membership.release_fence(fence)
        logger.info("Fence removed", fence_id=fence_id, released_icons=released)
        return Ok(fence)

    def move(self, fence_id: str, x: int, y: int) -> Result[Fence, FenceError]:
        position = self._snap(Point(x=x, y=y), self._settings())
        return self._modify_unlocked(fence_id, lambda fence: fence.model_copy(update={"position": position}))

    def resize(self, fence_id: str, width: int, height: int) -> Result[Fence, FenceError]:
        if width <= 0 or height <= 0:
            return Err(self._invalid_size(fence_id))
        size = Size(width=width, height=height)
        return self._modify_unlocked(fence_id, lambda fence: fence.model_copy(update={"size": size}))

    def set_locked(self, fence_id: str, locked: bool) -> Result[Fence, FenceError]:
        return self._fences.modify(fence_id, lambda fence: fence.model_copy(update={"is_locked": locked}))

    def set_visible(self, fence_id: str, visible: bool) -> Result[Fence, FenceError]:
        return self._fences.modify(fence_id, lambda fence: fence.model_copy(update={"is_visible": visible}))

    def set_sort_rule(self, fence_id: str, rule: IconSortRule) -> Result[Fence, FenceError]:
        updated = self._fences.modify(fence_id, lambda fence: fence.model_copy(update={"sort_rule": rule}))
        if is_err(updated):
            return updated
        return self.sort_icons(fence_id)

    def sort_icons(self, fence_id: str) -> Result[Fence, FenceError]:
        """Reorder the fence's icons by its sort rule; ``none`` keeps insertion order."""
        icons = self._membership.icons_of(fence_id)
        if is_err(icons):
            return icons
        by_path = {icon.path: icon for icon in icons.unwrap()}

        def _sorted(fence: Fence) -> Fence:
            key = fence.sort_rule.sort_key()
            if key is None:
                return fence
            known = [by_path[path] for path in fence.icons if path in by_path]
            # Icons assigned after the snapshot keep their relative order at the end.
            unknown = [path for path in fence.icons if path not in by_path]
            ordered = sorted(known, key=key, reverse=fence.sort_rule.descending)
            return fence.model_copy(update={"icons": [icon.path for icon in ordered] + unknown})

        return self._fences.modify(fence_id, _sorted)

    def ensure_default_fence(self) -> Result[Fence, FenceError]:
        """Create the bootstrap fence when no fence exists yet."""
        with self._bootstrap_lock:
            existing = self._fences.list_all()
            if existing:
                return Ok(existing[0])
            return self.create(DEFAULT_FENCE_TITLE)

    def _modify_unlocked(self, fence_id: str, change: Callable[[Fence], Fence]) -> Result[Fence, FenceError]:
        current = self._fences.get(fence_id)
        if is_err(current):
            return current
        if current.unwrap().is_locked:
            return Err(FenceLockedError(fence_id=fence_id, message=f"Fence '{fence_id}' is locked"))
        return self._fences.modify(
            fence_id,
            lambda fence: change(fence).model_copy(update={"modified_at": datetime.now()}),
        )

    @staticmethod
    def _snap(position: Point, settings: DesktopSettings) -> Point:
        return position.snapped(settings.grid_size) if settings.enable_grid_snapping else position

    @staticmethod
    def _invalid_size(fence_id: str) -> FenceValidationError:
        return FenceValidationError(
            fence_id=fence_id,
            field="size",
            message="Fence width and height must be positive",
        )
