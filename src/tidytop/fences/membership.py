"""Keeps icon-to-fence membership consistent across both registries."""

from __future__ import annotations

from datetime import datetime

from result import Err, Ok, Result, is_err

from tidytop.common import create_logger
from tidytop.icons import DesktopIcon, IconRegistry
from tidytop.registry import EntityRegistry, NotFoundError, RegistryError

from .models import Fence

logger = create_logger("membership")

FenceRegistry = EntityRegistry[str, Fence]


def create_fence_registry() -> FenceRegistry:
    return EntityRegistry("fence")


def _with_icon(fence: Fence, icon_path: str) -> Fence:
    if icon_path in fence.icons:
        return fence
    return fence.model_copy(update={"icons": [*fence.icons, icon_path], "modified_at": datetime.now()})


def _without_icon(fence: Fence, icon_path: str) -> Fence:
    if icon_path not in fence.icons:
        return fence
    remaining = [path for path in fence.icons if path != icon_path]
    return fence.model_copy(update={"icons": remaining, "modified_at": datetime.now()})


class FenceMembershipIndex:
    """Maintains "an icon belongs to at most one fence".

    Every mutation takes the icon's key lock first and only then touches fence
    entries (each under its own key lock). Nothing takes a fence lock and then
    an icon lock, so the two orders can never deadlock, and concurrent assigns
    into one fence are serialized by that fence's lock.
    """

    def __init__(self, icons: IconRegistry, fences: FenceRegistry) -> None:
        self._icons = icons
        self._fences = fences

    def assign(self, icon_path: str, fence_id: str) -> Result[DesktopIcon, RegistryError]:
        with self._icons.locked(icon_path):
            icon_result = self._icons.get(icon_path)
            if is_err(icon_result):
                return icon_result
            icon = icon_result.unwrap()

            if not self._fences.contains(fence_id):
                return Err(NotFoundError(kind="fence", key=fence_id, message=f"Fence '{fence_id}' not found"))

            if icon.fence_id is not None and icon.fence_id != fence_id:
                self._fences.modify(icon.fence_id, lambda fence: _without_icon(fence, icon_path))

            added = self._fences.modify(fence_id, lambda fence: _with_icon(fence, icon_path))
            if is_err(added):
                # Target fence vanished after the check; leave the icon unfenced.
                self._icons.update(icon_path, icon.model_copy(update={"fence_id": None}))
                return Err(added.unwrap_err())

            if icon.fence_id != fence_id:
                logger.debug("Icon assigned", icon=icon_path, fence_id=fence_id, previous=icon.fence_id)
            return self._icons.update(icon_path, icon.model_copy(update={"fence_id": fence_id}))

    def detach(self, icon_path: str) -> Result[DesktopIcon, RegistryError]:
        with self._icons.locked(icon_path):
            icon_result = self._icons.get(icon_path)
            if is_err(icon_result):
                return icon_result
            icon = icon_result.unwrap()
            if icon.fence_id is None:
                return Ok(icon)

            self._fences.modify(icon.fence_id, lambda fence: _without_icon(fence, icon_path))
            logger.debug("Icon detached", icon=icon_path, fence_id=icon.fence_id)
            return self._icons.update(icon_path, icon.model_copy(update={"fence_id": None}))

    def icons_of(self, fence_id: str) -> Result[list[DesktopIcon], RegistryError]:
        fence_result = self._fences.get(fence_id)
        if is_err(fence_result):
            return fence_result

        members: list[DesktopIcon] = []
        for path in fence_result.unwrap().icons:
            icon = self._icons.get(path)
            if icon.is_ok() and icon.unwrap().fence_id == fence_id:
                members.append(icon.unwrap())
        return Ok(members)

    def unfenced(self) -> list[DesktopIcon]:
        return [icon for icon in self._icons.list_all() if icon.fence_id is None]

    def remove_icon(self, icon_path: str) -> Result[DesktopIcon, RegistryError]:
        """Detach the icon and drop it from the icon registry."""
        with self._icons.locked(icon_path):
            detached = self.detach(icon_path)
            if is_err(detached):
                return detached
            return self._icons.remove(icon_path)

    def release_fence(self, fence: Fence) -> int:
        """Clear the owning-fence reference of every icon of a removed fence."""
        released = 0
        for path in fence.icons:
            with self._icons.locked(path):
                icon = self._icons.get(path)
                if icon.is_ok() and icon.unwrap().fence_id == fence.id:
                    self._icons.update(path, icon.unwrap().model_copy(update={"fence_id": None}))
                    released += 1
        return released

