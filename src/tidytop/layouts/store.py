"""Layout persistence on top of a DataStore."""

from __future__ import annotations

import json

from pydantic import ValidationError
from result import Err, Ok, Result, is_err

from tidytop.common import create_logger
from tidytop.datastore import DataStore, DataStoreKeyNotFoundError

from .models import DesktopLayout, LayoutPersistenceError

logger = create_logger("layouts.store")

_LAYOUT_PREFIX = "layout-"
_ACTIVE_KEY = "active-layout"


class LayoutStore:
    def __init__(self, store: DataStore) -> None:
        self._store = store

    def save(self, layout: DesktopLayout) -> Result[None, LayoutPersistenceError]:
        return self._store.save(_key(layout.id), json.loads(layout.model_dump_json())).map_err(
            lambda error: LayoutPersistenceError(
                layout_id=layout.id,
                message=f"Failed to save layout: {error.message}",
            )
        )

    def load(self, layout_id: str) -> Result[DesktopLayout, LayoutPersistenceError]:
        loaded = self._store.load(_key(layout_id)).map_err(
            lambda error: LayoutPersistenceError(
                layout_id=layout_id,
                message=f"Failed to load layout: {error.message}",
            )
        )
        if is_err(loaded):
            return loaded

        try:
            return Ok(DesktopLayout.model_validate_json(json.dumps(loaded.unwrap())))
        except ValidationError as e:
            return Err(LayoutPersistenceError(layout_id=layout_id, message=f"Stored layout is invalid: {e}"))

    def delete(self, layout_id: str) -> Result[None, LayoutPersistenceError]:
        return self._store.delete(_key(layout_id)).map_err(
            lambda error: LayoutPersistenceError(
                layout_id=layout_id,
                message=f"Failed to delete layout: {error.message}",
            )
        )

    def load_all(self) -> Result[list[DesktopLayout], LayoutPersistenceError]:
        """Load every stored layout; unreadable entries are logged and skipped."""
        keys = self._store.keys().map_err(
            lambda error: LayoutPersistenceError(layout_id="*", message=f"Failed to list layouts: {error.message}")
        )
        if is_err(keys):
            return keys

        layouts: list[DesktopLayout] = []
        for key in keys.unwrap():
            if not key.startswith(_LAYOUT_PREFIX):
                continue
            loaded = self.load(key.removeprefix(_LAYOUT_PREFIX))
            if is_err(loaded):
                logger.warning("Skipping unreadable layout", key=key, error=loaded.unwrap_err().message)
                continue
            layouts.append(loaded.unwrap())
        return Ok(layouts)

    def save_active(self, layout_id: str | None) -> Result[None, LayoutPersistenceError]:
        return self._store.save(_ACTIVE_KEY, {"layout_id": layout_id}).map_err(
            lambda error: LayoutPersistenceError(
                layout_id=layout_id or "",
                message=f"Failed to save active layout: {error.message}",
            )
        )

    def load_active(self) -> Result[str | None, LayoutPersistenceError]:
        loaded = self._store.load(_ACTIVE_KEY)
        if loaded.is_err():
            error = loaded.unwrap_err()
            if isinstance(error, DataStoreKeyNotFoundError):
                return Ok(None)
            return Err(LayoutPersistenceError(layout_id="", message=f"Failed to load active layout: {error.message}"))

        payload = loaded.unwrap()
        layout_id = payload.get("layout_id") if isinstance(payload, dict) else None
        return Ok(layout_id if isinstance(layout_id, str) else None)


def _key(layout_id: str) -> str:
    return f"{_LAYOUT_PREFIX}{layout_id}"
