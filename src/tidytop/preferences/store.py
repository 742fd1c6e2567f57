"""Settings persistence on top of a DataStore."""

from __future__ import annotations

from typing import Protocol

from pydantic import ValidationError
from result import Err, Ok, Result

from tidytop.datastore import DataStore, DataStoreKeyNotFoundError

from .models import DesktopSettings, SettingsPersistenceError

SETTINGS_KEY = "desktop-settings"


class SettingsStore(Protocol):
    def load(self) -> Result[DesktopSettings | None, SettingsPersistenceError]:
        """Ok(None) when nothing has been persisted yet."""
        ...

    def persist(self, settings: DesktopSettings) -> Result[None, SettingsPersistenceError]: ...


class DataStoreSettingsStore:
    def __init__(self, store: DataStore, key: str = SETTINGS_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> Result[DesktopSettings | None, SettingsPersistenceError]:
        loaded = self._store.load(self._key)
        if loaded.is_err():
            error = loaded.unwrap_err()
            if isinstance(error, DataStoreKeyNotFoundError):
                return Ok(None)
            return Err(SettingsPersistenceError(message=f"Failed to load settings: {error.message}"))

        try:
            return Ok(DesktopSettings.model_validate(loaded.unwrap()))
        except ValidationError as e:
            return Err(SettingsPersistenceError(message=f"Stored settings are invalid: {e.errors()[0]['msg']}"))

    def persist(self, settings: DesktopSettings) -> Result[None, SettingsPersistenceError]:
        return self._store.save(self._key, settings.model_dump(mode="json")).map_err(
            lambda error: SettingsPersistenceError(message=f"Failed to save settings: {error.message}")
        )
