"""Single source of truth for desktop settings, with change notification."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime

from result import Err, Ok, Result

from tidytop.common import create_logger

from .models import DesktopSettings, SettingsPersistenceError
from .store import SettingsStore

logger = create_logger("settings")

SettingsHandler = Callable[[DesktopSettings], None]


class SettingsHolder:
    """Holds the current settings value and broadcasts successful saves.

    ``save`` is last-write-wins in memory: the new value replaces the old one
    before it is persisted and stays in place when persistence fails. The last
    value that did reach the store is kept in ``last_persisted``.
    """

    def __init__(self, store: SettingsStore) -> None:
        self._store = store
        self._current = DesktopSettings()
        self._last_persisted: DesktopSettings | None = None
        self._subscribers: list[SettingsHandler] = []
        self._save_lock = threading.RLock()
        self._subscribers_lock = threading.Lock()

    def load(self) -> DesktopSettings:
        """Read the persisted value once at startup, falling back to defaults."""
        try:
            loaded = self._store.load()
        except Exception as e:  # noqa: BLE001
            logger.exception("Settings store raised while loading", error=str(e))
            loaded = Err(SettingsPersistenceError(message=str(e)))

        with self._save_lock:
            match loaded:
                case Ok(None):
                    logger.info("No persisted settings, using defaults")
                    self._current = DesktopSettings()
                case Ok(settings):
                    logger.info("Settings loaded", version=settings.version)
                    self._current = settings
                    self._last_persisted = settings.model_copy(deep=True)
                case Err(error):
                    logger.warning("Settings could not be loaded, using defaults", error=error.message)
                    self._current = DesktopSettings()
            return self.get()

    def get(self) -> DesktopSettings:
        return self._current.model_copy(deep=True)

    @property
    def last_persisted(self) -> DesktopSettings | None:
        persisted = self._last_persisted
        return persisted.model_copy(deep=True) if persisted is not None else None

    def save(self, settings: DesktopSettings) -> Result[DesktopSettings, SettingsPersistenceError]:
        with self._save_lock:
            new_value = settings.model_copy(
                deep=True,
                update={"version": self._current.version + 1, "last_modified": datetime.now()},
            )
            self._current = new_value

            persisted = self._persist(new_value)
            if persisted.is_err():
                logger.error(
                    "Settings kept in memory but not persisted",
                    version=new_value.version,
                    error=persisted.unwrap_err().message,
                )
                return persisted

            self._last_persisted = new_value.model_copy(deep=True)
            logger.info("Settings saved", version=new_value.version)
            self._notify(new_value)
            return Ok(new_value.model_copy(deep=True))

    def reset(self) -> Result[DesktopSettings, SettingsPersistenceError]:
        return self.save(DesktopSettings())

    def subscribe(self, handler: SettingsHandler) -> SettingsHandler:
        with self._subscribers_lock:
            self._subscribers.append(handler)
        return handler

    def unsubscribe(self, handler: SettingsHandler) -> bool:
        with self._subscribers_lock:
            try:
                self._subscribers.remove(handler)
            except ValueError:
                return False
        return True

    def _persist(self, settings: DesktopSettings) -> Result[None, SettingsPersistenceError]:
        try:
            return self._store.persist(settings)
        except Exception as e:  # noqa: BLE001
            logger.exception("Settings store raised while persisting", error=str(e))
            return Err(SettingsPersistenceError(message=f"Failed to save settings: {e}"))

    def _notify(self, settings: DesktopSettings) -> None:
        with self._subscribers_lock:
            subscribers = list(self._subscribers)

        for handler in subscribers:
            try:
                handler(settings.model_copy(deep=True))
            except Exception as e:  # noqa: BLE001
                logger.exception("Settings subscriber failed", handler=getattr(handler, "__qualname__", repr(handler)), error=str(e))
