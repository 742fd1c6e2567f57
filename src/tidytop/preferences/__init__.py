"""Desktop settings: model, persistence and the in-memory holder."""

from .holder import SettingsHandler, SettingsHolder
from .models import ApplicationTheme, AutoOrganizeRule, DesktopSettings, RuleType, SettingsPersistenceError
from .store import SETTINGS_KEY, DataStoreSettingsStore, SettingsStore

__all__ = [
    "SETTINGS_KEY",
    "ApplicationTheme",
    "AutoOrganizeRule",
    "DataStoreSettingsStore",
    "DesktopSettings",
    "RuleType",
    "SettingsHandler",
    "SettingsHolder",
    "SettingsPersistenceError",
    "SettingsStore",
]
