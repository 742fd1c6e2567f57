"""Desktop icons: models, scan collaborator and registry service."""

from .models import SHORTCUT_EXTENSIONS, DesktopIcon, ScanEntry, ScanError
from .scanner import DirectoryScanner, IconSource
from .service import IconRegistry, IconService, IngestReport, create_icon_registry

__all__ = [
    "SHORTCUT_EXTENSIONS",
    "DesktopIcon",
    "DirectoryScanner",
    "IconRegistry",
    "IconService",
    "IconSource",
    "IngestReport",
    "ScanEntry",
    "ScanError",
    "create_icon_registry",
]
