"""Layout snapshots, versioning and the active-layout pointer."""

from .manager import ActiveLayoutPointer, LayoutManager, LayoutRegistry, create_layout_registry
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

__all__ = [
    "DEFAULT_LAYOUT_NAME",
    "ActiveLayoutPointer",
    "DesktopLayout",
    "FenceSnapshot",
    "LayoutError",
    "LayoutInvalidStateError",
    "LayoutManager",
    "LayoutNotFoundError",
    "LayoutPersistenceError",
    "LayoutRegistry",
    "LayoutStore",
    "create_layout_registry",
]
