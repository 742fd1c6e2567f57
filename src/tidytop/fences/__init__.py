"""Fences and icon membership."""

from .membership import FenceMembershipIndex, FenceRegistry, create_fence_registry
from .models import Fence, FenceLockedError, FenceStyle, FenceValidationError, IconLayoutType, IconSortRule
from .service import DEFAULT_FENCE_TITLE, FenceError, FenceService, style_from_settings

__all__ = [
    "DEFAULT_FENCE_TITLE",
    "Fence",
    "FenceError",
    "FenceLockedError",
    "FenceMembershipIndex",
    "FenceRegistry",
    "FenceService",
    "FenceStyle",
    "FenceValidationError",
    "IconLayoutType",
    "IconSortRule",
    "create_fence_registry",
    "style_from_settings",
]
