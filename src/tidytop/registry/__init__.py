"""Concurrent entity registries."""

from .models import BaseRegistryError, DuplicateKeyError, NotFoundError, RegistryError
from .registry import EntityRegistry

__all__ = [
    "BaseRegistryError",
    "DuplicateKeyError",
    "EntityRegistry",
    "NotFoundError",
    "RegistryError",
]
