"""Registry error models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseRegistryError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    message: str
    kind: str
    key: str


class NotFoundError(BaseRegistryError):
    """Referenced entity is absent."""


class DuplicateKeyError(BaseRegistryError):
    """An entity with the same identity is already registered."""


RegistryError = NotFoundError | DuplicateKeyError


__all__ = [
    "BaseRegistryError",
    "DuplicateKeyError",
    "NotFoundError",
    "RegistryError",
]
