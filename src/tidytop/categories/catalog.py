"""Ordered category set: read-only system entries followed by user entries."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from result import Err, Ok, Result

from tidytop.common import create_logger
from tidytop.registry import DuplicateKeyError, NotFoundError, RegistryError

from .models import Category, system_categories

logger = create_logger("categories")


class CategoryCatalog:
    def __init__(self, user_categories: Iterable[Category] = (), *, include_system: bool = True) -> None:
        self._system: tuple[Category, ...] = tuple(system_categories()) if include_system else ()
        self._user: list[Category] = []
        self._lock = threading.Lock()
        for category in user_categories:
            result = self.add_user_category(category)
            if result.is_err():
                logger.warning("Ignoring user category", category_id=category.id, error=result.unwrap_err().message)

    def categories(self) -> list[Category]:
        """Snapshot in matching order; this order breaks priority ties."""
        with self._lock:
            return [*self._system, *self._user]

    def get(self, category_id: str) -> Result[Category, RegistryError]:
        for category in self.categories():
            if category.id == category_id:
                return Ok(category)
        return Err(
            NotFoundError(kind="category", key=category_id, message=f"Category '{category_id}' not found"),
        )

    def add_user_category(self, category: Category) -> Result[Category, RegistryError]:
        user_category = category.model_copy(update={"is_system": False})
        with self._lock:
            if any(existing.id == category.id for existing in (*self._system, *self._user)):
                return Err(
                    DuplicateKeyError(
                        kind="category",
                        key=category.id,
                        message=f"Category '{category.id}' already exists",
                    )
                )
            self._user.append(user_category)
        logger.debug("User category added", category_id=category.id, priority=category.priority)
        return Ok(user_category)

    def remove_user_category(self, category_id: str) -> Result[Category, RegistryError]:
        with self._lock:
            for index, category in enumerate(self._user):
                if category.id == category_id:
                    return Ok(self._user.pop(index))
        return Err(
            NotFoundError(
                kind="category",
                key=category_id,
                message=f"User category '{category_id}' not found; system categories cannot be removed",
            )
        )
