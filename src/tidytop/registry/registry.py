"""Thread-safe keyed entity store."""

from __future__ import annotations

import threading
from collections.abc import Callable, Hashable, Iterator
from contextlib import contextmanager

from pydantic import BaseModel
from result import Err, Ok, Result

from tidytop.common import create_logger

from .models import DuplicateKeyError, NotFoundError, RegistryError

logger = create_logger("registry")


class EntityRegistry[K: Hashable, V: BaseModel]:
    """Keyed CRUD store with per-key linearizable writes.

    Stored values are private deep copies that are replaced, never mutated, so a
    reader always sees either the old or the new entity. ``_lock`` guards the
    dict itself and is only held for single dict operations; writers to one key
    additionally serialize on that key's ``RLock``, which is what ``modify``
    holds while running its callback.
    """

    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._items: dict[K, V] = {}
        self._key_locks: dict[K, threading.RLock] = {}
        self._key_users: dict[K, int] = {}
        self._lock = threading.Lock()

    @property
    def kind(self) -> str:
        return self._kind

    def add(self, key: K, value: V) -> Result[V, RegistryError]:
        stored = value.model_copy(deep=True)
        with self.locked(key):
            with self._lock:
                if key in self._items:
                    return Err(self._duplicate(key))
                self._items[key] = stored
        logger.trace("Entity added", kind=self._kind, key=str(key))
        return Ok(stored.model_copy(deep=True))

    def get(self, key: K) -> Result[V, RegistryError]:
        with self._lock:
            current = self._items.get(key)
        if current is None:
            return Err(self._not_found(key))
        return Ok(current.model_copy(deep=True))

    def update(self, key: K, value: V) -> Result[V, RegistryError]:
        stored = value.model_copy(deep=True)
        with self.locked(key):
            with self._lock:
                if key not in self._items:
                    return Err(self._not_found(key))
                self._items[key] = stored
        return Ok(stored.model_copy(deep=True))

    def modify(self, key: K, mutate: Callable[[V], V]) -> Result[V, RegistryError]:
        """Atomically replace the entity with ``mutate(copy_of_current)``.

        ``mutate`` receives a private copy and runs under the key's lock, so
        concurrent ``modify`` calls on one key never lose an update.
        """
        with self.locked(key):
            with self._lock:
                current = self._items.get(key)
            if current is None:
                return Err(self._not_found(key))
            stored = mutate(current.model_copy(deep=True)).model_copy(deep=True)
            with self._lock:
                self._items[key] = stored
        return Ok(stored.model_copy(deep=True))

    def remove(self, key: K) -> Result[V, RegistryError]:
        with self.locked(key):
            with self._lock:
                removed = self._items.pop(key, None)
        if removed is None:
            return Err(self._not_found(key))
        logger.trace("Entity removed", kind=self._kind, key=str(key))
        return Ok(removed)

    def contains(self, key: K) -> bool:
        with self._lock:
            return key in self._items

    def keys(self) -> list[K]:
        with self._lock:
            return list(self._items)

    def list_all(self) -> list[V]:
        with self._lock:
            snapshot = list(self._items.values())
        return [item.model_copy(deep=True) for item in snapshot]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @contextmanager
    def locked(self, key: K) -> Iterator[None]:
        """Hold the key's write lock; re-entrant, so registry calls inside are fine."""
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.RLock()
            self._key_users[key] = self._key_users.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._lock:
                self._key_users[key] -= 1
                # Locks of absent keys are dropped once no thread holds or waits on them.
                if not self._key_users[key] and key not in self._items:
                    del self._key_users[key]
                    del self._key_locks[key]

    def _not_found(self, key: K) -> NotFoundError:
        return NotFoundError(
            kind=self._kind,
            key=str(key),
            message=f"{self._kind.capitalize()} '{key}' not found",
        )

    def _duplicate(self, key: K) -> DuplicateKeyError:
        return DuplicateKeyError(
            kind=self._kind,
            key=str(key),
            message=f"{self._kind.capitalize()} '{key}' already exists",
        )
