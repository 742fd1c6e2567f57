"""In-process DataStore implementation."""

from __future__ import annotations

import copy
import threading

from result import Err, Ok, Result

from tidytop.common import JsonValue

from .models import DataStoreError, DataStoreKeyNotFoundError


class MemoryDataStore:
    """Keeps documents in a dict; used when nothing should touch the disk."""

    def __init__(self, namespace: str = "memory") -> None:
        self._namespace = namespace
        self._data: dict[str, JsonValue] = {}
        self._lock = threading.Lock()

    @property
    def namespace(self) -> str:
        return self._namespace

    def save(self, key: str, data: JsonValue) -> Result[None, DataStoreError]:
        with self._lock:
            self._data[key] = copy.deepcopy(data)
        return Ok(None)

    def load(self, key: str) -> Result[JsonValue, DataStoreError]:
        with self._lock:
            if key not in self._data:
                return Err(
                    DataStoreKeyNotFoundError(
                        namespace=self._namespace,
                        key=key,
                        message=f"Key '{key}' not found in namespace '{self._namespace}'",
                    )
                )
            return Ok(copy.deepcopy(self._data[key]))

    def delete(self, key: str) -> Result[None, DataStoreError]:
        with self._lock:
            self._data.pop(key, None)
        return Ok(None)

    def keys(self) -> Result[list[str], DataStoreError]:
        with self._lock:
            return Ok(sorted(self._data))
