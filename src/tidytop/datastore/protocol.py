"""DataStore protocol."""

from __future__ import annotations

from typing import Protocol

from result import Result

from tidytop.common import JsonValue

from .models import DataStoreError


class DataStore(Protocol):
    """Protocol for durable blob storage used by settings and layouts."""

    def save(self, key: str, data: JsonValue) -> Result[None, DataStoreError]: ...

    def load(self, key: str) -> Result[JsonValue, DataStoreError]: ...

    def delete(self, key: str) -> Result[None, DataStoreError]: ...

    def keys(self) -> Result[list[str], DataStoreError]: ...
