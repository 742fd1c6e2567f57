"""File-based DataStore implementation."""

from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path

from result import Err, Ok, Result, is_err

from tidytop.common import AppDirectories, JsonValue, create_logger, get_data_directory_from_dirs

from .models import DataStoreError, DataStoreKeyNotFoundError, DataStoreReadError, DataStoreWriteError

logger = create_logger("datastore")

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileDataStore:
    """Stores one JSON document per key under the XDG data directory.

    Layout: ``{data_dir}/{namespace}/{key}.json``. Writes go to a temporary file
    in the same directory and are moved into place, so a crashed write never
    leaves a truncated document behind.
    """

    def __init__(self, namespace: str, directories: AppDirectories) -> None:
        self._namespace = namespace
        self._directories = directories

    @property
    def namespace(self) -> str:
        return self._namespace

    def save(self, key: str, data: JsonValue) -> Result[None, DataStoreError]:
        path_result = self._get_key_path(key)
        if is_err(path_result):
            return path_result

        target = path_result.unwrap()
        try:
            payload = json.dumps(data, indent=2)
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(temp_name, target)
            except OSError:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Datastore write failed", namespace=self._namespace, key=key, error=str(e))
            return Err(
                DataStoreWriteError(
                    namespace=self._namespace,
                    message=f"Failed to save data: {e}",
                )
            )

        logger.debug("Datastore key saved", namespace=self._namespace, key=key)
        return Ok(None)

    def load(self, key: str) -> Result[JsonValue, DataStoreError]:
        path_result = self._get_key_path(key)
        if is_err(path_result):
            return path_result

        target = path_result.unwrap()
        if not target.is_file():
            return Err(
                DataStoreKeyNotFoundError(
                    namespace=self._namespace,
                    key=key,
                    message=f"Key '{key}' not found in namespace '{self._namespace}'",
                )
            )

        try:
            return Ok(json.loads(target.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Datastore read failed", namespace=self._namespace, key=key, error=str(e))
            return Err(
                DataStoreReadError(
                    namespace=self._namespace,
                    message=f"Failed to read data: {e}",
                )
            )

    def delete(self, key: str) -> Result[None, DataStoreError]:
        path_result = self._get_key_path(key)
        if is_err(path_result):
            return path_result

        try:
            path_result.unwrap().unlink(missing_ok=True)
        except OSError as e:
            return Err(
                DataStoreWriteError(
                    namespace=self._namespace,
                    message=f"Failed to delete data: {e}",
                )
            )
        return Ok(None)

    def keys(self) -> Result[list[str], DataStoreError]:
        directory = self._get_namespace_dir()
        if not directory.is_dir():
            return Ok([])

        try:
            return Ok(sorted(path.stem for path in directory.glob("*.json") if path.is_file()))
        except OSError as e:
            return Err(
                DataStoreReadError(
                    namespace=self._namespace,
                    message=f"Failed to list keys: {e}",
                )
            )

    def _get_namespace_dir(self) -> Path:
        return get_data_directory_from_dirs(self._directories) / self._namespace

    def _get_key_path(self, key: str) -> Result[Path, DataStoreError]:
        if not _SAFE_KEY.match(key):
            return Err(
                DataStoreWriteError(
                    namespace=self._namespace,
                    message=f"Invalid key '{key}': only letters, digits, '.', '_' and '-' are allowed",
                )
            )
        return Ok(self._get_namespace_dir() / f"{key}.json")
