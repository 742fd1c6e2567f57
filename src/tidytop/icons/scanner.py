"""Filesystem scan collaborator that feeds the icon registry."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from result import Err, Ok, Result

from tidytop.common import create_logger

from .models import ScanEntry, ScanError

logger = create_logger("scanner")


class IconSource(Protocol):
    """Anything that can enumerate the current desktop entries."""

    def scan(self) -> Result[list[ScanEntry], ScanError]: ...


class DirectoryScanner:
    """Lists the top level of one or more desktop directories.

    Hidden entries (leading dot) are skipped. Entries that disappear or cannot be
    stat'ed mid-scan are logged and skipped; the scan only fails when none of the
    directories could be read.
    """

    def __init__(self, directories: Sequence[Path]) -> None:
        seen: set[Path] = set()
        self._directories: list[Path] = []
        for directory in directories:
            resolved = directory.expanduser().absolute()
            if resolved not in seen:
                seen.add(resolved)
                self._directories.append(resolved)

    @property
    def directories(self) -> list[Path]:
        return list(self._directories)

    def scan(self) -> Result[list[ScanEntry], ScanError]:
        entries: list[ScanEntry] = []
        failures: list[tuple[Path, str]] = []
        scanned = 0

        for directory in self._directories:
            if not directory.is_dir():
                logger.debug("Desktop directory missing", path=str(directory))
                failures.append((directory, "not a directory"))
                continue
            try:
                children = sorted(directory.iterdir())
            except OSError as e:
                logger.error("Failed to list desktop directory", path=str(directory), error=str(e))
                failures.append((directory, str(e)))
                continue

            scanned += 1
            for child in children:
                if child.name.startswith("."):
                    continue
                try:
                    entries.append(ScanEntry.from_path(child))
                except OSError as e:
                    logger.warning("Skipping unreadable desktop entry", path=str(child), error=str(e))

        if scanned == 0 and failures:
            path, reason = failures[0]
            return Err(ScanError(path=str(path), message=f"Could not scan desktop directory '{path}': {reason}"))

        logger.info("Desktop scanned", directories=scanned, entries=len(entries))
        return Ok(entries)
