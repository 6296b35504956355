"""Append-only log of visited folders.

The shell prompt writes one ``<path> <unix-ns>`` line per prompt. Nothing
here sorts or deduplicates; that is left to the compactor.

Folder names are raw filesystem names, so the file is read and written with
``surrogateescape``: bytes that are not UTF-8 round-trip unchanged.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from legosigno.errors import LogCorruptError, StorageError

logger = logging.getLogger(__name__)

_TIMESTAMP_RE = re.compile(r"-?[0-9]+")
_LINE_BREAKS = ("\n", "\r")


class AppendLog:
    """Line-oriented visit log stored at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _open(self, mode: str):
        return open(self.path, mode, encoding="utf-8", errors="surrogateescape", newline="\n")

    def record(self, folder: str, timestamp: int, log_to: logging.Logger = logger) -> int:
        """Append one visit. Returns the log size in bytes after the write.

        Folders whose name holds a line break cannot be stored one per line
        and are skipped.
        """
        if any(c in folder for c in _LINE_BREAKS):
            log_to.warning("Not recording %r: folder name contains a line break", folder)
            return self.size()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._open("a") as f:
                f.write(f"{folder} {timestamp}\n")
        except OSError as e:
            raise StorageError(self.path, e) from e
        return self.size()

    def read_events(self) -> list[tuple[str, int]]:
        """Parse every line into ``(path, timestamp)``.

        Raises LogCorruptError on the first line that does not parse.
        """
        if not self.path.exists():
            return []

        events = []
        try:
            with self._open("r") as f:
                for number, raw in enumerate(f, start=1):
                    line = raw.rstrip("\n")
                    if not line.strip():
                        continue
                    folder, sep, stamp = line.rpartition(" ")
                    if not sep or not folder or not _TIMESTAMP_RE.fullmatch(stamp):
                        raise LogCorruptError(self.path, number, line)
                    events.append((folder, int(stamp)))
        except OSError as e:
            raise StorageError(self.path, e) from e
        return events

    def truncate(self) -> None:
        """Empty the log. Appends racing this call may be lost."""
        if not self.path.exists():
            return
        try:
            with self._open("r+") as f:
                f.truncate(0)
        except OSError as e:
            raise StorageError(self.path, e) from e
        logger.debug("Truncated %s", self.path)

    def size(self) -> int:
        try:
            return self.path.stat().st_size
        except FileNotFoundError:
            return 0
