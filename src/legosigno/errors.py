"""Error hierarchy for Legosigno."""

from __future__ import annotations


class LegosignoError(Exception):
    """Base class for failures that end a run with a diagnostic."""


class StorageError(LegosignoError):
    """A store or log file could not be opened, created or written."""

    def __init__(self, path: object, cause: OSError | None = None) -> None:
        detail = f": {cause.strerror or cause}" if cause else ""
        super().__init__(f"Unable to access {path}{detail}")
        self.path = path
        self.cause = cause


class LogCorruptError(LegosignoError):
    """The visited-folders log holds a line that cannot be parsed."""

    def __init__(self, path: object, line_number: int, line: str) -> None:
        super().__init__(f"Corrupt line {line_number} in {path}: {line!r}")
        self.path = path
        self.line_number = line_number
        self.line = line


class SelectionError(LegosignoError):
    """A user-supplied index or folder name does not address an entry."""
