"""Persisted store file."""

from __future__ import annotations

import logging
from pathlib import Path

from legosigno.errors import StorageError
from legosigno.models import Store

logger = logging.getLogger(__name__)


class StoreFile:
    """JSON file holding the bookmarks and visits tables.

    Saving truncates and rewrites the file in place; a crash halfway through
    a save can leave it unreadable, in which case the next load starts over
    from an empty store.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self, log_to: logging.Logger = logger) -> Store:
        """Read the store, creating an empty file when there is none."""
        try:
            if not self.path.exists():
                log_to.debug("Unable to open %s, creating it", self.path)
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            log_to.warning("Unable to read json in bookmarks file: %s", self.path)
            return Store()
        except OSError as e:
            raise StorageError(self.path, e) from e

        if not text.strip():
            return Store()

        try:
            store = Store.from_json(text)
        except ValueError:
            log_to.warning("Unable to read json in bookmarks file: %s", self.path)
            return Store()

        dropped = store.normalize()
        if dropped:
            log_to.warning("Dropped %d empty or duplicate entries from %s", dropped, self.path)
        return store

    def save(self, store: Store, log_to: logging.Logger = logger) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(store.to_json() + "\n", encoding="utf-8")
        except OSError as e:
            raise StorageError(self.path, e) from e
        log_to.debug(
            "Saved %d bookmark(s) and %d visit(s) to %s",
            len(store.bookmarks), len(store.visits), self.path,
        )
