"""Single numbered list over bookmarks and the top visited folders.

Bookmarks come first in stored order, followed by the best ranked visits.
Index ``-k`` is a shorthand for the k-th ranked visit, counted from 1.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from legosigno.errors import SelectionError
from legosigno.models import Entry, Store

LISTED_VISITS = 10
INTERACTIVE = "?"

BOOKMARK = "bookmark"
VISIT = "visit"


@dataclass(frozen=True)
class Row:
    index: int
    section: str
    entry: Entry

    @property
    def path(self) -> str:
        return self.entry.path


class Selector:
    """Index-addressable view of a Store."""

    def __init__(self, store: Store, listed_visits: int = LISTED_VISITS) -> None:
        self.store = store
        self.listed_visits = listed_visits

    def rows(self) -> list[Row]:
        rows = [
            Row(i, BOOKMARK, entry) for i, entry in enumerate(self.store.bookmarks)
        ]
        offset = len(rows)
        for i, entry in enumerate(self.store.visits[: self.listed_visits]):
            rows.append(Row(offset + i, VISIT, entry))
        return rows

    @property
    def last_index(self) -> int:
        listed = min(len(self.store.visits), self.listed_visits)
        return len(self.store.bookmarks) + listed - 1

    def _locate(self, index: int) -> tuple[list[Entry], int]:
        """Map a list index onto the underlying sequence and position."""
        bookmarks = self.store.bookmarks
        visits = self.store.visits

        if index < 0:
            position = -index - 1
            if position < len(visits):
                return visits, position
            raise SelectionError(f"No visited folder #{-index}")

        if index < len(bookmarks):
            return bookmarks, index
        position = index - len(bookmarks)
        if position < min(len(visits), self.listed_visits):
            return visits, position
        raise SelectionError(f"No folder with index {index}")

    def resolve(self, index: int) -> str:
        sequence, position = self._locate(index)
        return sequence[position].path

    def resolve_by_name(self, folder: str) -> int:
        for row in self.rows():
            if row.path == folder:
                return row.index
        raise SelectionError(f'Folder "{folder}" Not found')

    def remove(self, index: int, confirm: Callable[[str], bool]) -> Entry | None:
        """Delete the entry at ``index`` once ``confirm(path)`` agrees."""
        sequence, position = self._locate(index)
        entry = sequence[position]
        if not confirm(entry.path):
            return None
        del sequence[position]
        return entry

    def parse_selection(self, token: str, choose: Callable[[], str]) -> int:
        """Turn a user token into an index.

        ``"?"`` asks ``choose`` for the index after the list was shown.
        """
        if token == INTERACTIVE:
            answer = choose().strip()
            try:
                number = int(answer)
            except ValueError:
                raise SelectionError(f"Invalid bookmark index {answer!r}") from None
            if number > self.last_index:
                raise SelectionError("Invalid bookmark index")
            return number

        try:
            return int(token)
        except ValueError:
            raise SelectionError("Parameter should be number or ?") from None
