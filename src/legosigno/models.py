"""Data model: folder entries and the persisted store."""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """A folder and its score.

    For bookmarks the score counts how often the folder was bookmarked. For
    visits it is the most recent visit time in Unix nanoseconds.
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str = Field(default="", alias="folder")
    score: int = 0


class Store(BaseModel):
    """Bookmarks in insertion order plus ranked visited folders."""

    bookmarks: list[Entry] = Field(default_factory=list)
    visits: list[Entry] = Field(default_factory=list)

    def to_json(self) -> str:
        # json.dumps escapes the surrogates that stand in for non UTF-8 bytes
        # in folder names, so any name the filesystem accepts can be saved.
        return json.dumps(self.model_dump(by_alias=True))

    @classmethod
    def from_json(cls, text: str | bytes) -> Store:
        """Parse a saved store. Raises ValueError for bad JSON or shape."""
        return cls.model_validate(json.loads(text))

    def normalize(self) -> int:
        """Drop entries without a path and repeated paths.

        The first copy of a bookmark is kept; for visits the most recent
        score wins. Returns the number of entries dropped.
        """
        before = len(self.bookmarks) + len(self.visits)

        bookmarks: dict[str, Entry] = {}
        for entry in self.bookmarks:
            if entry.path and entry.path not in bookmarks:
                bookmarks[entry.path] = entry

        visits: dict[str, Entry] = {}
        for entry in self.visits:
            if not entry.path:
                continue
            seen = visits.get(entry.path)
            if seen is None or entry.score > seen.score:
                visits[entry.path] = entry

        self.bookmarks = list(bookmarks.values())
        self.visits = list(visits.values())
        return before - len(self.bookmarks) - len(self.visits)


def find_entry(entries: list[Entry], path: str) -> int:
    """Position of ``path`` in ``entries``, or -1."""
    for i, entry in enumerate(entries):
        if entry.path == path:
            return i
    return -1
