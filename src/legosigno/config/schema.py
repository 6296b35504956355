"""Pydantic v2 models for Legosigno configuration."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_STORAGE_DIR = "~/.legosigno"


class LegosignoConfig(BaseModel):
    """Root configuration model for Legosigno."""

    storage_dir: str = DEFAULT_STORAGE_DIR
    bookmarks_filename: str = "bookmarks.json"
    visited_filename: str = "visited_folders"
    max_visited_folders: int = Field(default=50, ge=1)
    listed_visits: int = Field(default=10, ge=0)
    max_log_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    log_level: str = "error"

    @property
    def storage_path(self) -> Path:
        return Path(self.storage_dir).expanduser()

    @property
    def bookmarks_path(self) -> Path:
        return self.storage_path / self.bookmarks_filename

    @property
    def visited_path(self) -> Path:
        return self.storage_path / self.visited_filename
