"""Operations the command line drives.

Every call gets a RunContext carrying the configuration and the logger to
report through; nothing here reads the environment or global state.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from legosigno.append_log import AppendLog
from legosigno.compactor import compact
from legosigno.config.schema import LegosignoConfig
from legosigno.logging_config import LOGGER_NAME
from legosigno.models import Entry, Store, find_entry
from legosigno.ranker import rank
from legosigno.selector import INTERACTIVE, Row, Selector
from legosigno.storage import StoreFile


@dataclass
class RunContext:
    config: LegosignoConfig = field(default_factory=LegosignoConfig)
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(LOGGER_NAME))

    @property
    def store_file(self) -> StoreFile:
        return StoreFile(self.config.bookmarks_path)

    @property
    def append_log(self) -> AppendLog:
        return AppendLog(self.config.visited_path)


@dataclass
class Session:
    """A loaded store and whether it needs saving."""

    store: Store
    dirty: bool = False

    def selector(self, ctx: RunContext) -> Selector:
        return Selector(self.store, ctx.config.listed_visits)


def open_store(ctx: RunContext) -> Session:
    """Load the store, fold in pending visits and re-rank them."""
    store = ctx.store_file.load(ctx.log)
    session = Session(store)
    session.dirty = compact(ctx.append_log, store.visits, ctx.log)

    evicted = rank(store.visits, ctx.config.max_visited_folders)
    if evicted:
        ctx.log.info("Dropped %d visited folder(s) past the limit", evicted)
        session.dirty = True
    return session


def save_store(ctx: RunContext, session: Session) -> bool:
    """Write the store back if anything changed. Returns True if written."""
    if not session.dirty:
        return False
    ctx.store_file.save(session.store, ctx.log)
    session.dirty = False
    return True


def record_visit(ctx: RunContext, folder: str, timestamp: int | None = None) -> None:
    """Log a visit; compacts right away once the log grows past its limit."""
    if timestamp is None:
        timestamp = time.time_ns()
    size = ctx.append_log.record(folder, timestamp, ctx.log)
    if size >= ctx.config.max_log_bytes:
        ctx.log.info("Visited log reached %d bytes, compacting", size)
        save_store(ctx, open_store(ctx))


def bookmark_current(session: Session, folder: str) -> Entry:
    """Bookmark ``folder``, or bump its score if it is already bookmarked."""
    bookmarks = session.store.bookmarks
    i = find_entry(bookmarks, folder)
    if i < 0:
        entry = Entry(path=folder, score=1)
        bookmarks.append(entry)
    else:
        entry = bookmarks[i]
        entry.score += 1
    session.dirty = True
    return entry


def list_folders(ctx: RunContext, session: Session) -> list[Row]:
    return session.selector(ctx).rows()


def remove_by_index_or_name(
    ctx: RunContext,
    session: Session,
    token: str,
    confirm: Callable[[str], bool],
    choose: Callable[[], str],
) -> Entry | None:
    """Remove the folder addressed by an index, ``?`` or a folder path."""
    selector = session.selector(ctx)
    if token != INTERACTIVE and not _is_int(token):
        index = selector.resolve_by_name(token)
    else:
        index = selector.parse_selection(token, choose)

    removed = selector.remove(index, confirm)
    if removed is not None:
        ctx.log.info("Removed %s", removed.path)
        session.dirty = True
    return removed


def resolve_target(
    ctx: RunContext,
    session: Session,
    token: str,
    choose: Callable[[], str],
) -> str:
    """Folder to change into for an index or ``?``."""
    selector = session.selector(ctx)
    return selector.resolve(selector.parse_selection(token, choose))


def _is_int(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True
