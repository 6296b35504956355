"""Fold the visit log into the ranked visits table."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from legosigno.append_log import AppendLog
from legosigno.models import Entry

logger = logging.getLogger(__name__)


def merge_visits(visits: list[Entry], events: Iterable[tuple[str, int]]) -> bool:
    """Merge ``(path, timestamp)`` events into ``visits`` in place.

    A known path takes the new timestamp only when it is strictly later.
    Returns True when ``visits`` changed.
    """
    positions = {entry.path: i for i, entry in enumerate(visits)}
    changed = False
    for folder, timestamp in events:
        i = positions.get(folder)
        if i is None:
            positions[folder] = len(visits)
            visits.append(Entry(path=folder, score=timestamp))
            changed = True
        elif timestamp > visits[i].score:
            visits[i].score = timestamp
            changed = True
    return changed


def compact(
    log: AppendLog,
    visits: list[Entry],
    log_to: logging.Logger = logger,
) -> bool:
    """Drain ``log`` into ``visits`` and empty it.

    Parsing happens before anything is merged, so a corrupt log leaves both
    the log and ``visits`` untouched. Returns the dirty flag.
    """
    events = log.read_events()
    if not events:
        return False

    changed = merge_visits(visits, events)
    log.truncate()
    log_to.info("Compacted %d visit(s) from %s", len(events), log.path)
    return changed
