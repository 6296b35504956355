"""Rank visited folders by recency and cap how many are kept."""

from __future__ import annotations

from legosigno.models import Entry

MAX_AMOUNT_OF_VISITED_FOLDERS = 50


def partition_sort(entries: list[Entry], lo: int = 0, hi: int | None = None) -> None:
    """Sort ``entries[lo:hi + 1]`` in place by score, highest first.

    Partition-exchange with the middle element as pivot. Equal scores keep no
    particular order.
    """
    if hi is None:
        hi = len(entries) - 1

    while hi - lo >= 1:
        mid = lo + (hi - lo + 1) // 2
        entries[mid], entries[hi] = entries[hi], entries[mid]
        pivot = entries[hi].score

        left = lo
        for i in range(lo, hi):
            if entries[i].score > pivot:
                entries[left], entries[i] = entries[i], entries[left]
                left += 1
        entries[left], entries[hi] = entries[hi], entries[left]

        # Recurse into the smaller side so the stack stays shallow
        if left - lo < hi - left:
            partition_sort(entries, lo, left - 1)
            lo = left + 1
        else:
            partition_sort(entries, left + 1, hi)
            hi = left - 1


def rank(visits: list[Entry], limit: int = MAX_AMOUNT_OF_VISITED_FOLDERS) -> int:
    """Sort ``visits`` most recent first and drop everything past ``limit``.

    Returns how many entries were evicted.
    """
    partition_sort(visits)
    evicted = max(len(visits) - limit, 0)
    if evicted:
        del visits[limit:]
    return evicted
