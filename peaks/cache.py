"""Stability cache: rendered columns for windows that can no longer change."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

logger = logging.getLogger(__name__)


class CachePolicy(Enum):
    """What a cached column does when the render max moves.

    RESCALE redraws the column against the new max, so every column on
    screen shares one scale. FREEZE keeps the column exactly as first
    drawn until the cache is invalidated.
    """
    RESCALE = "rescale"
    FREEZE = "freeze"


@dataclass(frozen=True)
class CachedColumn:
    rows: tuple[str, ...]
    max_value: int      # render max the rows were drawn against


class ColumnCache:
    """Pre-rendered rows per complete window index.

    Entries are only valid within one configuration epoch; the chart calls
    invalidate() whenever scaling, time scale, display mode or size change.
    """

    def __init__(self, policy: CachePolicy = CachePolicy.RESCALE):
        self.policy = policy
        self._entries: dict[int, CachedColumn] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, window_index: int) -> bool:
        return window_index in self._entries

    def get_or_render(self, window_index: int, complete: bool, max_value: int,
                      render: Callable[[], Sequence[str]]) -> tuple[str, ...]:
        if complete:
            entry = self._entries.get(window_index)
            if entry is not None and (
                self.policy is CachePolicy.FREEZE or entry.max_value == max_value
            ):
                self.hits += 1
                return entry.rows

        self.misses += 1
        rows = tuple(render())
        # the still-filling window is redrawn every time and never stored
        if complete:
            self._entries[window_index] = CachedColumn(rows, max_value)
        return rows

    def prune(self, first_index: int) -> None:
        """Drop entries for windows that have scrolled off the left edge."""
        stale = [i for i in self._entries if i < first_index]
        for i in stale:
            del self._entries[i]

    def invalidate(self, reason: str = "") -> None:
        if self._entries:
            logger.debug("column cache invalidated (%s): %d entries dropped",
                         reason or "unspecified", len(self._entries))
        self._entries.clear()
