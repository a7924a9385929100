"""Bounded history of (upload, download) samples."""

from __future__ import annotations

import logging
from collections import deque
from itertools import islice
from typing import NamedTuple

logger = logging.getLogger(__name__)


class Sample(NamedTuple):
    """One reading in bytes/sec."""
    upload: int
    download: int


class SampleBuffer:
    """Two parallel FIFO series with a running maximum.

    Appends beyond capacity evict the oldest sample. Besides the retained
    samples the buffer counts every sample appended since the last reset
    (`total`), which gives each sample a stable absolute sequence number:
    the oldest retained sample is number `total - len(buffer)`.
    """

    def __init__(self, max_points: int):
        self._max_points = max(1, int(max_points))
        self._upload: deque[int] = deque(maxlen=self._max_points)
        self._download: deque[int] = deque(maxlen=self._max_points)
        self._current_max = 0
        self._total = 0

    def __len__(self) -> int:
        return len(self._upload)

    # ---- properties ----

    @property
    def max_points(self) -> int:
        return self._max_points

    @property
    def current_max(self) -> int:
        """Largest value of either series among the retained samples."""
        return self._current_max

    @property
    def total(self) -> int:
        """Number of samples appended since creation or the last reset."""
        return self._total

    @property
    def first_sequence(self) -> int:
        """Absolute sequence number of the oldest retained sample."""
        return self._total - len(self._upload)

    # ---- mutation ----

    def append(self, upload: int, download: int) -> None:
        upload = max(0, int(upload))
        download = max(0, int(download))

        evicted = None
        if len(self._upload) == self._max_points:
            evicted = max(self._upload[0], self._download[0])

        # deque(maxlen=...) drops index 0 for us
        self._upload.append(upload)
        self._download.append(download)
        self._total += 1

        if evicted is not None and evicted >= self._current_max:
            self._recalculate_max()
        else:
            self._current_max = max(self._current_max, upload, download)

    def set_capacity(self, max_points: int) -> None:
        """Change the bound; shrinking discards the oldest samples."""
        max_points = max(1, int(max_points))
        if max_points == self._max_points:
            return

        trimmed = max(0, len(self._upload) - max_points)
        self._upload = deque(islice(self._upload, trimmed, None), maxlen=max_points)
        self._download = deque(islice(self._download, trimmed, None), maxlen=max_points)
        self._max_points = max_points

        if trimmed:
            logger.debug("capacity %d: trimmed %d oldest samples", max_points, trimmed)
            self._recalculate_max()

    def reset(self) -> None:
        self._upload.clear()
        self._download.clear()
        self._current_max = 0
        self._total = 0

    def _recalculate_max(self) -> None:
        self._current_max = max(
            max(self._upload, default=0),
            max(self._download, default=0),
        )

    # ---- access ----

    def get(self, sequence: int) -> Sample | None:
        """Sample with the given absolute sequence number, if still retained."""
        index = sequence - self.first_sequence
        if index < 0 or index >= len(self._upload):
            return None
        return Sample(self._upload[index], self._download[index])

    def span(self, start: int, end: int) -> tuple[list[int], list[int]]:
        """Retained upload/download values for sequence numbers [start, end).

        Walks from whichever end of the buffer is closer, so reading the
        newest windows costs time proportional to the span alone.
        """
        first = self.first_sequence
        length = len(self._upload)
        lo = max(0, start - first)
        hi = min(length, end - first)
        if hi <= lo:
            return [], []

        if lo >= length - hi:
            # reversed deque iteration starts at the newest sample
            skip = length - hi
            upload = list(islice(reversed(self._upload), skip, skip + hi - lo))
            download = list(islice(reversed(self._download), skip, skip + hi - lo))
            upload.reverse()
            download.reverse()
        else:
            upload = list(islice(self._upload, lo, hi))
            download = list(islice(self._download, lo, hi))
        return upload, download

    def samples(self) -> list[Sample]:
        """All retained samples, oldest first."""
        return [Sample(u, d) for u, d in zip(self._upload, self._download)]
