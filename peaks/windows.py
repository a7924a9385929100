"""Time-scale windows: which samples collapse into which chart column."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from peaks.buffer import Sample, SampleBuffer

EMPTY = Sample(0, 0)


class TimeScale(Enum):
    """History compressed into the chart width, in minutes."""
    MIN_1 = 1
    MIN_3 = 3
    MIN_5 = 5
    MIN_10 = 10
    MIN_15 = 15
    MIN_30 = 30
    MIN_60 = 60

    @property
    def minutes(self) -> int:
        return self.value

    @property
    def seconds(self) -> int:
        return self.value * 60

    @property
    def window_size(self) -> int:
        """Samples folded into one column."""
        return max(1, self.seconds // 60)

    @property
    def label(self) -> str:
        return f"{self.value} min"

    def next(self) -> TimeScale:
        order = list(TimeScale)
        return order[(order.index(self) + 1) % len(order)]

    @classmethod
    def from_minutes(cls, minutes: int) -> TimeScale:
        """Map a minute count to a scale; unknown counts fall back to 1 minute."""
        for scale in cls:
            if scale.value == minutes:
                return scale
        return cls.MIN_1


@dataclass(frozen=True)
class Window:
    """Samples [start, end) by absolute sequence number, drawn as one column."""
    index: int
    start: int
    end: int
    complete: bool


@dataclass(frozen=True)
class ColumnLayout:
    window_size: int
    columns: tuple[Window | None, ...]   # None = left padding, nothing to draw

    @property
    def windows(self) -> list[Window]:
        return [w for w in self.columns if w is not None]

    @property
    def first_index(self) -> int:
        windows = self.windows
        return windows[0].index if windows else 0


class WindowAggregator:
    """Slices a SampleBuffer into per-column windows and reduces them by max.

    Window i covers sequence numbers [i*k, (i+1)*k). Newest data always
    lands in the rightmost column; when fewer windows exist than columns
    the chart is left-padded. A window is complete once all k of its
    samples have been appended; only the rightmost window can be partial.

    The aggregate of a complete window can no longer change until the
    buffer starts evicting its samples, so it is memoized until then or
    until the window scrolls off screen. Evicted samples stop counting;
    a window with every sample evicted aggregates to zero.
    """

    def __init__(self, buffer: SampleBuffer, window_size: int = 1):
        self.buffer = buffer
        self._window_size = max(1, window_size)
        self._closed: dict[int, Sample] = {}

    @property
    def window_size(self) -> int:
        return self._window_size

    def set_window_size(self, window_size: int) -> None:
        window_size = max(1, window_size)
        if window_size != self._window_size:
            self._window_size = window_size
            self.invalidate()

    def invalidate(self) -> None:
        self._closed.clear()

    # ---- layout ----

    def layout(self, width: int) -> ColumnLayout:
        k = self._window_size
        total = self.buffer.total
        total_windows = -(-total // k)
        first_visible = max(0, total_windows - width)
        pad = max(0, width - total_windows)

        columns: list[Window | None] = [None] * pad
        for index in range(first_visible, total_windows):
            start = index * k
            end = min(start + k, total)
            columns.append(Window(index, start, end, complete=start + k <= total))

        self._prune(max(first_visible, self.first_retained_index()))
        return ColumnLayout(k, tuple(columns))

    def first_retained_index(self) -> int:
        """Index of the oldest window whose samples are all still in the buffer."""
        return -(-self.buffer.first_sequence // self._window_size)

    def is_stable(self, window: Window) -> bool:
        """True once a window can no longer change: complete and nothing evicted."""
        return window.complete and window.start >= self.buffer.first_sequence

    def _prune(self, first_index: int) -> None:
        stale = [i for i in self._closed if i < first_index]
        for i in stale:
            del self._closed[i]

    # ---- aggregation ----

    def aggregate(self, window: Window | None) -> Sample:
        """Peak upload and peak download within the window.

        Max rather than mean, so a one-sample burst inside a wide window
        still shows at full height.
        """
        if window is None:
            return EMPTY
        stable = self.is_stable(window)
        if stable:
            cached = self._closed.get(window.index)
            if cached is not None:
                return cached

        upload, download = self.buffer.span(window.start, window.end)
        result = Sample(max(upload, default=0), max(download, default=0))

        if stable:
            self._closed[window.index] = result
        return result

    def visible_max(self, layout: ColumnLayout) -> int:
        """Largest value of either series across every visible window."""
        peak = 0
        for window in layout.windows:
            up, down = self.aggregate(window)
            peak = max(peak, up, down)
        return peak
