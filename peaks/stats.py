"""Session statistics shown in the status bar."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class Stats:
    """Peaks and running totals since start (or the last reset).

    Totals integrate each rate over the sampling interval, so they are an
    estimate of bytes moved rather than an exact counter.
    """
    interval_s: float = 0.5
    total_upload: int = 0
    total_download: int = 0
    peak_upload: int = 0
    peak_download: int = 0
    start_time: float = field(default_factory=time.monotonic)

    def update(self, upload: int, download: int) -> None:
        self.total_upload += int(upload * self.interval_s)
        self.total_download += int(download * self.interval_s)
        self.peak_upload = max(self.peak_upload, upload)
        self.peak_download = max(self.peak_download, download)

    @property
    def uptime(self) -> float:
        return time.monotonic() - self.start_time

    def reset(self) -> None:
        self.total_upload = 0
        self.total_download = 0
        self.peak_upload = 0
        self.peak_download = 0
        self.start_time = time.monotonic()
