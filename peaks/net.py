"""Host-wide network traffic samplers: /proc/net/dev and psutil."""

from __future__ import annotations

import os
import time
from argparse import ArgumentParser, Namespace

import psutil

from peaks import register
from peaks.sampler import BaseSampler, SamplerError

PROC_NET_DEV = "/proc/net/dev"
LOOPBACK_NAMES = {"lo", "Loopback", "lo0"}


def _parse_excludes(raw: str) -> set[str]:
    return set(x.strip() for x in raw.split(",") if x.strip())


class CounterSampler(BaseSampler):
    """Turns cumulative per-NIC byte counters into bytes/sec.

    Subclasses implement _read_counters() → {iface: (tx_bytes, rx_bytes)}.
    A counter that goes backwards (wrap or NIC reset) counts from zero.
    """

    @classmethod
    def add_args(cls, parser: ArgumentParser) -> None:
        parser.add_argument("--interface", default=None,
                            help="Monitor a single NIC (e.g. enp0s31f6)")
        parser.add_argument("--exclude", default="",
                            help="Comma-separated NICs to skip (e.g. virbr0,tailscale0)")

    def setup(self, args: Namespace) -> None:
        self._interface = getattr(args, "interface", None)
        self._excludes = _parse_excludes(getattr(args, "exclude", "") or "")
        self._prev = self._read_counters()
        self._prev_time = time.monotonic()

    def sample(self) -> tuple[int, int]:
        now = time.monotonic()
        cur = self._read_counters()
        dt = now - self._prev_time
        # too close to the previous read to give a meaningful rate
        if dt < 0.01:
            return 0, 0

        upload = download = 0
        for iface, (tx, rx) in cur.items():
            prev = self._prev.get(iface)
            if prev is None:
                continue
            prev_tx, prev_rx = prev
            upload += int((tx - prev_tx if tx >= prev_tx else tx) / dt)
            download += int((rx - prev_rx if rx >= prev_rx else rx) / dt)

        self._prev = cur
        self._prev_time = now
        return upload, download

    def label(self) -> str:
        return self._interface or ""

    def _wanted(self, iface: str) -> bool:
        if iface in LOOPBACK_NAMES:
            return False
        if self._interface and iface != self._interface:
            return False
        return iface not in self._excludes

    def _read_counters(self) -> dict[str, tuple[int, int]]:
        raise NotImplementedError


@register
class ProcNetSampler(CounterSampler):
    name = "proc"
    description = "Linux /proc/net/dev counters"

    def _read_counters(self) -> dict[str, tuple[int, int]]:
        """Per-NIC (TX, RX) bytes from /proc/net/dev."""
        counters = {}
        try:
            with open(PROC_NET_DEV) as f:
                for line in f:
                    if ":" not in line:
                        continue
                    iface, data = line.split(":", 1)
                    iface = iface.strip()
                    if not self._wanted(iface):
                        continue
                    parts = data.split()
                    counters[iface] = (int(parts[8]), int(parts[0]))   # transmit, receive bytes
        except (OSError, ValueError, IndexError) as e:
            raise SamplerError(f"could not read network statistics: {e}") from e
        return counters

    @classmethod
    def is_available(cls) -> bool:
        return os.path.exists(PROC_NET_DEV)


@register
class PsutilSampler(CounterSampler):
    name = "psutil"
    description = "psutil per-NIC counters (any OS)"

    def _read_counters(self) -> dict[str, tuple[int, int]]:
        try:
            stats = psutil.net_io_counters(pernic=True)
        except (OSError, RuntimeError) as e:
            raise SamplerError(f"could not read network statistics: {e}") from e
        return {
            iface: (io.bytes_sent, io.bytes_recv)
            for iface, io in stats.items()
            if self._wanted(iface)
        }
