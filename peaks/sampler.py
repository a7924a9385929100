"""BaseSampler: the traffic source the chart consumes.

A sampler yields one (upload, download) pair of bytes/sec per tick.
Subclasses implement: name, description, add_args(), setup(), sample().
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace


class SamplerError(RuntimeError):
    """Raised when traffic counters cannot be read."""


class BaseSampler(ABC):
    """Abstract base for all traffic samplers.

    Lifecycle:
        1. __init__() stores parsed args and calls setup()
        2. sample() is called each tick
        3. cleanup() is called on exit
    """

    name: str = ""            # e.g. "proc", used by registry & --sampler
    description: str = ""     # e.g. "Linux /proc/net/dev counters"

    def __init__(self, args: Namespace | None = None):
        self.args = args if args is not None else Namespace()
        self.setup(self.args)

    # ---- subclass interface ----

    @classmethod
    def add_args(cls, parser: ArgumentParser) -> None:
        """Override to add sampler-specific CLI flags."""

    @abstractmethod
    def setup(self, args: Namespace) -> None:
        """Called once after arg parsing. Prime counters here."""

    @abstractmethod
    def sample(self) -> tuple[int, int]:
        """Called each tick. Return (upload_bytes_per_sec, download_bytes_per_sec)."""

    def cleanup(self) -> None:
        """Called on exit. Override to release resources."""

    def label(self) -> str:
        """Override to describe what is being measured (e.g. an interface name)."""
        return ""

    # ---- availability check ----

    @classmethod
    def is_available(cls) -> bool:
        """Return True if this sampler can run on the current system."""
        return True
