"""Synthetic traffic: a steady trickle with occasional bursts."""

from __future__ import annotations

import random
from argparse import ArgumentParser, Namespace

from peaks import register
from peaks.sampler import BaseSampler


@register
class MockSampler(BaseSampler):
    name = "mock"
    description = "Random test traffic (no network access needed)"

    @classmethod
    def add_args(cls, parser: ArgumentParser) -> None:
        parser.add_argument("--seed", type=int, default=None,
                            help="Seed for reproducible mock traffic")
        parser.add_argument("--peak", type=int, default=8 * 1024**2,
                            help="Largest mock burst in bytes/sec (default: 8 MB/s)")

    def setup(self, args: Namespace) -> None:
        self._rng = random.Random(getattr(args, "seed", None))
        self._peak = max(1024, getattr(args, "peak", 8 * 1024**2))
        self._burst = 0

    def sample(self) -> tuple[int, int]:
        if self._burst == 0 and self._rng.random() < 0.05:
            self._burst = self._rng.randint(3, 20)

        scale = 1.0 if self._burst else 0.02
        if self._burst:
            self._burst -= 1

        download = int(self._rng.uniform(0.1, 1.0) * self._peak * scale)
        upload = int(self._rng.uniform(0.05, 0.4) * self._peak * scale)
        return upload, download

    def label(self) -> str:
        return "mock"
