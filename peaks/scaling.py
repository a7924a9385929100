"""Value scaling: map a byte rate onto a 0..1 bar height."""

from __future__ import annotations

import math
from enum import Enum

# Floor for logarithmic scaling and for a zero maximum (1 KiB/s)
MIN_SCALE_VALUE = 1024
# Ceiling for the render max (100 MiB/s); faster rates saturate
MAX_SCALE_LIMIT = 100 * 1024 * 1024


class ScalingMode(Enum):
    LINEAR = "linear"
    LOGARITHMIC = "log"
    SQUARE_ROOT = "sqrt"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def next(self) -> ScalingMode:
        """Return the mode that follows this one in the cycle order."""
        order = list(ScalingMode)
        return order[(order.index(self) + 1) % len(order)]


_LABELS = {
    ScalingMode.LINEAR: "Linear",
    ScalingMode.LOGARITHMIC: "Logarithmic",
    ScalingMode.SQUARE_ROOT: "Square Root",
}


def scale_value(value: int, max_value: int, mode: ScalingMode) -> float:
    """Normalize value against max_value under the given mode.

    Zero always maps to 0.0. A zero (or negative) maximum is treated as
    MIN_SCALE_VALUE. The result is clamped to [0, 1], so values above the
    maximum saturate instead of overflowing the column.
    """
    if value <= 0:
        return 0.0
    if max_value <= 0:
        max_value = MIN_SCALE_VALUE

    if mode is ScalingMode.LOGARITHMIC:
        val = max(float(value), MIN_SCALE_VALUE)
        max_val = max(float(max_value), MIN_SCALE_VALUE)
        log_min = math.log10(MIN_SCALE_VALUE)
        span = math.log10(max_val) - log_min
        if span <= 0:
            # max sits on the floor: anything at or above it is full height
            return 1.0 if value >= MIN_SCALE_VALUE else 0.0
        scaled = (math.log10(val) - log_min) / span
    elif mode is ScalingMode.SQUARE_ROOT:
        scaled = math.sqrt(value) / math.sqrt(max_value)
    else:
        scaled = value / max_value

    return max(0.0, min(1.0, scaled))


def clamp_max(value: int) -> int:
    """Bound a render max to [MIN_SCALE_VALUE, MAX_SCALE_LIMIT]."""
    return min(MAX_SCALE_LIMIT, max(MIN_SCALE_VALUE, value))
