"""Human-readable byte rates, sizes and durations."""

from __future__ import annotations

RATE_UNITS = [("B/s", 1), ("KB/s", 1024), ("MB/s", 1024**2), ("GB/s", 1024**3),
              ("TB/s", 1024**4), ("PB/s", 1024**5)]
SIZE_UNITS = [("B", 1), ("KB", 1024), ("MB", 1024**2), ("GB", 1024**3), ("TB", 1024**4)]


def pick_unit(max_val: float, units: list[tuple[str, int]] | None = None) -> tuple[str, int]:
    """Choose the best unit so the peak value is readable."""
    if units is None:
        units = RATE_UNITS
    for name, divisor in reversed(units):
        if max_val >= divisor:
            return name, divisor
    return units[0]


def format_rate(bps: float, units: list[tuple[str, int]] | None = None) -> str:
    """Format a value into a human-readable string with auto-scaled units."""
    if units is None:
        units = RATE_UNITS
    name, divisor = pick_unit(bps, units)
    if divisor == 1:
        return f"{bps:.0f} {name}"
    return f"{bps / divisor:.2f} {name}"


def format_bytes(count: float) -> str:
    return format_rate(count, SIZE_UNITS)


def format_duration(seconds: float) -> str:
    """Compact uptime: 42s, 3m7s, 2h5m."""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m{seconds % 60}s"
    return f"{seconds // 3600}h{(seconds % 3600) // 60}m"
