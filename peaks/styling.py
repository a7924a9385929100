"""Gradient coloring for braille cells.

Colors are RGB tuples so plotext emits 24-bit escape sequences. Each
gradient is ordered darkest first: index 0 is used farthest from the
series' origin, the last step right at the origin.
"""

from __future__ import annotations

from enum import Enum

import plotext as plt

RGB = tuple[int, int, int]


class Series(Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"
    OVERLAP = "overlap"


def hex_to_rgb(code: str) -> RGB:
    code = code.lstrip("#")
    return int(code[0:2], 16), int(code[2:4], 16), int(code[4:6], 16)


GRADIENTS: dict[Series, tuple[RGB, ...]] = {
    Series.UPLOAD: tuple(hex_to_rgb(c) for c in (
        "#7F1D1D", "#B91C1C", "#DC2626", "#EF4444", "#F87171", "#FCA5A5",
    )),
    Series.DOWNLOAD: tuple(hex_to_rgb(c) for c in (
        "#064E3B", "#047857", "#059669", "#10B981", "#34D399", "#6EE7B7",
    )),
    # amber, only used where both series cover the same cell
    Series.OVERLAP: tuple(hex_to_rgb(c) for c in (
        "#713F12", "#92400E", "#B45309", "#D97706",
        "#F59E0B", "#FBBF24", "#FCD34D", "#FDE68A",
    )),
}

# Flat colors for the compact header
FLAT_COLORS: dict[Series, RGB] = {
    Series.UPLOAD: hex_to_rgb("#EF4444"),
    Series.DOWNLOAD: hex_to_rgb("#10B981"),
    Series.OVERLAP: hex_to_rgb("#EAB308"),
}
BACKGROUND_COLOR = hex_to_rgb("#374151")


def gradient_step(position: float, step_count: int) -> int:
    """Gradient index for a 0..1 distance from the origin (0 = lightest step)."""
    inverted = 1.0 - max(0.0, min(1.0, position))
    return min(step_count - 1, int(inverted * (step_count - 1)))


def gradient_color(position: float, series: Series) -> RGB:
    steps = GRADIENTS[series]
    return steps[gradient_step(position, len(steps))]


class GradientStyler:
    """Colors glyphs by gradient position, memoizing every styled string.

    The memo is keyed by (glyph, position rounded to 2 places, series) and
    owned by the instance, so separate charts never share styling state.
    """

    def __init__(self, bold: bool = True):
        self._style = "bold" if bold else None
        self._cache: dict[tuple[str, float, Series], str] = {}
        self._flat_cache: dict[tuple[str, RGB], str] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def style(self, glyph: str, position: float, series: Series) -> str:
        key = (glyph, round(position, 2), series)
        styled = self._cache.get(key)
        if styled is None:
            color = gradient_color(key[1], series)
            styled = plt.colorize(glyph, color, self._style)
            self._cache[key] = styled
        return styled

    def flat(self, glyph: str, color: RGB) -> str:
        """Single-color styling for the compact header."""
        key = (glyph, color)
        styled = self._flat_cache.get(key)
        if styled is None:
            styled = plt.colorize(glyph, color)
            self._flat_cache[key] = styled
        return styled

    def clear(self) -> None:
        self._cache.clear()
        self._flat_cache.clear()
