"""Compact header strip: a few lines of single-dot-column bars.

Uses the chart's windows and scaling at half the horizontal dot density
of the full chart, against a max taken over the strip's own visible
windows. Every cell is drawn (unlit cells as a grey blank braille glyph)
so the strip reads as a solid bar.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from peaks.braille import BRAILLE_BASE, DOTS_PER_CELL, LEFT_DOTS, RIGHT_DOTS, bar_height
from peaks.scaling import clamp_max, scale_value
from peaks.styling import BACKGROUND_COLOR, FLAT_COLORS, Series

if TYPE_CHECKING:
    from peaks.chart import BrailleChart

COMPACT_MIN_WIDTH = 10
COMPACT_MIN_LINES = 2

CompactCell = tuple[str, Optional[Series]]


def compact_width(terminal_width: int) -> int:
    return max(COMPACT_MIN_WIDTH, terminal_width - 2)


def _cell(dots: int, series: Series | None) -> CompactCell:
    return chr(BRAILLE_BASE + dots), (series if dots else None)


def split_column(up_scale: float, down_scale: float, lines: int) -> list[CompactCell]:
    """Upload hangs from the top edge, download stands on the bottom edge."""
    top_lines = lines // 2
    bottom_lines = lines - top_lines
    up_h = bar_height(up_scale, top_lines * DOTS_PER_CELL)
    down_h = bar_height(down_scale, bottom_lines * DOTS_PER_CELL)

    cells = []
    for y in range(top_lines):
        dots = 0
        for dot_row in range(DOTS_PER_CELL):
            if y * DOTS_PER_CELL + dot_row < up_h:
                dots |= RIGHT_DOTS[dot_row]
        cells.append(_cell(dots, Series.UPLOAD))

    bottom_full = bottom_lines * DOTS_PER_CELL
    for y in range(bottom_lines):
        dots = 0
        for dot_row in range(DOTS_PER_CELL):
            if bottom_full - (y * DOTS_PER_CELL + dot_row) <= down_h:
                dots |= LEFT_DOTS[dot_row]
        cells.append(_cell(dots, Series.DOWNLOAD))
    return cells


def overlay_column(up_scale: float, down_scale: float, lines: int) -> list[CompactCell]:
    """Both series stand on the bottom edge; shared cells are overlap colored."""
    full = lines * DOTS_PER_CELL
    up_h = bar_height(up_scale, full)
    down_h = bar_height(down_scale, full)

    cells = []
    for y in range(lines):
        up_dots = 0
        down_dots = 0
        for dot_row in range(DOTS_PER_CELL):
            distance = full - (y * DOTS_PER_CELL + dot_row)
            if distance <= up_h:
                up_dots |= LEFT_DOTS[dot_row]
            if distance <= down_h:
                down_dots |= LEFT_DOTS[dot_row]

        if up_dots and down_dots:
            series = Series.OVERLAP
        elif up_dots:
            series = Series.UPLOAD
        else:
            series = Series.DOWNLOAD
        cells.append(_cell(up_dots | down_dots, series))
    return cells


def render_compact(chart: BrailleChart, terminal_width: int, lines: int = 2) -> str:
    width = compact_width(terminal_width)
    lines = max(COMPACT_MIN_LINES, lines)
    styler = chart.styler

    if not len(chart.buffer):
        empty = styler.flat(chr(BRAILLE_BASE), BACKGROUND_COLOR) * width
        return "\n".join([empty] * lines)

    layout = chart.aggregator.layout(width)
    # the strip is narrower than the chart, so it keeps its own max
    max_value = clamp_max(chart.aggregator.visible_max(layout))
    mode = chart.scaling_mode
    build = overlay_column if chart.is_overlay else split_column

    rows: list[list[str]] = [[] for _ in range(lines)]
    for window in layout.columns:
        upload, download = chart.aggregator.aggregate(window)
        cells = build(scale_value(upload, max_value, mode),
                      scale_value(download, max_value, mode), lines)
        for y, (glyph, series) in enumerate(cells):
            color = BACKGROUND_COLOR if series is None else FLAT_COLORS[series]
            rows[y].append(styler.flat(glyph, color))

    return "\n".join("".join(row) for row in rows)
