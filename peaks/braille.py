"""Braille glyph composition for one chart column.

A braille cell is a 2x4 dot grid (U+2800..U+28FF). Each chart row is one
cell tall, so a column of `height` rows has `height * 4` addressable dot
rows. Both dots of a dot row are lit together, giving solid bars.
"""

from __future__ import annotations

from dataclasses import dataclass

from peaks.styling import Series

BRAILLE_BASE = 0x2800
DOTS_PER_CELL = 4
BLANK = " "

# Bits for each dot row of a cell, top to bottom (both sub-columns)
DOT_PATTERNS = (
    0x01 | 0x08,   # dots 1,4
    0x02 | 0x10,   # dots 2,5
    0x04 | 0x20,   # dots 3,6
    0x40 | 0x80,   # dots 7,8
)
LEFT_DOTS = (0x01, 0x02, 0x04, 0x40)
RIGHT_DOTS = (0x08, 0x10, 0x20, 0x80)


@dataclass(frozen=True)
class Cell:
    """A lit braille cell and what to color it as.

    position is the cell's distance from its series' origin as a 0..1
    fraction (0 = at the axis or bottom edge).
    """
    dots: int
    series: Series
    position: float

    @property
    def glyph(self) -> str:
        return chr(BRAILLE_BASE + self.dots)


def bar_height(scaled: float, span: int) -> int:
    """Whole dot rows covered by a 0..1 scaled value over `span` rows."""
    return max(0, min(span, int(scaled * span)))


def split_cell(row: int, upload_height: int, download_height: int,
               half_height: int) -> Cell | None:
    """Cell for `row` when download grows up and upload grows down from the axis.

    half_height is the axis position in dot rows from the top. Heights are
    in dot rows. Returns None for a cell with no lit dots.
    """
    if upload_height == 0 and download_height == 0:
        return None

    dots = 0
    up_position: float | None = None
    down_position: float | None = None
    span = max(1, half_height - 1)
    line_top = row * DOTS_PER_CELL

    for dot_row in range(DOTS_PER_CELL):
        pos = line_top + dot_row
        if pos < half_height:
            distance = half_height - pos          # 1 just above the axis
            if distance <= download_height:
                dots |= DOT_PATTERNS[dot_row]
                # lowest lit dot is nearest the axis
                down_position = (distance - 1) / span
        else:
            distance = pos - half_height          # 0 just below the axis
            if distance < upload_height:
                dots |= DOT_PATTERNS[dot_row]
                if up_position is None:
                    up_position = distance / span

    if not dots:
        return None
    # Series are disjoint around the axis; if both ever land in one cell, upload wins.
    if up_position is not None:
        return Cell(dots, Series.UPLOAD, min(1.0, up_position))
    return Cell(dots, Series.DOWNLOAD, min(1.0, down_position or 0.0))


def overlay_cell(row: int, upload_height: int, download_height: int,
                 full_height: int) -> Cell | None:
    """Cell for `row` when both series grow up from the bottom edge.

    A cell that holds any dot lit by both series is an overlap cell.
    """
    if upload_height == 0 and download_height == 0:
        return None

    up_dots = 0
    down_dots = 0
    line_top = row * DOTS_PER_CELL

    for dot_row in range(DOTS_PER_CELL):
        distance = full_height - (line_top + dot_row)   # 1 on the bottom dot row
        if distance <= upload_height:
            up_dots |= DOT_PATTERNS[dot_row]
        if distance <= download_height:
            down_dots |= DOT_PATTERNS[dot_row]

    if not up_dots and not down_dots:
        return None

    # Shade by row rather than bar height so every column shares one gradient
    position = 1.0 - (line_top + DOTS_PER_CELL / 2) / max(1, full_height - 1)
    position = max(0.0, min(1.0, position))

    if up_dots & down_dots:
        series = Series.OVERLAP
    elif up_dots:
        series = Series.UPLOAD
    else:
        series = Series.DOWNLOAD
    return Cell(up_dots | down_dots, series, position)
