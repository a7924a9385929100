import re

from peaks.styling import GradientStyler

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
# one visible character plus the escape codes in front of it
CELL_RE = re.compile(r"(?:\x1b\[[0-9;]*m)*[^\x1b]")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def plain_rows(text: str) -> list[str]:
    return strip_ansi(text).split("\n")


def row_cells(row: str) -> list[str]:
    return CELL_RE.findall(row)


def column(text: str, x: int) -> list[str]:
    """Styled cell strings of column x, top to bottom."""
    return [row_cells(row)[x] for row in text.split("\n")]


def lit_count(text: str, x: int) -> int:
    return sum(1 for row in plain_rows(text) if row[x] != " ")


class RecordingStyler(GradientStyler):
    """GradientStyler that remembers the series of every styled cell."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def style(self, glyph, position, series):
        self.seen.append(series)
        return super().style(glyph, position, series)
