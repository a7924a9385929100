import pytest

from peaks.braille import (BRAILLE_BASE, DOT_PATTERNS, Cell, bar_height, overlay_cell,
                           split_cell)
from peaks.styling import Series

HALF = 16   # height 8: four rows above the axis, four below
FULL = 32


def test_bar_height_clamps():
    assert bar_height(0.0, 16) == 0
    assert bar_height(0.5, 16) == 8
    assert bar_height(1.0, 16) == 16
    assert bar_height(1.7, 16) == 16


def test_blank_when_nothing_lit():
    assert split_cell(0, 0, 0, HALF) is None
    assert overlay_cell(7, 0, 0, FULL) is None
    # download only reaches the row next to the axis
    assert split_cell(0, 0, 4, HALF) is None


def test_split_full_download_top_row():
    cell = split_cell(0, 0, HALF, HALF)
    assert cell.glyph == "⣿"
    assert cell.series is Series.DOWNLOAD
    assert cell.position == pytest.approx(12 / 15)


def test_split_single_upload_dot_hangs_from_axis():
    cell = split_cell(4, 1, 0, HALF)
    assert cell.dots == DOT_PATTERNS[0]
    assert cell.glyph == chr(BRAILLE_BASE + 0x09)
    assert cell.series is Series.UPLOAD
    assert cell.position == 0.0


def test_split_download_partial_cell_fills_from_bottom():
    cell = split_cell(3, 0, 2, HALF)
    assert cell.dots == DOT_PATTERNS[2] | DOT_PATTERNS[3]
    assert cell.series is Series.DOWNLOAD


def test_split_upload_never_above_axis():
    for row in range(4):
        assert split_cell(row, HALF, 0, HALF) is None


def test_split_shading_depends_on_row_only():
    tall = split_cell(5, 16, 0, HALF)
    short = split_cell(5, 8, 0, HALF)
    assert tall == short


def test_overlay_single_dot_both_series():
    cell = overlay_cell(7, 1, 1, FULL)
    assert cell.dots == DOT_PATTERNS[3]
    assert cell.glyph == "⣀"
    assert cell.series is Series.OVERLAP
    assert 0.0 <= cell.position < 0.1


def test_overlay_upload_above_download_is_upload_colored():
    # upload covers 8 dot rows, download 2
    assert overlay_cell(6, 8, 2, FULL).series is Series.UPLOAD
    assert overlay_cell(7, 8, 2, FULL).series is Series.OVERLAP
    assert overlay_cell(5, 8, 2, FULL) is None


def test_overlay_download_only():
    cell = overlay_cell(7, 0, 4, FULL)
    assert cell.series is Series.DOWNLOAD
    assert cell.glyph == "⣿"


def test_overlay_position_rises_with_row():
    positions = [overlay_cell(y, FULL, 0, FULL).position for y in range(8)]
    assert positions == sorted(positions, reverse=True)
    assert all(0.0 <= p <= 1.0 for p in positions)


def test_cell_glyph_in_braille_block():
    cell = Cell(0xFF, Series.UPLOAD, 0.0)
    assert 0x2800 <= ord(cell.glyph) <= 0x28FF
