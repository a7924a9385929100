"""BrailleChart: rolling upload/download history rendered as braille text.

Pipeline per render:
    SampleBuffer → WindowAggregator (one window per column, reduced by max)
    → scale_value → split_cell/overlay_cell → GradientStyler
with a ColumnCache in front of the last three steps for complete windows.

The chart is single-threaded: a host calls add_data_point() then render()
on a fixed cadence and must serialize those calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial

from peaks.braille import BLANK, DOTS_PER_CELL, Cell, bar_height, overlay_cell, split_cell
from peaks.buffer import SampleBuffer
from peaks.cache import CachePolicy, ColumnCache
from peaks.compact import render_compact
from peaks.scaling import MIN_SCALE_VALUE, ScalingMode, clamp_max, scale_value
from peaks.styling import GradientStyler
from peaks.windows import ColumnLayout, TimeScale, Window, WindowAggregator

logger = logging.getLogger(__name__)

MIN_CHART_WIDTH = 10
MIN_CHART_HEIGHT = 8
DEFAULT_CHART_WIDTH = 80
DEFAULT_CHART_HEIGHT = 20


class DisplayMode(Enum):
    SPLIT = "split"       # download above the center line, upload below
    OVERLAY = "overlay"   # both grow from the bottom edge


@dataclass
class ChartConfig:
    width: int = DEFAULT_CHART_WIDTH
    height: int = DEFAULT_CHART_HEIGHT
    scaling_mode: ScalingMode = ScalingMode.LOGARITHMIC
    display_mode: DisplayMode = DisplayMode.SPLIT
    time_scale: TimeScale = TimeScale.MIN_1
    cache_policy: CachePolicy = CachePolicy.RESCALE


class BrailleChart:
    """Fixed width x height braille chart over a bounded sample history."""

    def __init__(self, max_points: int, config: ChartConfig | None = None):
        self.config = config if config is not None else ChartConfig()
        self.config.width = max(MIN_CHART_WIDTH, self.config.width)
        self.config.height = max(MIN_CHART_HEIGHT, self.config.height)

        self.buffer = SampleBuffer(max_points)
        self.aggregator = WindowAggregator(self.buffer, self.config.time_scale.window_size)
        self.styler = GradientStyler()
        self.cache = ColumnCache(self.config.cache_policy)
        self._max_value = MIN_SCALE_VALUE

    # ---- geometry ----

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def set_width(self, width: int) -> None:
        width = max(MIN_CHART_WIDTH, int(width))
        if width != self.config.width:
            self.config.width = width
            self.cache.invalidate("width")

    def set_height(self, height: int) -> None:
        height = max(MIN_CHART_HEIGHT, int(height))
        if height != self.config.height:
            self.config.height = height
            self.cache.invalidate("height")

    def set_max_points(self, max_points: int) -> None:
        """Change history capacity; shrinking drops the oldest samples."""
        before = len(self.buffer)
        self.buffer.set_capacity(max_points)
        if len(self.buffer) < before:
            self.aggregator.invalidate()
            self.cache.invalidate("history trimmed")
            self.update_max_value(self.aggregator.layout(self.config.width))

    # ---- display mode ----

    @property
    def display_mode(self) -> DisplayMode:
        return self.config.display_mode

    @property
    def is_overlay(self) -> bool:
        return self.config.display_mode is DisplayMode.OVERLAY

    def set_display_mode(self, mode: DisplayMode | str) -> None:
        mode = DisplayMode(mode)
        if mode is not self.config.display_mode:
            self.config.display_mode = mode
            self.cache.invalidate("display mode")
            logger.debug("display mode: %s", mode.value)

    def toggle_display_mode(self) -> DisplayMode:
        if self.is_overlay:
            self.set_display_mode(DisplayMode.SPLIT)
        else:
            self.set_display_mode(DisplayMode.OVERLAY)
        return self.config.display_mode

    # ---- scaling ----

    @property
    def scaling_mode(self) -> ScalingMode:
        return self.config.scaling_mode

    @property
    def scaling_mode_name(self) -> str:
        return self.config.scaling_mode.label

    def set_scaling_mode(self, mode: ScalingMode | str) -> None:
        mode = ScalingMode(mode)
        if mode is not self.config.scaling_mode:
            self.config.scaling_mode = mode
            self.cache.invalidate("scaling mode")
            logger.debug("scaling mode: %s", mode.label)

    def cycle_scaling_mode(self) -> ScalingMode:
        self.set_scaling_mode(self.config.scaling_mode.next())
        return self.config.scaling_mode

    # ---- time scale ----

    @property
    def time_scale(self) -> TimeScale:
        return self.config.time_scale

    @property
    def time_scale_name(self) -> str:
        return self.config.time_scale.label

    @property
    def time_scale_seconds(self) -> int:
        return self.config.time_scale.seconds

    def set_time_scale(self, scale: TimeScale | int) -> None:
        scale = TimeScale(scale)
        if scale is not self.config.time_scale:
            self.config.time_scale = scale
            self.aggregator.set_window_size(scale.window_size)
            self.cache.invalidate("time scale")
            logger.debug("time scale: %s (%d samples per column)",
                         scale.label, scale.window_size)

    def cycle_time_scale(self) -> TimeScale:
        self.set_time_scale(self.config.time_scale.next())
        return self.config.time_scale

    # ---- cache policy ----

    def set_cache_policy(self, policy: CachePolicy | str) -> None:
        policy = CachePolicy(policy)
        if policy is not self.config.cache_policy:
            self.config.cache_policy = policy
            self.cache.policy = policy
            self.cache.invalidate("cache policy")

    # ---- data ----

    def add_data_point(self, upload: int, download: int) -> None:
        self.buffer.append(upload, download)
        self.update_max_value(self.aggregator.layout(self.config.width))

    def reset(self) -> None:
        self.buffer.reset()
        self.aggregator.invalidate()
        self.cache.invalidate("reset")
        self._max_value = MIN_SCALE_VALUE

    def get_max_value(self) -> int:
        """Value that maps to full column height in the current view."""
        return self._max_value

    def get_data_length(self) -> int:
        return len(self.buffer)

    def __len__(self) -> int:
        return len(self.buffer)

    def update_max_value(self, layout: ColumnLayout) -> int:
        visible = self.aggregator.visible_max(layout)
        self._max_value = clamp_max(visible)
        return self._max_value

    # ---- rendering ----

    def render(self) -> str:
        """Newline-joined rows, `width` glyphs each, no trailing newline."""
        width, height = self.config.width, self.config.height
        if not len(self.buffer):
            return self._render_empty()

        layout = self.aggregator.layout(width)
        max_value = self.update_max_value(layout)
        # columns whose samples were partly evicted are redrawn every time
        self.cache.prune(max(layout.first_index, self.aggregator.first_retained_index()))

        blank = (BLANK,) * height
        columns = []
        for window in layout.columns:
            if window is None:
                columns.append(blank)
                continue
            columns.append(self.cache.get_or_render(
                window.index, self.aggregator.is_stable(window), max_value,
                partial(self.render_column, window, max_value),
            ))

        return "\n".join("".join(col[y] for col in columns) for y in range(height))

    def render_column(self, window: Window, max_value: int) -> list[str]:
        """Styled rows, top to bottom, for one window drawn against max_value."""
        cells = self.column_cells(window, max_value)
        return [
            BLANK if cell is None else self.styler.style(cell.glyph, cell.position, cell.series)
            for cell in cells
        ]

    def column_cells(self, window: Window, max_value: int) -> list[Cell | None]:
        upload, download = self.aggregator.aggregate(window)
        mode = self.config.scaling_mode
        up_scale = scale_value(upload, max_value, mode)
        down_scale = scale_value(download, max_value, mode)
        height = self.config.height

        if self.is_overlay:
            full = height * DOTS_PER_CELL
            up_h, down_h = bar_height(up_scale, full), bar_height(down_scale, full)
            return [overlay_cell(y, up_h, down_h, full) for y in range(height)]

        half = (height // 2) * DOTS_PER_CELL
        up_h, down_h = bar_height(up_scale, half), bar_height(down_scale, half)
        return [split_cell(y, up_h, down_h, half) for y in range(height)]

    def render_compact(self, terminal_width: int, lines: int = 2) -> str:
        """Low-resolution header strip; see peaks.compact."""
        return render_compact(self, terminal_width, lines)

    def _render_empty(self) -> str:
        row = BLANK * self.config.width
        return "\n".join([row] * self.config.height)
