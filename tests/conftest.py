import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from peaks.buffer import SampleBuffer
from peaks.chart import BrailleChart, ChartConfig, DisplayMode
from peaks.scaling import ScalingMode


@pytest.fixture
def make_chart():
    """Factory for small charts; linear scaling keeps bar heights easy to predict."""
    def _make(max_points=100, width=20, height=8, mode=DisplayMode.SPLIT,
              scaling=ScalingMode.LINEAR, **kwargs):
        config = ChartConfig(width=width, height=height, display_mode=mode,
                             scaling_mode=scaling, **kwargs)
        return BrailleChart(max_points, config)
    return _make


@pytest.fixture
def filled_buffer():
    def _fill(values, max_points=100):
        buf = SampleBuffer(max_points)
        for up, down in values:
            buf.append(up, down)
        return buf
    return _fill
