"""Value scaling: boundaries, monotonicity and the logarithmic floor."""

import pytest

from peaks.scaling import MIN_SCALE_VALUE, ScalingMode, scale_value


@pytest.mark.parametrize("mode", list(ScalingMode))
def test_zero_maps_to_zero(mode):
    assert scale_value(0, 10 * 1024, mode) == 0.0


@pytest.mark.parametrize("mode", list(ScalingMode))
def test_value_at_max_is_full_height(mode):
    assert scale_value(50_000, 50_000, mode) == pytest.approx(1.0)


@pytest.mark.parametrize("mode", list(ScalingMode))
def test_values_above_max_saturate(mode):
    assert scale_value(10 * 1024 * 1024, 4096, mode) == 1.0


@pytest.mark.parametrize("mode", list(ScalingMode))
def test_scaling_is_monotonic(mode):
    values = [0, 1, 512, 1024, 2000, 4096, 30_000, 250_000, 1_000_000]
    scaled = [scale_value(v, 1_000_000, mode) for v in values]
    assert scaled == sorted(scaled)
    assert all(0.0 <= s <= 1.0 for s in scaled)


@pytest.mark.parametrize("mode", list(ScalingMode))
def test_zero_max_uses_floor(mode):
    # must not divide by zero
    result = scale_value(512, 0, mode)
    assert 0.0 <= result <= 1.0


def test_linear_and_sqrt():
    assert scale_value(512, 1024, ScalingMode.LINEAR) == pytest.approx(0.5)
    assert scale_value(256, 1024, ScalingMode.SQUARE_ROOT) == pytest.approx(0.5)
    assert scale_value(512, 0, ScalingMode.LINEAR) == pytest.approx(0.5)


def test_log_midpoint():
    # 2**15 sits halfway between 2**10 and 2**20 on a log axis
    assert scale_value(2**15, 2**20, ScalingMode.LOGARITHMIC) == pytest.approx(0.5)


def test_log_values_below_floor_clamp_to_bottom():
    assert scale_value(100, 2**20, ScalingMode.LOGARITHMIC) == 0.0
    assert scale_value(MIN_SCALE_VALUE, 2**20, ScalingMode.LOGARITHMIC) == 0.0


def test_log_with_max_on_floor():
    assert scale_value(MIN_SCALE_VALUE, MIN_SCALE_VALUE, ScalingMode.LOGARITHMIC) == 1.0
    assert scale_value(4096, MIN_SCALE_VALUE, ScalingMode.LOGARITHMIC) == 1.0
    assert scale_value(500, MIN_SCALE_VALUE, ScalingMode.LOGARITHMIC) == 0.0


def test_mode_cycle_and_labels():
    assert ScalingMode.LINEAR.next() is ScalingMode.LOGARITHMIC
    assert ScalingMode.LOGARITHMIC.next() is ScalingMode.SQUARE_ROOT
    assert ScalingMode.SQUARE_ROOT.next() is ScalingMode.LINEAR
    assert [m.label for m in ScalingMode] == ["Linear", "Logarithmic", "Square Root"]
