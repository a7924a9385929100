import logging

import pytest

import peaks
from peaks.__main__ import main
from peaks.cache import CachePolicy
from peaks.chart import BrailleChart, DisplayMode
from peaks.mock import MockSampler
from peaks.monitor import Monitor, configure_logging, parse_args
from peaks.sampler import BaseSampler, SamplerError
from peaks.scaling import ScalingMode
from peaks.windows import TimeScale

from helpers import strip_ansi


class BrokenSampler(BaseSampler):
    name = "broken"

    def setup(self, args):
        pass

    def sample(self):
        raise SamplerError("counters went away")


@pytest.fixture
def monitor():
    args, sampler_cls = parse_args(["--sampler", "mock", "--seed", "3",
                                    "--interval", "1", "--history-minutes", "1"])
    return Monitor(args, sampler_cls(args))


def test_parse_args_adds_sampler_flags():
    args, sampler_cls = parse_args(["--sampler", "demo", "--seed", "9", "--scale", "sqrt"])
    assert sampler_cls is MockSampler
    assert args.seed == 9
    assert args.scale == "sqrt"
    assert args.freeze_columns is False
    assert args.statusbar is True


def test_parse_args_unknown_sampler():
    args, sampler_cls = parse_args(["--sampler", "nope"])
    assert sampler_cls is None
    assert args.sampler == "nope"


def test_parse_args_rejects_unknown_time():
    with pytest.raises(SystemExit):
        parse_args(["--sampler", "mock", "--time", "7"])


def test_monitor_builds_chart_from_args():
    args, sampler_cls = parse_args([
        "--sampler", "mock", "--mode", "overlay", "--scale", "linear",
        "--time", "5", "--freeze-columns", "--interval", "0.5", "--history-minutes", "2",
    ])
    mon = Monitor(args, sampler_cls(args))
    assert mon.max_points == 240
    assert mon.chart.display_mode is DisplayMode.OVERLAY
    assert mon.chart.scaling_mode is ScalingMode.LINEAR
    assert mon.chart.time_scale is TimeScale.MIN_5
    assert mon.chart.cache.policy is CachePolicy.FREEZE


def test_tick_feeds_chart_and_stats(monitor):
    assert monitor.max_points == 60
    for _ in range(5):
        monitor.tick()
    assert len(monitor.chart) == 5
    assert monitor.stats.peak_download >= monitor.current_download


def test_failed_sample_is_skipped(monitor):
    monitor.sampler = BrokenSampler()
    monitor.tick()
    assert len(monitor.chart) == 0


def test_pause_stops_sampling(monitor):
    monitor.handle_key("p")
    monitor.tick()
    assert len(monitor.chart) == 0
    monitor.handle_key(" ")
    monitor.tick()
    assert len(monitor.chart) == 1


def test_keys_change_chart(monitor):
    monitor.tick()
    monitor.handle_key("m")
    assert monitor.chart.is_overlay
    monitor.handle_key("l")
    assert monitor.chart.scaling_mode is ScalingMode.SQUARE_ROOT
    monitor.handle_key("t")
    assert monitor.chart.time_scale is TimeScale.MIN_3
    monitor.handle_key("r")
    assert len(monitor.chart) == 0
    assert monitor.stats.peak_upload == 0


def test_statusbar_toggle(monitor):
    assert monitor.show_statusbar
    monitor.handle_key("s")
    assert not monitor.show_statusbar


@pytest.mark.parametrize("key", ["q", "Q", "\x1b", "\x03"])
def test_quit_keys(monitor, key):
    monitor.handle_key(key)
    assert not monitor.running


def test_unknown_key_is_ignored(monitor):
    monitor.handle_key("z")
    assert monitor.running
    assert not monitor.paused


def test_status_line_fits_width(monitor):
    monitor.tick()
    wide = strip_ansi(monitor.status_line(500))
    assert "Peak:" in wide
    assert "Scale: Logarithmic" in wide
    assert "Time: 1 min" in wide

    narrow = strip_ansi(monitor.status_line(40))
    assert len(narrow) <= 40
    assert "Peak:" not in narrow


def test_frame_layout(monitor):
    monitor.tick()
    lines = monitor.frame().split("\n")
    assert len(lines) == monitor.chart.height + 2
    assert "PEAKS" in strip_ansi(lines[-1])

    monitor.show_statusbar = False
    assert len(monitor.frame().split("\n")) == monitor.chart.height + 1


def test_main_lists_samplers(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--list"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    for name in ("proc", "psutil", "mock"):
        assert name in out


def test_main_rejects_unknown_sampler(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--sampler", "nope"])
    assert exc.value.code == 1
    assert "Unknown sampler" in capsys.readouterr().err


def test_version_flag(capsys):
    with pytest.raises(SystemExit):
        parse_args(["--version"])
    assert peaks.__version__ in capsys.readouterr().out


def test_log_file_receives_debug_events(tmp_path):
    path = tmp_path / "peaks.log"
    logger = logging.getLogger("peaks")
    configure_logging(str(path))
    try:
        BrailleChart(10).cycle_scaling_mode()
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
    assert "scaling mode: Square Root" in path.read_text()


def test_status_text_is_str(monitor):
    monitor.tick()
    assert isinstance(monitor.status_line(200), str)
    assert isinstance(monitor.help_line(200), str)
