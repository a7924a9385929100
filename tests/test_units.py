import time

from peaks.stats import Stats
from peaks.units import SIZE_UNITS, format_bytes, format_duration, format_rate, pick_unit


def test_pick_unit():
    assert pick_unit(0) == ("B/s", 1)
    assert pick_unit(2048) == ("KB/s", 1024)
    assert pick_unit(3 * 1024**3) == ("GB/s", 1024**3)
    assert pick_unit(5 * 1024**2, SIZE_UNITS) == ("MB", 1024**2)


def test_format_rate():
    assert format_rate(0) == "0 B/s"
    assert format_rate(512) == "512 B/s"
    assert format_rate(1536) == "1.50 KB/s"
    assert format_rate(1.25 * 1024**2) == "1.25 MB/s"


def test_format_bytes():
    assert format_bytes(512) == "512 B"
    assert format_bytes(10 * 1024**3) == "10.00 GB"


def test_format_duration():
    assert format_duration(0) == "0s"
    assert format_duration(42.9) == "42s"
    assert format_duration(187) == "3m7s"
    assert format_duration(7500) == "2h5m"


def test_stats_totals_and_peaks():
    stats = Stats(interval_s=0.5)
    stats.update(1000, 2000)
    stats.update(3000, 500)
    assert stats.total_upload == 2000
    assert stats.total_download == 1250
    assert stats.peak_upload == 3000
    assert stats.peak_download == 2000


def test_stats_reset():
    stats = Stats(interval_s=1.0, start_time=time.monotonic() - 100)
    stats.update(10, 10)
    assert stats.uptime >= 100
    stats.reset()
    assert stats.total_upload == stats.peak_download == 0
    assert stats.uptime < 100
