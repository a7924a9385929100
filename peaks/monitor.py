"""Monitor: the terminal shell around BrailleChart.

Handles: argparse, sampler selection, deadline-based tick loop, SIGWINCH
resize, ANSI cursor-home redraws with rate-limiting, single-key controls,
the status bar, and the compact header mode.
"""

from __future__ import annotations

import argparse
import logging
import math
import os
import select
import shutil
import signal
import sys
import termios
import time
import tty
from argparse import ArgumentParser, Namespace

import plotext as plt

import peaks
import peaks.mock
import peaks.net
from peaks.cache import CachePolicy
from peaks.chart import MIN_CHART_HEIGHT, BrailleChart, ChartConfig, DisplayMode
from peaks.sampler import BaseSampler, SamplerError
from peaks.scaling import ScalingMode
from peaks.stats import Stats
from peaks.styling import hex_to_rgb
from peaks.units import format_bytes, format_duration, format_rate
from peaks.windows import TimeScale

logger = logging.getLogger(__name__)

UPLOAD_COLOR = hex_to_rgb("#EF4444")
DOWNLOAD_COLOR = hex_to_rgb("#10B981")
MUTED_UPLOAD_COLOR = hex_to_rgb("#DC2626")
MUTED_DOWNLOAD_COLOR = hex_to_rgb("#059669")
INFO_COLOR = hex_to_rgb("#60A5FA")
HELP_COLOR = hex_to_rgb("#6B7280")

QUIT_KEYS = {"q", "Q", "\x1b", "\x03"}
SCALE_CHOICES = {"linear": ScalingMode.LINEAR, "log": ScalingMode.LOGARITHMIC,
                 "sqrt": ScalingMode.SQUARE_ROOT}


# ---- configuration ----

def default_sampler() -> str:
    if peaks.net.ProcNetSampler.is_available():
        return "proc"
    return "psutil"


def build_parser(sampler_cls: type[BaseSampler] | None = None) -> ArgumentParser:
    parser = ArgumentParser(
        prog="peaks",
        description="Live bandwidth monitor drawn with braille characters.",
        epilog="Keys: r reset, p/space pause, s statusbar, m mode, l scaling, t time, q quit.",
    )
    parser.add_argument("--sampler", default=default_sampler(),
                        help="Traffic source: proc, psutil or mock (default: %(default)s)")
    parser.add_argument("--list", action="store_true", dest="list_samplers",
                        help="List available samplers and exit")
    parser.add_argument("--interval", type=float, default=0.5,
                        help="Sample/redraw interval in seconds (default: 0.5)")
    parser.add_argument("--history-minutes", type=float, default=60.0,
                        help="Minutes of samples to keep (default: 60)")
    parser.add_argument("--mode", choices=[m.value for m in DisplayMode], default="split",
                        help="Chart layout (default: split)")
    parser.add_argument("--scale", choices=list(SCALE_CHOICES), default="log",
                        help="Value scaling (default: log)")
    parser.add_argument("--time", type=int, choices=[t.minutes for t in TimeScale], default=1,
                        help="Minutes of history across the chart width (default: 1)")
    parser.add_argument(
        "--freeze-columns",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Never redraw finished columns when the peak changes (default: off)",
    )
    parser.add_argument(
        "--statusbar",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Show the status bar (default: on)",
    )
    parser.add_argument("--compact", action="store_true",
                        help="Draw a small header strip at the top of the terminal instead")
    parser.add_argument("--size", type=int, default=2,
                        help="Compact header height in lines (default: 2)")
    parser.add_argument("--log-file", default=None,
                        help="Write debug logs to this file")
    parser.add_argument("--version", action="version", version=f"PEAKS {peaks.__version__}")
    if sampler_cls is not None:
        sampler_cls.add_args(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> tuple[Namespace, type[BaseSampler] | None]:
    """Two passes: find --sampler first so its own flags can be added."""
    pre = ArgumentParser(add_help=False)
    pre.add_argument("--sampler", default=default_sampler())
    known, _ = pre.parse_known_args(argv)
    sampler_cls = peaks.REGISTRY.get(peaks.resolve(known.sampler))
    args = build_parser(sampler_cls).parse_args(argv)
    return args, sampler_cls


def configure_logging(path: str | None) -> None:
    """Log to a file when asked; never to the terminal being drawn on."""
    root = logging.getLogger("peaks")
    if path:
        handler = logging.FileHandler(path)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
    else:
        root.addHandler(logging.NullHandler())


def list_samplers() -> None:
    for name, cls in sorted(peaks.REGISTRY.items()):
        aliases = [a for a, canon in peaks.ALIASES.items() if canon == name]
        alias_str = f"  (aka {', '.join(aliases)})" if aliases else ""
        avail = "✓" if cls.is_available() else "✗"
        print(f"  {avail}  {name:8s}  {cls.description}{alias_str}")


# ---- monitor ----

class Monitor:
    """Owns the chart, the sampler and the terminal.

    Lifecycle:
        1. __init__() builds the chart from args and starts the sampler
        2. run() / run_compact() enter the blocking main loop
        3. tick() samples once per interval
        4. the sampler's cleanup() and terminal restore run on exit
    """

    def __init__(self, args: Namespace, sampler: BaseSampler):
        self.args = args
        self.sampler = sampler
        self.interval_s = max(0.1, args.interval)
        self.max_points = max(1, math.ceil(args.history_minutes * 60 / self.interval_s))

        config = ChartConfig(
            scaling_mode=SCALE_CHOICES[args.scale],
            display_mode=DisplayMode(args.mode),
            time_scale=TimeScale.from_minutes(args.time),
            cache_policy=CachePolicy.FREEZE if args.freeze_columns else CachePolicy.RESCALE,
        )
        self.chart = BrailleChart(self.max_points, config)
        self.stats = Stats(interval_s=self.interval_s)

        self.paused = False
        self.running = True
        self.show_statusbar = args.statusbar
        self.current_upload = 0
        self.current_download = 0
        self._last_draw = 0.0
        self._term_size = (80, 24)

    # ---- sampling ----

    def tick(self) -> None:
        if self.paused:
            return
        try:
            upload, download = self.sampler.sample()
        except SamplerError as e:
            logger.warning("skipping sample: %s", e)
            return
        self.current_upload, self.current_download = upload, download
        self.chart.add_data_point(upload, download)
        self.stats.update(upload, download)

    # ---- controls ----

    def handle_key(self, key: str) -> None:
        if key in QUIT_KEYS:
            self.running = False
        elif key in ("p", " "):
            self.paused = not self.paused
        elif key == "r":
            self.chart.reset()
            self.stats.reset()
        elif key == "s":
            self.show_statusbar = not self.show_statusbar
            self.resize()
        elif key == "m":
            self.chart.toggle_display_mode()
        elif key == "l":
            self.chart.cycle_scaling_mode()
        elif key == "t":
            self.chart.cycle_time_scale()
        else:
            return
        logger.debug("key %r handled", key)

    def resize(self) -> None:
        cols, rows = shutil.get_terminal_size()
        self._term_size = (cols, rows)
        reserved = 1 + (1 if self.show_statusbar else 0)   # help line + status bar
        self.chart.set_width(cols)
        self.chart.set_height(max(MIN_CHART_HEIGHT, rows - reserved))

    # ---- text around the chart ----

    def status_segments(self) -> list[tuple[str, str]]:
        """(plain, colored) pieces of the status bar, most important first."""
        s = self.stats
        down = plt.colorize("↓", DOWNLOAD_COLOR)
        up = plt.colorize("↑", UPLOAD_COLOR)

        def pair(label: str, d: str, u: str, width: int, d_color, u_color) -> tuple[str, str]:
            plain = f"{label}↓{d:>{width}} ↑{u:>{width}}"
            colored = (f"{label}{down}{plt.colorize(f'{d:>{width}}', d_color)} "
                       f"{up}{plt.colorize(f'{u:>{width}}', u_color)}")
            return plain, colored

        segments = [
            pair("", format_rate(self.current_download), format_rate(self.current_upload),
                 11, DOWNLOAD_COLOR, UPLOAD_COLOR),
            pair("Peak: ", format_rate(s.peak_download), format_rate(s.peak_upload),
                 10, MUTED_DOWNLOAD_COLOR, MUTED_UPLOAD_COLOR),
            pair("Total: ", format_bytes(s.total_download), format_bytes(s.total_upload),
                 9, MUTED_DOWNLOAD_COLOR, MUTED_UPLOAD_COLOR),
        ]
        info = (f"Up: {format_duration(s.uptime)} | Mode: {self.chart.display_mode.value} | "
                f"Scale: {self.chart.scaling_mode_name} | Time: {self.chart.time_scale_name}")
        segments.append((info, plt.colorize(info, INFO_COLOR)))
        return segments

    def status_line(self, width: int) -> str:
        plain_len = 0
        parts = []
        for plain, colored in self.status_segments():
            extra = len(plain) + (3 if parts else 0)
            if plain_len + extra > width:
                break
            parts.append(colored)
            plain_len += extra
        return " | ".join(parts)

    def help_line(self, width: int) -> str:
        title = f"  PEAKS {peaks.__version__}"
        source = self.sampler.label()
        if source:
            title += f" ({source})"
        pause = "resume" if self.paused else "pause"
        controls = f"r: reset • p: {pause} • s: statusbar • m: mode • l: scaling • t: time • q: quit"

        colored_title = plt.colorize(title, INFO_COLOR, "bold")
        if len(title) + len(controls) < width:
            spacing = " " * (width - len(title) - len(controls))
            return colored_title + spacing + plt.colorize(controls, HELP_COLOR)
        return colored_title

    def frame(self) -> str:
        width = self._term_size[0]
        parts = [self.chart.render()]
        if self.show_statusbar:
            parts.append(self.status_line(width))
        parts.append(self.help_line(width))
        return "\n".join(parts)

    def _draw(self, force: bool = False) -> None:
        now = time.monotonic()
        if not force and now - self._last_draw < 0.05:
            return
        self._last_draw = now
        sys.stdout.write("\033[H" + self.frame() + "\033[J")
        sys.stdout.flush()

    # ---- input ----

    def _wait_for_keys(self, deadline: float) -> None:
        """Sleep until deadline, handling keypresses as they arrive."""
        interactive = sys.stdin.isatty()
        while self.running:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return
            if not interactive:
                time.sleep(remaining)
                return
            ready, _, _ = select.select([sys.stdin], [], [], remaining)
            if not ready:
                return
            chunk = os.read(sys.stdin.fileno(), 32).decode(errors="ignore")
            if chunk.startswith("\x1b") and len(chunk) > 1:
                continue   # arrow/function key sequence, not a bare Esc
            for key in chunk:
                self.handle_key(key)
            self._draw(force=True)

    # ---- main loops ----

    def run(self) -> None:
        """Blocking full-screen loop. q or Ctrl+C to exit."""
        fd = sys.stdin.fileno() if sys.stdin.isatty() else None
        old_settings = termios.tcgetattr(fd) if fd is not None else None
        if fd is not None:
            tty.setcbreak(fd)
        sys.stdout.write("\033[?25l\033[2J")  # hide cursor, clear
        sys.stdout.flush()

        def on_resize(signum, frame):
            self.resize()
            self._draw(force=True)

        signal.signal(signal.SIGWINCH, on_resize)
        self.resize()
        logger.info("monitor started: sampler=%s interval=%.2fs max_points=%d",
                    self.sampler.name, self.interval_s, self.max_points)

        next_tick = time.monotonic()
        try:
            while self.running:
                next_tick += self.interval_s
                self.tick()
                self._draw()
                self._wait_for_keys(next_tick)
        except KeyboardInterrupt:
            pass
        finally:
            self.sampler.cleanup()
            if old_settings is not None:
                termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
            sys.stdout.write("\033[?25h\n")  # show cursor
            sys.stdout.flush()
            logger.info("monitor stopped")

    def run_compact(self) -> None:
        """Redraw a header strip in the top lines while the shell scrolls below it."""
        size = max(2, self.args.size)
        cols, rows = shutil.get_terminal_size()

        # reserve the header and confine scrolling to the rest of the screen
        sys.stdout.write("\033[2J\033[H" + "\n" * size)
        sys.stdout.write(f"\033[{size + 1};{rows}r\033[{size + 1};1H")
        sys.stdout.flush()
        logger.info("compact header started: %d lines", size)

        next_tick = time.monotonic()
        try:
            while self.running:
                next_tick += self.interval_s
                self.tick()
                cols, rows = shutil.get_terminal_size()
                lines = self.chart.render_compact(cols, size).split("\n")

                out = ["\0337"]   # save cursor
                for i, line in enumerate(lines[:size]):
                    out.append(f"\033[{i + 1};1H\033[2K{line}")
                out.append("\0338")   # restore cursor
                sys.stdout.write("".join(out))
                sys.stdout.flush()

                time.sleep(max(0, next_tick - time.monotonic()))
        except KeyboardInterrupt:
            pass
        finally:
            self.sampler.cleanup()
            out = [f"\033[1;{rows}r"]
            for i in range(size):
                out.append(f"\033[{i + 1};1H\033[2K")
            sys.stdout.write("".join(out) + "\033[H")
            sys.stdout.flush()
            logger.info("compact header stopped")
