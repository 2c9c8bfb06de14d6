"""
Command line demo: plays a drum-beat score on any of the clocks and logs
every hit, then prints how regular the clock's ticks were.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .clock import Clock, OfflineClock, RealtimeClock
from .clocks import CLOCK_TYPES, WorkerClock, make_clock
from .config import cfg_get, load_config, write_default_config
from .interval_logger import IntervalLogger
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ---------------- Configuration via Arguments ----------------
def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(description="cadence drum-beat demo")

    parser.add_argument("--config", default=None, help="YAML config file (written with defaults if missing)")
    parser.add_argument("--write-config", metavar="PATH", default=None,
                        help="Write the default config to PATH and exit")

    parser.add_argument("--clock", choices=CLOCK_TYPES, default=None, help="Clock driving the scheduler")
    parser.add_argument("--rate", type=float, default=None, help="Clock rate in ticks per second")
    parser.add_argument("--window", type=float, default=None,
                        help="Scheduler window in seconds (default: the clock's tick duration)")

    parser.add_argument("--bpm", type=float, default=None, help="Tempo in BPM")
    parser.add_argument("--ticks", type=int, default=None, help="Ticks to run on the offline clock")
    parser.add_argument("--duration", type=float, default=None, help="Seconds to run realtime clocks for")

    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")

    return parser.parse_args(argv)


def setup_logging(level="INFO"):
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def apply_overrides(cfg: Dict[str, Any], args) -> Dict[str, Any]:
    overrides = {
        "clock.type": args.clock,
        "clock.rate": args.rate,
        "scheduler.window": args.window,
        "demo.bpm": args.bpm,
        "demo.ticks": args.ticks,
        "demo.duration": args.duration,
        "logging.level": args.log_level,
    }
    for path, value in overrides.items():
        if value is None:
            continue
        section, key = path.split(".")
        cfg.setdefault(section, {})[key] = value
        if path == "clock.rate":
            cfg["clock"].pop("freq", None)
    return cfg


# ---------------- Score ----------------
def drum_beat_score(bpm: float, on_hit: Callable[[str, float], None]) -> List[Dict[str, Any]]:
    """Kick and snare on alternating beats, hihat on eighth notes and a
    single splash just after the second beat.
    """
    beat = 60.0 / bpm

    def hit(name):
        return lambda t: on_hit(name, t)

    return [
        {"id": "kick", "type": "repeat", "time": 0, "interval": 2 * beat, "callback": hit("kick")},
        {"id": "snare", "type": "repeat", "time": beat, "interval": 2 * beat, "callback": hit("snare")},
        {"id": "hihat", "type": "repeat", "time": 0, "interval": beat / 2, "callback": hit("hihat")},
        {"id": "splash", "type": "once", "time": 2.25 * beat, "callback": hit("splash")},
    ]


# ---------------- Driving the clock ----------------
def drive_clock(clock: Clock, ticks: int, duration: float):
    if type(clock) is OfflineClock:
        for _ in range(ticks):
            clock.tick()
        return

    if type(clock) is RealtimeClock:
        deadline = time.perf_counter() + duration
        while time.perf_counter() < deadline:
            clock.tick()
            time.sleep(clock.tick_duration)
        return

    clock.start()
    try:
        if isinstance(clock, WorkerClock):
            clock.run_for(duration)
        elif hasattr(clock, "run"):
            clock.run(max_frames=int(round(duration * clock.rate)))
        else:
            # Interval and audio clocks tick on their own threads
            time.sleep(duration)
    finally:
        clock.stop()


def run(cfg: Dict[str, Any]) -> Tuple[List[Tuple[str, float]], Optional[IntervalLogger]]:
    clock = make_clock(cfg)
    scheduler = Scheduler(clock, window=cfg_get(cfg, "scheduler.window"))

    interval_logger = None
    if cfg_get(cfg, "interval_logger.enabled", True):
        interval_logger = IntervalLogger(clock, int(cfg_get(cfg, "interval_logger.num_ticks", 72000)))

    hits: List[Tuple[str, float]] = []

    def on_hit(name: str, t: float):
        hits.append((name, t))
        logger.info("%-6s @ %.3fs", name, t)

    bpm = float(cfg_get(cfg, "demo.bpm", 60.0))
    scheduler.schedule(drum_beat_score(bpm, on_hit))

    logger.info("Playing drum beat at %.1f BPM on %s (%.3f Hz)", bpm, type(clock).__name__, clock.rate)
    drive_clock(
        clock,
        ticks=int(cfg_get(cfg, "demo.ticks", 30)),
        duration=float(cfg_get(cfg, "demo.duration", 5.0)),
    )
    scheduler.clear_all()
    scheduler.detach()
    return hits, interval_logger


# ---------------- Main entry --------------------
def main(argv=None) -> int:
    args = parse_arguments(argv)

    if args.write_config:
        path = write_default_config(args.write_config)
        print(f"Wrote default config to: {path.resolve()}")
        return 0

    if args.config is not None and not Path(args.config).exists():
        path = write_default_config(args.config)
        print(f"Wrote default config to: {path.resolve()}")
        print("Edit it if needed, then run again.")
        return 0

    cfg = apply_overrides(load_config(args.config), args)
    setup_logging(cfg_get(cfg, "logging.level", "INFO"))

    try:
        hits, interval_logger = run(cfg)
    except KeyboardInterrupt:
        print("\nStopped by user.")
        return 130

    print(f"\n{len(hits)} hits")
    if interval_logger is not None:
        stats = interval_logger.stats()
        print(
            f"Tick intervals: n={stats['count']} mean={stats['mean'] * 1000:.3f}ms "
            f"std={stats['std'] * 1000:.3f}ms jitter={stats['jitter'] * 1000:.3f}ms"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
