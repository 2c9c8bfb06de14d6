"""
Clock implementations and a factory that builds them from config.
"""

from typing import Any, Dict

from ..clock import Clock, OfflineClock, RealtimeClock
from ..config import cfg_get
from ..errors import ConfigError
from .audio import AudioClock
from .interval import IntervalClock
from .worker import WorkerClock

CLOCK_TYPES = ("offline", "realtime", "interval", "worker", "frame", "audio")


def make_clock(cfg: Dict[str, Any]) -> Clock:
    """Build the clock described by the ``clock`` and ``audio`` sections."""
    clock_type = str(cfg_get(cfg, "clock.type", "offline")).lower()
    # "freq" is the older name for the tick rate
    rate = cfg_get(cfg, "clock.freq")
    if rate is None:
        rate = cfg_get(cfg, "clock.rate", 1.0)
    rate = float(rate)

    if clock_type == "offline":
        return OfflineClock(rate)
    if clock_type == "realtime":
        return RealtimeClock(rate)
    if clock_type == "interval":
        return IntervalClock(rate)
    if clock_type == "worker":
        return WorkerClock(rate)
    if clock_type == "frame":
        # pygame is only needed by the frame clock
        from .frame import FrameClock
        return FrameClock(rate)
    if clock_type == "audio":
        return AudioClock(
            sr=int(cfg_get(cfg, "audio.sr", 44100)),
            blocksize=int(cfg_get(cfg, "audio.blocksize", 512)),
            channels=int(cfg_get(cfg, "audio.channels", 1)),
            latency=cfg_get(cfg, "audio.latency", "high"),
        )

    raise ConfigError(f"Unknown clock type {clock_type!r}; expected one of {', '.join(CLOCK_TYPES)}")


__all__ = [
    "AudioClock",
    "Clock",
    "IntervalClock",
    "OfflineClock",
    "RealtimeClock",
    "WorkerClock",
    "CLOCK_TYPES",
    "make_clock",
]
