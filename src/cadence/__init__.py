"""
cadence: clock-driven callback scheduling for animation, audio and
sequencing.
"""

from .clock import Clock, OfflineClock, RealtimeClock
from .errors import CadenceError, ConfigError, InvalidEventSpecError, MissingPriorityError
from .events import EventKind, OnceEvent, RepeatEvent, event_from_spec
from .interval_logger import IntervalLogger
from .priority_queue import PriorityQueue
from .scheduler import Scheduler

__version__ = "0.1.0"

__all__ = [
    "CadenceError",
    "Clock",
    "ConfigError",
    "EventKind",
    "IntervalLogger",
    "InvalidEventSpecError",
    "MissingPriorityError",
    "OfflineClock",
    "OnceEvent",
    "PriorityQueue",
    "RealtimeClock",
    "RepeatEvent",
    "Scheduler",
    "event_from_spec",
]
