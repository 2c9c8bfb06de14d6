"""
Scheduled event records.

An event is either a ``OnceEvent`` (fires a single time, then retires) or a
``RepeatEvent`` (fires, then re-arms itself ``interval`` seconds later until
its ``end_time`` has passed). Both share ``callback``, ``time`` (the offset
from the moment of scheduling) and ``priority`` (the absolute due time,
filled in by the scheduler).

Records compare by identity, so the same record can be cleared later.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Union

from .errors import InvalidEventSpecError


class EventKind(str, Enum):
    ONCE = "once"
    REPEAT = "repeat"


@dataclass(eq=False)
class ScheduledEvent:
    callback: Callable[[float], Any]
    time: Optional[float] = 0.0
    priority: Optional[float] = None
    id: Optional[str] = None

    kind: ClassVar[EventKind]

    def normalize(self, now: float):
        """Turn the relative offset into an absolute due time."""
        if self.time is None:
            self.time = 0.0
        self.priority = now + self.time


@dataclass(eq=False)
class OnceEvent(ScheduledEvent):
    kind: ClassVar[EventKind] = EventKind.ONCE


@dataclass(eq=False)
class RepeatEvent(ScheduledEvent):
    interval: Optional[float] = None
    end_time: Optional[float] = None
    # end_time as passed in, relative to the scheduling moment
    _relative_end: Optional[float] = field(default=None, init=False, repr=False)

    kind: ClassVar[EventKind] = EventKind.REPEAT

    def __post_init__(self):
        if self.interval is None:
            raise InvalidEventSpecError("RepeatEvent requires an interval")
        self._relative_end = self.end_time

    def normalize(self, now: float):
        # Stored absolute; recomputed from the relative end so rescheduling works
        self.end_time = math.inf if self._relative_end is None else self._relative_end + now
        super().normalize(now)

    def rearm(self, fired_at: float) -> bool:
        """Advance to the next occurrence. Returns False once past the end."""
        if self.end_time <= fired_at:
            return False
        self.priority = fired_at + self.interval
        return True


Event = Union[OnceEvent, RepeatEvent]

_ALIASES = {
    "freq": "interval",
    "end": "end_time",
    "endTime": "end_time",
}


def event_from_spec(spec: Dict[str, Any]) -> Event:
    """Build an event from a score dict such as
    ``{"type": "repeat", "time": 0, "interval": 0.5, "callback": fn}``.
    """
    fields = {}
    for key, value in spec.items():
        name = _ALIASES.get(key, key)
        if name in fields:
            raise InvalidEventSpecError(f"Event spec sets {name!r} more than once: {spec!r}")
        fields[name] = value
    kind = fields.pop("type", None)

    if not callable(fields.get("callback")):
        raise InvalidEventSpecError(f"Event spec has no callable callback: {spec!r}")

    try:
        kind = EventKind(kind)
    except ValueError:
        raise InvalidEventSpecError(f"Unknown event type {kind!r}") from None

    # Score specs may use Infinity for an unbounded repeat
    end_time = fields.get("end_time")
    if end_time is not None and math.isinf(end_time):
        fields["end_time"] = None

    try:
        if kind is EventKind.ONCE:
            return OnceEvent(
                callback=fields["callback"],
                time=fields.get("time", 0.0),
                id=fields.get("id"),
            )
        return RepeatEvent(
            callback=fields["callback"],
            time=fields.get("time", 0.0),
            interval=fields["interval"],
            end_time=fields.get("end_time"),
            id=fields.get("id"),
        )
    except KeyError as e:
        raise InvalidEventSpecError(f"Event spec is missing {e.args[0]!r}: {spec!r}") from None
