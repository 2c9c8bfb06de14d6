"""
Scheduler that fires timed callbacks against a clock.

Events are kept in a priority queue keyed by their absolute due time. On
every clock tick the scheduler drains all events due within the tick's
window, calling them in due-time order, and re-arms repeating events.
"""

import logging
import threading
from typing import Any, Callable, List, Optional

from .clock import Clock
from .events import Event, OnceEvent, RepeatEvent, event_from_spec
from .priority_queue import PriorityQueue

logger = logging.getLogger(__name__)


class Scheduler:
    """
    Schedules callbacks on a single clock.

    ``window`` is how far past the tick time an event may be due and still
    fire during that tick. It defaults to the clock's tick duration, so each
    tick covers the span until the next one.
    """

    def __init__(self, clock: Clock, window: Optional[float] = None):
        self.clock = clock
        self.window = window
        self.queue = PriorityQueue()
        self._lock = threading.RLock()
        # Repeats re-armed inside the window of the tick in progress
        self._held: List[RepeatEvent] = []
        self.clock.add_listener(self._on_clock_tick)

    def detach(self):
        """Stop listening to the clock."""
        self.clock.remove_listener(self._on_clock_tick)

    def _on_clock_tick(self, time: float, rate: float):
        window = self.clock.tick_duration if self.window is None else self.window
        self.tick(time, window)

    def tick(self, time: float, window: float = 0.0):
        """Fire every event due at or before ``time + window``.

        Callbacks receive ``time``, even when their nominal due time lies
        later in the window. Repeats are re-armed from ``time``.
        """
        max_time = time + window

        with self._lock:
            outer_held, self._held = self._held, []
            try:
                while True:
                    next_event = self.queue.peek()
                    # Also covers events overdue from earlier ticks
                    if next_event is None or next_event.priority > max_time:
                        break

                    self.queue.pop()
                    logger.debug(
                        "Firing %s event %s (due %.6f) at %.6f",
                        next_event.kind.value, next_event.id or hex(id(next_event)),
                        next_event.priority, time,
                    )
                    next_event.callback(time)

                    if (
                        isinstance(next_event, RepeatEvent)
                        # its callback may already have rescheduled it
                        and next_event not in self.queue
                        and next_event.rearm(time)
                    ):
                        if next_event.priority <= max_time:
                            # Interval fits inside the window; fire it next tick
                            self._held.append(next_event)
                        else:
                            self.queue.push(next_event)
            finally:
                for event in self._held:
                    self.queue.push(event)
                self._held = outer_held

    def schedule(self, event_spec):
        """Schedule one event, or a list of them.

        Accepts ``OnceEvent``/``RepeatEvent`` records or score dicts. Returns
        the scheduled record(s) so they can be cleared later.
        """
        if isinstance(event_spec, (list, tuple)):
            return [self._schedule_event(spec) for spec in event_spec]

        return self._schedule_event(event_spec)

    def _schedule_event(self, event_spec) -> Event:
        event = event_from_spec(event_spec) if isinstance(event_spec, dict) else event_spec

        with self._lock:
            # Rescheduling a pending record moves it instead of duplicating it
            self.queue.remove(event)
            if event in self._held:
                self._held.remove(event)
            event.normalize(self.clock.time)
            self.queue.push(event)

        logger.debug(
            "Scheduled %s event %s for %.6f",
            event.kind.value, event.id or hex(id(event)), event.priority,
        )
        return event

    def once(self, time: float, callback: Callable[[float], Any]) -> OnceEvent:
        """Fire ``callback`` once, ``time`` seconds from now."""
        return self._schedule_event(OnceEvent(callback=callback, time=time))

    def repeat(
        self,
        interval: float,
        callback: Callable[[float], Any],
        time: float = 0.0,
        end_time: Optional[float] = None,
    ) -> RepeatEvent:
        """Fire ``callback`` every ``interval`` seconds, starting now.

        ``end_time`` (relative to now) bounds the repetition; by default it
        repeats until cleared.
        """
        return self._schedule_event(
            RepeatEvent(callback=callback, time=time, interval=interval, end_time=end_time)
        )

    def clear(self, event: Event):
        """Stop a scheduled event from firing. Unknown events are ignored."""
        with self._lock:
            self.queue.remove(event)
            if event in self._held:
                self._held.remove(event)

    def clear_all(self):
        with self._lock:
            self.queue.clear()
            self._held.clear()

    def __len__(self):
        return len(self.queue)
