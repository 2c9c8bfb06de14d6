"""
Clocks drive schedulers.

A clock keeps a current time (in seconds), runs at a nominal rate (ticks
per second) and notifies its listeners once per tick with
``listener(time, rate)``. How ticks are produced is up to each clock:
manually, from a thread, from a frame loop or from an audio callback.
"""

import time as _time
from typing import Callable, List

TickListener = Callable[[float, float], None]


def calc_tick_duration(rate: float) -> float:
    return 1.0 / rate


class Clock:
    """Base class for all clocks."""

    def __init__(self, rate: float = 1.0):
        if rate <= 0:
            raise ValueError(f"Clock rate must be positive, got {rate}")

        self.time = 0.0
        # Nominal rate in Hz and the duration between ticks in seconds.
        # Neither is guaranteed to be precise for realtime clocks.
        self.rate = float(rate)
        self.tick_duration = calc_tick_duration(self.rate)
        self._listeners: List[TickListener] = []

    def add_listener(self, listener: TickListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: TickListener):
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def start(self):
        pass

    def stop(self):
        pass

    def tick(self):
        pass

    def _fire_tick(self):
        for listener in list(self._listeners):
            listener(self.time, self.rate)


class OfflineClock(Clock):
    """
    Tracks time relatively, without reference to a real source of time.

    Drive it manually by calling ``tick()``, e.g. from an offline frame or
    audio renderer.
    """

    def tick(self):
        self.time = self.round(self.time + self.tick_duration)
        self._fire_tick()

    @staticmethod
    def round(t: float) -> float:
        # Repeated float addition drifts; 14 decimal places absorbs it
        return round(t, 14)


class RealtimeClock(Clock):
    """Tracks time from the system's high-resolution performance counter."""

    def __init__(self, rate: float = 1.0):
        super().__init__(rate)
        self._origin = _time.perf_counter()
        self.time = self.now()

    def now(self) -> float:
        """Seconds since this clock was created."""
        return _time.perf_counter() - self._origin

    def tick(self):
        self.time = self.now()
        self._fire_tick()
