"""
Logs the interval between clock ticks.

Intervals are written into a preallocated float32 array so the realtime
behaviour of a clock can be analysed afterwards (e.g. to tell whether it is
dropping frames) without allocating on every tick.
"""

from typing import Dict, Optional

import numpy as np

from .clock import Clock

DEFAULT_NUM_TICKS_TO_LOG = 60 * 60 * 20  # Twenty minutes at 60 fps


class IntervalLogger:

    def __init__(self, clock: Clock, num_ticks_to_log: int = DEFAULT_NUM_TICKS_TO_LOG):
        self.clock = clock
        self.num_ticks_to_log = int(num_ticks_to_log)
        self.interval_log = np.zeros(self.num_ticks_to_log, dtype=np.float32)
        self.tick_counter = 0
        self.last_tick_time: Optional[float] = None
        self.interval = 0.0
        self.clock.add_listener(self.log)

    def detach(self):
        self.clock.remove_listener(self.log)

    def log(self, time: float, rate: float):
        if self.last_tick_time is None:
            self.last_tick_time = time
            return

        self.interval = time - self.last_tick_time
        self.last_tick_time = time

        if self.tick_counter < self.num_ticks_to_log:
            self.interval_log[self.tick_counter] = self.interval
        self.tick_counter += 1

    @property
    def intervals(self) -> np.ndarray:
        """The recorded part of the log."""
        return self.interval_log[:min(self.tick_counter, self.num_ticks_to_log)]

    def stats(self) -> Dict[str, float]:
        logged = self.intervals
        if logged.size == 0:
            return {"count": 0, "mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0, "jitter": 0.0}

        lo, hi = float(np.min(logged)), float(np.max(logged))
        return {
            "count": int(logged.size),
            "mean": float(np.mean(logged)),
            "std": float(np.std(logged)),
            "min": lo,
            "max": hi,
            "jitter": hi - lo,
        }
