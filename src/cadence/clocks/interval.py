"""
Realtime clock ticked from a background thread at a fixed interval.
"""

import logging
import threading

from ..clock import RealtimeClock

logger = logging.getLogger(__name__)


class IntervalClock(RealtimeClock):
    """Ticks every ``1 / rate`` seconds on a daemon thread.

    Listeners run on the clock's thread.
    """

    def __init__(self, rate: float = 60.0):
        super().__init__(rate)
        self._thread = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start ticking in a separate thread"""
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run_loop, name="cadence-interval-clock")
        self._thread.daemon = True
        self._thread.start()
        logger.info("Interval clock started at %.3f Hz", self.rate)

    def stop(self):
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)
            logger.info("Interval clock stopped")

    def _run_loop(self):
        next_tick = self.now() + self.tick_duration
        while not self._stop_event.wait(max(0.0, next_tick - self.now())):
            self.tick()
            next_tick += self.tick_duration
            # Fell behind by more than a tick; don't burst to catch up
            if next_tick < self.now():
                next_tick = self.now() + self.tick_duration
