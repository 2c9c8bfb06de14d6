"""
Clock whose timer runs on a worker thread.

The worker only posts ``"tick"`` messages; the thread that owns the clock
relays them into ``tick()`` by calling ``dispatch_pending()`` or
``run_for()``. Listeners therefore always run on the owning thread.
"""

import logging
import threading
import time as _time
from queue import Empty, Queue
from typing import Optional

from ..clock import RealtimeClock

logger = logging.getLogger(__name__)

TICK = "tick"
STOP = "stop"


class WorkerClock(RealtimeClock):

    def __init__(self, rate: float = 60.0):
        super().__init__(rate)
        self.messages: Queue = Queue()
        self._commands: Queue = Queue()
        self._worker = None

    def start(self):
        if self._worker is not None:
            return

        self._worker = threading.Thread(
            target=self._worker_loop,
            args=(self.tick_duration,),
            name="cadence-worker-clock",
        )
        self._worker.daemon = True
        self._worker.start()
        logger.info("Worker clock started at %.3f Hz", self.rate)

    def stop(self):
        worker, self._worker = self._worker, None
        if worker is None:
            return

        self._commands.put(STOP)
        worker.join(timeout=1.0)
        logger.info("Worker clock stopped")

    def dispatch_pending(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """Relay queued tick messages into ``tick()``. Returns how many ran."""
        count = 0
        while True:
            try:
                msg = self.messages.get(block=block and count == 0, timeout=timeout)
            except Empty:
                break
            if msg == TICK:
                self.tick()
                count += 1
        return count

    def run_for(self, seconds: float) -> int:
        """Dispatch ticks on the calling thread for ``seconds``."""
        deadline = _time.perf_counter() + seconds
        count = 0
        while True:
            remaining = deadline - _time.perf_counter()
            if remaining <= 0:
                break
            count += self.dispatch_pending(block=True, timeout=remaining)
        return count

    def _worker_loop(self, interval: float):
        # Runs on the worker thread and talks to the owner only through the queues
        while True:
            try:
                cmd = self._commands.get(timeout=interval)
            except Empty:
                self.messages.put(TICK)
                continue
            if cmd == STOP:
                break
