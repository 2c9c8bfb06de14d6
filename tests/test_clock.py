import threading
import time

import pytest

from cadence import Clock, OfflineClock, RealtimeClock
from cadence.clocks import IntervalClock, WorkerClock
from cadence.clocks.worker import TICK


class TickRecorder:
    def __init__(self):
        self.ticks = []
        self.threads = []
        self.event = threading.Event()

    def __call__(self, time, rate):
        self.ticks.append((time, rate))
        self.threads.append(threading.current_thread())
        if len(self.ticks) >= 3:
            self.event.set()


def test_base_clock_defaults():
    clock = Clock()
    assert clock.time == 0
    assert clock.rate == 1.0
    assert clock.tick_duration == 1.0
    clock.start()
    clock.tick()
    clock.stop()
    assert clock.time == 0


@pytest.mark.parametrize("rate", [0, -1])
def test_rate_must_be_positive(rate):
    with pytest.raises(ValueError):
        Clock(rate)


def test_tick_duration_from_rate():
    assert OfflineClock(rate=4).tick_duration == 0.25
    assert OfflineClock(rate=0.1).tick_duration == 10.0


def test_offline_clock_advances_by_tick_duration():
    clock = OfflineClock(rate=10)
    recorder = TickRecorder()
    clock.add_listener(recorder)

    for _ in range(3):
        clock.tick()

    # Rounding keeps repeated 0.1 increments from drifting
    assert clock.time == 0.3
    assert recorder.ticks == [(0.1, 10.0), (0.2, 10.0), (0.3, 10.0)]


def test_offline_clock_many_ticks_stay_exact():
    clock = OfflineClock(rate=10)
    for _ in range(1000):
        clock.tick()
    assert clock.time == 100.0


def test_remove_listener():
    clock = OfflineClock()
    recorder = TickRecorder()
    clock.add_listener(recorder)
    clock.tick()
    clock.remove_listener(recorder)
    clock.remove_listener(recorder)
    clock.tick()
    assert len(recorder.ticks) == 1


def test_listener_can_remove_itself_during_tick():
    clock = OfflineClock()
    calls = []

    def once_only(time, rate):
        calls.append(time)
        clock.remove_listener(once_only)

    other = TickRecorder()
    clock.add_listener(once_only)
    clock.add_listener(other)
    clock.tick()
    clock.tick()
    assert calls == [1.0]
    assert len(other.ticks) == 2


def test_realtime_clock_is_monotonic():
    clock = RealtimeClock(rate=100)
    recorder = TickRecorder()
    clock.add_listener(recorder)

    for _ in range(3):
        clock.tick()
        time.sleep(0.001)

    times = [t for t, _ in recorder.ticks]
    assert times == sorted(times)
    assert times[0] >= 0
    assert times[-1] > times[0]
    assert clock.time == times[-1]


def test_interval_clock_ticks_on_its_own_thread():
    clock = IntervalClock(rate=200)
    recorder = TickRecorder()
    clock.add_listener(recorder)

    clock.start()
    try:
        assert clock.running
        assert recorder.event.wait(timeout=2.0)
    finally:
        clock.stop()

    assert not clock.running
    assert all(thread is not threading.main_thread() for thread in recorder.threads)
    count = len(recorder.ticks)
    time.sleep(0.05)
    assert len(recorder.ticks) == count


def test_interval_clock_start_twice_is_harmless():
    clock = IntervalClock(rate=100)
    clock.start()
    thread = clock._thread
    clock.start()
    assert clock._thread is thread
    clock.stop()
    clock.stop()


def test_worker_clock_dispatches_posted_ticks():
    clock = WorkerClock(rate=60)
    recorder = TickRecorder()
    clock.add_listener(recorder)

    clock.messages.put(TICK)
    clock.messages.put(TICK)
    assert clock.dispatch_pending() == 2
    assert clock.dispatch_pending() == 0
    assert len(recorder.ticks) == 2


def test_worker_clock_runs_listeners_on_owner_thread():
    clock = WorkerClock(rate=200)
    recorder = TickRecorder()
    clock.add_listener(recorder)

    clock.start()
    try:
        count = clock.run_for(0.2)
    finally:
        clock.stop()

    assert count > 0
    assert count == len(recorder.ticks)
    assert all(thread is threading.current_thread() for thread in recorder.threads)
