import pytest

from cadence import OfflineClock, Scheduler


@pytest.fixture
def clock():
    return OfflineClock(rate=0.1)


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def recorder():
    """Callback factory collecting (name, time) pairs in firing order."""
    fired = []

    def make(name):
        def callback(time):
            fired.append((name, time))
        return callback

    make.fired = fired
    return make
