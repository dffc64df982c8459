"""Integration test fixtures (real threads, real clock).

Provides a small eventually-consistent store whose writes become visible
after a delay, standing in for queues and async APIs under test.
"""

import threading
import time

import pytest


class DelayedStore:
    """Key-value store where writes become visible only after `delay` seconds."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = threading.Lock()
        self._timers: list[threading.Timer] = []
        self.changed = threading.Event()
        self.reads = 0

    def write_later(self, key: str, value: str, delay: float) -> None:
        def _apply() -> None:
            with self._lock:
                self._data[key] = value
            self.changed.set()

        timer = threading.Timer(delay, _apply)
        timer.daemon = True
        self._timers.append(timer)
        timer.start()

    def read(self, key: str) -> str:
        """Raise KeyError until the key becomes visible."""
        with self._lock:
            self.reads += 1
            return self._data[key]

    def close(self) -> None:
        for timer in self._timers:
            timer.cancel()


@pytest.fixture
def delayed_store():
    store = DelayedStore()
    yield store
    store.close()


@pytest.fixture
def stopwatch():
    """Monotonic stopwatch: call to get seconds since the fixture was created."""
    started = time.monotonic()
    return lambda: time.monotonic() - started
