"""Unit test fixtures (fakes and stubs).

Provides deterministic replacements for time, waiting and value producers
so the retry loop can be tested without sleeping.
"""

from collections.abc import Iterable
from datetime import timedelta
from typing import Any, Optional

import pytest


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.reads = 0

    def __call__(self) -> float:
        self.reads += 1
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta.total_seconds()


class RecordingWaitStrategy:
    """Wait strategy counting its calls; optionally advances a FakeClock or raises."""

    def __init__(
        self,
        clock: Optional[FakeClock] = None,
        step: timedelta = timedelta(milliseconds=10),
        error: Optional[Exception] = None,
    ):
        self.clock = clock
        self.step = step
        self.error = error
        self.calls = 0

    def wait(self) -> None:
        self.calls += 1
        if self.clock is not None:
            self.clock.advance(self.step)
        if self.error is not None:
            raise self.error

    def describe(self) -> str:
        return f"recording wait ({self.calls} calls)"


class ScriptedProducer:
    """
    Producer replaying a script: values are returned, exceptions are raised.

    Once the script is exhausted the last entry repeats forever.
    """

    def __init__(self, script: Iterable[Any]):
        self.script = list(script)
        if not self.script:
            raise ValueError("script must not be empty")
        self.calls = 0

    def __call__(self) -> Any:
        entry = self.script[min(self.calls, len(self.script) - 1)]
        self.calls += 1
        if isinstance(entry, BaseException):
            raise entry
        return entry


@pytest.fixture
def fake_clock() -> FakeClock:
    """Controllable clock starting at an arbitrary non-zero instant."""
    return FakeClock()


@pytest.fixture
def create_recording_wait():
    """Factory fixture to create RecordingWaitStrategy instances.
    
    Usage:
        def test_something(create_recording_wait, fake_clock):
            wait = create_recording_wait(clock=fake_clock, step=timedelta(milliseconds=10))
    """
    def _create(
        clock: Optional[FakeClock] = None,
        step: timedelta = timedelta(milliseconds=10),
        error: Optional[Exception] = None,
    ) -> RecordingWaitStrategy:
        return RecordingWaitStrategy(clock=clock, step=step, error=error)
    
    return _create


@pytest.fixture
def create_producer():
    """Factory fixture to create ScriptedProducer instances.
    
    Usage:
        def test_something(create_producer):
            producer = create_producer("a", RuntimeError("boom"), "c")
    """
    def _create(*script: Any) -> ScriptedProducer:
        return ScriptedProducer(script)
    
    return _create
