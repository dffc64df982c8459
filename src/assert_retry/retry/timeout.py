"""
Restartable timeout backed by an injectable monotonic clock.

A Timeout has a fixed duration and is armed explicitly with start(). The
clock is any zero-argument callable returning seconds as a float; the
default is time.monotonic so wall-clock adjustments never move the
deadline. Tests inject a controlled clock instead.

Expiry is strict: a Timeout is expired only once the clock reads strictly
after the deadline.
"""

import time
from collections.abc import Callable
from datetime import timedelta
from typing import Optional

from assert_retry.retry.exceptions import InvalidTimeoutStateError, RetryConfigError
from assert_retry.retry.formatting import format_duration

Clock = Callable[[], float]

SYSTEM_CLOCK: Clock = time.monotonic


class Timeout:
    """
    A bounded time window, started explicitly.

    Lifecycle: start() -> is_expired()/elapsed() ... -> reset() -> start() ...
    Calling start() twice without an intervening reset() is a programming
    error. restart() re-arms in one step.

    Attributes:
        duration: Length of the window (immutable)
    """

    def __init__(self, duration: timedelta, clock: Clock = SYSTEM_CLOCK):
        """
        Initialize timeout.

        Args:
            duration: Length of the window, must not be negative
            clock: Monotonic time source in seconds

        Raises:
            RetryConfigError: If duration is None or negative
        """
        if duration is None:
            raise RetryConfigError("Timeout duration must not be None")
        if duration < timedelta(0):
            raise RetryConfigError(f"Timeout duration must not be negative, got {duration}")

        self._duration = duration
        self._clock = clock
        self._start: Optional[float] = None
        self._end: Optional[float] = None

    @property
    def duration(self) -> timedelta:
        return self._duration

    @property
    def is_started(self) -> bool:
        return self._start is not None

    def start(self) -> None:
        """
        Arm the timeout: the deadline becomes now + duration.

        Raises:
            InvalidTimeoutStateError: If already started and not reset
        """
        if self._start is not None:
            raise InvalidTimeoutStateError("Timeout had already been started and not reset")

        self._start = self._clock()
        self._end = self._start + self._duration.total_seconds()

    def reset(self) -> None:
        """Disarm, permitting a fresh start()."""
        self._start = None
        self._end = None

    def restart(self) -> None:
        self.reset()
        self.start()

    def is_expired(self) -> bool:
        """
        Whether the clock reads strictly after the deadline.

        Raises:
            InvalidTimeoutStateError: If not started
        """
        end = self._require_started()[1]
        return self._clock() > end

    def elapsed(self) -> timedelta:
        """
        Time since start().

        Raises:
            InvalidTimeoutStateError: If not started
        """
        start = self._require_started()[0]
        return timedelta(seconds=self._clock() - start)

    def describe(self) -> str:
        return f"within {format_duration(self._duration)}"

    def _require_started(self) -> tuple[float, float]:
        if self._start is None or self._end is None:
            raise InvalidTimeoutStateError("Timeout has not been started")
        return self._start, self._end

    def __repr__(self) -> str:
        state = "started" if self.is_started else "idle"
        return f"{type(self).__name__}(duration={self._duration!r}, {state})"


class InfiniteTimeout(Timeout):
    """
    A timeout that never expires.

    Used when a config bounds the run by attempt count only. It still tracks
    start/elapsed so diagnostics can report how long a run took.
    """

    def __init__(self, clock: Clock = SYSTEM_CLOCK):
        super().__init__(timedelta.max, clock)

    def is_expired(self) -> bool:
        self._require_started()
        return False

    def describe(self) -> str:
        return "without a time limit"
