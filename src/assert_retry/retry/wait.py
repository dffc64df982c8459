"""
Wait strategies: the pause between two failed attempts.

This module implements the Strategy Pattern for pausing. Each strategy
performs one pause per call to `wait()` and never influences termination:
if `wait()` raises, the retry engine logs the error and runs the next
attempt straight away.

Built-in strategies:
    1. SleepWaitStrategy: Fixed-duration sleep
    2. NoWaitStrategy: Retry immediately
    3. ExponentialBackoffWaitStrategy: Growing sleeps, capped
    4. EventWaitStrategy: Block until a threading.Event fires (bounded)
"""

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Optional, Protocol, runtime_checkable

import structlog

from assert_retry.retry.exceptions import RetryConfigError, WaitStrategyFailure
from assert_retry.retry.formatting import format_duration

logger = structlog.get_logger(__name__)

Sleeper = Callable[[float], None]


@runtime_checkable
class WaitStrategy(Protocol):
    """
    Protocol for wait strategies.

    `wait()` performs a single pause of strategy-defined length or behavior,
    returning normally or raising. `describe()` returns a one-line
    description for diagnostics and must not raise.
    """

    def wait(self) -> None:
        ...

    def describe(self) -> str:
        ...


@runtime_checkable
class ResettableWaitStrategy(WaitStrategy, Protocol):
    """
    A wait strategy holding per-run state (e.g. a backoff counter).

    The engine calls `reset()` once at the start of every run, then mutates
    the strategy serially through `wait()`.
    """

    def reset(self) -> None:
        ...


def describe_safely(strategy: object) -> str:
    """
    Describe a wait strategy without ever raising.

    Custom strategies may implement `describe()` badly; fall back to a
    generic "<Class>@<id>" description in that case.
    """
    try:
        return str(strategy.describe())  # type: ignore[attr-defined]
    except Exception:
        logger.debug("Wait strategy description failed", strategy_type=type(strategy).__name__)
        return f"{type(strategy).__name__}@{id(strategy):#x}"


def clamp_millis(millis: int) -> timedelta:
    """
    Convert milliseconds to a timedelta, clamping on overflow.

    A duration longer than timedelta can represent becomes timedelta.max
    instead of raising.
    """
    try:
        return timedelta(milliseconds=millis)
    except OverflowError:
        return timedelta.max if millis > 0 else timedelta.min


def _sleep_seconds(duration: timedelta) -> float:
    # time.sleep rejects values above the platform limit
    return min(duration.total_seconds(), threading.TIMEOUT_MAX)


class SleepWaitStrategy:
    """
    Sleep for a fixed duration.

    Use case: plain polling at a regular interval.
    """

    def __init__(self, duration: timedelta, sleeper: Sleeper = time.sleep):
        """
        Initialize sleep strategy.

        Args:
            duration: How long to sleep on every wait, must not be negative
            sleeper: Function sleeping for a number of seconds (injectable for tests)

        Raises:
            RetryConfigError: If duration is None or negative
        """
        if duration is None:
            raise RetryConfigError("Sleep duration must not be None")
        if duration < timedelta(0):
            raise RetryConfigError(f"Sleep duration must not be negative, got {duration}")

        self.duration = duration
        self.sleeper = sleeper

    @classmethod
    def from_millis(cls, millis: int, sleeper: Sleeper = time.sleep) -> "SleepWaitStrategy":
        return cls(clamp_millis(millis), sleeper)

    def wait(self) -> None:
        self.sleeper(_sleep_seconds(self.duration))

    def describe(self) -> str:
        return f"sleep for {format_duration(self.duration)}"

    def __repr__(self) -> str:
        return f"SleepWaitStrategy({self.describe()!r})"


class NoWaitStrategy:
    """Retry immediately, without pausing."""

    def wait(self) -> None:
        pass

    def describe(self) -> str:
        return "do not wait"


class ExponentialBackoffWaitStrategy:
    """
    Sleep for a duration growing geometrically with each wait.

    The n-th wait of a run (0-based) sleeps `initial * multiplier ** n`,
    capped at `max_delay`. The counter is reset by the engine at the start
    of every run.
    """

    def __init__(
        self,
        initial: timedelta,
        multiplier: float = 2.0,
        max_delay: Optional[timedelta] = None,
        sleeper: Sleeper = time.sleep,
    ):
        """
        Initialize exponential backoff strategy.

        Args:
            initial: First delay, must be positive
            multiplier: Growth factor, must be >= 1
            max_delay: Upper bound for any single delay (None = unbounded)
            sleeper: Function sleeping for a number of seconds

        Raises:
            RetryConfigError: If any argument is out of range
        """
        if initial is None or initial <= timedelta(0):
            raise RetryConfigError("Initial backoff delay must be positive")
        if multiplier < 1:
            raise RetryConfigError(f"Backoff multiplier must be >= 1, got {multiplier}")
        if max_delay is not None and max_delay < initial:
            raise RetryConfigError("Maximum backoff delay must not be lower than the initial delay")

        self.initial = initial
        self.multiplier = multiplier
        self.max_delay = max_delay
        self.sleeper = sleeper
        self._waits = 0

    @property
    def waits(self) -> int:
        """Number of waits performed since the last reset."""
        return self._waits

    def next_delay(self) -> timedelta:
        """Delay the next call to wait() will sleep for."""
        ceiling = self.max_delay if self.max_delay is not None else timedelta.max
        try:
            delay = self.initial * (self.multiplier ** self._waits)
        except OverflowError:
            return ceiling
        return min(delay, ceiling)

    def wait(self) -> None:
        delay = self.next_delay()
        self._waits += 1
        self.sleeper(_sleep_seconds(delay))

    def reset(self) -> None:
        self._waits = 0

    def describe(self) -> str:
        description = f"exponential backoff from {format_duration(self.initial)} (x{self.multiplier:g}"
        if self.max_delay is not None:
            description += f", max {format_duration(self.max_delay)}"
        return description + ")"


class EventWaitStrategy:
    """
    Wait until an external event fires.

    Blocks on a threading.Event for at most `timeout`, then clears it so the
    next wait blocks again. Use case: a producer-side callback (message
    consumed, webhook received) signalling that a new value is worth
    fetching.
    """

    def __init__(self, event: threading.Event, timeout: timedelta):
        """
        Initialize event wait strategy.

        Args:
            event: Event set by whoever produces new values
            timeout: Longest a single wait may block, must be positive

        Raises:
            RetryConfigError: If event is None or timeout is not positive
        """
        if event is None:
            raise RetryConfigError("The event must not be None")
        if timeout is None or timeout <= timedelta(0):
            raise RetryConfigError("Event wait timeout must be positive")

        self.event = event
        self.timeout = timeout

    def wait(self) -> None:
        """
        Block until the event is set.

        Raises:
            WaitStrategyFailure: If the event was not set within the timeout
        """
        if not self.event.wait(_sleep_seconds(self.timeout)):
            raise WaitStrategyFailure(
                f"Event not set within {format_duration(self.timeout)}"
            )
        self.event.clear()

    def describe(self) -> str:
        return f"wait for event (up to {format_duration(self.timeout)})"
