"""
Retry configuration: an immutable RetryConfig and its validating builder.

A RetryConfig bundles everything the engine needs for a run:
- Timeout (or InfiniteTimeout when only an attempt budget is set)
- optional maximum number of attempts
- WaitStrategy
- RetryOnException policy

Usage:
    config = (
        RetryConfigBuilder()
        .timeout_after_millis(5000)
        .sleep_for_millis(100)
        .retry_on_exception(ConnectionError)
        .build()
    )
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from assert_retry.config import Settings
from assert_retry.retry.exceptions import RetryConfigError
from assert_retry.retry.policy import RetryOnException
from assert_retry.retry.timeout import SYSTEM_CLOCK, Clock, InfiniteTimeout, Timeout
from assert_retry.retry.wait import (
    SleepWaitStrategy,
    WaitStrategy,
    clamp_millis,
    describe_safely,
)


def _check_count(value: object, name: str) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise RetryConfigError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class RetryConfig:
    """
    Immutable retry configuration.

    Stateless except for the Timeout's elapsed-time state, which the engine
    restarts at the beginning of every run. A config may therefore be reused
    for sequential runs, but never shared by concurrent ones.

    Attributes:
        wait_strategy: Pause between attempts
        retry_on_exception: Policy for errors raised by the producer
        timeout: Time bound (InfiniteTimeout when there is none)
        max_attempts: Attempt bound (None when there is none)
    """

    wait_strategy: WaitStrategy
    retry_on_exception: RetryOnException
    timeout: Optional[Timeout] = None
    max_attempts: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration invariants."""
        if self.wait_strategy is None:
            raise RetryConfigError("The wait strategy must not be None")
        if not isinstance(self.wait_strategy, WaitStrategy):
            raise RetryConfigError(
                f"{type(self.wait_strategy).__name__} does not implement wait() and describe()"
            )

        if not isinstance(self.retry_on_exception, RetryOnException):
            raise RetryConfigError("The retry-on-exception policy must be set explicitly")

        if self.max_attempts is not None:
            _check_count(self.max_attempts, "max_attempts")
            if self.max_attempts < 1:
                raise RetryConfigError(f"max_attempts must be >= 1, got {self.max_attempts}")

        if self.timeout is None:
            if self.max_attempts is None:
                raise RetryConfigError("Either a timeout or a maximum number of attempts must be set")
            object.__setattr__(self, "timeout", InfiniteTimeout())
        elif not isinstance(self.timeout, Timeout):
            raise RetryConfigError(f"Expected a Timeout, got {self.timeout!r}")
        elif isinstance(self.timeout, InfiniteTimeout):
            if self.max_attempts is None:
                raise RetryConfigError("An infinite timeout requires a maximum number of attempts")
        elif self.timeout.duration <= timedelta(0):
            raise RetryConfigError(
                f"Timeout duration must be positive, got {self.timeout.duration}"
            )

    @classmethod
    def builder(cls) -> "RetryConfigBuilder":
        return RetryConfigBuilder()

    @property
    def has_time_limit(self) -> bool:
        return not isinstance(self.timeout, InfiniteTimeout)

    @property
    def has_attempt_limit(self) -> bool:
        return self.max_attempts is not None

    def describe(self) -> str:
        """One-line description, e.g. "within 5s, sleep for 100ms, does not retry on exceptions"."""
        parts: list[str] = []
        if self.has_time_limit:
            parts.append(self.timeout.describe())
        if self.max_attempts is not None:
            noun = "attempt" if self.max_attempts == 1 else "attempts"
            parts.append(f"at most {self.max_attempts} {noun}")
        parts.append(describe_safely(self.wait_strategy))
        parts.append(self.retry_on_exception.describe())
        return ", ".join(parts)


class RetryConfigBuilder:
    """
    Validating builder for RetryConfig.

    Every setter validates its argument eagerly and raises RetryConfigError.
    `build()` reports all missing mandatory fields at once. Mandatory:
    - a timeout and/or a maximum number of attempts
    - a wait strategy
    - an explicit retry-on-exception policy

    A fresh Timeout is created on each build(), so configs built from the
    same builder never share elapsed-time state.
    """

    def __init__(self) -> None:
        self._timeout_duration: Optional[timedelta] = None
        self._max_attempts: Optional[int] = None
        self._wait_strategy: Optional[WaitStrategy] = None
        self._retry_on_exception: Optional[RetryOnException] = None
        self._clock: Clock = SYSTEM_CLOCK

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RetryConfigBuilder":
        """
        Create a builder pre-populated with the configured defaults.

        Args:
            settings: Settings to read defaults from (None = load from environment)

        Returns:
            Builder that can be further customised before build()
        """
        if settings is None:
            settings = Settings()

        builder = cls().timeout_after_millis(settings.DEFAULT_TIMEOUT_MS).sleep_for_millis(
            settings.DEFAULT_SLEEP_MS
        )
        if settings.DEFAULT_MAX_ATTEMPTS is not None:
            builder.max_attempts(settings.DEFAULT_MAX_ATTEMPTS)
        if settings.DEFAULT_RETRY_ON_EXCEPTION:
            builder.retry_on_exception(Exception)
        else:
            builder.do_not_retry_on_exception()
        return builder

    def timeout_after(self, duration: timedelta) -> "RetryConfigBuilder":
        """Stop retrying once more than `duration` has elapsed."""
        if duration is None:
            raise RetryConfigError("Timeout duration must not be None")
        if duration <= timedelta(0):
            raise RetryConfigError(f"Timeout duration must be positive, got {duration}")
        self._timeout_duration = duration
        return self

    def timeout_after_millis(self, millis: int) -> "RetryConfigBuilder":
        return self.timeout_after(clamp_millis(_check_count(millis, "Timeout millis")))

    def max_attempts(self, attempts: int) -> "RetryConfigBuilder":
        """Stop retrying once `attempts` attempts have been made."""
        _check_count(attempts, "max_attempts")
        if attempts < 1:
            raise RetryConfigError(f"max_attempts must be >= 1, got {attempts}")
        self._max_attempts = attempts
        return self

    def sleep_for(self, duration: timedelta) -> "RetryConfigBuilder":
        """Sleep for `duration` between attempts."""
        if duration is None:
            raise RetryConfigError("Sleep duration must not be None")
        if duration <= timedelta(0):
            raise RetryConfigError(f"Sleep duration must be positive, got {duration}")
        return self.wait_strategy(SleepWaitStrategy(duration))

    def sleep_for_millis(self, millis: int) -> "RetryConfigBuilder":
        return self.sleep_for(clamp_millis(_check_count(millis, "Sleep millis")))

    def sleep_for_seconds(self, seconds: int) -> "RetryConfigBuilder":
        _check_count(seconds, "Sleep seconds")
        try:
            duration = timedelta(seconds=seconds)
        except OverflowError:
            duration = timedelta.max if seconds > 0 else timedelta.min
        return self.sleep_for(duration)

    def wait_strategy(self, strategy: WaitStrategy) -> "RetryConfigBuilder":
        """Use a custom wait strategy between attempts."""
        if strategy is None:
            raise RetryConfigError("The wait strategy must not be None")
        if not isinstance(strategy, WaitStrategy):
            raise RetryConfigError(
                f"{type(strategy).__name__} does not implement wait() and describe()"
            )
        self._wait_strategy = strategy
        return self

    def retry_on_exception(self, exception_type: type[Exception]) -> "RetryConfigBuilder":
        """Keep retrying when the producer raises `exception_type` or a subtype."""
        self._retry_on_exception = RetryOnException.on(exception_type)
        return self

    def do_not_retry_on_exception(self) -> "RetryConfigBuilder":
        """Abort the run as soon as the producer raises."""
        self._retry_on_exception = RetryOnException.off()
        return self

    def clock(self, clock: Clock) -> "RetryConfigBuilder":
        """Use a custom monotonic time source (seconds as float)."""
        if not callable(clock):
            raise RetryConfigError(f"The clock must be callable, got {clock!r}")
        self._clock = clock
        return self

    def build(self) -> RetryConfig:
        """
        Build the immutable RetryConfig.

        Raises:
            RetryConfigError: If one or more mandatory parameters are missing
        """
        missing: list[str] = []
        if self._timeout_duration is None and self._max_attempts is None:
            missing.append("- timeout or max attempts: call timeout_after() and/or max_attempts()")
        if self._wait_strategy is None:
            missing.append(
                "- wait strategy: call sleep_for(), sleep_for_millis(), sleep_for_seconds() or wait_strategy()"
            )
        if self._retry_on_exception is None:
            missing.append(
                "- retry on exception: call retry_on_exception() or do_not_retry_on_exception()"
            )
        if missing:
            raise RetryConfigError(
                "One or more mandatory parameters have not been set:\n\t" + "\n\t".join(missing)
            )

        if self._timeout_duration is not None:
            timeout: Timeout = Timeout(self._timeout_duration, self._clock)
        else:
            timeout = InfiniteTimeout(self._clock)

        return RetryConfig(
            wait_strategy=self._wait_strategy,
            retry_on_exception=self._retry_on_exception,
            timeout=timeout,
            max_attempts=self._max_attempts,
        )
