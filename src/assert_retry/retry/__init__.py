"""
Retry-polling engine for eventual assertions.

This package implements the loop that repeatedly pulls a value from a
producer, evaluates a predicate and decides whether to wait and retry or
stop (match, timeout, attempt budget exhausted, non-retryable error),
keeping an ordered record of every attempt for the failure report.

Main Components:
    - RetryEngine: The polling loop
    - RetryConfig / RetryConfigBuilder: Immutable configuration + validating builder
    - Timeout / InfiniteTimeout: Restartable time bound with injectable clock
    - WaitStrategy: Protocol for pauses between attempts
    - RetryOnException: Off / on(exception type) policy
    - AttemptRecord / ResultLog: Attempt history
    - RetryError: Failure carrying the full attempt history

Usage:
    >>> from assert_retry.retry import RetryConfigBuilder, RetryEngine
    >>> config = RetryConfigBuilder().max_attempts(3).sleep_for_millis(10).do_not_retry_on_exception().build()
    >>> RetryEngine(config).run(lambda: "c", lambda v: v == "c")
    'c'
"""

from assert_retry.retry.config import RetryConfig, RetryConfigBuilder
from assert_retry.retry.engine import RetryEngine
from assert_retry.retry.exceptions import (
    AttemptsExhausted,
    InvalidTimeoutStateError,
    NonRetryableProducerError,
    RetryConfigError,
    RetryError,
    TimeoutExpired,
    WaitStrategyFailure,
)
from assert_retry.retry.formatting import format_duration
from assert_retry.retry.metadata import AttemptRecord, ResultLog
from assert_retry.retry.policy import RetryOnException
from assert_retry.retry.timeout import InfiniteTimeout, Timeout
from assert_retry.retry.wait import (
    EventWaitStrategy,
    ExponentialBackoffWaitStrategy,
    NoWaitStrategy,
    SleepWaitStrategy,
    WaitStrategy,
)

__all__ = [
    "RetryEngine",
    "RetryConfig",
    "RetryConfigBuilder",
    "Timeout",
    "InfiniteTimeout",
    "WaitStrategy",
    "SleepWaitStrategy",
    "NoWaitStrategy",
    "ExponentialBackoffWaitStrategy",
    "EventWaitStrategy",
    "RetryOnException",
    "AttemptRecord",
    "ResultLog",
    "format_duration",
    # Exceptions
    "RetryError",
    "NonRetryableProducerError",
    "TimeoutExpired",
    "AttemptsExhausted",
    "RetryConfigError",
    "InvalidTimeoutStateError",
    "WaitStrategyFailure",
]
