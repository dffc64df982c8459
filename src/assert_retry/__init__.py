"""
Assert Retry: eventual assertions for asynchronous systems.

Lets a test assert that a value *eventually* satisfies a condition,
tolerating transient failures (non-matching values or raised errors)
within a time and/or attempt budget:
- RetryConfigBuilder assembles an immutable RetryConfig
- RetryEngine polls a producer until the predicate matches
- RetryError (an AssertionError) reports every attempt on failure

Architecture: single-threaded polling loop + pluggable wait strategies
"""

__version__ = "0.1.0"

from assert_retry.assertions import assert_eventually
from assert_retry.retry import (
    AttemptsExhausted,
    NonRetryableProducerError,
    RetryConfig,
    RetryConfigBuilder,
    RetryConfigError,
    RetryEngine,
    RetryError,
    TimeoutExpired,
)

__all__ = [
    "__version__",
    "assert_eventually",
    "RetryConfig",
    "RetryConfigBuilder",
    "RetryEngine",
    "RetryError",
    "RetryConfigError",
    "NonRetryableProducerError",
    "TimeoutExpired",
    "AttemptsExhausted",
]
