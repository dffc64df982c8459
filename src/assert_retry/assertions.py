"""
Eventual assertions.

Thin entry point over RetryEngine for test code:

    from assert_retry import assert_eventually

    message = assert_eventually(lambda: queue.get_nowait(), lambda m: m.id == 42)

Without an explicit RetryConfig the defaults from Settings are used
(5s timeout, 100ms sleep, no retry on exceptions unless configured).
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from assert_retry.config import Settings
from assert_retry.retry.config import RetryConfig, RetryConfigBuilder
from assert_retry.retry.engine import RetryEngine

T = TypeVar("T")


def assert_eventually(
    producer: Callable[[], T],
    predicate: Callable[[T], bool],
    config: Optional[RetryConfig] = None,
    settings: Optional[Settings] = None,
) -> T:
    """
    Assert that `producer` eventually yields a value satisfying `predicate`.

    Args:
        producer: Zero-argument callable yielding the next candidate value
        predicate: Condition the value must eventually satisfy
        config: Retry configuration (None = build one from settings)
        settings: Defaults used when config is None (None = load from environment)

    Returns:
        The first matching value

    Raises:
        RetryError: (an AssertionError) if no value matched; the message lists
            every attempt in order
    """
    if config is None:
        config = RetryConfigBuilder.from_settings(settings).build()
    return RetryEngine(config).run(producer, predicate)
