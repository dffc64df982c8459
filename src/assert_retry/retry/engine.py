"""
Retry engine: the polling loop behind every eventual assertion.

The engine repeatedly pulls a value from a producer and evaluates a
predicate until the value matches or the run must stop:

    1. Restart the config's Timeout (and reset a resettable wait strategy)
    2. Invoke the producer; record the value (or the raised error)
    3. Match -> return the value
       Raised and not covered by the retry policy -> NonRetryableProducerError
    4. Attempt budget reached -> AttemptsExhausted
       Timeout expired -> TimeoutExpired
    5. Wait (errors raised while waiting are logged and ignored), repeat

Everything runs on the calling thread; attempts never overlap.

Usage:
    engine = RetryEngine(config)
    value = engine.run(lambda: queue.peek(), lambda msg: msg is not None)
"""

from collections.abc import Callable
from typing import Optional, TypeVar

import structlog

from assert_retry.retry.config import RetryConfig
from assert_retry.retry.exceptions import (
    AttemptsExhausted,
    NonRetryableProducerError,
    RetryError,
    TimeoutExpired,
)
from assert_retry.retry.metadata import AttemptRecord, ResultLog
from assert_retry.retry.wait import ResettableWaitStrategy, describe_safely

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryEngine:
    """
    Single-threaded retry-polling engine.

    The engine tracks the complete attempt history of a run and attaches it
    to the RetryError raised when the run terminates without a match.

    Attributes:
        config: Retry configuration (timeout, attempt budget, wait, policy)
        last_failure: Failure of the most recent `matches()` call, if any
        last_results: Attempt history of the most recent run (success or failure)
    """

    def __init__(self, config: RetryConfig):
        """
        Initialize retry engine.

        Args:
            config: Retry configuration; its Timeout is restarted on every run
        """
        self.config = config
        self.last_failure: Optional[RetryError] = None
        self.last_results: tuple[AttemptRecord, ...] = ()

    def run(self, producer: Callable[[], T], predicate: Callable[[T], bool]) -> T:
        """
        Poll `producer` until its value satisfies `predicate`.

        Errors raised by `predicate` are not tolerated: they propagate
        unchanged.

        Args:
            producer: Zero-argument callable yielding the next candidate value
            predicate: Condition the value must eventually satisfy

        Returns:
            The first value satisfying the predicate

        Raises:
            NonRetryableProducerError: Producer raised an error the policy does not cover
            AttemptsExhausted: Attempt budget used up without a match
            TimeoutExpired: Timeout expired without a match
        """
        results = ResultLog()
        try:
            return self._poll(producer, predicate, results)
        finally:
            self.last_results = results.snapshot()

    def _poll(
        self,
        producer: Callable[[], T],
        predicate: Callable[[T], bool],
        results: ResultLog,
    ) -> T:
        config = self.config
        config.timeout.restart()
        if isinstance(config.wait_strategy, ResettableWaitStrategy):
            config.wait_strategy.reset()

        logger.debug("Starting retry run", config=config.describe())

        attempt = 0
        while True:
            attempt += 1

            try:
                value = producer()
            except Exception as e:
                results.append(AttemptRecord.raised(attempt, e))
                if not config.retry_on_exception.matches(e):
                    logger.info(
                        "Producer raised a non-retryable error",
                        attempt=attempt,
                        error_type=type(e).__name__,
                        retry_policy=config.retry_on_exception.describe(),
                    )
                    raise NonRetryableProducerError(e, results.snapshot()) from e

                logger.debug(
                    "Producer raised a retryable error",
                    attempt=attempt,
                    error_type=type(e).__name__,
                    error=str(e),
                )
            else:
                if predicate(value):
                    results.append(AttemptRecord.matched(attempt, value))
                    logger.info(
                        "Value eventually matched",
                        attempts=attempt,
                        elapsed_s=config.timeout.elapsed().total_seconds(),
                    )
                    return value

                results.append(AttemptRecord.mismatched(attempt, value))
                logger.debug("Value did not match", attempt=attempt, actual=repr(value))

            self._check_termination(attempt, results)
            self._wait(attempt)

    def matches(self, producer: Callable[[], T], predicate: Callable[[T], bool]) -> bool:
        """
        Boolean variant of `run()` for matcher-style adapters.

        On failure the RetryError is kept in `last_failure` so the caller can
        render the reason and attempt history. Non-retryable producer errors
        count as a failed match.
        """
        self.last_failure = None
        try:
            self.run(producer, predicate)
        except RetryError as e:
            self.last_failure = e
            return False
        return True

    def _check_termination(self, attempt: int, results: ResultLog) -> None:
        """
        Raise if a boundary has been crossed.

        The attempt budget is checked before the timeout, so when both are
        crossed on the same attempt the failure reports the attempt budget.
        """
        config = self.config

        if config.max_attempts is not None and attempt >= config.max_attempts:
            logger.info(
                "Attempt budget exhausted",
                attempts=attempt,
                max_attempts=config.max_attempts,
            )
            raise AttemptsExhausted(config.max_attempts, results.snapshot())

        if config.timeout.is_expired():
            elapsed = config.timeout.elapsed()
            logger.info(
                "Timeout expired",
                attempts=attempt,
                timeout_s=config.timeout.duration.total_seconds(),
                elapsed_s=elapsed.total_seconds(),
            )
            raise TimeoutExpired(config.timeout.duration, elapsed, results.snapshot())

    def _wait(self, attempt: int) -> None:
        """Run the wait strategy once; never let it fail the run."""
        strategy = self.config.wait_strategy
        logger.debug("About to wait", attempt=attempt, wait_strategy=describe_safely(strategy))
        try:
            strategy.wait()
        except Exception as e:
            logger.warning(
                "Wait strategy failed, running the next attempt now",
                attempt=attempt,
                error_type=type(e).__name__,
                error=str(e),
            )
