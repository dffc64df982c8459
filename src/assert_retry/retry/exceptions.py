"""
Retry engine exceptions.

This module defines the complete error taxonomy of the retry engine:

- RetryConfigError: invalid configuration, raised synchronously at build time
- InvalidTimeoutStateError: Timeout lifecycle misuse (programming error)
- RetryError and subclasses: a retry run terminated without a match
- WaitStrategyFailure: a wait strategy could not pause (never surfaced)

RetryError subclasses AssertionError so a failed eventual assertion is
reported by test runners as an assertion failure rather than an error.
"""

from collections.abc import Sequence
from datetime import timedelta
from typing import TYPE_CHECKING

from assert_retry.models.enums import FailureReason
from assert_retry.retry.formatting import format_duration, render_attempts

if TYPE_CHECKING:
    from assert_retry.retry.metadata import AttemptRecord


class RetryConfigError(ValueError):
    """
    Raised when a RetryConfig (or one of its parts) is invalid.

    Examples: missing mandatory field, non-positive duration or attempt
    count, null wait strategy. Always fatal, never retried.
    """


class InvalidTimeoutStateError(RuntimeError):
    """Raised when a Timeout is used out of order (e.g. started twice)."""


class WaitStrategyFailure(Exception):
    """
    Raised by a wait strategy that could not perform its pause.

    The retry engine catches it (like any other error raised while waiting),
    logs it and proceeds to the next attempt immediately.
    """


class RetryError(AssertionError):
    """
    Base class for a retry run that terminated without a matching value.

    Carries the complete, ordered attempt history so the caller can tell
    intermittent failures from persistent ones.

    Attributes:
        reason: Why the run terminated
        results: Every attempt, in order of appearance
        detail: Reason-specific extra text (may be empty)
    """

    def __init__(
        self,
        reason: FailureReason,
        results: Sequence["AttemptRecord"],
        detail: str = "",
    ) -> None:
        """
        Initialize RetryError.

        Args:
            reason: Termination reason
            results: Ordered attempt log (copied)
            detail: Optional text appended to the reason line
        """
        self.reason = reason
        self.results: tuple["AttemptRecord", ...] = tuple(results)
        self.detail = detail
        super().__init__(self._forge_message())

    @property
    def attempts(self) -> int:
        """Number of attempts made before giving up."""
        return len(self.results)

    def _forge_message(self) -> str:
        count = len(self.results)
        noun = "attempt" if count == 1 else "attempts"
        reason_line = self.reason.description
        if self.detail:
            reason_line = f"{reason_line} ({self.detail})"

        lines = [f"Retry assertion failed after {count} {noun}: {reason_line}"]
        if self.results:
            lines.append("Actual values (in order of appearance):")
            lines.append(render_attempts(self.results))
        return "\n".join(lines)


class NonRetryableProducerError(RetryError):
    """
    Raised when the producer raised an error the retry policy does not cover.

    The run stops immediately after that attempt. The original error is
    available as `error` and is also chained as `__cause__`.
    """

    def __init__(self, error: BaseException, results: Sequence["AttemptRecord"]) -> None:
        self.error = error
        super().__init__(
            FailureReason.NON_RETRYABLE_ERROR,
            results,
            detail=f"{type(error).__name__}: {error}",
        )


class TimeoutExpired(RetryError):
    """
    Raised when the timeout expired and none of the values matched.

    Attributes:
        timeout: Configured timeout duration
        elapsed: Actual time spent retrying
    """

    def __init__(
        self,
        timeout: timedelta,
        elapsed: timedelta,
        results: Sequence["AttemptRecord"],
    ) -> None:
        self.timeout = timeout
        self.elapsed = elapsed
        super().__init__(
            FailureReason.TIMEOUT_EXPIRED,
            results,
            detail=f"timeout {format_duration(timeout)}, elapsed {format_duration(elapsed)}",
        )


class AttemptsExhausted(RetryError):
    """
    Raised when the attempt budget was used up and none of the values matched.

    Attributes:
        max_attempts: Configured attempt budget
    """

    def __init__(self, max_attempts: int, results: Sequence["AttemptRecord"]) -> None:
        self.max_attempts = max_attempts
        super().__init__(
            FailureReason.ATTEMPTS_EXHAUSTED,
            results,
            detail=f"{len(results)} of {max_attempts} attempts made",
        )
