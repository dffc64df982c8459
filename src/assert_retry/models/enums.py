"""
Enumerations for the retry engine data model.

All enums are closed sets - the engine never produces values outside them.
"""

from enum import Enum


class AttemptOutcome(str, Enum):
    """
    Result of a single attempt.

    An attempt either produced a value (which did or did not satisfy the
    predicate) or the producer raised.
    """

    MATCHED = "matched"
    MISMATCHED = "mismatched"
    RAISED = "raised"


class FailureReason(str, Enum):
    """
    Why a retry run terminated without a matching value.

    Each member carries the human-readable line used in failure reports.
    """

    NON_RETRYABLE_ERROR = "non_retryable_error"
    TIMEOUT_EXPIRED = "timeout_expired"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"

    @property
    def description(self) -> str:
        """One-line description for failure messages."""
        return _FAILURE_DESCRIPTIONS[self]


_FAILURE_DESCRIPTIONS = {
    FailureReason.NON_RETRYABLE_ERROR: "the producer raised a non-retryable error",
    FailureReason.TIMEOUT_EXPIRED: "the timeout expired before any value matched",
    FailureReason.ATTEMPTS_EXHAUSTED: "no value matched within the attempt budget",
}


class RetryMode(str, Enum):
    """
    Retry-on-exception mode.

    OFF: any error raised by the producer aborts the run immediately.
    ON: errors of the configured type (or a subtype) are tolerated.
    """

    OFF = "off"
    ON = "on"
