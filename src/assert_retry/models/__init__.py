"""
Shared enumerations for the retry engine.

Includes:
- FailureReason (why a retry run gave up)
- AttemptOutcome (what a single attempt produced)
- RetryMode (whether raised errors are tolerated)
"""

from assert_retry.models.enums import AttemptOutcome, FailureReason, RetryMode

__all__ = [
    "AttemptOutcome",
    "FailureReason",
    "RetryMode",
]
