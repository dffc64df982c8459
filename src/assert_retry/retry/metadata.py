"""
Attempt history tracking.

This module defines the AttemptRecord frozen dataclass (one per attempt)
and the append-only ResultLog that collects them during a single retry run.
The log is only used to build the failure report.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Optional

from assert_retry.models.enums import AttemptOutcome


@dataclass(frozen=True)
class AttemptRecord:
    """
    Outcome of a single attempt.

    Tagged union over AttemptOutcome:
    - MATCHED / MISMATCHED: `value` holds what the producer returned
    - RAISED: `error` holds what the producer raised

    Attributes:
        index: 1-based attempt number
        outcome: What the attempt produced
        value: Produced value (None for RAISED)
        error: Raised error (None unless RAISED)
    """

    index: int
    outcome: AttemptOutcome
    value: Any = None
    error: Optional[BaseException] = None

    def __post_init__(self) -> None:
        """Validate record invariants."""
        if self.index < 1:
            raise ValueError("index must be >= 1")

        if self.outcome is AttemptOutcome.RAISED and self.error is None:
            raise ValueError("a RAISED record must carry the error")

        if self.outcome is not AttemptOutcome.RAISED and self.error is not None:
            raise ValueError(f"a {self.outcome.value.upper()} record cannot carry an error")

    @classmethod
    def matched(cls, index: int, value: Any) -> "AttemptRecord":
        return cls(index=index, outcome=AttemptOutcome.MATCHED, value=value)

    @classmethod
    def mismatched(cls, index: int, value: Any) -> "AttemptRecord":
        return cls(index=index, outcome=AttemptOutcome.MISMATCHED, value=value)

    @classmethod
    def raised(cls, index: int, error: BaseException) -> "AttemptRecord":
        return cls(index=index, outcome=AttemptOutcome.RAISED, error=error)

    @property
    def is_error(self) -> bool:
        return self.outcome is AttemptOutcome.RAISED

    def describe(self) -> str:
        """Render as the value's repr, or as "thrown <error>"."""
        if self.is_error:
            return f"thrown {self.error!r}"
        return repr(self.value)


class ResultLog:
    """
    Ordered, append-only log of attempt records for one retry run.

    Records are never mutated or removed once appended. `snapshot()` returns
    an immutable copy suitable for attaching to a RetryError.
    """

    def __init__(self) -> None:
        self._records: list[AttemptRecord] = []

    def append(self, record: AttemptRecord) -> None:
        """
        Append the next record.

        Raises:
            ValueError: If the record index does not follow the last one
        """
        expected = len(self._records) + 1
        if record.index != expected:
            raise ValueError(f"expected attempt #{expected}, got #{record.index}")
        self._records.append(record)

    def snapshot(self) -> tuple[AttemptRecord, ...]:
        return tuple(self._records)

    @property
    def last(self) -> Optional[AttemptRecord]:
        return self._records[-1] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[AttemptRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, position: int) -> AttemptRecord:
        return self._records[position]

    def __repr__(self) -> str:
        return f"ResultLog([{', '.join(r.describe() for r in self._records)}])"
