"""
Retry-on-exception policy.

Decides, given an error raised by the value producer, whether the retry
engine should tolerate it (keep polling) or abort the run immediately.
The policy is a closed two-state value so failure reports can describe it
in a single line.
"""

from dataclasses import dataclass
from typing import Optional

from assert_retry.models.enums import RetryMode
from assert_retry.retry.exceptions import RetryConfigError


@dataclass(frozen=True)
class RetryOnException:
    """
    Tagged policy: OFF, or ON for one exception type and its subtypes.

    Construct through `off()` / `on(exception_type)` rather than directly.

    Attributes:
        mode: RetryMode.OFF or RetryMode.ON
        exception_type: Tolerated exception type (None when OFF)
    """

    mode: RetryMode
    exception_type: Optional[type[Exception]] = None

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        if not isinstance(self.mode, RetryMode):
            raise RetryConfigError(f"Expected a RetryMode, got {self.mode!r}")

        if self.mode is RetryMode.OFF and self.exception_type is not None:
            raise RetryConfigError("An OFF retry policy cannot name an exception type")

        if self.mode is RetryMode.ON:
            if self.exception_type is None:
                raise RetryConfigError("The exception type must not be None")
            if not (isinstance(self.exception_type, type) and issubclass(self.exception_type, Exception)):
                raise RetryConfigError(
                    f"Expected an exception class, got {self.exception_type!r}"
                )

    @classmethod
    def off(cls) -> "RetryOnException":
        """Never retry: any raised error aborts the run."""
        return cls(RetryMode.OFF)

    @classmethod
    def on(cls, exception_type: type[Exception]) -> "RetryOnException":
        """Retry on errors of `exception_type` or a subtype; abort on anything else."""
        return cls(RetryMode.ON, exception_type)

    @property
    def is_on(self) -> bool:
        return self.mode is RetryMode.ON

    def matches(self, error: BaseException) -> bool:
        """Whether `error` should be tolerated."""
        if self.exception_type is None:
            return False
        return isinstance(error, self.exception_type)

    def describe(self) -> str:
        if self.exception_type is None:
            return "does not retry on exceptions"
        return f"retries on {self.exception_type.__name__} and subtypes"
