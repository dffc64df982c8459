"""
Human-readable rendering helpers for failure reports and diagnostics.

Provides compact duration printing ("1h 2m 3s 4ms") and the numbered
attempt listing embedded in every RetryError message.
"""

from collections.abc import Iterable
from datetime import timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from assert_retry.retry.metadata import AttemptRecord

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE


def format_duration(duration: timedelta) -> str:
    """
    Pretty-print a duration with millisecond precision.

    Zero components are omitted; days are folded into hours. Sub-millisecond
    precision is dropped.

    Args:
        duration: Non-negative duration to render

    Returns:
        Compact representation, "0ms" for a zero duration

    Examples:
        >>> format_duration(timedelta(hours=1, seconds=3, milliseconds=4))
        '1h 3s 4ms'
        >>> format_duration(timedelta(0))
        '0ms'
    """
    total_millis = duration // timedelta(milliseconds=1)
    total_seconds, millis = divmod(total_millis, 1000)
    hours, remainder = divmod(total_seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(remainder, SECONDS_PER_MINUTE)

    parts: list[str] = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    if millis or not parts:
        parts.append(f"{millis}ms")

    return " ".join(parts)


def render_attempts(results: Iterable["AttemptRecord"], indent: str = "  ") -> str:
    """
    Render an ordered attempt log, one numbered line per attempt.

    Args:
        results: Attempt records in order of appearance
        indent: Prefix for every line

    Returns:
        Multi-line string, e.g. "  1. 'a'\\n  2. thrown RuntimeError('boom')"
    """
    return "\n".join(f"{indent}{record.index}. {record.describe()}" for record in results)
