"""
Unit tests for duration and attempt-log rendering.
"""

from datetime import timedelta

import pytest

from assert_retry.retry.formatting import format_duration, render_attempts
from assert_retry.retry.metadata import AttemptRecord


@pytest.mark.parametrize(
    "duration, expected",
    [
        (timedelta(0), "0ms"),
        (timedelta(milliseconds=7), "7ms"),
        (timedelta(seconds=5), "5s"),
        (timedelta(minutes=2), "2m"),
        (timedelta(hours=1), "1h"),
        (timedelta(hours=1, minutes=2, seconds=3, milliseconds=4), "1h 2m 3s 4ms"),
        (timedelta(hours=1, seconds=3), "1h 3s"),
        (timedelta(days=2), "48h"),
        (timedelta(microseconds=999), "0ms"),
    ],
)
def test_format_duration(duration, expected):
    assert format_duration(duration) == expected


def test_render_attempts():
    results = [
        AttemptRecord.mismatched(1, "a"),
        AttemptRecord.raised(2, RuntimeError("boom")),
        AttemptRecord.matched(3, "c"),
    ]

    assert render_attempts(results) == (
        "  1. 'a'\n"
        "  2. thrown RuntimeError('boom')\n"
        "  3. 'c'"
    )


def test_render_attempts_empty():
    assert render_attempts([]) == ""
