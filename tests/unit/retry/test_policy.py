"""
Unit tests for the retry-on-exception policy.
"""

import pytest

from assert_retry.models.enums import RetryMode
from assert_retry.retry.exceptions import RetryConfigError
from assert_retry.retry.policy import RetryOnException


class CustomError(RuntimeError):
    pass


class TestRetryOnException:
    """Test suite for RetryOnException."""

    def test_off_matches_nothing(self):
        policy = RetryOnException.off()

        assert policy.mode is RetryMode.OFF
        assert policy.is_on is False
        assert policy.matches(RuntimeError()) is False
        assert policy.matches(Exception()) is False

    def test_on_matches_exact_type(self):
        policy = RetryOnException.on(RuntimeError)

        assert policy.is_on is True
        assert policy.matches(RuntimeError("x")) is True

    def test_on_matches_subtypes(self):
        assert RetryOnException.on(RuntimeError).matches(CustomError()) is True
        assert RetryOnException.on(Exception).matches(KeyError()) is True

    def test_on_does_not_match_other_types(self):
        policy = RetryOnException.on(CustomError)

        assert policy.matches(RuntimeError()) is False
        assert policy.matches(ValueError()) is False

    @pytest.mark.parametrize("bad_type", [None, int, "RuntimeError", KeyboardInterrupt])
    def test_on_requires_exception_class(self, bad_type):
        with pytest.raises(RetryConfigError):
            RetryOnException.on(bad_type)

    def test_off_cannot_name_a_type(self):
        with pytest.raises(RetryConfigError):
            RetryOnException(RetryMode.OFF, RuntimeError)

    @pytest.mark.parametrize("mode", ["on", "off", True, None])
    def test_mode_must_be_retry_mode(self, mode):
        with pytest.raises(RetryConfigError, match="Expected a RetryMode"):
            RetryOnException(mode, ValueError)

    def test_describe(self):
        assert RetryOnException.off().describe() == "does not retry on exceptions"
        assert RetryOnException.on(ConnectionError).describe() == "retries on ConnectionError and subtypes"

    def test_is_immutable_value(self):
        assert RetryOnException.on(KeyError) == RetryOnException.on(KeyError)
        with pytest.raises(AttributeError):
            RetryOnException.off().mode = RetryMode.ON
