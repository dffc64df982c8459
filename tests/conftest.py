"""Fixtures shared by the unit and integration suites."""

import pytest

from assert_retry.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Settings with short budgets so default-config runs finish quickly.

    Fields can be reassigned per test, e.g. `test_settings.DEFAULT_MAX_ATTEMPTS = 2`.
    """
    return Settings(
        APP_NAME="assert-retry-tests",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        DEFAULT_TIMEOUT_MS=200,
        DEFAULT_MAX_ATTEMPTS=None,
        DEFAULT_SLEEP_MS=5,
        DEFAULT_RETRY_ON_EXCEPTION=False,
    )
