"""
Unit tests for environment-driven Settings.
"""

import pytest
from pydantic import ValidationError

from assert_retry.config import Settings


def test_defaults(monkeypatch):
    for name in ("DEFAULT_TIMEOUT_MS", "DEFAULT_SLEEP_MS", "DEFAULT_MAX_ATTEMPTS", "DEFAULT_RETRY_ON_EXCEPTION"):
        monkeypatch.delenv(f"ASSERT_RETRY_{name}", raising=False)

    settings = Settings()

    assert settings.DEFAULT_TIMEOUT_MS == 5000
    assert settings.DEFAULT_SLEEP_MS == 100
    assert settings.DEFAULT_MAX_ATTEMPTS is None
    assert settings.DEFAULT_RETRY_ON_EXCEPTION is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ASSERT_RETRY_DEFAULT_MAX_ATTEMPTS", "7")
    monkeypatch.setenv("ASSERT_RETRY_DEFAULT_RETRY_ON_EXCEPTION", "true")
    monkeypatch.setenv("ASSERT_RETRY_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.DEFAULT_MAX_ATTEMPTS == 7
    assert settings.DEFAULT_RETRY_ON_EXCEPTION is True
    assert settings.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "field, value",
    [
        ("DEFAULT_TIMEOUT_MS", 0),
        ("DEFAULT_SLEEP_MS", -1),
        ("DEFAULT_MAX_ATTEMPTS", 0),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})
