"""
Configuration settings for Assert Retry.

Defaults used when an eventual assertion is made without an explicit
RetryConfig. All settings are loaded from environment variables prefixed
with ASSERT_RETRY_ (e.g. ASSERT_RETRY_DEFAULT_TIMEOUT_MS=10000); a .env file
is read for local development.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASSERT_RETRY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "assert-retry"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches logs to JSON

    # === Retry defaults ===
    DEFAULT_TIMEOUT_MS: int = Field(default=5000, gt=0)
    DEFAULT_MAX_ATTEMPTS: Optional[int] = Field(default=None, ge=1)  # None = bounded by timeout only
    DEFAULT_SLEEP_MS: int = Field(default=100, gt=0)
    DEFAULT_RETRY_ON_EXCEPTION: bool = False  # True = tolerate any Exception
