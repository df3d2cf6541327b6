"""
Configuration settings for the ScopeDB client.

All settings are loaded from environment variables (prefixed with
``SCOPEDB_``) with sensible defaults. Use a .env file for local development.
"""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCOPEDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Service ===
    ENDPOINT: str = "http://localhost:6543"
    HTTP_TIMEOUT: float = 60.0  # seconds, per attempt
    MAX_CONNECTIONS: int = 10
    MAX_KEEPALIVE_CONNECTIONS: int = 5

    # === Retry ===
    RETRY_BASE_DELAY: float = 1.0  # seconds between attempts (before jitter)
    RETRY_JITTER: float = 0.15  # fraction of RETRY_BASE_DELAY
    RETRY_MAX_ELAPSED: Optional[float] = 60.0  # None disables the deadline
    RETRY_MAX_ATTEMPTS: Optional[int] = None

    # === Logging ===
    CONFIGURE_LOGGING: bool = False  # let ScopeDBClient.from_settings install handlers
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches to JSON output

    @field_validator("RETRY_JITTER")
    @classmethod
    def _check_jitter(cls, value: float) -> float:
        if not 0.0 <= value < 1.0:
            raise ValueError("RETRY_JITTER must be in [0, 1)")
        return value

    @field_validator("RETRY_BASE_DELAY")
    @classmethod
    def _check_base_delay(cls, value: float) -> float:
        if value < 0:
            raise ValueError("RETRY_BASE_DELAY must be >= 0")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
