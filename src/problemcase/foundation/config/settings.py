"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated configuration from environment variables
with sensible defaults. Supports .env files.

Example:
    >>> from problemcase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.type_base_uri
    'https://example.com/errors'
    >>> settings.stack_depth
    32

    # Or with environment variables:
    # PROBLEMCASE_TYPE_BASE_URI=https://errors.example.org
    # PROBLEMCASE_STACK_DEPTH=16
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_STACK_DEPTH = 32


class ProblemSettings(BaseSettings):
    """Root settings for problemcase.

    Example environment variables:
        PROBLEMCASE_TYPE_BASE_URI=https://errors.example.org
        PROBLEMCASE_DEFAULT_TYPE=about:blank
        PROBLEMCASE_STACK_DEPTH=16
        PROBLEMCASE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="PROBLEMCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    type_base_uri: str = Field(
        default="https://example.com/errors",
        description="Base URI for problem type URIs ({base}/{category}/{title})",
    )
    default_type: str = Field(
        default="about:blank",
        description="Type used when a problem has no category or title",
    )
    stack_depth: Annotated[int, Field(ge=1, le=MAX_STACK_DEPTH)] = MAX_STACK_DEPTH
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("type_base_uri", mode="after")
    @classmethod
    def _strip_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Normalize level name to uppercase."""
        return v.upper() if isinstance(v, str) else v


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> ProblemSettings:
    """Get the global settings instance (cached)."""
    return ProblemSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
