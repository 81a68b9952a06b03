"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import MAX_STACK_DEPTH, ProblemSettings, clear_settings_cache, get_settings

__all__ = [
    "MAX_STACK_DEPTH",
    "ProblemSettings",
    "clear_settings_cache",
    "get_settings",
]
