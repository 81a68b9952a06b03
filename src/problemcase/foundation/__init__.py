"""Foundation - configuration and logging setup shared by problemcase modules."""

from __future__ import annotations

from .config import MAX_STACK_DEPTH, ProblemSettings, clear_settings_cache, get_settings
from .logs import configure_logging

__all__ = [
    "MAX_STACK_DEPTH",
    "ProblemSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
