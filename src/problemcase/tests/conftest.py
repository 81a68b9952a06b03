"""Shared fixtures for problemcase tests."""

from typing import Callable

import pytest

from problemcase.foundation.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings() -> object:
    """Reload settings from the (monkeypatched) environment for each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def zero_source() -> Callable[[int], bytes]:
    """Deterministic id source."""
    return lambda n: b"\x00" * n
