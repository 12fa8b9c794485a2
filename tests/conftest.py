# tests/conftest.py
"""
Shared fixtures for the Lifeline test-suite.

Data builders live in ``builders.py``; the fixtures here only cover state
that must be reset around a test.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from builders import sequential_ids
from lifeline.core.settings import load_settings


@pytest.fixture  # type: ignore[misc]
def ids() -> Callable[[], str]:
    """Fresh deterministic id factory per test."""
    return sequential_ids()


@pytest.fixture  # type: ignore[misc]
def fresh_settings() -> Iterator[None]:
    """Rebuild settings around a test that mutates the environment."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
