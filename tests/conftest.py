"""Pytest configuration shared by the API tests.

Tests swap the expense store through ``app.dependency_overrides``; the autouse fixture
below clears those overrides after every test so stores never leak between tests.
"""

from collections.abc import Iterator

import pytest

from main import app


@pytest.fixture(autouse=True)
def _reset_dependency_overrides() -> Iterator[None]:
    """Clear FastAPI dependency overrides after each test."""
    yield
    app.dependency_overrides.clear()
