"""Shared pytest fixtures for all test suites."""

import pytest

from backend.app.models.common import Coordinate
from backend.app.tokens.counter import TokenCounter
from tests.helpers import word_counter


@pytest.fixture
def token_counter() -> TokenCounter:
    """Token counter that counts whitespace-separated words."""
    return word_counter()


@pytest.fixture
def start() -> Coordinate:
    """Trip starting point (Beirut)."""
    return Coordinate(lat=33.8938, lng=35.5018)
