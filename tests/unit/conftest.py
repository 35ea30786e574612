"""Unit test fixtures (mocks and stubs).

Provides scripted operations and stub random sources for testing the
retry engine without timing dependencies.
"""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest


class UpstreamDown(Exception):
    """Failure raised by scripted operations."""


@pytest.fixture
def make_operation():
    """Factory fixture for an async operation that fails `failures` times, then succeeds.

    Usage:
        def test_something(make_operation):
            operation = make_operation(failures=2, result="ok")
            operation = make_operation(failures=None)  # always fails
    """
    def _create(failures: int | None = 0, result: object = "ok", error: Exception | None = None):
        err = error if error is not None else UpstreamDown("upstream down")
        if failures is None:
            return AsyncMock(side_effect=err)
        return AsyncMock(side_effect=[err] * failures + [result])

    return _create


@pytest.fixture
def stub_rng():
    """Factory fixture for a Random stand-in whose uniform() returns a fixed offset."""
    def _create(offset: float) -> MagicMock:
        rng = MagicMock(spec=random.Random)
        rng.uniform.return_value = offset
        return rng

    return _create
