"""
Unit tests for Settings bounds.

Out-of-range environment values are rejected when Settings loads.
"""

import pytest
from pydantic import ValidationError

from weather_proxy.config import Settings


@pytest.mark.parametrize(
    "overrides",
    [
        {"SIMULATED_FAILURE_RATE": -0.1},
        {"SIMULATED_FAILURE_RATE": 1.5},
        {"RAPID_FIRE_MAX_CALLS": 0},
        {"RETRY_MAX_RETRIES": -1},
        {"RETRY_INITIAL_DELAY_MS": -500},
        {"RETRY_MULTIPLIER": 0.5},
        {"RETRY_JITTER_MS": -1},
        {"RETRY_MAX_DELAY_MS": -1},
        {"RETRY_ATTEMPT_TIMEOUT_MS": 0},
        {"WEATHER_API_TIMEOUT": 0},
    ],
)
def test_out_of_range_values_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_out_of_range_env_value_rejected(monkeypatch):
    monkeypatch.setenv("RETRY_MAX_RETRIES", "-1")

    with pytest.raises(ValidationError):
        Settings()


def test_boundary_values_accepted():
    settings = Settings(
        SIMULATED_FAILURE_RATE=1.0,
        RAPID_FIRE_MAX_CALLS=1,
        RETRY_MAX_RETRIES=0,
        RETRY_MULTIPLIER=1.0,
        RETRY_JITTER_MS=0,
        RETRY_ATTEMPT_TIMEOUT_MS=None,
    )

    assert settings.RETRY_ATTEMPT_TIMEOUT_MS is None
    assert settings.SIMULATED_FAILURE_RATE == 1.0
