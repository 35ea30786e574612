"""
Unit tests for the backoff policy.

Jitter is made deterministic by injecting a stub or seeded random source.
"""

import random

import pytest

from weather_proxy.retry.backoff import BackoffPolicy, compute_delay
from weather_proxy.retry.config import RetryConfig


@pytest.fixture
def config() -> RetryConfig:
    return RetryConfig(max_retries=10, initial_delay=0.5, multiplier=2.0, jitter=0.1, max_delay=5.0)


@pytest.mark.parametrize(
    "attempt,expected",
    [(1, 0.5), (2, 1.0), (3, 2.0), (4, 4.0), (5, 5.0), (6, 5.0)],
)
def test_base_delay_grows_exponentially_until_cap(config, attempt, expected):
    assert BackoffPolicy.base_delay(attempt, config) == pytest.approx(expected)


def test_base_delay_is_non_decreasing(config):
    delays = [BackoffPolicy.base_delay(n, config) for n in range(1, 40)]

    assert delays == sorted(delays)
    assert max(delays) == config.max_delay


def test_base_delay_survives_float_overflow(config):
    """Huge attempt indexes saturate at max_delay instead of raising."""
    assert BackoffPolicy.base_delay(5000, config) == config.max_delay


def test_multiplier_one_gives_constant_delay():
    config = RetryConfig(initial_delay=0.3, multiplier=1.0, jitter=0.0, max_delay=1.0)
    policy = BackoffPolicy()

    assert [policy.compute_delay(n, config) for n in (1, 2, 5)] == [0.3, 0.3, 0.3]


def test_zero_jitter_skips_random_source(stub_rng):
    config = RetryConfig(initial_delay=0.5, jitter=0.0, max_delay=5.0)
    rng = stub_rng(0.0)

    assert BackoffPolicy(rng).compute_delay(2, config) == pytest.approx(1.0)
    rng.uniform.assert_not_called()


def test_jitter_is_applied_symmetrically(config, stub_rng):
    rng = stub_rng(0.07)

    delay = BackoffPolicy(rng).compute_delay(2, config)

    assert delay == pytest.approx(1.07)
    rng.uniform.assert_called_once_with(-0.1, 0.1)


def test_negative_jitter_never_goes_below_zero(stub_rng):
    config = RetryConfig(initial_delay=0.05, jitter=0.1, max_delay=1.0)

    delay = BackoffPolicy(stub_rng(-0.1)).compute_delay(1, config)

    assert delay == 0.0


def test_positive_jitter_never_exceeds_cap(config, stub_rng):
    """At the cap, positive jitter is clamped back to max_delay."""
    delay = BackoffPolicy(stub_rng(0.1)).compute_delay(8, config)

    assert delay == config.max_delay


@pytest.mark.parametrize("attempt", [0, -1])
def test_attempt_index_must_be_positive(config, attempt):
    with pytest.raises(ValueError):
        BackoffPolicy().compute_delay(attempt, config)


def test_delay_always_within_bounds(config):
    policy = BackoffPolicy(random.Random(1234))

    for attempt in range(1, 30):
        for _ in range(50):
            delay = policy.compute_delay(attempt, config)
            assert 0.0 <= delay <= config.max_delay


def test_first_two_retry_delays_fall_in_jitter_window(demo_retry_config):
    """500ms/x2/100ms: delay before attempt 2 in [0.4, 0.6], before attempt 3 in [0.9, 1.1]."""
    policy = BackoffPolicy(random.Random(42))

    for _ in range(200):
        assert 0.4 <= policy.compute_delay(1, demo_retry_config) <= 0.6
        assert 0.9 <= policy.compute_delay(2, demo_retry_config) <= 1.1


def test_seeded_policies_are_reproducible(config):
    first = BackoffPolicy(random.Random(7))
    second = BackoffPolicy(random.Random(7))

    assert [first.compute_delay(n, config) for n in range(1, 6)] == [
        second.compute_delay(n, config) for n in range(1, 6)
    ]


def test_module_level_compute_delay_uses_injected_rng(config, stub_rng):
    assert compute_delay(1, config, rng=stub_rng(-0.05)) == pytest.approx(0.45)


def test_module_level_compute_delay_default_rng(config):
    assert 0.4 <= compute_delay(1, config) <= 0.6
