"""
Retry/backoff engine.

A fixed-policy, per-call exponential-backoff retrier with jitter and a
statistics side-channel:

1. **RetryConfig**: Immutable policy (retries, delays, cap, timeout, predicate)
2. **BackoffPolicy**: Delay before the next attempt (growth, jitter, cap)
3. **RetryExecutor**: Sequential attempts, backoff sleeps, outcome events
4. **StatisticsRegister**: Thread-safe counters fed by outcome events

Usage:
    >>> from weather_proxy.retry import RetryConfig, RetryExecutor, StatisticsRegister
    >>> register = StatisticsRegister()
    >>> executor = RetryExecutor()
    >>> data = await executor.execute(fetch, RetryConfig(max_retries=3), register.record)
"""

from weather_proxy.retry.backoff import BackoffPolicy, compute_delay
from weather_proxy.retry.config import RetryConfig, retry_all
from weather_proxy.retry.engine import RetryExecutor, retryable
from weather_proxy.retry.exceptions import AttemptTimeoutError, RetryConfigError
from weather_proxy.retry.outcome import (
    AttemptOutcome,
    RetryableFailure,
    Success,
    TerminalFailure,
)
from weather_proxy.retry.statistics import RetryStatistics, StatisticsRegister

__all__ = [
    "AttemptOutcome",
    "AttemptTimeoutError",
    "BackoffPolicy",
    "RetryConfig",
    "RetryConfigError",
    "RetryExecutor",
    "RetryStatistics",
    "RetryableFailure",
    "StatisticsRegister",
    "Success",
    "TerminalFailure",
    "compute_delay",
    "retry_all",
    "retryable",
]
