"""
Statistics register for retry/call bookkeeping.

A single mutex-guarded set of counters shared by every in-flight call.
The lock guards only the counter update itself; it is never held across
an await or a backoff sleep.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from weather_proxy.retry.outcome import AttemptOutcome, Success

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RetryStatistics:
    """
    Point-in-time copy of the register.

    Attributes:
        total_attempts: Every attempt, regardless of outcome
        successful_calls: Attempts that returned a result
        failed_calls: Attempts that raised
        retried_calls: Failed attempts followed by another attempt
        simulated_failure_rate: Echoed simulated failure probability
        simulate_failures_enabled: Echoed simulated failure switch
        last_call_timestamp: Time of the most recent attempt (UTC)
    """

    total_attempts: int
    successful_calls: int
    failed_calls: int
    retried_calls: int
    simulated_failure_rate: float
    simulate_failures_enabled: bool
    last_call_timestamp: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        """Boundary shape (camelCase keys, ISO timestamp)."""
        return {
            "totalAttempts": self.total_attempts,
            "successfulCalls": self.successful_calls,
            "failedCalls": self.failed_calls,
            "retriedCalls": self.retried_calls,
            "simulatedFailureRate": self.simulated_failure_rate,
            "simulateFailuresEnabled": self.simulate_failures_enabled,
            "lastCallTimestamp": (
                self.last_call_timestamp.isoformat() if self.last_call_timestamp else None
            ),
        }


class StatisticsRegister:
    """
    Concurrency-safe call statistics.

    Safe to share between asyncio tasks and worker threads. Simulated
    failure settings are echoed in snapshots but never mutated here.
    """

    def __init__(
        self,
        simulated_failure_rate: float = 0.0,
        simulate_failures_enabled: bool = False,
    ):
        self._lock = threading.Lock()
        self._total_attempts = 0
        self._successful_calls = 0
        self._failed_calls = 0
        self._retried_calls = 0
        self._last_call_timestamp: Optional[datetime] = None
        self._simulated_failure_rate = simulated_failure_rate
        self._simulate_failures_enabled = simulate_failures_enabled

    def record_attempt(self) -> None:
        now = datetime.now(timezone.utc)
        with self._lock:
            self._total_attempts += 1
            self._last_call_timestamp = now

    def record_success(self) -> None:
        with self._lock:
            self._successful_calls += 1

    def record_failure(self, will_retry: bool) -> None:
        with self._lock:
            self._failed_calls += 1
            if will_retry:
                self._retried_calls += 1

    def record(self, outcome: AttemptOutcome) -> None:
        """
        Record one attempt outcome; usable directly as an on_attempt observer.

        All counters move under one lock acquisition, so a snapshot never
        sees an attempt without its success or failure.
        """
        now = datetime.now(timezone.utc)
        with self._lock:
            self._total_attempts += 1
            self._last_call_timestamp = now
            if isinstance(outcome, Success):
                self._successful_calls += 1
            else:
                self._failed_calls += 1
                if outcome.will_retry:
                    self._retried_calls += 1

    def snapshot(self) -> RetryStatistics:
        with self._lock:
            return RetryStatistics(
                total_attempts=self._total_attempts,
                successful_calls=self._successful_calls,
                failed_calls=self._failed_calls,
                retried_calls=self._retried_calls,
                simulated_failure_rate=self._simulated_failure_rate,
                simulate_failures_enabled=self._simulate_failures_enabled,
                last_call_timestamp=self._last_call_timestamp,
            )

    def reset(self) -> None:
        """Zero the four counters; echoed config and timestamp are kept."""
        with self._lock:
            self._total_attempts = 0
            self._successful_calls = 0
            self._failed_calls = 0
            self._retried_calls = 0
        logger.info("Statistics reset")
