"""
Retry configuration.

RetryConfig is an immutable value supplied per call type. All invariants
are checked in __post_init__, so an invalid policy fails at startup rather
than on the first failing request.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional

from weather_proxy.retry.exceptions import RetryConfigError

if TYPE_CHECKING:
    from weather_proxy.config import Settings


def retry_all(error: BaseException) -> bool:
    """Default retry predicate: every operation failure is retryable."""
    return True


@dataclass(frozen=True)
class RetryConfig:
    """
    Fixed retry/backoff policy for one call type.

    Durations are expressed in seconds.

    Attributes:
        max_retries: Retries after the initial attempt (total = max_retries + 1)
        initial_delay: Delay before the first retry
        multiplier: Exponential growth factor applied per retry
        jitter: Maximum random perturbation added to or subtracted from a delay
        max_delay: Hard cap on any single delay
        attempt_timeout: Per-attempt timeout (None = unbounded)
        retry_on: Predicate deciding whether a failure may be retried
    """

    max_retries: int = 3
    initial_delay: float = 0.5
    multiplier: float = 2.0
    jitter: float = 0.1
    max_delay: float = 5.0
    attempt_timeout: Optional[float] = None
    retry_on: Callable[[BaseException], bool] = field(default=retry_all, compare=False)

    def __post_init__(self) -> None:
        """Validate config invariants."""
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise RetryConfigError("max_retries", self.max_retries, "must be an integer")
        if self.max_retries < 0:
            raise RetryConfigError("max_retries", self.max_retries, "must be >= 0")

        if self.initial_delay < 0:
            raise RetryConfigError("initial_delay", self.initial_delay, "must be >= 0")

        if self.multiplier < 1.0:
            raise RetryConfigError("multiplier", self.multiplier, "must be >= 1.0")

        if self.jitter < 0:
            raise RetryConfigError("jitter", self.jitter, "must be >= 0")

        if self.max_delay < self.initial_delay:
            raise RetryConfigError(
                "max_delay", self.max_delay, f"must be >= initial_delay ({self.initial_delay})"
            )

        if self.attempt_timeout is not None and self.attempt_timeout <= 0:
            raise RetryConfigError("attempt_timeout", self.attempt_timeout, "must be > 0")

        if not callable(self.retry_on):
            raise RetryConfigError("retry_on", self.retry_on, "must be callable")

    @property
    def total_attempts(self) -> int:
        """Maximum number of attempts, including the initial one."""
        return self.max_retries + 1

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        retry_on: Callable[[BaseException], bool] = retry_all,
    ) -> "RetryConfig":
        """
        Build a RetryConfig from application settings.

        Settings carry milliseconds; the config uses seconds.
        """
        attempt_timeout = (
            settings.RETRY_ATTEMPT_TIMEOUT_MS / 1000
            if settings.RETRY_ATTEMPT_TIMEOUT_MS is not None
            else None
        )
        return cls(
            max_retries=settings.RETRY_MAX_RETRIES,
            initial_delay=settings.RETRY_INITIAL_DELAY_MS / 1000,
            multiplier=settings.RETRY_MULTIPLIER,
            jitter=settings.RETRY_JITTER_MS / 1000,
            max_delay=settings.RETRY_MAX_DELAY_MS / 1000,
            attempt_timeout=attempt_timeout,
            retry_on=retry_on,
        )
