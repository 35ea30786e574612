"""
Backoff policy: exponential growth, jitter and a hard cap.

    base     = initial_delay * multiplier ** (attempt - 1)
    capped   = min(base, max_delay)
    jittered = capped + uniform(-jitter, +jitter)
    delay    = clamp(jittered, 0, max_delay)

Pure computation apart from the random source, which is injectable so
tests can use a seeded or stubbed generator.
"""

import random
from typing import Optional

from weather_proxy.retry.config import RetryConfig


class BackoffPolicy:
    """
    Computes the delay before the next attempt.

    Attributes:
        rng: Random source used for jitter (defaults to a private Random())
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @staticmethod
    def base_delay(attempt: int, config: RetryConfig) -> float:
        """Un-jittered delay after failed attempt `attempt`, capped at max_delay."""
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")

        # Very large attempt indexes overflow the float range
        try:
            base = config.initial_delay * config.multiplier ** (attempt - 1)
        except OverflowError:
            base = config.max_delay
        return min(base, config.max_delay)

    def compute_delay(self, attempt: int, config: RetryConfig) -> float:
        """
        Delay in seconds after failed attempt `attempt` (1-based).

        Args:
            attempt: Index of the attempt that just failed (>= 1)
            config: Retry policy

        Returns:
            Delay in seconds, always within [0, max_delay]
        """
        capped = self.base_delay(attempt, config)

        if config.jitter > 0:
            jittered = capped + self.rng.uniform(-config.jitter, config.jitter)
        else:
            jittered = capped

        return min(max(jittered, 0.0), config.max_delay)


_default_policy = BackoffPolicy()


def compute_delay(
    attempt: int, config: RetryConfig, rng: Optional[random.Random] = None
) -> float:
    """Module-level shortcut for BackoffPolicy(rng).compute_delay()."""
    policy = BackoffPolicy(rng) if rng is not None else _default_policy
    return policy.compute_delay(attempt, config)
