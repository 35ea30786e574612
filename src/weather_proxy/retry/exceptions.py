"""
Retry engine exceptions.

Operation failures are never wrapped by the engine: the last error raised
by the wrapped operation is re-raised verbatim. The exceptions here cover
the engine's own failure modes (bad configuration, attempt timeouts).
"""


class RetryConfigError(ValueError):
    """
    Raised when a RetryConfig violates its invariants.

    Always raised at construction time, never while executing a call.

    Attributes:
        field: Name of the offending config field
        value: Rejected value
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid retry config: {field}={value!r} ({reason})")


class AttemptTimeoutError(TimeoutError):
    """
    Raised when a single attempt exceeds the configured attempt timeout.

    The executor treats it like any other operation failure: it is retried
    while attempts remain and re-raised as the terminal failure otherwise.

    Attributes:
        attempt: 1-based attempt index that timed out
        timeout: Configured per-attempt timeout in seconds
    """

    def __init__(self, attempt: int, timeout: float) -> None:
        self.attempt = attempt
        self.timeout = timeout
        super().__init__(f"Attempt {attempt} timed out after {timeout:.3f}s")
