"""
Per-attempt outcomes.

The executor produces exactly one outcome per attempt and hands it to the
caller's on_attempt observer. Outcomes are transient; nothing in the
engine stores them.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """Attempt returned a result; the call is finished."""

    attempt: int
    result: Any
    operation: str = "operation"

    @property
    def will_retry(self) -> bool:
        return False


@dataclass(frozen=True)
class RetryableFailure:
    """Attempt failed and another attempt follows after `delay` seconds."""

    attempt: int
    error: BaseException
    delay: float
    operation: str = "operation"

    @property
    def will_retry(self) -> bool:
        return True


@dataclass(frozen=True)
class TerminalFailure:
    """Attempt failed and no further attempts are made; `error` is re-raised."""

    attempt: int
    error: BaseException
    operation: str = "operation"

    @property
    def will_retry(self) -> bool:
        return False


AttemptOutcome = Union[Success, RetryableFailure, TerminalFailure]
