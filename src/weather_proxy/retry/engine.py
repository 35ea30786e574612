"""
Retry executor.

Drives repeated invocation of a fallible async operation under a fixed
RetryConfig:

    Attempting(n) --success--> Succeeded(result)            (return result)
    Attempting(n) --failure, n == max_retries + 1--> Failed  (re-raise error)
    Attempting(n) --failure, retry_on(error) False--> Failed (re-raise error)
    Attempting(n) --failure--> sleep(delay) --> Attempting(n + 1)

The backoff sleep is the only suspension point and holds no lock, so
concurrent executions never wait on each other.

Usage:
    executor = RetryExecutor()
    result = await executor.execute(lambda: client.fetch(...), config, register.record)
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

import structlog

from weather_proxy.retry.backoff import BackoffPolicy
from weather_proxy.retry.config import RetryConfig
from weather_proxy.retry.exceptions import AttemptTimeoutError
from weather_proxy.retry.outcome import (
    AttemptOutcome,
    RetryableFailure,
    Success,
    TerminalFailure,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

AttemptObserver = Callable[[AttemptOutcome], None]


class RetryExecutor:
    """
    Executes an operation with retry and exponential backoff.

    The executor itself is stateless between calls and can be shared by any
    number of concurrent callers.

    Attributes:
        backoff: Backoff policy used to compute delays between attempts
        sleep: Awaitable sleep function (injectable for tests)
    """

    def __init__(
        self,
        backoff: Optional[BackoffPolicy] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.backoff = backoff if backoff is not None else BackoffPolicy()
        self.sleep = sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        config: RetryConfig,
        on_attempt: Optional[AttemptObserver] = None,
        name: str = "operation",
    ) -> T:
        """
        Run `operation` until it succeeds or attempts are exhausted.

        Args:
            operation: Zero-argument callable returning an awaitable
            config: Retry policy
            on_attempt: Observer called once per attempt with its outcome
            name: Operation name for logs and outcomes

        Returns:
            The operation's result

        Raises:
            Exception: The last failure, re-raised verbatim
        """
        attempt = 1

        while True:
            try:
                result = await self._run_attempt(operation, config, attempt)
            except Exception as exc:
                exhausted = attempt >= config.total_attempts
                if exhausted or not config.retry_on(exc):
                    self._notify(
                        on_attempt, TerminalFailure(attempt=attempt, error=exc, operation=name)
                    )
                    logger.error(
                        "Retry terminated",
                        operation=name,
                        attempt=attempt,
                        max_attempts=config.total_attempts,
                        reason="exhausted" if exhausted else "not_retryable",
                        error_type=type(exc).__name__,
                        error=str(exc),
                    )
                    raise

                delay = self.backoff.compute_delay(attempt, config)
                self._notify(
                    on_attempt,
                    RetryableFailure(attempt=attempt, error=exc, delay=delay, operation=name),
                )
                logger.warning(
                    f"Attempt {attempt}/{config.total_attempts} failed, retrying",
                    operation=name,
                    attempt=attempt,
                    next_attempt=attempt + 1,
                    backoff_seconds=round(delay, 3),
                    error_type=type(exc).__name__,
                    error=str(exc),
                )

                await self.sleep(delay)
                attempt += 1
                continue

            self._notify(on_attempt, Success(attempt=attempt, result=result, operation=name))
            if attempt > 1:
                logger.info("Retry succeeded", operation=name, attempt=attempt)
            return result

    @staticmethod
    async def _run_attempt(
        operation: Callable[[], Awaitable[T]], config: RetryConfig, attempt: int
    ) -> T:
        """
        Invoke the operation once, bounded by the per-attempt timeout.

        Only an expired deadline becomes AttemptTimeoutError; a TimeoutError
        raised by the operation itself propagates unchanged.
        """
        if config.attempt_timeout is None:
            return await operation()

        task = asyncio.ensure_future(operation())
        try:
            done, _ = await asyncio.wait({task}, timeout=config.attempt_timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task not in done:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise AttemptTimeoutError(attempt, config.attempt_timeout)

        return task.result()

    @staticmethod
    def _notify(on_attempt: Optional[AttemptObserver], outcome: AttemptOutcome) -> None:
        if on_attempt is not None:
            on_attempt(outcome)


def retryable(
    config: RetryConfig,
    executor: Optional[RetryExecutor] = None,
    on_attempt: Optional[AttemptObserver] = None,
    name: Optional[str] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator binding an async function to a retry policy.

    The binding is explicit: config, executor and observer are arguments,
    not attributes discovered at runtime.

    Example:
        @retryable(RetryConfig(max_retries=2), on_attempt=register.record)
        async def fetch_current(lang: str) -> dict:
            ...
    """
    runner = executor if executor is not None else RetryExecutor()

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        operation_name = name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await runner.execute(
                lambda: func(*args, **kwargs),
                config,
                on_attempt=on_attempt,
                name=operation_name,
            )

        return wrapper

    return decorator
