"""
Weather service: binds upstream operations to the retry executor.

Each named operation (current weather, local forecast, 9-day forecast) is
an explicit WeatherOperation registration carrying its RetryConfig and
its terminal failure policy:

    FailurePolicy.FALLBACK   -> fallback envelope (data=None, fromFallback=True)
    FailurePolicy.PROPAGATE  -> last error re-raised to the boundary layer

Default registrations:
    current_weather    FALLBACK
    local_forecast     FALLBACK
    nine_day_forecast  PROPAGATE
"""

import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from weather_proxy.config import Settings
from weather_proxy.models.enums import WeatherDataType, WeatherLang
from weather_proxy.models.responses import (
    CallResult,
    RapidFireResult,
    RetryInfo,
    RetryStatisticsResponse,
    WeatherApiResponse,
)
from weather_proxy.models.weather import (
    CurrentWeatherResponse,
    LocalForecastResponse,
    NineDayForecastResponse,
    UpstreamModel,
)
from weather_proxy.monitoring.metrics import (
    fallback_responses_total,
    retry_delay_seconds,
    upstream_attempts_total,
)
from weather_proxy.retry.config import RetryConfig
from weather_proxy.retry.engine import RetryExecutor
from weather_proxy.retry.outcome import AttemptOutcome, RetryableFailure, Success
from weather_proxy.retry.statistics import RetryStatistics, StatisticsRegister
from weather_proxy.weather.client import WeatherApiClient
from weather_proxy.weather.exceptions import SimulatedFailureError, WeatherApiError

logger = structlog.get_logger(__name__)


class FailurePolicy(str, Enum):
    """What a call site does once every attempt has failed."""

    FALLBACK = "fallback"
    PROPAGATE = "propagate"


@dataclass(frozen=True)
class WeatherOperation:
    """
    Registration of one upstream operation.

    Attributes:
        name: Operation name used in logs and metrics
        data_type: Upstream dataType
        payload_model: Model the upstream payload is validated into
        retry_config: Retry policy for this operation
        failure_policy: Terminal failure handling
    """

    name: str
    data_type: WeatherDataType
    payload_model: type[UpstreamModel]
    retry_config: RetryConfig
    failure_policy: FailurePolicy


CURRENT_WEATHER = "current_weather"
LOCAL_FORECAST = "local_forecast"
NINE_DAY_FORECAST = "nine_day_forecast"


def default_operations(retry_config: RetryConfig) -> dict[str, WeatherOperation]:
    """Build the default operation registrations sharing one retry policy."""
    return {
        CURRENT_WEATHER: WeatherOperation(
            name=CURRENT_WEATHER,
            data_type=WeatherDataType.CURRENT,
            payload_model=CurrentWeatherResponse,
            retry_config=retry_config,
            failure_policy=FailurePolicy.FALLBACK,
        ),
        LOCAL_FORECAST: WeatherOperation(
            name=LOCAL_FORECAST,
            data_type=WeatherDataType.LOCAL_FORECAST,
            payload_model=LocalForecastResponse,
            retry_config=retry_config,
            failure_policy=FailurePolicy.FALLBACK,
        ),
        NINE_DAY_FORECAST: WeatherOperation(
            name=NINE_DAY_FORECAST,
            data_type=WeatherDataType.NINE_DAY_FORECAST,
            payload_model=NineDayForecastResponse,
            retry_config=retry_config,
            failure_policy=FailurePolicy.PROPAGATE,
        ),
    }


class WeatherService:
    """
    Proxy service for the HK Observatory weather API.

    Every upstream call runs through the RetryExecutor; every attempt is
    recorded in the injected StatisticsRegister. Simulated failures (demo)
    are injected before the upstream request so the retry behaviour is
    visible even when the upstream is healthy.

    Attributes:
        client: Upstream API client
        statistics: Shared statistics register
        executor: Retry executor
        operations: Operation registrations by name
    """

    def __init__(
        self,
        client: WeatherApiClient,
        statistics: StatisticsRegister,
        settings: Settings,
        executor: Optional[RetryExecutor] = None,
        operations: Optional[dict[str, WeatherOperation]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.statistics = statistics
        self.executor = executor if executor is not None else RetryExecutor()
        self.operations = (
            operations
            if operations is not None
            else default_operations(RetryConfig.from_settings(settings))
        )
        self.simulate_failures = settings.SIMULATE_FAILURES
        self.simulated_failure_rate = settings.SIMULATED_FAILURE_RATE
        self.rapid_fire_max_calls = settings.RAPID_FIRE_MAX_CALLS
        self._rng = rng if rng is not None else random.Random()

        logger.info(
            "WeatherService initialized",
            operations={name: op.failure_policy.value for name, op in self.operations.items()},
            simulate_failures=self.simulate_failures,
            simulated_failure_rate=self.simulated_failure_rate,
        )

    async def get_current_weather(
        self, lang: WeatherLang = WeatherLang.ENGLISH
    ) -> WeatherApiResponse[CurrentWeatherResponse]:
        return await self.call(CURRENT_WEATHER, lang)

    async def get_local_forecast(
        self, lang: WeatherLang = WeatherLang.ENGLISH
    ) -> WeatherApiResponse[LocalForecastResponse]:
        return await self.call(LOCAL_FORECAST, lang)

    async def get_nine_day_forecast(
        self, lang: WeatherLang = WeatherLang.ENGLISH
    ) -> WeatherApiResponse[NineDayForecastResponse]:
        return await self.call(NINE_DAY_FORECAST, lang)

    async def call(self, operation_name: str, lang: WeatherLang) -> WeatherApiResponse:
        """
        Execute a registered operation through the retry executor.

        Args:
            operation_name: Key in `operations`
            lang: Upstream language

        Returns:
            Success envelope, or a fallback envelope for FALLBACK operations

        Raises:
            KeyError: Unknown operation name
            Exception: Terminal failure of a PROPAGATE operation, verbatim
        """
        operation = self.operations[operation_name]
        envelope_type = WeatherApiResponse[operation.payload_model]
        fetched_at = datetime.now(timezone.utc)

        try:
            payload = await self.executor.execute(
                lambda: self._attempt(operation, lang),
                operation.retry_config,
                on_attempt=self._on_attempt,
                name=operation.name,
            )
        except Exception as exc:
            if operation.failure_policy is FailurePolicy.PROPAGATE:
                raise

            fallback_responses_total.labels(operation=operation.name).inc()
            logger.warning(
                "Returning fallback response",
                operation=operation.name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return envelope_type(
                data=None,
                data_type=operation.data_type.value,
                lang=lang.value,
                fetched_at=fetched_at,
                from_fallback=True,
                error=str(exc),
                retry_info=self._retry_info(operation),
            )

        return envelope_type(
            data=payload,
            data_type=operation.data_type.value,
            lang=lang.value,
            fetched_at=fetched_at,
            from_fallback=False,
            retry_info=self._retry_info(operation),
        )

    async def _attempt(self, operation: WeatherOperation, lang: WeatherLang) -> UpstreamModel:
        """One upstream attempt: optional simulated failure, fetch, validate."""
        if self.simulate_failures and self._rng.random() < self.simulated_failure_rate:
            logger.warning(
                "Simulating random failure",
                operation=operation.name,
                rate=self.simulated_failure_rate,
            )
            raise SimulatedFailureError(
                "Simulated failure to demonstrate retry behavior",
                details={"rate": self.simulated_failure_rate},
            )

        payload = await self.client.fetch(operation.data_type, lang)

        try:
            return operation.payload_model.model_validate(payload)
        except PydanticValidationError as e:
            raise WeatherApiError(
                f"Unexpected {operation.data_type.value} payload from weather API",
                details={"errors": e.errors(include_url=False)},
            ) from e

    def _on_attempt(self, outcome: AttemptOutcome) -> None:
        """Attempt observer: statistics register plus Prometheus counters."""
        self.statistics.record(outcome)

        if isinstance(outcome, Success):
            label = "success"
        elif isinstance(outcome, RetryableFailure):
            label = "retryable_failure"
            retry_delay_seconds.labels(operation=outcome.operation).observe(outcome.delay)
        else:
            label = "terminal_failure"
        upstream_attempts_total.labels(operation=outcome.operation, outcome=label).inc()

    def _retry_info(self, operation: WeatherOperation) -> RetryInfo:
        return RetryInfo(
            total_attempts=self.statistics.snapshot().total_attempts,
            retry_enabled=True,
            max_retries=operation.retry_config.max_retries,
        )

    def get_retry_statistics(self) -> RetryStatistics:
        return self.statistics.snapshot()

    def reset_statistics(self) -> None:
        self.statistics.reset()

    async def rapid_fire(self, count: int = 10) -> RapidFireResult:
        """
        Issue `count` sequential current-weather calls (demo).

        The count is clamped to [1, RAPID_FIRE_MAX_CALLS].
        """
        total = max(1, min(count, self.rapid_fire_max_calls))
        results: list[CallResult] = []

        logger.info("Rapid-fire demo started", requested=count, calls=total)

        for index in range(total):
            start_time = time.perf_counter()
            try:
                response = await self.get_current_weather()
                success = not response.from_fallback
                error = response.error
            except Exception as exc:
                success = False
                error = str(exc)

            results.append(
                CallResult(
                    call_number=index + 1,
                    success=success,
                    error=error,
                    duration_ms=int((time.perf_counter() - start_time) * 1000),
                )
            )

        success_count = sum(1 for r in results if r.success)
        logger.info("Rapid-fire demo finished", calls=total, successes=success_count)

        return RapidFireResult(
            total_calls=len(results),
            success_count=success_count,
            failure_count=len(results) - success_count,
            calls=results,
            retry_statistics=RetryStatisticsResponse.from_statistics(self.statistics.snapshot()),
        )
