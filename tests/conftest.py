"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from collections import defaultdict, deque
from pathlib import Path
from typing import Any, Dict
from unittest.mock import AsyncMock

import httpx
import pytest

from weather_proxy.config import Settings
from weather_proxy.retry.config import RetryConfig
from weather_proxy.retry.engine import RetryExecutor
from weather_proxy.retry.statistics import StatisticsRegister
from weather_proxy.weather.client import WeatherApiClient
from weather_proxy.weather.service import WeatherService

FIXTURES_DIR = Path(__file__).parent / "fixtures"

FIXTURE_FILES = {
    "rhrread": "current_weather.json",
    "flw": "local_forecast.json",
    "fnd": "nine_day_forecast.json",
}


def load_fixture(name: str) -> Dict[str, Any]:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


class FakeUpstream:
    """Scriptable stand-in for the HK Observatory API.

    Responses are queued per dataType; once a queue is empty the sample
    fixture payload is served with HTTP 200.

    Usage:
        upstream.queue("rhrread", 500, 500)        # two failures, then fixture
        upstream.fail_always("fnd", status=503)
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queues: dict[str, deque] = defaultdict(deque)
        self._always: dict[str, int] = {}

    def queue(self, data_type: str, *responses) -> None:
        """Queue responses: an int is an error status, a dict a 200 JSON body."""
        for item in responses:
            if isinstance(item, int):
                self._queues[data_type].append(httpx.Response(item, text="Server Error"))
            elif isinstance(item, httpx.Response):
                self._queues[data_type].append(item)
            else:
                self._queues[data_type].append(httpx.Response(200, json=item))

    def fail_always(self, data_type: str, status: int = 500) -> None:
        self._always[data_type] = status

    def calls(self, data_type: str | None = None) -> int:
        if data_type is None:
            return len(self.requests)
        return sum(1 for r in self.requests if r.url.params.get("dataType") == data_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        data_type = request.url.params.get("dataType", "")

        if data_type in self._always:
            return httpx.Response(self._always[data_type], text="Server Error")
        if self._queues[data_type]:
            return self._queues[data_type].popleft()
        if data_type in FIXTURE_FILES:
            return httpx.Response(200, json=load_fixture(FIXTURE_FILES[data_type]))
        return httpx.Response(404, text="Unknown dataType")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Simulated failures are off so upstream failures are fully scripted.
    """
    return Settings(
        # === Application ===
        APP_NAME="Weather Proxy (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Upstream ===
        WEATHER_API_BASE_URL="https://weather.test/weatherAPI/opendata",
        WEATHER_API_RESOURCE="weather.php",
        WEATHER_API_TIMEOUT=5.0,

        # === Simulated failures ===
        SIMULATE_FAILURES=False,
        SIMULATED_FAILURE_RATE=0.3,

        # === Retry ===
        RETRY_MAX_RETRIES=3,
        RETRY_INITIAL_DELAY_MS=500,
        RETRY_MULTIPLIER=2.0,
        RETRY_JITTER_MS=100,
        RETRY_MAX_DELAY_MS=5000,
        RETRY_ATTEMPT_TIMEOUT_MS=None,

        # === Demo ===
        RAPID_FIRE_MAX_CALLS=50,

        PROMETHEUS_ENABLED=False,
    )


@pytest.fixture
def current_weather_payload() -> Dict[str, Any]:
    return load_fixture("current_weather.json")


@pytest.fixture
def demo_retry_config() -> RetryConfig:
    """500ms initial delay, x2.0, 100ms jitter, 5000ms cap, 3 retries."""
    return RetryConfig(
        max_retries=3,
        initial_delay=0.5,
        multiplier=2.0,
        jitter=0.1,
        max_delay=5.0,
    )


@pytest.fixture
def fake_sleep() -> AsyncMock:
    """Awaitable sleep stand-in that records requested delays without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def executor(fake_sleep: AsyncMock) -> RetryExecutor:
    """RetryExecutor that never actually sleeps."""
    return RetryExecutor(sleep=fake_sleep)


@pytest.fixture
def register(test_settings: Settings) -> StatisticsRegister:
    return StatisticsRegister(
        simulated_failure_rate=test_settings.SIMULATED_FAILURE_RATE,
        simulate_failures_enabled=test_settings.SIMULATE_FAILURES,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def upstream_client(upstream: FakeUpstream, test_settings: Settings) -> WeatherApiClient:
    """WeatherApiClient wired to the fake upstream."""
    return WeatherApiClient(
        base_url=test_settings.WEATHER_API_BASE_URL,
        resource=test_settings.WEATHER_API_RESOURCE,
        timeout=test_settings.WEATHER_API_TIMEOUT,
        transport=upstream.transport,
    )


@pytest.fixture
def create_weather_service(
    upstream_client: WeatherApiClient,
    register: StatisticsRegister,
    executor: RetryExecutor,
    test_settings: Settings,
):
    """Factory fixture to build a WeatherService with overridden settings.

    Usage:
        def test_something(create_weather_service):
            service = create_weather_service(SIMULATE_FAILURES=True)
    """
    def _create(**overrides) -> WeatherService:
        service_settings = test_settings.model_copy(update=overrides)
        return WeatherService(
            client=upstream_client,
            statistics=register,
            settings=service_settings,
            executor=executor,
        )

    return _create


@pytest.fixture
def weather_service(create_weather_service) -> WeatherService:
    return create_weather_service()
