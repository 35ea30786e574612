"""
FastAPI dependency injection for the Weather Proxy.

Provides singleton instances of shared resources. The statistics register
is created once and handed explicitly to the service; nothing reaches it
through a module-level global.
"""

from functools import lru_cache

from weather_proxy.config import Settings, settings
from weather_proxy.retry.engine import RetryExecutor
from weather_proxy.retry.statistics import StatisticsRegister
from weather_proxy.weather.client import WeatherApiClient
from weather_proxy.weather.service import WeatherService


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_statistics_register() -> StatisticsRegister:
    """
    Get the process-wide statistics register.

    Echoes the simulated failure settings for visibility in snapshots.
    """
    app_settings = get_settings()
    return StatisticsRegister(
        simulated_failure_rate=app_settings.SIMULATED_FAILURE_RATE,
        simulate_failures_enabled=app_settings.SIMULATE_FAILURES,
    )


@lru_cache()
def get_weather_client() -> WeatherApiClient:
    """
    Get singleton upstream client with connection pooling.

    Returns:
        WeatherApiClient instance
    """
    app_settings = get_settings()
    return WeatherApiClient(
        base_url=app_settings.WEATHER_API_BASE_URL,
        resource=app_settings.WEATHER_API_RESOURCE,
        timeout=app_settings.WEATHER_API_TIMEOUT,
    )


@lru_cache()
def get_weather_service() -> WeatherService:
    """
    Get singleton weather service.

    The service shares the cached client and statistics register.

    Returns:
        WeatherService instance
    """
    return WeatherService(
        client=get_weather_client(),
        statistics=get_statistics_register(),
        settings=get_settings(),
        executor=RetryExecutor(),
    )
