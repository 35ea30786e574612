"""
Unit tests for API dependency injection.
"""

from weather_proxy.api.dependencies import (
    get_settings,
    get_statistics_register,
    get_weather_client,
    get_weather_service,
)
from weather_proxy.config import Settings
from weather_proxy.retry.statistics import StatisticsRegister
from weather_proxy.weather.client import WeatherApiClient
from weather_proxy.weather.service import WeatherService


def test_get_settings():
    """Test settings singleton."""
    settings1 = get_settings()
    settings2 = get_settings()

    # Should be same instance (cached)
    assert settings1 is settings2
    assert isinstance(settings1, Settings)


def test_get_statistics_register():
    """Test statistics register singleton."""
    register1 = get_statistics_register()
    register2 = get_statistics_register()

    assert register1 is register2
    assert isinstance(register1, StatisticsRegister)


def test_statistics_register_echoes_settings():
    settings = get_settings()
    stats = get_statistics_register().snapshot()

    assert stats.simulated_failure_rate == settings.SIMULATED_FAILURE_RATE
    assert stats.simulate_failures_enabled == settings.SIMULATE_FAILURES


def test_get_weather_client():
    """Test upstream client singleton."""
    client1 = get_weather_client()
    client2 = get_weather_client()

    assert client1 is client2
    assert isinstance(client1, WeatherApiClient)
    assert client1.base_url == get_settings().WEATHER_API_BASE_URL.rstrip("/")


def test_dependencies_integration():
    """Service should be wired to the cached client and register."""
    service = get_weather_service()

    assert isinstance(service, WeatherService)
    assert service is get_weather_service()
    assert service.client is get_weather_client()
    assert service.statistics is get_statistics_register()
