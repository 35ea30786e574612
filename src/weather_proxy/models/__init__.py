"""
Pydantic data models for the Weather Proxy.

Includes:
- Enums (WeatherDataType, WeatherLang)
- Upstream payload models (CurrentWeatherResponse, LocalForecastResponse, NineDayForecastResponse)
- Boundary response models (WeatherApiResponse, RetryInfo, RetryStatisticsResponse, RapidFireResult)
"""

from weather_proxy.models.enums import WeatherDataType, WeatherLang
from weather_proxy.models.responses import (
    CallResult,
    HealthResponse,
    RapidFireResult,
    ResetResponse,
    RetryInfo,
    RetryStatisticsResponse,
    WeatherApiResponse,
)
from weather_proxy.models.weather import (
    CurrentWeatherResponse,
    DayForecast,
    LocalForecastResponse,
    NineDayForecastResponse,
)

__all__ = [
    # Enums
    "WeatherDataType",
    "WeatherLang",
    # Upstream payloads
    "CurrentWeatherResponse",
    "LocalForecastResponse",
    "NineDayForecastResponse",
    "DayForecast",
    # Boundary responses
    "WeatherApiResponse",
    "RetryInfo",
    "RetryStatisticsResponse",
    "ResetResponse",
    "CallResult",
    "RapidFireResult",
    "HealthResponse",
]
