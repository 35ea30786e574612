"""
Weather call site.

- client.py: httpx client for the HK Observatory open data API
- service.py: operation registrations bound to the retry executor
- exceptions.py: per-attempt failure types
"""

from weather_proxy.weather.client import WeatherApiClient
from weather_proxy.weather.exceptions import (
    SimulatedFailureError,
    WeatherApiError,
    WeatherError,
)
from weather_proxy.weather.service import (
    FailurePolicy,
    WeatherOperation,
    WeatherService,
    default_operations,
)

__all__ = [
    "WeatherApiClient",
    "WeatherError",
    "WeatherApiError",
    "SimulatedFailureError",
    "FailurePolicy",
    "WeatherOperation",
    "WeatherService",
    "default_operations",
]
