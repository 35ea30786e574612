"""Integration test fixtures (app wiring and prerequisites).

The FastAPI app is exercised through TestClient with the weather service
dependency overridden, so the full HTTP stack runs against the scripted
FakeUpstream transport. Live upstream tests are skipped unless the HK
Observatory API is reachable.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from weather_proxy.api.dependencies import get_weather_client, get_weather_service
from weather_proxy.main import app
from weather_proxy.weather.client import WeatherApiClient


@pytest.fixture(scope="session")
def check_weather_api():
    """Check if the HK Observatory open data API is reachable.

    Skips tests if the upstream cannot be reached.
    """
    try:
        response = httpx.get(
            "https://data.weather.gov.hk/weatherAPI/opendata/weather.php",
            params={"dataType": "rhrread", "lang": "en"},
            timeout=5,
        )
        if response.status_code != 200:
            pytest.skip("Weather API not available (non-200 status)")
    except Exception as e:
        pytest.skip(f"Weather API not available: {e}")


@pytest.fixture
def live_weather_client(check_weather_api):
    """Real WeatherApiClient against the public upstream.

    Requires network access (checked by check_weather_api fixture).
    """
    return WeatherApiClient(timeout=10.0)


@pytest.fixture
def create_api_client(upstream_client, create_weather_service):
    """Factory fixture for a TestClient bound to a scripted WeatherService.

    Usage:
        def test_something(create_api_client):
            with create_api_client(SIMULATE_FAILURES=True) as client:
                client.get("/api/weather/current")
    """
    def _create(raise_server_exceptions: bool = True, **overrides) -> TestClient:
        service = create_weather_service(**overrides)
        app.dependency_overrides[get_weather_service] = lambda: service
        app.dependency_overrides[get_weather_client] = lambda: upstream_client
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    yield _create

    app.dependency_overrides.clear()


@pytest.fixture
def api_client(create_api_client):
    """TestClient with default test settings (no simulated failures)."""
    with create_api_client() as client:
        yield client
