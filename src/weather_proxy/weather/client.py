"""
HK Observatory open data client.

Communicates with the upstream weather API using httpx AsyncClient:
- GET {resource}?dataType=<type>&lang=<lang>
- Connection pooling via a persistent AsyncClient
- Health check against the upstream host

The client makes exactly one request per call. Retries belong to the
retry executor, never to the client.
"""

import time
from typing import Any, Optional

import httpx
import structlog

from weather_proxy.models.enums import WeatherDataType, WeatherLang
from weather_proxy.weather.exceptions import WeatherApiError

logger = structlog.get_logger(__name__)


class WeatherApiClient:
    """
    Async client for the HK Observatory weather.php resource.

    Attributes:
        base_url: Upstream base URL
        resource: Resource path under base_url (weather.php)
        timeout: Transport timeout in seconds
    """

    def __init__(
        self,
        base_url: str = "https://data.weather.gov.hk/weatherAPI/opendata",
        resource: str = "weather.php",
        timeout: float = 10.0,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize weather API client.

        Args:
            base_url: Upstream base URL
            resource: Resource path
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 20 max connections)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.resource = resource.lstrip("/")
        self.timeout = timeout

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0,
            )

        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

        logger.info(
            "Weather API client initialized",
            base_url=self.base_url,
            resource=self.resource,
            timeout=timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                follow_redirects=True,
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def fetch(self, data_type: WeatherDataType, lang: WeatherLang) -> dict[str, Any]:
        """
        Fetch one weather dataset.

        Returns:
            Decoded JSON object from the upstream

        Raises:
            WeatherApiError: Transport failure, non-2xx status, empty or non-JSON body
        """
        params = {"dataType": data_type.value, "lang": lang.value}
        start_time = time.perf_counter()

        logger.debug("Fetching weather data", data_type=data_type.value, lang=lang.value)

        try:
            client = await self._get_client()
            response = await client.get(f"/{self.resource}", params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise WeatherApiError(
                f"Weather API returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                details={"data_type": data_type.value, "lang": lang.value},
            ) from e
        except httpx.TimeoutException as e:
            raise WeatherApiError(
                f"Weather API request timed out after {self.timeout}s",
                details={"data_type": data_type.value, "error_type": type(e).__name__},
            ) from e
        except httpx.HTTPError as e:
            raise WeatherApiError(
                f"Failed to fetch weather data: {e}",
                details={"data_type": data_type.value, "error_type": type(e).__name__},
            ) from e

        if not response.content:
            raise WeatherApiError(
                "Empty response from weather API",
                status_code=response.status_code,
                details={"data_type": data_type.value},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise WeatherApiError(
                "Weather API returned invalid JSON",
                status_code=response.status_code,
                details={"data_type": data_type.value, "body_preview": response.text[:200]},
            ) from e

        if not isinstance(payload, dict):
            raise WeatherApiError(
                "Weather API returned unexpected payload",
                status_code=response.status_code,
                details={"data_type": data_type.value, "payload_type": type(payload).__name__},
            )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Fetched weather data",
            data_type=data_type.value,
            lang=lang.value,
            latency_ms=latency_ms,
        )
        return payload

    async def health_check(self) -> bool:
        """Return True if the upstream answers a current-weather request with 2xx."""
        try:
            client = await self._get_client()
            response = await client.get(
                f"/{self.resource}",
                params={"dataType": WeatherDataType.CURRENT.value, "lang": WeatherLang.ENGLISH.value},
                timeout=5.0,
            )
            return response.is_success
        except httpx.HTTPError as e:
            logger.warning("Weather API health check failed", error=str(e))
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed httpx AsyncClient")
