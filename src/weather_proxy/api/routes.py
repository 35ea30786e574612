"""
Weather proxy API routes.

Endpoints:
- GET  /api/weather/current          Current weather readings
- GET  /api/weather/forecast         Local weather forecast
- GET  /api/weather/9day             9-day weather forecast
- GET  /api/weather/retry/stats      Retry statistics
- POST /api/weather/retry/reset      Reset retry statistics
- GET  /api/weather/demo/rapid-fire  Rapid-fire demo to trigger retries
"""

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from weather_proxy.api.dependencies import get_weather_service
from weather_proxy.models.enums import WeatherDataType, WeatherLang
from weather_proxy.models.responses import (
    RapidFireResult,
    ResetResponse,
    RetryStatisticsResponse,
    WeatherApiResponse,
)
from weather_proxy.models.weather import (
    CurrentWeatherResponse,
    LocalForecastResponse,
    NineDayForecastResponse,
)
from weather_proxy.weather.service import WeatherService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/weather")

LANG_DESCRIPTION = "Language code: en (English), tc (Traditional Chinese), sc (Simplified Chinese)"

FALLBACK_RESPONSES = {
    200: {"description": "Upstream data fetched (possibly after retries)"},
    503: {"description": "Retries exhausted, fallback envelope returned"},
}


def build_response(response: WeatherApiResponse):
    """Return the envelope as-is, or with HTTP 503 when it is a fallback."""
    if response.from_fallback:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(mode="json", by_alias=True),
        )
    return response


@router.get(
    "/current",
    response_model=WeatherApiResponse[CurrentWeatherResponse],
    summary=WeatherDataType.CURRENT.description,
    responses=FALLBACK_RESPONSES,
)
async def get_current_weather(
    lang: str = Query("en", description=LANG_DESCRIPTION),
    service: WeatherService = Depends(get_weather_service),
):
    response = await service.get_current_weather(WeatherLang.parse(lang))
    return build_response(response)


@router.get(
    "/forecast",
    response_model=WeatherApiResponse[LocalForecastResponse],
    summary=WeatherDataType.LOCAL_FORECAST.description,
    responses=FALLBACK_RESPONSES,
)
async def get_local_forecast(
    lang: str = Query("en", description=LANG_DESCRIPTION),
    service: WeatherService = Depends(get_weather_service),
):
    response = await service.get_local_forecast(WeatherLang.parse(lang))
    return build_response(response)


@router.get(
    "/9day",
    response_model=WeatherApiResponse[NineDayForecastResponse],
    summary=WeatherDataType.NINE_DAY_FORECAST.description,
    description="""
    Fetch the 9-day forecast. Terminal failures are not masked by a
    fallback envelope: they surface as error responses
    (502 upstream failure, 503 simulated failure, 504 attempt timeout).
    """,
    responses={
        200: {"description": "Upstream data fetched (possibly after retries)"},
        502: {"description": "Upstream failed on every attempt"},
        503: {"description": "Simulated failure on every attempt"},
        504: {"description": "Final attempt timed out"},
    },
)
async def get_nine_day_forecast(
    lang: str = Query("en", description=LANG_DESCRIPTION),
    service: WeatherService = Depends(get_weather_service),
):
    return await service.get_nine_day_forecast(WeatherLang.parse(lang))


@router.get(
    "/retry/stats",
    response_model=RetryStatisticsResponse,
    summary="Retry statistics",
)
async def get_retry_statistics(
    service: WeatherService = Depends(get_weather_service),
) -> RetryStatisticsResponse:
    """Total attempts, successes, failures and retry counts."""
    return RetryStatisticsResponse.from_statistics(service.get_retry_statistics())


@router.post(
    "/retry/reset",
    response_model=ResetResponse,
    summary="Reset retry statistics",
)
async def reset_retry_statistics(
    service: WeatherService = Depends(get_weather_service),
) -> ResetResponse:
    service.reset_statistics()
    return ResetResponse()


@router.get(
    "/demo/rapid-fire",
    response_model=RapidFireResult,
    summary="Rapid-fire demo",
    description="""
    Make several sequential current-weather calls to make retry behaviour
    with exponential backoff visible. The count is clamped to 1-50.
    """,
)
async def rapid_fire_demo(
    count: int = Query(10, description="Number of calls to make"),
    service: WeatherService = Depends(get_weather_service),
) -> RapidFireResult:
    return await service.rapid_fire(count)
