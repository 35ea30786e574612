"""
FastAPI application entry point for the Weather Proxy.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Depends, FastAPI, status
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from weather_proxy.api.dependencies import get_settings, get_weather_client, get_weather_service
from weather_proxy.api.error_handlers import EXCEPTION_HANDLERS
from weather_proxy.api.middleware import RequestTracingMiddleware
from weather_proxy.api.routes import router as weather_router
from weather_proxy.config import Settings, settings
from weather_proxy.logging_config import configure_logging
from weather_proxy.models.enums import WeatherDataType
from weather_proxy.models.responses import HealthResponse
from weather_proxy.weather.client import WeatherApiClient

# Configure structured logging before the app is created
configure_logging(
    settings.LOG_LEVEL,
    settings.ENVIRONMENT,
    service="weather-proxy",
    version=settings.APP_VERSION,
)
logger = structlog.get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Proxy for the HK Observatory weather API with retry, backoff and retry statistics",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(weather_router, tags=["weather"])


@app.on_event("startup")
async def startup():
    """Application startup.

    Builds the weather service eagerly so an invalid retry policy
    (RetryConfigError) aborts boot instead of failing every request.
    """
    app_settings = get_settings()
    service = get_weather_service()
    logger.info(
        "Application startup",
        version=app_settings.APP_VERSION,
        environment=app_settings.ENVIRONMENT,
        weather_api_base_url=app_settings.WEATHER_API_BASE_URL,
        simulate_failures=service.simulate_failures,
        simulated_failure_rate=service.simulated_failure_rate,
        operations={
            name: op.retry_config.max_retries for name, op in service.operations.items()
        },
    )


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the upstream connection pool."""
    await get_weather_client().close()
    logger.info("Application shutdown complete")


if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "weather": "/api/weather/current",
        "retry_stats": "/api/weather/retry/stats",
        "data_types": {data_type.value: data_type.description for data_type in WeatherDataType},
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={200: {"description": "Service up (upstream may be degraded)"}},
)
async def health_check(
    client: WeatherApiClient = Depends(get_weather_client),
    app_settings: Settings = Depends(get_settings),
):
    """
    Report service health.

    The proxy stays up when the upstream is down (retries and fallbacks
    still answer), so an unreachable upstream reports "degraded", not 503.
    """
    upstream_ok = await client.health_check()
    response = HealthResponse(
        status="healthy" if upstream_ok else "degraded",
        version=app_settings.APP_VERSION,
        services={"weather_api": "ok" if upstream_ok else "unreachable"},
        timestamp=datetime.now(timezone.utc),
    )
    logger.info("Health check", status=response.status)

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=response.model_dump(mode="json", by_alias=True),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_proxy.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Only for development
    )
