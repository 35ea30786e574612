"""
FastAPI exception handlers for structured error responses.

Only terminal failures of PROPAGATE operations reach these handlers;
intermediate retryable failures never leave the retry executor.
"""

from datetime import datetime, timezone

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse

from weather_proxy.retry.exceptions import AttemptTimeoutError
from weather_proxy.weather.exceptions import SimulatedFailureError, WeatherApiError

logger = structlog.get_logger(__name__)


def _error_body(error: str, message: str, **extra) -> dict:
    return {
        "error": error,
        "message": message,
        **extra,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def weather_api_error_handler(request: Request, exc: WeatherApiError) -> JSONResponse:
    """
    Handle upstream API failures.

    Maps to 502 Bad Gateway (upstream service failed).
    """
    logger.error(
        "Weather API failure after retries",
        error=exc.message,
        upstream_status=exc.status_code,
        details=exc.details,
    )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=_error_body(
            "upstream_failed",
            exc.message,
            upstream_status=exc.status_code,
        ),
    )


async def simulated_failure_handler(request: Request, exc: SimulatedFailureError) -> JSONResponse:
    """
    Handle simulated failures that exhausted every attempt.

    Maps to 503 Service Unavailable (temporary failure).
    """
    logger.warning("Simulated failure after retries", error=exc.message)

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body("simulated_failure", exc.message),
    )


async def attempt_timeout_handler(request: Request, exc: AttemptTimeoutError) -> JSONResponse:
    """
    Handle attempts that timed out on the final try.

    Maps to 504 Gateway Timeout (upstream service timeout).
    """
    logger.error("Upstream attempt timed out", attempt=exc.attempt, timeout=exc.timeout)

    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content=_error_body("upstream_timeout", str(exc), attempt=exc.attempt),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("internal_error", "An unexpected error occurred"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    WeatherApiError: weather_api_error_handler,
    SimulatedFailureError: simulated_failure_handler,
    AttemptTimeoutError: attempt_timeout_handler,
    Exception: generic_error_handler,
}
