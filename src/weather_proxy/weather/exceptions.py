"""
Custom exceptions for the weather call site.

Every failure of a single upstream attempt is raised as one of these. The
retry executor does not distinguish between them by default; the boundary
layer maps them to HTTP statuses when a terminal failure propagates.
"""


class WeatherError(Exception):
    """
    Base exception for all weather call failures.

    Attributes:
        message: Human-readable description
        details: Structured context for logs and error responses
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class WeatherApiError(WeatherError):
    """
    Raised when the upstream weather API call fails.

    Covers transport errors, non-2xx statuses, empty bodies and payloads
    that cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class SimulatedFailureError(WeatherError):
    """
    Raised by the demo failure injector before the upstream call is made.
    """
    pass
