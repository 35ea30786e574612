"""
Response models returned by the proxy's HTTP boundary.

Field names are snake_case in Python and camelCase on the wire
(alias generator), matching the upstream API's own key style.
"""

from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from weather_proxy.retry.statistics import RetryStatistics

PayloadT = TypeVar("PayloadT")


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RetryInfo(CamelModel):
    """Retry summary attached to every weather envelope."""

    total_attempts: int = Field(
        ge=0,
        description="Process-wide attempt count when the envelope was built",
    )
    retry_enabled: bool = Field(description="Whether the call ran through the retry executor")
    max_retries: int = Field(ge=0, description="Configured retries for this operation")


class WeatherApiResponse(CamelModel, Generic[PayloadT]):
    """
    Envelope around an upstream payload.

    On a fallback response `data` is None, `from_fallback` is True and
    `error` carries the terminal failure message.
    """

    data: Optional[PayloadT] = Field(default=None, description="Upstream payload")
    data_type: str = Field(description="Upstream dataType", examples=["rhrread", "flw", "fnd"])
    lang: str = Field(description="Upstream language", examples=["en", "tc", "sc"])
    fetched_at: datetime = Field(description="Time the call started (UTC)")
    from_fallback: bool = Field(default=False, description="True when all attempts failed")
    error: Optional[str] = Field(default=None, description="Terminal failure message")
    retry_info: Optional[RetryInfo] = None


class RetryStatisticsResponse(CamelModel):
    """Snapshot of the statistics register."""

    total_attempts: int
    successful_calls: int
    failed_calls: int
    retried_calls: int
    simulated_failure_rate: float
    simulate_failures_enabled: bool
    last_call_timestamp: Optional[datetime] = None

    @classmethod
    def from_statistics(cls, stats: RetryStatistics) -> "RetryStatisticsResponse":
        return cls.model_validate(stats.to_dict())


class ResetResponse(CamelModel):
    message: str = "Retry statistics reset successfully"


class CallResult(CamelModel):
    """Result of a single call in the rapid-fire demo."""

    call_number: int = Field(ge=1)
    success: bool
    error: Optional[str] = None
    duration_ms: int = Field(ge=0)


class RapidFireResult(CamelModel):
    """Aggregated result of the rapid-fire demo."""

    total_calls: int
    success_count: int
    failure_count: int
    calls: list[CallResult] = Field(default_factory=list)
    retry_statistics: RetryStatisticsResponse


class HealthResponse(CamelModel):
    """Health check response."""

    status: str = Field(description="healthy | degraded", examples=["healthy", "degraded"])
    version: str
    services: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime
