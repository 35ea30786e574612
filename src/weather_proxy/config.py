"""
Configuration settings for the Weather Proxy.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Weather Proxy"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # === Upstream Weather API (HK Observatory open data) ===
    WEATHER_API_BASE_URL: str = "https://data.weather.gov.hk/weatherAPI/opendata"
    WEATHER_API_RESOURCE: str = "weather.php"
    WEATHER_API_TIMEOUT: float = Field(default=10.0, gt=0)  # seconds, transport-level

    # === Simulated Failures (demo) ===
    SIMULATE_FAILURES: bool = True
    SIMULATED_FAILURE_RATE: float = Field(default=0.3, ge=0.0, le=1.0)

    # === Retry & Backoff ===
    RETRY_MAX_RETRIES: int = Field(default=3, ge=0)  # total attempts = retries + 1
    RETRY_INITIAL_DELAY_MS: int = Field(default=500, ge=0)
    RETRY_MULTIPLIER: float = Field(default=2.0, ge=1.0)  # 500ms -> 1s -> 2s
    RETRY_JITTER_MS: int = Field(default=100, ge=0)
    RETRY_MAX_DELAY_MS: int = Field(default=5000, ge=0)  # must be >= RETRY_INITIAL_DELAY_MS
    RETRY_ATTEMPT_TIMEOUT_MS: Optional[int] = Field(default=8000, gt=0)  # None disables per-attempt timeout

    # === Demo Endpoints ===
    RAPID_FIRE_MAX_CALLS: int = Field(default=50, ge=1)

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
