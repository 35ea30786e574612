"""Monitoring and metrics instrumentation for the Weather Proxy.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from weather_proxy.monitoring.metrics import (
    fallback_responses_total,
    retry_delay_seconds,
    upstream_attempts_total,
)

__all__ = [
    "upstream_attempts_total",
    "retry_delay_seconds",
    "fallback_responses_total",
]
