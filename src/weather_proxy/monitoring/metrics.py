"""Custom Prometheus metrics for the Weather Proxy.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- weather_upstream_attempts_total (high failure share indicates upstream instability)
- weather_fallback_responses_total (any sustained rate means callers see degraded data)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

upstream_attempts_total = Counter(
    "weather_upstream_attempts_total",
    "Total upstream attempts by operation and outcome",
    ["operation", "outcome"],
)
"""
Upstream attempts counter.

Labels:
- operation: current_weather, local_forecast, nine_day_forecast
- outcome: success, retryable_failure, terminal_failure

Alert thresholds:
- WARN: terminal_failure rate > 1% of calls
"""

retry_delay_seconds = Histogram(
    "weather_retry_delay_seconds",
    "Backoff delay applied before a retry, in seconds",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

# === Fallback Metrics ===

fallback_responses_total = Counter(
    "weather_fallback_responses_total",
    "Fallback envelopes returned after retries were exhausted",
    ["operation"],
)
