"""
Unit tests for the Weather Proxy.

Test individual components in isolation:
- Retry config validation
- Backoff policy (growth, jitter, cap)
- Retry executor (attempt sequencing, timeouts, cancellation)
- Statistics register (counters, reset, thread safety)
- Weather client and service (scripted upstream)
- Dependencies and response models
"""
