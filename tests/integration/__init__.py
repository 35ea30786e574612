"""
Integration tests for the Weather Proxy.

Test components together or against the real upstream:
- API endpoints (FastAPI TestClient with a scripted upstream transport)
- Retry flow end to end (executor + backoff + register + service)
- HK Observatory client (real calls, marked with @pytest.mark.integration)
"""
