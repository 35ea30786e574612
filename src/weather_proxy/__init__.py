"""
Weather Proxy for the Hong Kong Observatory open data API.

Forwards weather requests to the upstream provider and wraps every call in
a retry/backoff engine:
- Exponential backoff with jitter and a hard cap
- Caller-supplied retry eligibility and per-attempt timeouts
- Concurrency-safe retry statistics exposed over HTTP

Architecture: FastAPI boundary + httpx upstream client + asyncio retry engine
"""

__version__ = "0.1.0"
