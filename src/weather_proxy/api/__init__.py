"""
FastAPI API routes and endpoints.

- routes.py: Weather proxy endpoints under /api/weather
- dependencies.py: Dependency injection for client, statistics register, service
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request tracing
"""

from weather_proxy.api import dependencies, error_handlers
from weather_proxy.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
]
