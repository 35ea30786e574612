"""Structured logging for the Weather Proxy using structlog.

Application events and the stdlib loggers of uvicorn and httpx share one
handler on stdout: JSON lines in production, colored console otherwise.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Request lines are logged by RequestTracingMiddleware with the request_id,
# so uvicorn's own access log would only duplicate them.
QUIET_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}

# Loggers that uvicorn wires to its own handlers; they are rerouted to root.
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def service_context(service: str, version: Optional[str] = None) -> Processor:
    """Build a processor stamping every event with the service name and version."""

    def add_service_context(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service", service)
        if version is not None:
            event_dict.setdefault("version", version)
        return event_dict

    return add_service_context


def drop_color_message(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Remove uvicorn's ANSI duplicate of the message."""
    event_dict.pop("color_message", None)
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    environment: str = "development",
    service: str = "weather-proxy",
    version: Optional[str] = None,
) -> None:
    """Configure structlog and route stdlib loggers through it.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        environment: "production" selects JSON output
        service: Value of the `service` key on every event
        version: Value of the `version` key, omitted when None
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        drop_color_message,
        service_context(service, version),
    ]

    renderer: Processor
    if is_production:
        shared_processors.append(structlog.processors.dict_tracebacks)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(level),
        renderer="json" if is_production else "console",
    )
