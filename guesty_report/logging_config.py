from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, cast

import structlog

from guesty_report.config import LOG_LEVEL, SERVICE_NAME

Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]

# Loggers that would otherwise echo every Guesty round trip or every served request
QUIET_LOGGERS = ("urllib3", "requests", "uvicorn.access")


def add_service_name(
    _logger: Any, _method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Stamp every event with the service name so shipped logs can be filtered by it."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging() -> None:
    """
    Route the report service's logs to stdout.

    Stdlib records (uvicorn, requests) keep a plain text format. structlog
    events from ``guesty_report`` carry the request ID bound by
    ``RequestIDMiddleware`` and the service name, rendered as JSON at INFO and
    through the coloured console renderer at any other level.
    """
    logging.basicConfig(
        format="[%(asctime)s] %(levelname)s in %(name)s: %(message)s",
        stream=sys.stdout,
        level=LOG_LEVEL,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer = cast(
        Processor,
        structlog.processors.JSONRenderer()
        if LOG_LEVEL == "INFO"
        else structlog.dev.ConsoleRenderer(colors=True),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_name,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(LOG_LEVEL)),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
