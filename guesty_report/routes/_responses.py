"""Uniform success/failure envelopes shared by the /api routes."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi.responses import JSONResponse

from guesty_report.errors import GuestyError, status_code_for

logger = structlog.get_logger(__name__)


def success_response(**payload: Any) -> JSONResponse:
    return JSONResponse(content={"success": True, **payload})


def error_response(error: Exception, route: str) -> JSONResponse:
    """
    Turn any exception raised while handling ``route`` into a failure envelope.

    Guesty errors keep their message and map to their configured status code.
    Anything else is logged with a traceback and reported as an internal error.
    """
    if isinstance(error, GuestyError):
        logger.error(
            "route_upstream_failure",
            route=route,
            error_type=error.error_type,
            error=error.message,
        )
        status_code = status_code_for(error)
        error_type = error.error_type
        message = error.message
    else:
        logger.exception("route_internal_failure", route=route, error=str(error))
        status_code = 500
        error_type = "internal"
        message = str(error) or error.__class__.__name__

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "errorType": error_type},
    )
