"""Liveness endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from guesty_report.config import SERVICE_NAME

router = APIRouter()


@router.get("/")
def health_check() -> JSONResponse:
    """
    Liveness check endpoint.

    Returns 200 while the process is running. Does not contact Guesty.

    Example:
        >>> GET /
        {"status": "ok", "service": "Guesty MCP Server"}
    """
    return JSONResponse(content={"status": "ok", "service": SERVICE_NAME})
