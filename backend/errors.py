"""Custom exceptions and centralized FastAPI error handlers."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SheetServiceError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class FetchError(SheetServiceError):
    """Network failure, timeout or non-success response from the export endpoint."""

    def __init__(self, message: str, upstream_status: int | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class ParseError(SheetServiceError):
    """Payload is not a readable workbook, or has nothing to read."""


class UnknownDatasetError(SheetServiceError):
    def __init__(self, key: str, configured: set[str]):
        super().__init__(f"Unknown dataset: {key}. Configured: {sorted(configured)}")


def error_body(message: str) -> dict:
    return {
        "success": False,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "error": message,
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app.

    Every failure maps to the same 500 envelope; the message is surfaced as-is.
    """

    @app.exception_handler(SheetServiceError)
    async def handle_service_error(_request: Request, exc: SheetServiceError):
        logger.warning("%s: %s", type(exc).__name__, exc)
        return JSONResponse(error_body(str(exc)), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(error_body(str(exc)), status_code=500)
