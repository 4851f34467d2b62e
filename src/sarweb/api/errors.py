"""Exception handlers — every failure leaves the gateway as a JSON error body.

Error bodies have the shape ``{"error": <message>}``.  The raw message of the
underlying exception is added as ``details`` only when the service runs in
development mode; failures are always logged server side.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sarweb.models.response import ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Not Found",
}


class APIError(Exception):
    """An error raised by an endpoint, rendered by ``api_error_handler``.

    Args:
        status_code: HTTP status of the response.
        message: Client-facing error message.
        cause: Underlying exception; its text is disclosed only in development.
        details: Client-safe details, always included when given.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        cause: BaseException | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.cause = cause
        self.details = details


def _is_development(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.is_development)


def error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    cause: BaseException | None = None,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON error response, applying the detail redaction policy."""
    if details is None and cause is not None and _is_development(request):
        details = str(cause)
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        exc.message,
        cause=exc.cause,
        details=exc.details,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes and other routing-level HTTP errors.

    A path that exists but does not accept the method is reported exactly like
    an unknown path: 404 with no ``Allow`` header.
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(request, status.HTTP_404_NOT_FOUND, _HTTP_MESSAGES[status.HTTP_404_NOT_FOUND])
    message = _HTTP_MESSAGES.get(exc.status_code) or str(exc.detail)
    return error_response(
        request,
        exc.status_code,
        message,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed query parameters with 400 and a per-parameter summary."""
    details = [
        {
            "param": str(err.get("loc", ("", "?"))[-1]),
            "message": err.get("msg", "invalid value"),
        }
        for err in exc.errors()
    ]
    logger.info("Rejected request %s %s: %s", request.method, request.url.path, details)
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Invalid request parameters",
        details=details,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        cause=exc,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    # Reached only for errors raised by the middleware itself; route errors are
    # rendered by UnhandledErrorMiddleware.
    app.add_exception_handler(Exception, unhandled_exception_handler)
