"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Every error leaves as the
same envelope: {success: false, message, error: {code, statusCode, timestamp, details}}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import WebCoreException
from app.schemas.common import ErrorBody, ErrorResponse
from app.shared.utils.datetime import iso_timestamp

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "AUTHENTICATION_ERROR",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "RATE_LIMIT_EXCEEDED",
    503: "SERVICE_UNAVAILABLE",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build the error envelope."""
    body = ErrorResponse(
        message=message,
        error=ErrorBody(
            code=code,
            statusCode=status_code,
            timestamp=iso_timestamp(),
            details=jsonable_encoder(details or {}),
        ),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _webcore_exception_handler(request: Request, exc: WebCoreException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message, exc.error_code, exc.details)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with one entry per failing field."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return error_response(400, "Validation failed", "VALIDATION_ERROR", {"errors": errors})


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Starlette HTTP exceptions, including 404 for unknown routes."""
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    response = error_response(
        exc.status_code, message, _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded on %s %s", request.method, request.url.path)
    return error_response(
        429, f"Too many requests: {exc.detail}", "RATE_LIMIT_EXCEEDED"
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    settings = get_settings()
    message = str(exc) if settings.debug else "Internal server error"
    return error_response(500, message, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: WebCoreException (and
    subclasses), RequestValidationError, RateLimitExceeded,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(WebCoreException, _webcore_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
