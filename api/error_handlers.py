"""Global exception handlers for FastAPI.

Provides consistent JSON error response format across all endpoints.
Internal server errors (500s) are logged but not exposed to clients.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.exceptions import GatewayException

logger = logging.getLogger(__name__)


def create_error_response(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create standardized error response structure.

    Args:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional additional context

    Returns:
        Error response dictionary
    """
    error = {
        "code": code,
        "message": message,
    }
    if details:
        error["details"] = details
    return {"error": error}


async def gateway_exception_handler(
    request: Request, exc: GatewayException
) -> JSONResponse:
    """Render a GatewayException as the standard error envelope.

    Server-side failures log at ERROR; client errors at INFO.
    """
    level = logging.ERROR if exc.status_code >= 500 else logging.INFO
    logger.log(
        level,
        "API error: %s (code=%s, status=%d, path=%s)",
        exc.message,
        exc.error_code,
        exc.status_code,
        request.url.path,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.to_dict()},
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Converts FastAPI's validation errors to our standard format with one
    entry per offending field. Runs before any handler touches the store.
    """
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        errors.append(
            {
                "field": loc,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type", "value_error"),
            }
        )

    logger.info(
        "Validation error: %d field errors (path=%s)",
        len(errors),
        request.url.path,
    )

    return JSONResponse(
        status_code=400,
        content=create_error_response(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            details={"errors": errors},
        ),
    )


# Codes for HTTPExceptions the framework raises on its own: malformed JSON
# bodies, unknown paths and wrong methods. Our handlers raise GatewayException.
FRAMEWORK_ERROR_CODES = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Handle Starlette/FastAPI HTTPExceptions.

    Covers routing failures (unknown path, wrong method) and unreadable
    request bodies.
    """
    error_code = FRAMEWORK_ERROR_CODES.get(exc.status_code, "ERROR")
    if exc.status_code == 404:
        message = "Endpoint not found"
    else:
        message = str(exc.detail) if exc.detail else "An error occurred"

    logger.info("HTTP error %d: %s (path=%s)", exc.status_code, message, request.url.path)

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(code=error_code, message=message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Logs the full traceback but returns a generic message to clients.
    Never exposes internal error details.
    """
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=exc)

    return JSONResponse(
        status_code=500,
        content=create_error_response(
            code="INTERNAL_ERROR",
            message="Internal server error",
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(GatewayException, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
