"""
Exception handlers for the API layer.

Every error leaves the API in the same envelope:
``{"error": {"code", "message", "request_id", "details"}}``.
"""

import uuid
from typing import Any

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.shared.exceptions import (
    DuplicateEntityError,
    GoodCornerException,
    ResourceNotFoundError,
)

logger = structlog.get_logger(__name__)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int,
    request_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        error_code: Machine-readable error code
        message: User-friendly error message
        status_code: HTTP status code
        request_id: Optional request ID for tracking
        details: Optional additional error details

    Returns:
        JSONResponse: Standardized error response
    """
    content: dict[str, Any] = {
        "error": {
            "code": error_code,
            "message": message,
        }
    }

    if request_id:
        content["error"]["request_id"] = request_id

    if details:
        content["error"]["details"] = details

    return JSONResponse(status_code=status_code, content=content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """
    Handle validation errors from Pydantic models.

    Args:
        request: The incoming request
        exc: The validation exception

    Returns:
        JSONResponse: Formatted validation error response
    """
    formatted_errors = [
        {
            "field": " -> ".join(str(x) for x in error.get("loc", [])),
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        for error in exc.errors()
    ]

    return create_error_response(
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        request_id=str(uuid.uuid4()),
        details={"validation_errors": formatted_errors},
    )


async def resource_not_found_handler(
    request: Request, exc: ResourceNotFoundError
) -> JSONResponse:
    """Map a missing ad, category, tag or user to 404."""
    return create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=status.HTTP_404_NOT_FOUND,
        request_id=str(uuid.uuid4()),
        details=exc.details,
    )


async def duplicate_entity_handler(
    request: Request, exc: DuplicateEntityError
) -> JSONResponse:
    return create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=status.HTTP_409_CONFLICT,
        request_id=str(uuid.uuid4()),
        details=exc.details,
    )


async def good_corner_exception_handler(
    request: Request, exc: GoodCornerException
) -> JSONResponse:
    """
    Handle all remaining custom Good Corner exceptions.

    Args:
        request: The incoming request
        exc: The GoodCornerException

    Returns:
        JSONResponse: Formatted error response
    """
    status_code_map = {
        "SEARCH_SERVICE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    status_code = status_code_map.get(
        exc.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    logger.warning(
        "request_failed",
        path=request.url.path,
        error_code=exc.error_code,
        status_code=status_code,
    )

    return create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=status_code,
        request_id=str(uuid.uuid4()),
        details=exc.details,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    The full exception is logged but never exposed to the client.
    """
    request_id = str(uuid.uuid4())
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        request_id=request_id,
        error_type=type(exc).__name__,
    )
    return create_error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id=request_id,
    )


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(ResourceNotFoundError, resource_not_found_handler)
    app.add_exception_handler(DuplicateEntityError, duplicate_entity_handler)
    app.add_exception_handler(GoodCornerException, good_corner_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
