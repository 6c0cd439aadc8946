"""Exception handlers for the FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ecobite.domain.errors import (
    AggregationConsistencyError,
    EcoBiteError,
    InvalidInputError,
    NotFoundError,
)

_logger = logging.getLogger(__name__)

_RETRY_MESSAGE = "The meal could not be logged. Please try again."


def error_response(
    message: str, status_code: int, details: dict[str, object] | None = None
) -> JSONResponse:
    """Build the JSON error body shared by all handlers."""
    body: dict[str, object] = {"error": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Respond 404 for missing records."""
    return error_response(exc.message, status.HTTP_404_NOT_FOUND, exc.details)


async def invalid_input_handler(
    request: Request, exc: InvalidInputError
) -> JSONResponse:
    """Respond 400 for rejected input."""
    return error_response(exc.message, status.HTTP_400_BAD_REQUEST, exc.details)


async def consistency_handler(
    request: Request, exc: AggregationConsistencyError
) -> JSONResponse:
    """Respond 503 with a retry hint when a meal log was rolled back."""
    _logger.error(
        "Aggregation failure on %s %s: %s",
        request.method,
        request.url.path,
        exc.message,
    )
    return error_response(
        _RETRY_MESSAGE, status.HTTP_503_SERVICE_UNAVAILABLE, exc.details
    )


async def app_error_handler(request: Request, exc: EcoBiteError) -> JSONResponse:
    """Respond 400 for any other domain error."""
    return error_response(exc.message, status.HTTP_400_BAD_REQUEST, exc.details)


async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from clients."""
    _logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        "An internal server error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the app."""
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(AggregationConsistencyError, consistency_handler)
    app.add_exception_handler(EcoBiteError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_handler)
