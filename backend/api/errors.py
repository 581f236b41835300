"""
Error responses and exception handlers.

Every failure leaves the API as {success: false, message}. Store errors
are logged with their details and answered with an opaque message.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.exceptions import StoreError

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "Internal server error while accessing the database."
MALFORMED_BODY_MESSAGE = "Malformed request body."


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    message: str


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(
        "Store failure on %s %s: %s %s",
        request.method,
        request.url.path,
        exc.message,
        exc.details,
    )
    return error_response(500, STORE_ERROR_MESSAGE)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    # Only locations: the rejected input may contain credentials
    locations = [error.get("loc") for error in exc.errors()]
    logger.info("Rejected malformed body on %s: %s", request.url.path, locations)
    return error_response(400, MALFORMED_BODY_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
