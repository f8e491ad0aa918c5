"""
Exception handlers for the FastAPI application.

Domain errors keep their status and code; anything else becomes a generic
500 with the details left in the log.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import BookingSystemError, InternalFailure
from app.core.logger import logger


async def booking_error_handler(request: Request, exc: BookingSystemError) -> JSONResponse:
    if isinstance(exc, InternalFailure):
        logger.error(
            f"Internal failure on {request.method} {request.url.path}",
            exc_info=exc.__cause__ or exc,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid request payload.",
            "code": "INVALID_INPUT",
            "details": errors,
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error.", "code": "INTERNAL_FAILURE"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingSystemError, booking_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
