"""
Application error taxonomy and the FastAPI handlers that render it.

Client-facing messages are fixed per error class. Internal causes are chained
with ``raise ... from exc`` and only ever reach the log.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields are required."


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email already exists."


class InvalidCredentials(AppError):
    # Sign-in reports failures in the body, not the status line.
    status_code = status.HTTP_200_OK
    message = "Invalid email or password."


class Unauthorized(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "No token provided."


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid or expired token."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Unauthorized: Only admins can add new admins."


class StoreError(AppError):
    message = "Server error."


class HashingError(AppError):
    message = "Error encrypting password."


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, (StoreError, HashingError)):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


SIGN_IN_PATH = "/sign-in"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed bodies without echoing the submitted input back."""
    fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    logger.info("%s %s malformed body: %s", request.method, request.url.path, fields)

    # Sign-in never says which part of the request was wrong.
    error = InvalidCredentials() if request.url.path == SIGN_IN_PATH else ValidationError()
    return JSONResponse(
        status_code=error.status_code,
        content={"success": False, "message": error.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
