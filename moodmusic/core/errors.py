# ============================================================================
# FILE: moodmusic/core/errors.py
# Error taxonomy and JSON error envelope
# ============================================================================
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP error envelope"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied. No token provided."


class InvalidToken(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid token."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UpstreamUnavailable(AppError):
    """The recommendation model could not be reached; fatal to the request"""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Failed to get recommendations"


class LookupDegraded(AppError):
    """A per-candidate lookup failed; callers downgrade instead of failing"""

    default_message = "Lookup failed"


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def to_response(error: AppError) -> JSONResponse:
    """Render an AppError as the JSON envelope (usable outside exception handlers)"""
    return JSONResponse(status_code=error.status_code, content=error_body(error.message))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return to_response(exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
