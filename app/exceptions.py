import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TaskFolderError(Exception):
    """Base error for the API.

    Services raise subclasses of this; the handlers below turn them into
    ``{"error": message}`` responses.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskFolderError):
    """Missing or malformed field, bad enum value, bad date or bad id."""

    status_code = 400


class NotFoundError(TaskFolderError):
    """Entity absent or owned by someone else (the two are indistinguishable)."""

    status_code = 404


class AuthError(TaskFolderError):
    """Missing, invalid or expired credential."""

    status_code = 401


class StoreError(TaskFolderError):
    """Unexpected persistence failure. The message never carries internals."""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)


async def task_folder_exception_handler(request: Request, exc: TaskFolderError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"Invalid request: {location} {errors[0].get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def store_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Unhandled store error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})
