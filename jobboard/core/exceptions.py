"""
Application error taxonomy and the FastAPI handlers that map it to HTTP.

Every failure leaving a route is turned into the same JSON shape:

    {"error": "<message>", "type": "<ErrorClass>", "details": {...}}
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base exception for application errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Missing or invalid required input"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(AppException):
    """Referenced id does not exist"""
    status_code = status.HTTP_404_NOT_FOUND


class MethodNotAllowed(AppException):
    """Known path, unsupported HTTP method"""
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class UploadError(AppException):
    """The storage backend rejected or failed an upload"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreUnavailable(AppException):
    """The database could not be reached or the operation failed"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: AppException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "type": exc.__class__.__name__,
            "details": exc.details,
        }
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions"""
    if exc.status_code >= 500:
        cause = exc.__cause__
        logger.error(
            f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}"
            + (f" (cause: {cause!r})" if cause else ""),
            extra={"details": exc.details}
        )
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or empty form/JSON fields are presence failures, reported as 400"""
    fields = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            fields.append(".".join(loc))
    message = f"Missing or invalid fields: {', '.join(fields)}" if fields else "Invalid request"
    return await app_exception_handler(request, ValidationError(message, {"fields": fields}))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Route-level 404/405 raised by the router itself"""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        app_exc: AppException = MethodNotAllowed("Method not allowed", {"method": request.method})
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        app_exc = NotFound("Not found", {"path": request.url.path})
    else:
        logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "type": "HTTPException", "details": {}},
            headers=getattr(exc, "headers", None)
        )
    response = await app_exception_handler(request, app_exc)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures that escaped a route"""
    store_exc = StoreUnavailable("Database operation failed", {"reason": exc.__class__.__name__})
    store_exc.__cause__ = exc
    return await app_exception_handler(request, store_exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
