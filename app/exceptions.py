"""
Application error taxonomy.

Services raise these instead of bare HTTPException so every failure carries a
stable machine-readable code. `register_exception_handlers` renders them as
{"status": "error", "code": ..., "message": ...}.
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import IS_PRODUCTION

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message)
        self.message = message
        if code:
            self.code = code


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


class InvalidInputError(AppError):
    status_code = 400
    code = "INVALID_INPUT"


class ForbiddenError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class UnauthorizedError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Not authenticated", code: Optional[str] = None):
        super().__init__(message, code)
        self.headers = {"WWW-Authenticate": "Bearer"}


def error_body(code: str, message: str, **extra) -> dict:
    body = {"status": "error", "code": code, "message": message}
    body.update(extra)
    return body


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} - {exc.code}: {exc.message}")
    else:
        logger.info(f"⚠️ {request.method} {request.url.path} - {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.code, exc.message),
        headers=getattr(exc, "headers", None),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render framework and rate limiter HTTPExceptions in the same envelope"""
    codes = {
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        429: "RATE_LIMITED",
        503: "SERVICE_UNAVAILABLE",
    }
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("message", str(detail))
    else:
        message = str(detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(codes.get(exc.status_code, "HTTP_ERROR"), message),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Missing or malformed Authorization headers are authentication failures;
    every other schema failure is a 400 with field details.
    """
    for error in exc.errors():
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(
                status_code=401,
                content=error_body("UNAUTHORIZED", "Not authenticated"),
            )

    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=error_body("VALIDATION_ERROR", "Invalid request data", errors=errors),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Constraint violations that slipped past the service checks (e.g. concurrent inserts)"""
    logger.warning(f"⚠️ Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content=error_body("CONFLICT", "Operation violates a uniqueness or integrity constraint"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    extra = {} if IS_PRODUCTION else {"detail": str(exc)}
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_SERVER_ERROR", "Internal server error", **extra),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
