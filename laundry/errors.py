"""
Application error taxonomy and the handlers that turn it into JSON responses.

Every failure leaves the API as ``{"success": false, "message": ..., "error"?: ...}``.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, error: Any = None, headers: Optional[dict] = None):
        self.message = message or self.default_message
        self.error = error
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    # Uniqueness violations have always been reported as 400 by this API
    status_code = 400
    default_message = "Resource already exists"


class ExpiredError(AppError):
    status_code = 400
    default_message = "OTP has expired"


class MismatchError(AppError):
    status_code = 400
    default_message = "Invalid OTP"


class InvalidStateError(AppError):
    status_code = 400
    default_message = "Operation not allowed in the current state"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Not authorized to access this route"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class RateLimitError(AppError):
    status_code = 429
    default_message = "Too many requests"


class InternalError(AppError):
    status_code = 500


def error_body(message: str, error: Any = None) -> dict:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} - {exc.message}")
    else:
        logger.debug(f"⚠️ {request.method} {request.url.path} - {exc.status_code} {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error),
        headers=exc.headers,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Report request validation failures as 400, except a missing or malformed
    Authorization header which is an authentication failure (401).
    """
    errors = exc.errors()
    for error in errors:
        if error.get("loc") and "authorization" in str(error.get("loc")).lower():
            logger.warning(
                f"Authentication failed for {request.url.path}: Missing or invalid Authorization header"
            )
            return JSONResponse(status_code=401, content=error_body(UnauthorizedError.default_message))

    logger.warning(f"Validation error for {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")} for e in errors]
    return JSONResponse(status_code=400, content=error_body(message, details))


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"❌ Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=error_body("Internal server error", str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
