"""Exception handlers producing the ``{"success": false, "message": ...}`` envelope."""
import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from tortoise.exceptions import DoesNotExist, IntegrityError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        # Raised by the router itself when no route matched
        message = "Route not found"
    return error_response(exc.status_code, str(message), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info(f"Rejected request to {request.url.path}: {problems}")
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(problems) or "Invalid request")


async def does_not_exist_handler(request: Request, exc: DoesNotExist) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, "Record not found")


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.url.path}: {exc}")
    return error_response(status.HTTP_400_BAD_REQUEST, "Record conflicts with existing data")


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return error_response(
        status.HTTP_429_TOO_MANY_REQUESTS,
        "Too many requests from this IP, please try again later.",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")


def exception_handlers() -> dict:
    return {
        StarletteHTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
        DoesNotExist: does_not_exist_handler,
        IntegrityError: integrity_error_handler,
        RateLimitExceeded: rate_limit_exceeded_handler,
        Exception: unhandled_exception_handler,
    }
