"""
Consolidated middleware for the Recipe Catalog API
"""

import time
import logging
from datetime import datetime
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import AppError

logger = logging.getLogger("recipe_catalog.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, BaseException):
        return str(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    return obj


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a request id and its processing time"""

    async def dispatch(self, request: Request, call_next):
        # An incoming X-Request-ID is kept
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        log_context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }

        logger.debug(
            f"{request.method} {request.url.path} started",
            extra={
                **log_context,
                "client": request.client.host if request.client else None,
            },
        )
        start_time = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"{request.method} {request.url.path} failed after {process_time:.4f}s",
                extra={**log_context, "error": str(exc)},
                exc_info=True,
            )
            raise

        process_time = time.perf_counter() - start_time
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({process_time:.4f}s)",
            extra={**log_context, "status_code": response.status_code},
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    # Convert errors to JSON-serializable format (handles Decimal, etc.)
    serializable_errors = make_serializable(exc.errors())

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "success": False,
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": serializable_errors,
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {
                "code": f"HTTP_{exc.status_code}",
                "message": exc.detail,
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def app_exception_handler(request: Request, exc: AppError):
    """Handle errors raised on purpose by services and repositories"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url}: {exc.message}")
    else:
        logger.warning(f"{exc.code} on {request.url}: {exc.message}")

    error = {"code": exc.code, "message": exc.message}
    if exc.details:
        error["details"] = make_serializable(dict(exc.details))

    return JSONResponse(
        status_code=exc.http_status,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            },
            "timestamp": datetime.utcnow().isoformat(),
        },
    )
