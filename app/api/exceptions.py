"""
Exception Handlers
Custom exception handlers for FastAPI.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.api.middleware.security import extract_client_ip
from app.core.exceptions import (
    AuthenticationError,
    FingerprintMissingError,
    SessionHijackedError,
)

logger = logging.getLogger(__name__)


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """Handle authentication errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def session_hijacked_error_handler(
    request: Request, exc: SessionHijackedError
) -> JSONResponse:
    """Handle detected session hijacking."""
    logger.warning(
        f"Rejected hijacked session on {request.url.path} "
        f"from {extract_client_ip(request)}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


async def fingerprint_missing_error_handler(
    request: Request, exc: FingerprintMissingError
) -> JSONResponse:
    """Handle requests that arrive without a client fingerprint."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": exc.errors(),
        },
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
