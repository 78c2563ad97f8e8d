"""
Security Middleware
Extracts client context (IP, User-Agent, fingerprint) and hardens responses.
"""
import logging
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def extract_client_ip(request: Request) -> str:
    """
    Extract client IP address from request.
    Handles X-Forwarded-For header for load balancer environments.

    Args:
        request: FastAPI request object

    Returns:
        Client IP address string
    """
    # X-Forwarded-For can contain multiple IPs: "client, proxy1, proxy2"
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to responses."""

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )

        return response


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Add request context (IP, User-Agent, fingerprint header) to request state."""

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request.state.client_ip = extract_client_ip(request)
        request.state.user_agent = request.headers.get("User-Agent")
        request.state.fingerprint = request.headers.get(settings.FINGERPRINT_HEADER)

        return await call_next(request)
