"""
FastAPI Dependencies
Session token extraction and fingerprint-bound session enforcement.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.middleware.security import extract_client_ip
from app.core.config import get_settings
from app.core.exceptions import AuthenticationError, SessionHijackedError
from app.domain.schemas.session import VerificationResult
from app.infrastructure.redis.binding_store import (
    SessionBindingStore,
    get_binding_store,
)
from app.application.use_cases.check_session import check_session

settings = get_settings()
security = HTTPBearer(auto_error=False)


async def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """
    Get the raw session token from the Bearer header, or the session cookie.
    Returns None when the request carries neither.
    """
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def get_request_fingerprint(request: Request) -> Optional[str]:
    """Fingerprint header value, as captured by RequestContextMiddleware."""
    fingerprint = getattr(request.state, "fingerprint", None)
    if fingerprint is None:
        fingerprint = request.headers.get(settings.FINGERPRINT_HEADER)
    return fingerprint or None


async def require_valid_session(
    request: Request,
    token: Optional[str] = Depends(get_session_token),
    store: SessionBindingStore = Depends(get_binding_store),
) -> VerificationResult:
    """
    Enforce a fingerprint-bound session on a route.

    Raises:
        AuthenticationError: No token, or the session could not be verified
        SessionHijackedError: The bound fingerprint differs from the presented one
        FingerprintMissingError: The request carries no fingerprint
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    result = await check_session(
        store=store,
        token=token,
        fingerprint=get_request_fingerprint(request),
        ip_address=extract_client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )

    if result.hijacked:
        raise SessionHijackedError()
    if not result.valid:
        raise AuthenticationError("Session could not be verified")

    return result
