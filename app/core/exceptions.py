"""
Custom Exceptions
Domain and application-level exceptions.
"""
from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    """Authentication failed."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class SessionHijackedError(HTTPException):
    """Presented fingerprint does not match the one bound to the session."""

    def __init__(self, detail: str = "Session hijacking detected"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class FingerprintMissingError(HTTPException):
    """
    No fingerprint was supplied for verification.
    Client-side defect, not an authentication outcome.
    """

    def __init__(self, detail: str = "Error calculating fingerprint"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class BindingStoreError(Exception):
    """Base class for recovered binding store failures."""

    def __init__(self, message: str, key_hint: str = ""):
        super().__init__(message)
        self.key_hint = key_hint


class BindStoreError(BindingStoreError):
    """Store write failed while binding a session. Never raised to callers."""


class StoreLookupError(BindingStoreError):
    """Store read failed while verifying a session. Never raised to callers."""
