from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from app.core.exceptions import BindStoreError, StoreLookupError


# ==========================================
# REQUEST SCHEMAS
# ==========================================


class BindSessionRequest(BaseModel):
    """Bind a freshly issued session token to the client fingerprint."""

    token: str = Field(..., min_length=1, description="Raw session token")
    fingerprint: str = Field(..., min_length=1, description="Client fingerprint")

    class Config:
        json_schema_extra = {
            "example": {
                "token": "abc123",
                "fingerprint": "fp-X",
            }
        }


class VerifySessionRequest(BaseModel):
    """
    Verify the session carried by the request.
    The token comes from the Authorization header or the session cookie.
    """

    fingerprint: Optional[str] = Field(
        None, description="Client fingerprint (falls back to the fingerprint header)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "fingerprint": "fp-X",
            }
        }


# ==========================================
# RESULT SCHEMAS
# ==========================================


class VerificationResult(BaseModel):
    """
    Outcome of a session verification.

    Only explicitly set fields are part of the wire form: an unauthenticated
    request or a store failure serializes to ``{"valid": false}``, every other
    outcome carries ``hijacked`` and ``receivedFingerprint``.
    Check ``valid`` first; ``hijacked`` is meaningful only when present.
    """

    model_config = ConfigDict(populate_by_name=True)

    valid: bool = Field(..., description="Session may proceed")
    hijacked: Optional[bool] = Field(
        None, description="Bound fingerprint differs from the presented one"
    )
    received_fingerprint: Optional[str] = Field(
        None,
        alias="receivedFingerprint",
        description="Fingerprint on record for the session (null when unbound)",
    )

    _error: Optional[StoreLookupError] = PrivateAttr(default=None)

    @property
    def error(self) -> Optional[StoreLookupError]:
        """Store failure absorbed while producing this result, if any."""
        return self._error

    @classmethod
    def unauthenticated(cls) -> "VerificationResult":
        return cls(valid=False)

    @classmethod
    def store_unavailable(cls, error: StoreLookupError) -> "VerificationResult":
        result = cls(valid=False)
        result._error = error
        return result

    @classmethod
    def matched(cls, stored_fingerprint: Optional[str]) -> "VerificationResult":
        return cls(
            valid=True, hijacked=False, received_fingerprint=stored_fingerprint
        )

    @classmethod
    def hijack(cls, stored_fingerprint: str) -> "VerificationResult":
        return cls(
            valid=False, hijacked=True, received_fingerprint=stored_fingerprint
        )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class BindResult(BaseModel):
    """
    Outcome of a best-effort bind.
    Callers may ignore it; ``bound=True`` is not a durability guarantee.
    """

    bound: bool = Field(..., description="Store accepted the write")

    _error: Optional[BindStoreError] = PrivateAttr(default=None)

    @property
    def error(self) -> Optional[BindStoreError]:
        return self._error

    @classmethod
    def failed(cls, error: Optional[BindStoreError] = None) -> "BindResult":
        result = cls(bound=False)
        result._error = error
        return result


# ==========================================
# RESPONSE SCHEMAS
# ==========================================


class SessionStatusResponse(BaseModel):
    """Binding status of an authenticated session."""

    bound: bool = Field(..., description="A fingerprint is on record")
    valid: bool = Field(..., description="Session passed fingerprint verification")

    class Config:
        json_schema_extra = {
            "example": {
                "bound": True,
                "valid": True,
            }
        }


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str = Field(..., description="Response message")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Operation completed successfully",
            }
        }


# ==========================================
# INTERNAL SCHEMAS
# ==========================================


class AuditEvent(BaseModel):
    """Schema for security audit events."""

    event_type: str = Field(..., description="Event type enum value")
    risk_score: int = Field(default=0, ge=0, le=100, description="Risk score 0-100")
    ip_address: str = Field(default="unknown", description="IP address")
    user_agent: Optional[str] = Field(None, description="User agent string")
    key_hint: Optional[str] = Field(None, description="Prefix of the token hash")
    event_metadata: Optional[dict] = Field(
        None,
        description="Additional metadata",
        alias="metadata",
    )

    class Config:
        populate_by_name = True
