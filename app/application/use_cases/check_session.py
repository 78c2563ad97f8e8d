"""
Check Session Use Case
Verify the session carried by a request against its bound fingerprint.
"""
from typing import Optional

from app.core.exceptions import FingerprintMissingError
from app.core.security import hash_session_token, key_hint
from app.domain.enums import SecurityEventEnum
from app.domain.schemas.session import VerificationResult
from app.infrastructure.redis.binding_store import SessionBindingStore
from app.application.services.audit_service import audit_service
from app.application.services.session_verifier import verify_session


def _event_for(result: VerificationResult) -> Optional[SecurityEventEnum]:
    if result.error is not None:
        return SecurityEventEnum.STORE_LOOKUP_FAILED
    if result.hijacked:
        return SecurityEventEnum.SESSION_HIJACKED
    if result.valid and result.received_fingerprint is None:
        return SecurityEventEnum.SESSION_UNBOUND
    if result.valid:
        return SecurityEventEnum.SESSION_VERIFIED
    return None


async def check_session(
    store: SessionBindingStore,
    token: Optional[str],
    fingerprint: Optional[str],
    ip_address: str,
    user_agent: Optional[str] = None,
) -> VerificationResult:
    """
    Hash the presented session token and verify it.

    Args:
        store: Session binding store
        token: Raw session token from the request (may be absent)
        fingerprint: Fingerprint observed on this request
        ip_address: Client IP address
        user_agent: User agent string

    Returns:
        Verification result

    Raises:
        FingerprintMissingError: If a token is present but no fingerprint is
    """
    token_hash = hash_session_token(token) if token else None

    try:
        result = await verify_session(token_hash, fingerprint, store)
    except FingerprintMissingError:
        audit_service.log_event(
            event_type=SecurityEventEnum.FINGERPRINT_MISSING,
            ip_address=ip_address,
            user_agent=user_agent,
            key_hint=key_hint(token_hash),
        )
        raise

    event_type = _event_for(result)
    if event_type is not None:
        audit_service.log_event(
            event_type=event_type,
            ip_address=ip_address,
            user_agent=user_agent,
            key_hint=key_hint(token_hash),
        )
    return result
