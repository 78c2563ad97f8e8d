"""
Establish Session Use Case
Bind a freshly issued session token to the client fingerprint.
"""
from typing import Optional

from app.core.security import hash_session_token, key_hint
from app.domain.enums import SecurityEventEnum
from app.domain.schemas.session import BindResult
from app.infrastructure.redis.binding_store import SessionBindingStore
from app.application.services.audit_service import audit_service
from app.application.services.session_binder import bind_session


async def establish_session(
    store: SessionBindingStore,
    token: str,
    fingerprint: str,
    ip_address: str,
    user_agent: Optional[str] = None,
) -> BindResult:
    """
    Hash the session token and bind it to the fingerprint.

    Args:
        store: Session binding store
        token: Raw session token issued by the authentication flow
        fingerprint: Client fingerprint
        ip_address: Client IP address
        user_agent: User agent string

    Returns:
        BindResult (best-effort; a failed bind does not raise)
    """
    token_hash = hash_session_token(token)
    result = await bind_session(token_hash, fingerprint, store)

    if result.bound:
        event_type = SecurityEventEnum.SESSION_BOUND
        metadata = None
    else:
        event_type = SecurityEventEnum.SESSION_BIND_FAILED
        metadata = {"reason": str(result.error) if result.error else "invalid_input"}

    audit_service.log_event(
        event_type=event_type,
        ip_address=ip_address,
        user_agent=user_agent,
        key_hint=key_hint(token_hash),
        metadata=metadata,
    )
    return result
