"""
Session Verification Service
Classifies a request's session as valid, invalid, or hijacked by comparing
the presented fingerprint with the one bound at session establishment.
"""
import logging
from typing import Optional

from app.core.exceptions import FingerprintMissingError, StoreLookupError
from app.core.security import key_hint
from app.domain.schemas.session import VerificationResult
from app.infrastructure.redis.binding_store import SessionBindingStore

logger = logging.getLogger(__name__)


class SessionVerifier:
    """Read-only fingerprint check against the binding store."""

    def __init__(self, store: SessionBindingStore):
        self.store = store

    async def verify(
        self, auth_token: Optional[str], fingerprint: Optional[str]
    ) -> VerificationResult:
        """
        Verify a session against its bound fingerprint.

        Args:
            auth_token: Store key of the session (the token hash)
            fingerprint: Fingerprint freshly observed on this request

        Returns:
            - ``{valid: false}`` when there is no token or the store failed
            - valid, not hijacked, when the fingerprint matches or no binding
              exists for the token
            - invalid and hijacked when a different fingerprint is bound

        Raises:
            FingerprintMissingError: If no fingerprint was supplied
        """
        if not auth_token:
            return VerificationResult.unauthenticated()

        if not fingerprint:
            raise FingerprintMissingError()

        try:
            stored_fingerprint = await self.store.get(auth_token)
        except Exception as e:
            # Fail closed without claiming a hijack
            error = StoreLookupError(
                f"Failed to look up session binding: {e}",
                key_hint=key_hint(auth_token),
            )
            error.__cause__ = e
            logger.error(
                f"Session lookup failed for {error.key_hint}: {e}", exc_info=True
            )
            return VerificationResult.store_unavailable(error)

        if stored_fingerprint == fingerprint:
            return VerificationResult.matched(stored_fingerprint)

        # Unbound tokens (issued before binding existed, or never bound) pass
        if stored_fingerprint is None:
            logger.info(f"No fingerprint bound for session {key_hint(auth_token)}")
            return VerificationResult.matched(None)

        logger.warning(f"Fingerprint mismatch for session {key_hint(auth_token)}")
        return VerificationResult.hijack(stored_fingerprint)


async def verify_session(
    auth_token: Optional[str],
    fingerprint: Optional[str],
    store: SessionBindingStore,
) -> VerificationResult:
    return await SessionVerifier(store).verify(auth_token, fingerprint)
