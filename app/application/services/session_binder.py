"""
Session Binding Service
Records the fingerprint observed when a session is established.
"""
import logging

from app.core.exceptions import BindStoreError
from app.core.security import key_hint
from app.domain.schemas.session import BindResult
from app.infrastructure.redis.binding_store import SessionBindingStore

logger = logging.getLogger(__name__)


class SessionBinder:
    """
    Persist token hash -> fingerprint bindings.

    Binding is best-effort: store failures are logged and reported in the
    returned BindResult, never raised, so the surrounding authentication
    flow is never blocked by it.
    """

    def __init__(self, store: SessionBindingStore):
        self.store = store

    async def bind(self, token_hash: str, fingerprint: str) -> BindResult:
        """
        Bind a session token hash to a fingerprint (last write wins).

        Args:
            token_hash: One-way hash of the session token (never the raw token)
            fingerprint: Client fingerprint observed at session establishment

        Returns:
            BindResult; callers are free to ignore it
        """
        if not token_hash or not fingerprint:
            logger.warning(
                f"Skipping session bind for {key_hint(token_hash)}: "
                "token hash and fingerprint are required"
            )
            return BindResult.failed()

        try:
            await self.store.set(token_hash, fingerprint)
        except Exception as e:
            error = BindStoreError(
                f"Failed to bind session: {e}", key_hint=key_hint(token_hash)
            )
            error.__cause__ = e
            logger.error(
                f"Session bind failed for {error.key_hint}: {e}", exc_info=True
            )
            return BindResult.failed(error)

        logger.debug(f"Session bound for {key_hint(token_hash)}")
        return BindResult(bound=True)


async def bind_session(
    token_hash: str, fingerprint: str, store: SessionBindingStore
) -> BindResult:
    return await SessionBinder(store).bind(token_hash, fingerprint)
