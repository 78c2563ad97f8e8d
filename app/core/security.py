"""
Security Utilities: Session Token Hashing
Raw session tokens are never persisted; bindings are keyed by their hash.
"""
import hashlib
import hmac
from typing import Optional

from app.core.config import get_settings

settings = get_settings()


class TokenHasher:
    """One-way hashing of session tokens (SHA-256, or HMAC-SHA256 with a secret)."""

    def __init__(self, secret: Optional[bytes] = None):
        self.secret = secret

    def hash_token(self, token: str) -> str:
        """
        Hash a session token for use as a binding key.

        Args:
            token: Plain session token

        Returns:
            Hex digest of the token
        """
        data = token.encode("utf-8")
        if self.secret:
            return hmac.new(self.secret, data, hashlib.sha256).hexdigest()
        return hashlib.sha256(data).hexdigest()


def key_hint(token_hash: Optional[str]) -> str:
    """Short, log-safe prefix of a token hash."""
    return f"{token_hash[:8]}..." if token_hash else "<empty>"


# Singleton instance
token_hasher = TokenHasher(settings.token_hash_secret_bytes)


def hash_session_token(token: str) -> str:
    return token_hasher.hash_token(token)
