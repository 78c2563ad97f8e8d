"""
Session Binding Store
Flat string keyspace: token hash -> fingerprint.
"""
import logging
from typing import Awaitable, Callable, Optional, Protocol

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.config import get_settings
from app.infrastructure.redis.connection import get_redis

settings = get_settings()
logger = logging.getLogger(__name__)


class SessionBindingStore(Protocol):
    """Key-value store the binder and verifier operate on."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class RedisBindingStore:
    """
    Redis implementation of SessionBindingStore.

    The client is resolved on every call so a Redis outage at startup
    does not pin the store to a dead connection.
    """

    def __init__(
        self,
        client_factory: Callable[[], Awaitable[Optional[Redis]]] = get_redis,
        key_prefix: str = settings.SESSION_KEY_PREFIX,
        ttl_seconds: Optional[int] = settings.SESSION_BINDING_TTL_SECONDS,
    ):
        self._client_factory = client_factory
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def _client(self) -> Redis:
        client = await self._client_factory()
        if client is None:
            raise RedisConnectionError("Redis unavailable")
        return client

    async def get(self, key: str) -> Optional[str]:
        client = await self._client()
        return await client.get(self._key(key))

    async def set(self, key: str, value: str) -> None:
        client = await self._client()
        # SET overwrites: last write wins
        await client.set(self._key(key), value, ex=self.ttl_seconds)


async def get_binding_store() -> SessionBindingStore:
    """FastAPI dependency returning the configured binding store."""
    return RedisBindingStore()
