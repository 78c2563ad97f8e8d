"""
Redis Connection Management
Backs the session binding store (token hash -> fingerprint).
"""
import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.asyncio import Redis

from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global Redis connection pool
_redis_client: Optional[Redis] = None


async def get_redis() -> Optional[Redis]:
    """
    Get Redis client instance.
    Returns None if Redis is unavailable (for graceful degradation).
    """
    global _redis_client

    if _redis_client is None:
        client = aioredis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            retry_on_timeout=False,
            health_check_interval=30,
        )
        try:
            await client.ping()
            if _redis_client is None:
                _redis_client = client
                logger.info("Redis connection established")
            else:
                # A concurrent caller connected first; keep a single pool
                await client.aclose()
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            await client.aclose()

    return _redis_client


async def close_redis() -> None:
    """
    Close Redis connection (called on application shutdown).
    """
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None
        logger.info("Redis connection closed")


async def check_redis_health() -> bool:
    """
    Check if Redis is available and healthy.
    Returns True if Redis is operational, False otherwise.
    """
    try:
        client = await get_redis()
        if client is None:
            return False
        await client.ping()
        return True
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        return False
