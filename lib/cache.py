# =============================================================================
# lib/cache.py - Read-Through Record Cache
# =============================================================================
# Short-lived Redis cache in front of single-record lookups.
#
#   value = await cache.get_or_load(record_id, loader)
#
# - Hit within the TTL: cached value, loader is not called
# - Miss or expiry: loader is awaited, its result stored with the TTL
# - Loader failures propagate and nothing is cached
# - Redis failures never fail a read; the loader result is served instead
#
# Entries are evicted explicitly after writes made through the API. Writes
# made directly to the database stay visible only after the TTL expires.
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Any]]


def create_redis_client(url: str, timeout: float | None = None) -> aioredis.Redis:
    """Create an asyncio Redis client that returns str values."""
    return aioredis.from_url(
        url,
        decode_responses=True,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
    )


class ReadThroughCache:
    """
    JSON read-through cache over an asyncio Redis client.

    Args:
        client: redis.asyncio client (decode_responses=True)
        ttl_seconds: Lifetime of each entry
        namespace: Key prefix, keys look like "<namespace>:<key>"
    """

    def __init__(
        self,
        client: aioredis.Redis,
        ttl_seconds: int = 3,
        namespace: str = "contact-us",
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get_or_load(self, key: str, loader: Loader) -> Any:
        cache_key = self._key(key)

        try:
            raw = await self.client.get(cache_key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {cache_key}: {e}")
            raw = None

        if raw is not None:
            logger.debug(f"Cache hit: {cache_key}")
            return json.loads(raw)

        value = await loader()

        # Misses are not cached, so a record created right after a miss is visible
        if value is None:
            return None

        try:
            await self.client.set(cache_key, json.dumps(value, default=str), ex=self.ttl_seconds)
        except RedisError as e:
            logger.warning(f"Cache write failed for {cache_key}: {e}")

        return value

    async def evict(self, *keys: str) -> None:
        """Drop entries so the next read goes to the database."""
        if not keys:
            return
        try:
            await self.client.delete(*(self._key(key) for key in keys))
        except RedisError as e:
            logger.warning(f"Cache eviction failed for {keys}: {e}")

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning(f"Cache ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis cache client closed")
