"""Redis-based cache service for catalog records.

Provides async Redis access with TTL support: string entries for
serialized records and a set for the record index. Key format lives in
catalog.infrastructure.cache.keys.

Unlike a pure accelerator, this service reports failures: every redis
error becomes CacheUnavailableException so the coordinator decides
whether to swallow it (best-effort paths) or surface it (cache-only
projections). No command is retried here.
"""

from __future__ import annotations

import logging

import redis.asyncio as redis

from catalog.core.config import Settings, get_settings
from catalog.domain.exceptions import CacheUnavailableException

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service implementing IRecordCache.

    Uses catalog.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()

    async def connect(self) -> None:
        """Create the Redis client and ping it. Call on startup.

        A failed ping is logged, not raised: the client is kept and the
        connection pool reconnects on the next command, so the cache
        recovers once Redis is reachable.
        """
        if self.redis is None:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=self.settings.redis_password.get_secret_value()
                if self.settings.redis_password
                else None,
                decode_responses=True,
                socket_connect_timeout=self.settings.redis_socket_timeout,
                socket_timeout=self.settings.redis_socket_timeout,
                socket_keepalive=True,
            )
        try:
            await self.redis.ping()
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except redis.RedisError as e:
            logger.warning("Redis ping failed: %s. Cache calls will fail until it recovers.", e)

    async def disconnect(self) -> None:
        """Close Redis connection. Call on shutdown."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        """Return True if a client has been configured."""
        return self.redis is not None

    def _client(self, operation: str, key: str) -> redis.Redis:
        if self.redis is None:
            raise CacheUnavailableException(operation, key, "Redis client not connected")
        return self.redis

    async def get(self, key: str) -> str | None:
        """Return the cached text for key, or None if missing.

        Raises:
            CacheUnavailableException: On any Redis error.
        """
        client = self._client("get", key)
        try:
            value = await client.get(key)
        except redis.RedisError as e:
            raise CacheUnavailableException("get", key, str(e)) from e
        logger.debug("Cache %s: %s", "HIT" if value is not None else "MISS", key)
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store value under key with a TTL in seconds (SETEX)."""
        client = self._client("set", key)
        try:
            await client.setex(key, ttl, value)
        except redis.RedisError as e:
            raise CacheUnavailableException("set", key, str(e)) from e
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key (no error if it does not exist)."""
        client = self._client("delete", key)
        try:
            await client.delete(key)
        except redis.RedisError as e:
            raise CacheUnavailableException("delete", key, str(e)) from e
        logger.debug("Cache DELETE: %s", key)

    async def add_to_set(self, key: str, *members: str) -> None:
        """SADD members to the set at key. No-op when members is empty."""
        if not members:
            return
        client = self._client("add_to_set", key)
        try:
            await client.sadd(key, *members)
        except redis.RedisError as e:
            raise CacheUnavailableException("add_to_set", key, str(e)) from e
        logger.debug("Cache SADD: %s (+%s)", key, len(members))

    async def remove_from_set(self, key: str, member: str) -> None:
        """SREM member from the set at key."""
        client = self._client("remove_from_set", key)
        try:
            await client.srem(key, member)
        except redis.RedisError as e:
            raise CacheUnavailableException("remove_from_set", key, str(e)) from e
        logger.debug("Cache SREM: %s (-%s)", key, member)

    async def set_members(self, key: str) -> list[str]:
        """Return the members of the set at key (empty list if missing)."""
        client = self._client("set_members", key)
        try:
            members = await client.smembers(key)
        except redis.RedisError as e:
            raise CacheUnavailableException("set_members", key, str(e)) from e
        return list(members)

    async def expire(self, key: str, ttl: int) -> None:
        """Reset the TTL of key to ttl seconds."""
        client = self._client("expire", key)
        try:
            await client.expire(key, ttl)
        except redis.RedisError as e:
            raise CacheUnavailableException("expire", key, str(e)) from e
