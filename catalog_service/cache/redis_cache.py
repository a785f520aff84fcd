"""
Distributed cache backend using Redis.

Shared across service instances so that every replica sees the same
catalog cache entries and invalidations.
"""

from typing import Optional

import redis.asyncio as redis
import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..domain.exceptions import CacheException

logger = structlog.get_logger(__name__)


class RedisCacheBackend:
    """
    Cache backend over redis.asyncio.

    Supports:
    - Raw byte payloads with SETEX expiration
    - Connection pooling
    - Optional instance prefix for sharing a Redis database
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        prefix: str = "",
        max_connections: int = 50,
        socket_timeout: float = 5.0,
        socket_connect_timeout: float = 5.0,
        client: Optional[Redis] = None,
    ):
        """
        Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (may carry credentials)
            prefix: Instance prefix prepended to every key
            max_connections: Maximum connections in pool
            socket_timeout: Socket read/write timeout
            socket_connect_timeout: Socket connection timeout
            client: Pre-built client, mainly for tests
        """
        self.redis_url = redis_url
        self.prefix = prefix
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self.client: Optional[Redis] = client

        self.hits = 0
        self.misses = 0
        self.errors = 0

    async def connect(self) -> None:
        """
        Establish Redis connection with connection pooling.

        Raises:
            CacheException: If Redis cannot be reached
        """
        if self.client is not None:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                max_connections=self.max_connections,
                socket_timeout=self.socket_timeout,
                socket_connect_timeout=self.socket_connect_timeout,
                decode_responses=False,
            )
            await self.client.ping()
        except (RedisError, OSError) as e:
            logger.error("Failed to connect to Redis", error=str(e))
            if self.client is not None:
                await self.client.aclose()
            self.client = None
            raise CacheException("connect", str(e)) from e

        logger.info(
            "Redis cache connected",
            redis_url=self.redis_url.split("@")[-1],
            max_connections=self.max_connections,
        )

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("Redis cache disconnected")

    def is_available(self) -> bool:
        return self.client is not None

    def _make_key(self, key: str) -> str:
        """Generate namespaced cache key."""
        return f"{self.prefix}{key}"

    def _require_client(self, operation: str) -> Redis:
        if self.client is None:
            self.errors += 1
            raise CacheException(operation, "Redis not connected")
        return self.client

    async def get(self, key: str) -> Optional[bytes]:
        client = self._require_client("get")
        try:
            data = await client.get(self._make_key(key))
        except RedisError as e:
            self.errors += 1
            raise CacheException("get", str(e)) from e

        if data is None:
            self.misses += 1
            return None

        self.hits += 1
        return data

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        client = self._require_client("set")
        try:
            await client.setex(self._make_key(key), ttl_seconds, value)
        except RedisError as e:
            self.errors += 1
            raise CacheException("set", str(e)) from e

    async def delete(self, key: str) -> bool:
        client = self._require_client("delete")
        try:
            return await client.delete(self._make_key(key)) > 0
        except RedisError as e:
            self.errors += 1
            raise CacheException("delete", str(e)) from e

    async def ping(self) -> bool:
        """Check Redis connectivity without raising."""
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except RedisError:
            return False

    async def get_stats(self) -> dict:
        """Get cache statistics."""
        total = self.hits + self.misses
        hit_rate = (self.hits / total * 100) if total > 0 else 0

        stats = {
            "backend": "redis",
            "hits": self.hits,
            "misses": self.misses,
            "errors": self.errors,
            "total_requests": total,
            "hit_rate_percent": round(hit_rate, 2),
        }

        if self.client:
            try:
                info = await self.client.info("stats")
                stats["redis_keyspace_hits"] = info.get("keyspace_hits", 0)
                stats["redis_keyspace_misses"] = info.get("keyspace_misses", 0)
            except RedisError:
                pass

        return stats
