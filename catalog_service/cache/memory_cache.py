"""
In-memory LRU cache backend.

Process-local stand-in for Redis, used for single-instance deployments
(CACHE_BACKEND=memory) and for tests that need a real cache with a
controllable clock.
"""

import time
from typing import Callable, Optional, Tuple

import structlog
from cachetools import LRUCache

logger = structlog.get_logger(__name__)


class MemoryCacheBackend:
    """
    In-memory LRU cache with per-entry expiration.

    Attributes:
        cache: LRU cache of (payload, expires_at) pairs
        max_size: Maximum number of entries kept
        timer: Monotonic clock used for expiry
        hits: Number of cache hits
        misses: Number of cache misses
        evictions: Number of entries evicted due to size limit
    """

    def __init__(self, max_size: int = 1000, timer: Callable[[], float] = time.monotonic):
        """
        Initialize memory cache.

        Args:
            max_size: Maximum number of entries (default: 1000)
            timer: Clock returning seconds; override to control expiry in tests
        """
        self.cache: LRUCache = LRUCache(maxsize=max_size)
        self.max_size = max_size
        self.timer = timer

        self.hits = 0
        self.misses = 0
        self.evictions = 0

        logger.info("Initialized MemoryCacheBackend", max_size=max_size)

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Optional[bytes]:
        entry: Optional[Tuple[bytes, float]] = self.cache.get(key)

        if entry is None:
            self.misses += 1
            return None

        payload, expires_at = entry
        if self.timer() >= expires_at:
            del self.cache[key]
            self.misses += 1
            logger.debug("Cache entry expired", key=key)
            return None

        self.hits += 1
        return payload

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        if len(self.cache) >= self.max_size and key not in self.cache:
            self.evictions += 1

        self.cache[key] = (value, self.timer() + ttl_seconds)

    async def delete(self, key: str) -> bool:
        return self.cache.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all entries."""
        count = len(self.cache)
        self.cache.clear()
        logger.info("Cleared memory cache", entries=count)

    async def get_stats(self) -> dict:
        """Get cache statistics."""
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0

        return {
            "backend": "memory",
            "size": len(self.cache),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
        }
