"""
Tests for cache backends (in-memory LRU and Redis)
"""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from catalog_service.cache.memory_cache import MemoryCacheBackend
from catalog_service.cache.redis_cache import RedisCacheBackend
from catalog_service.domain.exceptions import CacheException


class TestMemoryCacheBackend:
    """Test in-memory cache backend"""

    @pytest.mark.asyncio
    async def test_set_and_get(self, memory_cache):
        """Test storing and reading a payload"""
        await memory_cache.set("key", b"value", 60)

        assert await memory_cache.get("key") == b"value"

    @pytest.mark.asyncio
    async def test_missing_key(self, memory_cache):
        """Test reading an unknown key"""
        assert await memory_cache.get("unknown") is None
        assert memory_cache.misses == 1

    @pytest.mark.asyncio
    async def test_entry_expires(self, memory_cache, clock):
        """Test that entries disappear at their expiry time"""
        await memory_cache.set("key", b"value", 10)

        clock.advance(9)
        assert await memory_cache.get("key") == b"value"

        clock.advance(1)
        assert await memory_cache.get("key") is None
        assert "key" not in memory_cache.cache

    @pytest.mark.asyncio
    async def test_overwrite_resets_ttl(self, memory_cache, clock):
        """Test that writing a key again extends its lifetime"""
        await memory_cache.set("key", b"old", 10)
        clock.advance(8)
        await memory_cache.set("key", b"new", 10)
        clock.advance(8)

        assert await memory_cache.get("key") == b"new"

    @pytest.mark.asyncio
    async def test_delete(self, memory_cache):
        """Test deleting present and absent keys"""
        await memory_cache.set("key", b"value", 60)

        assert await memory_cache.delete("key") is True
        assert await memory_cache.delete("key") is False
        assert await memory_cache.get("key") is None

    @pytest.mark.asyncio
    async def test_lru_eviction(self, clock):
        """Test that the least recently used entry is evicted when full"""
        cache = MemoryCacheBackend(max_size=2, timer=clock)
        await cache.set("a", b"1", 60)
        await cache.set("b", b"2", 60)
        await cache.get("a")

        await cache.set("c", b"3", 60)

        assert await cache.get("b") is None
        assert await cache.get("a") == b"1"
        assert await cache.get("c") == b"3"
        assert cache.evictions == 1

    @pytest.mark.asyncio
    async def test_stats(self, memory_cache):
        """Test hit/miss statistics"""
        await memory_cache.set("key", b"value", 60)
        await memory_cache.get("key")
        await memory_cache.get("key")
        await memory_cache.get("other")

        stats = await memory_cache.get_stats()

        assert stats["backend"] == "memory"
        assert stats["size"] == 1
        assert stats["hits"] == 2
        assert stats["misses"] == 1
        assert stats["hit_rate_percent"] == 66.67

    @pytest.mark.asyncio
    async def test_clear(self, memory_cache):
        """Test clearing the cache"""
        await memory_cache.set("key", b"value", 60)

        memory_cache.clear()

        assert await memory_cache.get("key") is None


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.get.return_value = None
    client.delete.return_value = 1
    return client


class TestRedisCacheBackend:
    """Test Redis cache backend with a mocked client"""

    @pytest.mark.asyncio
    async def test_get_hit(self, redis_client):
        """Test reading an existing key"""
        redis_client.get.return_value = b"payload"
        cache = RedisCacheBackend(client=redis_client)

        assert await cache.get("catalog:items:1") == b"payload"
        redis_client.get.assert_awaited_once_with("catalog:items:1")
        assert cache.hits == 1

    @pytest.mark.asyncio
    async def test_get_miss(self, redis_client):
        """Test reading an absent key"""
        cache = RedisCacheBackend(client=redis_client)

        assert await cache.get("catalog:items:1") is None
        assert cache.misses == 1

    @pytest.mark.asyncio
    async def test_set_uses_setex_and_prefix(self, redis_client):
        """Test that writes carry the TTL and instance prefix"""
        cache = RedisCacheBackend(prefix="eu:", client=redis_client)

        await cache.set("catalog:items:all", b"[]", 600)

        redis_client.setex.assert_awaited_once_with("eu:catalog:items:all", 600, b"[]")

    @pytest.mark.asyncio
    async def test_delete(self, redis_client):
        """Test deleting a key"""
        cache = RedisCacheBackend(client=redis_client)

        assert await cache.delete("catalog:items:1") is True

        redis_client.delete.return_value = 0
        assert await cache.delete("catalog:items:1") is False

    @pytest.mark.asyncio
    async def test_redis_error_becomes_cache_exception(self, redis_client):
        """Test that driver errors are wrapped"""
        redis_client.get.side_effect = RedisConnectionError("connection reset")
        cache = RedisCacheBackend(client=redis_client)

        with pytest.raises(CacheException) as exc_info:
            await cache.get("catalog:items:1")

        assert exc_info.value.details["operation"] == "get"
        assert "connection reset" in exc_info.value.message
        assert cache.errors == 1

    @pytest.mark.asyncio
    async def test_not_connected(self):
        """Test that calls without a client fail with CacheException"""
        cache = RedisCacheBackend()

        assert cache.is_available() is False
        with pytest.raises(CacheException):
            await cache.set("key", b"value", 10)

    @pytest.mark.asyncio
    async def test_connect_success(self, redis_client):
        """Test connecting pings the server"""
        with patch(
            "catalog_service.cache.redis_cache.redis.from_url", return_value=redis_client
        ) as from_url:
            cache = RedisCacheBackend(redis_url="redis://cache:6379/0")
            await cache.connect()

        from_url.assert_called_once()
        redis_client.ping.assert_awaited_once()
        assert cache.is_available() is True

    @pytest.mark.asyncio
    async def test_connect_failure(self, redis_client):
        """Test that an unreachable server raises CacheException"""
        redis_client.ping.side_effect = RedisConnectionError("refused")

        with patch("catalog_service.cache.redis_cache.redis.from_url", return_value=redis_client):
            cache = RedisCacheBackend()
            with pytest.raises(CacheException):
                await cache.connect()

        redis_client.aclose.assert_awaited_once()
        assert cache.is_available() is False

    @pytest.mark.asyncio
    async def test_disconnect(self, redis_client):
        """Test closing the connection"""
        cache = RedisCacheBackend(client=redis_client)

        await cache.disconnect()

        redis_client.aclose.assert_awaited_once()
        assert cache.client is None

    @pytest.mark.asyncio
    async def test_ping_failure(self, redis_client):
        """Test ping reports False on errors"""
        redis_client.ping.side_effect = RedisConnectionError("refused")
        cache = RedisCacheBackend(client=redis_client)

        assert await cache.ping() is False

    @pytest.mark.asyncio
    async def test_stats(self, redis_client):
        """Test statistics include server keyspace counters"""
        redis_client.info.return_value = {"keyspace_hits": 10, "keyspace_misses": 5}
        cache = RedisCacheBackend(client=redis_client)
        await cache.get("missing")

        stats = await cache.get_stats()

        assert stats["backend"] == "redis"
        assert stats["misses"] == 1
        assert stats["redis_keyspace_hits"] == 10
