"""Cache module initialization."""

from .backend import CacheBackend
from .memory_cache import MemoryCacheBackend
from .redis_cache import RedisCacheBackend

__all__ = ["CacheBackend", "MemoryCacheBackend", "RedisCacheBackend"]
