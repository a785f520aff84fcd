"""
Cache-aside decorator for the catalog service.

Wraps any ICatalogService with a key-value cache:
1. Reads check the cache first and fall through to the wrapped service
2. Results found in the store are written back with a fixed TTL
3. Writes go to the store first, then delete the affected keys

Cache failures never reach the caller; the decorator degrades to direct
store access. Store failures propagate unchanged.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from ..cache.backend import CacheBackend
from ..config import CacheOptions
from ..metrics import track_cache_error, track_cache_hit, track_cache_invalidation, track_cache_miss
from ..schemas import CatalogBrandView, CatalogItemInput, CatalogItemView, CatalogTypeView
from .catalog_service import ICatalogService

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ITEM_ADAPTER = TypeAdapter(CatalogItemView)
ITEM_LIST_ADAPTER = TypeAdapter(List[CatalogItemView])


class CatalogCacheKeys:
    """Builds namespaced catalog cache keys."""

    def __init__(self, prefix: str = "catalog:"):
        self.prefix = prefix

    def all_items(self) -> str:
        return f"{self.prefix}items:all"

    def item(self, item_id: int) -> str:
        return f"{self.prefix}items:{item_id}"

    def brand(self, brand_id: int) -> str:
        return f"{self.prefix}items:brand:{brand_id}"

    def type(self, type_id: int) -> str:
        return f"{self.prefix}items:type:{type_id}"

    def for_write(self, item_id: int, brand_id: int, type_id: int) -> List[str]:
        """Keys whose content can change when an item is created or updated."""
        return [
            self.all_items(),
            self.item(item_id),
            self.brand(brand_id),
            self.type(type_id),
        ]


class CacheLookupStatus(str, Enum):
    """Outcome of a cache read."""

    HIT = "hit"
    MISS = "miss"
    ERROR = "error"


@dataclass(frozen=True)
class CacheLookup:
    """Result of a cache read: status plus payload on a hit."""

    status: CacheLookupStatus
    payload: Optional[bytes] = None


class CachedCatalogService(ICatalogService):
    """
    Catalog service decorator implementing cache-aside.

    Key scheme (prefix configurable):
    - {prefix}items:all
    - {prefix}items:{id}
    - {prefix}items:brand:{brandId}
    - {prefix}items:type:{typeId}

    Update invalidates the brand and type lists of the new brand/type
    only. If an update moves an item to another brand or type, the old
    list entries stay stale until their TTL expires.
    """

    def __init__(
        self,
        inner: ICatalogService,
        cache: CacheBackend,
        options: Optional[CacheOptions] = None,
    ):
        """
        Initialize cached catalog service.

        Args:
            inner: Wrapped catalog service (source of truth)
            cache: Cache backend
            options: Key prefix, TTL and cache call timeout
        """
        self.inner = inner
        self.cache = cache
        self.options = options or CacheOptions()
        self.keys = CatalogCacheKeys(self.options.key_prefix)

    async def list_items(self) -> List[CatalogItemView]:
        return await self._get_or_load(
            self.keys.all_items(), self.inner.list_items, ITEM_LIST_ADAPTER, "list_items"
        )

    async def get_item(self, item_id: int) -> Optional[CatalogItemView]:
        return await self._get_or_load(
            self.keys.item(item_id),
            lambda: self.inner.get_item(item_id),
            ITEM_ADAPTER,
            "get_item",
        )

    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItemView]:
        return await self._get_or_load(
            self.keys.brand(brand_id),
            lambda: self.inner.list_items_by_brand(brand_id),
            ITEM_LIST_ADAPTER,
            "list_items_by_brand",
        )

    async def list_items_by_type(self, type_id: int) -> List[CatalogItemView]:
        return await self._get_or_load(
            self.keys.type(type_id),
            lambda: self.inner.list_items_by_type(type_id),
            ITEM_LIST_ADAPTER,
            "list_items_by_type",
        )

    async def create_item(self, data: CatalogItemInput) -> CatalogItemView:
        created = await self.inner.create_item(data)

        await self._invalidate(
            self.keys.for_write(created.id, data.brand_id, data.type_id), "create"
        )
        logger.info("Created catalog item and invalidated related caches", item_id=created.id)
        return created

    async def update_item(self, item_id: int, data: CatalogItemInput) -> None:
        # Not-found propagates from here before any key is touched
        await self.inner.update_item(item_id, data)

        await self._invalidate(self.keys.for_write(item_id, data.brand_id, data.type_id), "update")
        logger.info("Updated catalog item and invalidated related caches", item_id=item_id)

    async def delete_item(self, item_id: int) -> None:
        await self.inner.delete_item(item_id)

        # Brand and type lists are unknown here and expire by TTL
        await self._invalidate([self.keys.item(item_id), self.keys.all_items()], "delete")
        logger.info("Deleted catalog item and invalidated item caches", item_id=item_id)

    async def list_brands(self) -> List[CatalogBrandView]:
        return await self.inner.list_brands()

    async def list_types(self) -> List[CatalogTypeView]:
        return await self.inner.list_types()

    async def _get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[T]],
        adapter: TypeAdapter,
        operation: str,
    ) -> T:
        """
        Generic cache-aside read.

        Serves a decodable cached payload, otherwise loads from the wrapped
        service and stores non-None results with the configured TTL.
        """
        lookup = await self._lookup(key)

        if lookup.status is CacheLookupStatus.HIT:
            try:
                value = adapter.validate_json(lookup.payload)
            except (ValidationError, ValueError) as e:
                logger.warning("Discarding undecodable cache entry", key=key, error=str(e))
                track_cache_error("decode")
                await self._remove(key)
            else:
                logger.debug("Cache hit", key=key)
                track_cache_hit(operation)
                return value

        logger.debug("Cache miss", key=key, lookup=lookup.status.value)
        track_cache_miss(operation)

        data = await loader()
        if data is None:
            return data

        await self._store(key, adapter.dump_json(data, by_alias=True))
        return data

    async def _lookup(self, key: str) -> CacheLookup:
        try:
            payload = await asyncio.wait_for(
                self.cache.get(key), timeout=self.options.operation_timeout_seconds
            )
        except Exception as e:
            logger.warning("Cache read failed, falling back to store", key=key, error=str(e))
            track_cache_error("get")
            return CacheLookup(CacheLookupStatus.ERROR)

        if payload is None:
            return CacheLookup(CacheLookupStatus.MISS)
        return CacheLookup(CacheLookupStatus.HIT, payload)

    async def _store(self, key: str, payload: bytes) -> None:
        try:
            await asyncio.wait_for(
                self.cache.set(key, payload, self.options.ttl_seconds),
                timeout=self.options.operation_timeout_seconds,
            )
        except Exception as e:
            logger.error("Failed to cache data", key=key, error=str(e))
            track_cache_error("set")
            return

        logger.debug("Cached data", key=key, ttl_seconds=self.options.ttl_seconds)

    async def _remove(self, key: str) -> bool:
        try:
            return await asyncio.wait_for(
                self.cache.delete(key), timeout=self.options.operation_timeout_seconds
            )
        except Exception as e:
            logger.warning("Failed to delete cache key", key=key, error=str(e))
            track_cache_error("delete")
            return False

    async def _invalidate(self, keys: List[str], reason: str) -> None:
        for key in keys:
            await self._remove(key)
            logger.debug("Invalidated cache key", key=key)
        track_cache_invalidation(reason, len(keys))
