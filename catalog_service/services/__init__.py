"""
Service layer - Catalog business logic.

Exposes the catalog service interface, its store-backed implementation,
and the cache-aside decorator.
"""

from .cached_catalog_service import CachedCatalogService, CatalogCacheKeys
from .catalog_service import CatalogService, ICatalogService

__all__ = ["CachedCatalogService", "CatalogCacheKeys", "CatalogService", "ICatalogService"]
