"""
Shared dependencies for the application.

Provides dependency injection functions used across routers. The
application lifespan registers the cache backend (if any) and, for the
in-memory store, the repository instance.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from .cache.backend import CacheBackend
from .config import CacheOptions
from .database import get_db
from .repositories.catalog_repository import ICatalogRepository
from .repositories.sqlalchemy_repository import SqlAlchemyCatalogRepository
from .services.cached_catalog_service import CachedCatalogService
from .services.catalog_service import CatalogService, ICatalogService

# Global state (set by main app)
_cache_backend: Optional[CacheBackend] = None
_cache_options: Optional[CacheOptions] = None
_memory_repository: Optional[ICatalogRepository] = None


def set_cache_backend(backend: Optional[CacheBackend], options: Optional[CacheOptions] = None) -> None:
    """
    Set the cache used to decorate the catalog service.

    Passing None disables caching; requests then go straight to the store.
    """
    global _cache_backend, _cache_options
    _cache_backend = backend
    _cache_options = options


def get_cache_backend() -> Optional[CacheBackend]:
    """Get the registered cache backend, if any."""
    return _cache_backend


def set_memory_repository(repository: Optional[ICatalogRepository]) -> None:
    """Use a process-wide repository instead of a database session."""
    global _memory_repository
    _memory_repository = repository


def get_catalog_repository(db: Session = Depends(get_db)) -> ICatalogRepository:
    """Get the catalog store for the current request."""
    if _memory_repository is not None:
        return _memory_repository
    return SqlAlchemyCatalogRepository(db)


def get_catalog_service(
    repository: ICatalogRepository = Depends(get_catalog_repository),
) -> ICatalogService:
    """
    Get catalog service instance for dependency injection.

    Returns the cache-aside decorator when a cache backend is registered,
    the plain store-backed service otherwise.
    """
    service: ICatalogService = CatalogService(repository)
    if _cache_backend is None:
        return service
    return CachedCatalogService(service, _cache_backend, _cache_options)
