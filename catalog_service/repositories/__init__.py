"""
Repository layer - Catalog Store.

This layer provides the persistence interface for catalog records,
hiding implementation details from the business logic.
"""

from .catalog_repository import ICatalogRepository
from .memory_repository import InMemoryCatalogRepository
from .sqlalchemy_repository import SqlAlchemyCatalogRepository

__all__ = ["ICatalogRepository", "InMemoryCatalogRepository", "SqlAlchemyCatalogRepository"]
