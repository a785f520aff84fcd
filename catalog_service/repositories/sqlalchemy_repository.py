"""
SQLAlchemy implementation of the catalog repository.

Implements persistent storage for catalog items, brands and types.
"""

from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.exceptions import DataIntegrityException, InvalidReferenceException
from ..models import CatalogBrand, CatalogItem, CatalogType
from ..schemas import CatalogItemInput
from .catalog_repository import ICatalogRepository

logger = structlog.get_logger(__name__)


class SqlAlchemyCatalogRepository(ICatalogRepository):
    """Relational catalog store backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    async def list_items(self) -> List[CatalogItem]:
        return self.db.query(CatalogItem).order_by(CatalogItem.id).all()

    async def get_item(self, item_id: int) -> Optional[CatalogItem]:
        return self.db.get(CatalogItem, item_id)

    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItem]:
        return (
            self.db.query(CatalogItem)
            .filter(CatalogItem.catalog_brand_id == brand_id)
            .order_by(CatalogItem.id)
            .all()
        )

    async def list_items_by_type(self, type_id: int) -> List[CatalogItem]:
        return (
            self.db.query(CatalogItem)
            .filter(CatalogItem.catalog_type_id == type_id)
            .order_by(CatalogItem.id)
            .all()
        )

    async def add_item(self, data: CatalogItemInput) -> CatalogItem:
        self._check_references(data)

        item = CatalogItem()
        self._apply(item, data)
        self.db.add(item)
        self._commit("add")
        self.db.refresh(item)

        logger.info("Catalog item stored", item_id=item.id)
        return item

    async def update_item(self, item_id: int, data: CatalogItemInput) -> Optional[CatalogItem]:
        item = self.db.get(CatalogItem, item_id)
        if item is None:
            return None

        self._check_references(data)
        self._apply(item, data)
        self._commit("update")
        self.db.refresh(item)

        logger.info("Catalog item updated", item_id=item_id)
        return item

    async def delete_item(self, item_id: int) -> bool:
        item = self.db.get(CatalogItem, item_id)
        if item is None:
            return False

        self.db.delete(item)
        self._commit("delete")

        logger.info("Catalog item deleted", item_id=item_id)
        return True

    async def list_brands(self) -> List[CatalogBrand]:
        return self.db.query(CatalogBrand).order_by(CatalogBrand.name).all()

    async def list_types(self) -> List[CatalogType]:
        return self.db.query(CatalogType).order_by(CatalogType.name).all()

    def _check_references(self, data: CatalogItemInput) -> None:
        """Ensure the brand and type referenced by an item exist."""
        if self.db.get(CatalogBrand, data.brand_id) is None:
            raise InvalidReferenceException("brandId", data.brand_id)
        if self.db.get(CatalogType, data.type_id) is None:
            raise InvalidReferenceException("typeId", data.type_id)

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Catalog write failed", operation=operation, error=str(e))
            raise DataIntegrityException("CatalogItem", str(e)) from e

    @staticmethod
    def _apply(item: CatalogItem, data: CatalogItemInput) -> None:
        item.name = data.name
        item.description = data.description
        item.price = data.price
        item.available_stock = data.available_stock
        item.image_url = data.image_url
        item.catalog_brand_id = data.brand_id
        item.catalog_type_id = data.type_id
