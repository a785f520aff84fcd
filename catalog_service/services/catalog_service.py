"""
Catalog business service.

Defines the catalog service interface used by the HTTP layer and the
store-backed implementation that maps persisted records to read views.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

import structlog

from ..domain.exceptions import CatalogItemNotFoundException
from ..models import CatalogItem
from ..repositories.catalog_repository import ICatalogRepository
from ..schemas import CatalogBrandView, CatalogItemInput, CatalogItemView, CatalogTypeView

logger = structlog.get_logger(__name__)


class ICatalogService(ABC):
    """
    Catalog query/command interface.

    Implemented by the store-backed CatalogService and by decorators that
    wrap it (see CachedCatalogService).
    """

    @abstractmethod
    async def list_items(self) -> List[CatalogItemView]:
        """Get every catalog item."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> Optional[CatalogItemView]:
        """
        Get one catalog item.

        Returns:
            The item view, or None if no item has this id
        """
        pass

    @abstractmethod
    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItemView]:
        """Get catalog items of one brand."""
        pass

    @abstractmethod
    async def list_items_by_type(self, type_id: int) -> List[CatalogItemView]:
        """Get catalog items of one type."""
        pass

    @abstractmethod
    async def create_item(self, data: CatalogItemInput) -> CatalogItemView:
        """
        Create a catalog item.

        Raises:
            InvalidReferenceException: If the brand or type does not exist
        """
        pass

    @abstractmethod
    async def update_item(self, item_id: int, data: CatalogItemInput) -> None:
        """
        Replace a catalog item.

        Raises:
            CatalogItemNotFoundException: If no item has this id
            InvalidReferenceException: If the brand or type does not exist
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> None:
        """Delete a catalog item. Deleting an unknown id is not an error."""
        pass

    @abstractmethod
    async def list_brands(self) -> List[CatalogBrandView]:
        """Get all brands."""
        pass

    @abstractmethod
    async def list_types(self) -> List[CatalogTypeView]:
        """Get all types."""
        pass


class CatalogService(ICatalogService):
    """Catalog service reading and writing through a catalog repository."""

    def __init__(self, repository: ICatalogRepository):
        """
        Initialize catalog service.

        Args:
            repository: Catalog store
        """
        self.repository = repository

    async def list_items(self) -> List[CatalogItemView]:
        items = await self.repository.list_items()
        return [to_item_view(item) for item in items]

    async def get_item(self, item_id: int) -> Optional[CatalogItemView]:
        item = await self.repository.get_item(item_id)
        return to_item_view(item) if item is not None else None

    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItemView]:
        items = await self.repository.list_items_by_brand(brand_id)
        return [to_item_view(item) for item in items]

    async def list_items_by_type(self, type_id: int) -> List[CatalogItemView]:
        items = await self.repository.list_items_by_type(type_id)
        return [to_item_view(item) for item in items]

    async def create_item(self, data: CatalogItemInput) -> CatalogItemView:
        item = await self.repository.add_item(data)
        return to_item_view(item)

    async def update_item(self, item_id: int, data: CatalogItemInput) -> None:
        item = await self.repository.update_item(item_id, data)
        if item is None:
            raise CatalogItemNotFoundException(item_id)

    async def delete_item(self, item_id: int) -> None:
        deleted = await self.repository.delete_item(item_id)
        if not deleted:
            logger.debug("Delete requested for unknown catalog item", item_id=item_id)

    async def list_brands(self) -> List[CatalogBrandView]:
        brands = await self.repository.list_brands()
        return [CatalogBrandView.model_validate(brand) for brand in brands]

    async def list_types(self) -> List[CatalogTypeView]:
        types = await self.repository.list_types()
        return [CatalogTypeView.model_validate(catalog_type) for catalog_type in types]


def to_item_view(item: CatalogItem) -> CatalogItemView:
    """Flatten a persisted catalog item into its read view."""
    return CatalogItemView(
        id=item.id,
        name=item.name,
        description=item.description or "",
        price=item.price,
        available_stock=item.available_stock,
        image_url=item.image_url or "",
        brand_name=item.brand.name if item.brand is not None else "",
        type_name=item.type.name if item.type is not None else "",
    )
