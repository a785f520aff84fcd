"""
Catalog repository interface (Abstract Base Class).

Defines the contract for catalog persistence independent of the
underlying storage mechanism.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models import CatalogBrand, CatalogItem, CatalogType
from ..schemas import CatalogItemInput


class ICatalogRepository(ABC):
    """
    Abstract repository interface for catalog data operations.

    Returned items always have their brand and type loaded.
    """

    @abstractmethod
    async def list_items(self) -> List[CatalogItem]:
        """Get all catalog items ordered by id."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> Optional[CatalogItem]:
        """
        Get a single catalog item.

        Args:
            item_id: Catalog item id

        Returns:
            CatalogItem if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItem]:
        """Get all items of one brand."""
        pass

    @abstractmethod
    async def list_items_by_type(self, type_id: int) -> List[CatalogItem]:
        """Get all items of one type."""
        pass

    @abstractmethod
    async def add_item(self, data: CatalogItemInput) -> CatalogItem:
        """
        Persist a new catalog item.

        Args:
            data: Item fields including brand and type ids

        Returns:
            The stored item with its generated id

        Raises:
            InvalidReferenceException: If the brand or type does not exist
        """
        pass

    @abstractmethod
    async def update_item(self, item_id: int, data: CatalogItemInput) -> Optional[CatalogItem]:
        """
        Replace the fields of an existing catalog item.

        Args:
            item_id: Catalog item id
            data: New item fields

        Returns:
            The updated item, or None if no item has this id

        Raises:
            InvalidReferenceException: If the brand or type does not exist
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        """
        Delete a catalog item.

        Returns:
            True if an item was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def list_brands(self) -> List[CatalogBrand]:
        """Get all brands ordered by name."""
        pass

    @abstractmethod
    async def list_types(self) -> List[CatalogType]:
        """Get all types ordered by name."""
        pass
