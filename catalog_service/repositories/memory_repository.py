"""
In-memory implementation of the catalog repository.

Keeps the reference catalog in process memory. Used for local development
(STORE_BACKEND=memory) and as a lightweight store in tests.
"""

from typing import Dict, List, Optional

from ..domain.exceptions import InvalidReferenceException
from ..models import SEED_BRANDS, SEED_ITEMS, SEED_TYPES, CatalogBrand, CatalogItem, CatalogType
from ..schemas import CatalogItemInput
from .catalog_repository import ICatalogRepository


class InMemoryCatalogRepository(ICatalogRepository):
    """Dictionary-backed catalog store."""

    def __init__(self, seed: bool = True):
        self._brands: Dict[int, CatalogBrand] = {}
        self._types: Dict[int, CatalogType] = {}
        self._items: Dict[int, CatalogItem] = {}
        self._next_id = 1

        if seed:
            for row in SEED_BRANDS:
                self.add_brand(row["id"], row["name"])
            for row in SEED_TYPES:
                self.add_type(row["id"], row["name"])
            for row in SEED_ITEMS:
                item = CatalogItem(**row)
                self._link(item)
                self._items[item.id] = item
                self._next_id = max(self._next_id, item.id + 1)

    def add_brand(self, brand_id: int, name: str) -> CatalogBrand:
        brand = CatalogBrand(id=brand_id, name=name)
        self._brands[brand_id] = brand
        return brand

    def add_type(self, type_id: int, name: str) -> CatalogType:
        catalog_type = CatalogType(id=type_id, name=name)
        self._types[type_id] = catalog_type
        return catalog_type

    async def list_items(self) -> List[CatalogItem]:
        return [self._items[item_id] for item_id in sorted(self._items)]

    async def get_item(self, item_id: int) -> Optional[CatalogItem]:
        return self._items.get(item_id)

    async def list_items_by_brand(self, brand_id: int) -> List[CatalogItem]:
        return [item for item in await self.list_items() if item.catalog_brand_id == brand_id]

    async def list_items_by_type(self, type_id: int) -> List[CatalogItem]:
        return [item for item in await self.list_items() if item.catalog_type_id == type_id]

    async def add_item(self, data: CatalogItemInput) -> CatalogItem:
        self._check_references(data)

        item = CatalogItem(id=self._next_id)
        self._next_id += 1
        self._apply(item, data)
        self._items[item.id] = item
        return item

    async def update_item(self, item_id: int, data: CatalogItemInput) -> Optional[CatalogItem]:
        item = self._items.get(item_id)
        if item is None:
            return None

        self._check_references(data)
        self._apply(item, data)
        return item

    async def delete_item(self, item_id: int) -> bool:
        return self._items.pop(item_id, None) is not None

    async def list_brands(self) -> List[CatalogBrand]:
        return sorted(self._brands.values(), key=lambda brand: brand.name)

    async def list_types(self) -> List[CatalogType]:
        return sorted(self._types.values(), key=lambda catalog_type: catalog_type.name)

    def _check_references(self, data: CatalogItemInput) -> None:
        if data.brand_id not in self._brands:
            raise InvalidReferenceException("brandId", data.brand_id)
        if data.type_id not in self._types:
            raise InvalidReferenceException("typeId", data.type_id)

    def _apply(self, item: CatalogItem, data: CatalogItemInput) -> None:
        item.name = data.name
        item.description = data.description
        item.price = data.price
        item.available_stock = data.available_stock
        item.image_url = data.image_url
        item.catalog_brand_id = data.brand_id
        item.catalog_type_id = data.type_id
        self._link(item)

    def _link(self, item: CatalogItem) -> None:
        item.brand = self._brands.get(item.catalog_brand_id)
        item.type = self._types.get(item.catalog_type_id)
