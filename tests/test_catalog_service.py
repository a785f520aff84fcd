"""
Unit tests for the store-backed catalog service
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from catalog_service.domain.exceptions import CatalogItemNotFoundException
from catalog_service.models import CatalogItem
from catalog_service.repositories.catalog_repository import ICatalogRepository
from catalog_service.repositories.memory_repository import InMemoryCatalogRepository
from catalog_service.services.catalog_service import CatalogService, to_item_view


class TestToItemView:
    """Test flattening items into read views"""

    def test_flattens_brand_and_type(self):
        """Test that brand and type names are copied onto the view"""
        repository = InMemoryCatalogRepository()
        item = repository._items[4]

        view = to_item_view(item)

        assert view.id == 4
        assert view.brand_name == "Apple"
        assert view.type_name == "Laptop"
        assert view.price == Decimal("2499.99")

    def test_missing_relations_become_empty(self):
        """Test an item without loaded brand or type"""
        item = CatalogItem(
            id=9,
            name="Loose item",
            description=None,
            price=Decimal("1.00"),
            available_stock=0,
            image_url=None,
            catalog_brand_id=1,
            catalog_type_id=1,
        )

        view = to_item_view(item)

        assert view.brand_name == ""
        assert view.type_name == ""
        assert view.description == ""
        assert view.image_url == ""


class TestCatalogService:
    """Test catalog service operations"""

    @pytest.mark.asyncio
    async def test_list_items(self):
        """Test listing seeded items as views"""
        service = CatalogService(InMemoryCatalogRepository())

        items = await service.list_items()

        assert len(items) == 5
        assert items[0].name == "Samsung Galaxy S24"
        assert items[0].brand_name == "Samsung"

    @pytest.mark.asyncio
    async def test_get_missing_item(self):
        """Test that a missing id yields None"""
        service = CatalogService(InMemoryCatalogRepository())

        assert await service.get_item(404) is None

    @pytest.mark.asyncio
    async def test_create_item(self, samsung_repository, galaxy_input):
        """Test creating an item returns its view"""
        service = CatalogService(samsung_repository)

        view = await service.create_item(galaxy_input)

        assert view.id == 1
        assert view.brand_name == "Samsung"
        assert view.type_name == "Smartphone"
        assert view.price == Decimal("999.99")

    @pytest.mark.asyncio
    async def test_update_missing_item_raises(self, galaxy_input):
        """Test that updating a missing id raises not-found"""
        repository = AsyncMock(spec=ICatalogRepository)
        repository.update_item.return_value = None
        service = CatalogService(repository)

        with pytest.raises(CatalogItemNotFoundException) as exc_info:
            await service.update_item(9999, galaxy_input)

        assert exc_info.value.item_id == 9999

    @pytest.mark.asyncio
    async def test_delete_missing_item_is_silent(self):
        """Test that deleting a missing id does not raise"""
        repository = AsyncMock(spec=ICatalogRepository)
        repository.delete_item.return_value = False
        service = CatalogService(repository)

        await service.delete_item(9999)

        repository.delete_item.assert_awaited_once_with(9999)

    @pytest.mark.asyncio
    async def test_list_brands_and_types(self):
        """Test reference list mapping"""
        service = CatalogService(InMemoryCatalogRepository())

        brands = await service.list_brands()
        types = await service.list_types()

        assert brands[0].name == "Apple"
        assert {catalog_type.id for catalog_type in types} == {1, 2, 3, 4, 5}
