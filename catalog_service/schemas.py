"""
Pydantic transfer shapes for the catalog API.

Field names are snake_case in Python and camelCase on the wire. The item
view is flat (brand and type are denormalized to their names) so it can be
serialized into the cache without an object graph.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Ids are 32-bit INTEGER columns in the store
MAX_ID = 2_147_483_647


class CatalogModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CatalogItemView(CatalogModel):
    """Flattened read view of a catalog item."""

    id: int
    name: str
    description: str = ""
    price: Decimal = Field(..., description="Unit price, serialized as a decimal string")
    available_stock: int
    image_url: str = ""
    brand_name: str = ""
    type_name: str = ""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Samsung Galaxy S24",
                "description": "Latest flagship smartphone with advanced AI features",
                "price": "999.99",
                "availableStock": 50,
                "imageUrl": "/images/galaxy-s24.jpg",
                "brandName": "Samsung",
                "typeName": "Smartphone",
            }
        }
    )


class CatalogItemInput(CatalogModel):
    """Request body for creating or replacing a catalog item."""

    name: str = Field(..., min_length=1, max_length=100, description="Product name")
    description: str = Field(default="", max_length=500)
    price: Decimal = Field(
        ..., ge=0, max_digits=18, decimal_places=2, description="Unit price, at most two decimals"
    )
    available_stock: int = Field(default=0, ge=0, le=MAX_ID, description="Units in stock")
    image_url: str = Field(default="", max_length=500)
    brand_id: int = Field(..., ge=1, le=MAX_ID, description="Existing catalog brand id")
    type_id: int = Field(..., ge=1, le=MAX_ID, description="Existing catalog type id")


class CatalogBrandView(CatalogModel):
    """Catalog brand."""

    id: int
    name: str


class CatalogTypeView(CatalogModel):
    """Catalog type."""

    id: int
    name: str
