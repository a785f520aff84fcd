"""
Database models for catalog service.

This module defines SQLAlchemy ORM models for catalog items and the
brand and type records they reference.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declarative_base, relationship

Base: Any = declarative_base()


class CatalogBrand(Base):
    """
    Product brand.

    Attributes:
        id: Primary key identifier
        name: Unique brand name
    """

    __tablename__ = "catalog_brands"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class CatalogType(Base):
    """
    Product type (category).

    Attributes:
        id: Primary key identifier
        name: Unique type name
    """

    __tablename__ = "catalog_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)


class CatalogItem(Base):
    """
    Catalog item available for sale.

    Attributes:
        id: Primary key identifier (generated)
        name: Product name
        description: Free-text description
        price: Unit price, two decimal places, never negative
        available_stock: Units in stock, never negative
        image_url: Relative or absolute image reference
        catalog_brand_id: Foreign key to catalog_brands
        catalog_type_id: Foreign key to catalog_types
        brand: Loaded brand record
        type: Loaded type record
    """

    __tablename__ = "catalog_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(500), nullable=False, default="")
    price = Column(Numeric(18, 2), nullable=False, index=True)
    available_stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=False, default="")

    catalog_brand_id = Column(
        Integer, ForeignKey("catalog_brands.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    catalog_type_id = Column(
        Integer, ForeignKey("catalog_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    brand = relationship(CatalogBrand, lazy="joined")
    type = relationship(CatalogType, lazy="joined")


# Reference data loaded into an empty catalog
SEED_BRANDS = [
    {"id": 1, "name": "Samsung"},
    {"id": 2, "name": "Apple"},
    {"id": 3, "name": "Sony"},
    {"id": 4, "name": "Microsoft"},
    {"id": 5, "name": "Dell"},
]

SEED_TYPES = [
    {"id": 1, "name": "Smartphone"},
    {"id": 2, "name": "Laptop"},
    {"id": 3, "name": "Headphones"},
    {"id": 4, "name": "Tablet"},
    {"id": 5, "name": "Monitor"},
]

SEED_ITEMS = [
    {
        "id": 1,
        "name": "Samsung Galaxy S24",
        "description": "Latest flagship smartphone with advanced AI features",
        "price": Decimal("999.99"),
        "available_stock": 50,
        "image_url": "/images/galaxy-s24.jpg",
        "catalog_brand_id": 1,
        "catalog_type_id": 1,
    },
    {
        "id": 2,
        "name": "iPhone 15 Pro",
        "description": "Apple's premium smartphone with titanium design",
        "price": Decimal("1199.99"),
        "available_stock": 30,
        "image_url": "/images/iphone-15-pro.jpg",
        "catalog_brand_id": 2,
        "catalog_type_id": 1,
    },
    {
        "id": 3,
        "name": "Sony WH-1000XM5",
        "description": "Industry-leading noise-canceling headphones",
        "price": Decimal("399.99"),
        "available_stock": 100,
        "image_url": "/images/sony-wh-1000xm5.jpg",
        "catalog_brand_id": 3,
        "catalog_type_id": 3,
    },
    {
        "id": 4,
        "name": "MacBook Pro 16",
        "description": "Powerful laptop for professionals with M3 Max chip",
        "price": Decimal("2499.99"),
        "available_stock": 25,
        "image_url": "/images/macbook-pro-16.jpg",
        "catalog_brand_id": 2,
        "catalog_type_id": 2,
    },
    {
        "id": 5,
        "name": "Dell XPS 15",
        "description": "Premium Windows laptop with stunning display",
        "price": Decimal("1799.99"),
        "available_stock": 40,
        "image_url": "/images/dell-xps-15.jpg",
        "catalog_brand_id": 5,
        "catalog_type_id": 2,
    },
]
