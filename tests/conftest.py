"""
Test configuration and fixtures.

Environment overrides must be applied before catalog_service is imported,
since settings and the database engine are created at import time.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DATA"] = "false"
os.environ["STORE_BACKEND"] = "database"
os.environ["CACHE_ENABLED"] = "true"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_JSON"] = "false"

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from catalog_service.app import app  # noqa: E402
from catalog_service.cache.memory_cache import MemoryCacheBackend  # noqa: E402
from catalog_service.config import CacheOptions  # noqa: E402
from catalog_service.database import SessionLocal, engine, get_db, seed_catalog  # noqa: E402
from catalog_service.models import Base  # noqa: E402
from catalog_service.repositories.memory_repository import InMemoryCatalogRepository  # noqa: E402
from catalog_service.schemas import CatalogItemInput  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db_session):
    """Database session with the reference catalog loaded."""
    seed_catalog(db_session)
    return db_session


@pytest.fixture(scope="function")
def client(seeded_db):
    """Create a test client with database dependency override"""

    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_cache(clock):
    """Memory cache driven by the fake clock."""
    return MemoryCacheBackend(max_size=100, timer=clock)


@pytest.fixture
def cache_options():
    return CacheOptions(key_prefix="catalog:", ttl_seconds=600, operation_timeout_seconds=0.5)


@pytest.fixture
def samsung_repository():
    """Empty store holding only brand Samsung (1) and type Smartphone (1)."""
    repository = InMemoryCatalogRepository(seed=False)
    repository.add_brand(1, "Samsung")
    repository.add_type(1, "Smartphone")
    return repository


@pytest.fixture
def galaxy_input():
    return CatalogItemInput(
        name="Galaxy S24",
        description="Flagship phone",
        price=Decimal("999.99"),
        available_stock=50,
        image_url="/images/galaxy-s24.jpg",
        brand_id=1,
        type_id=1,
    )


@pytest.fixture
def galaxy_payload():
    """Request body for the Galaxy S24 as the HTTP API expects it."""
    return {
        "name": "Galaxy S24",
        "description": "Flagship phone",
        "price": 999.99,
        "availableStock": 50,
        "imageUrl": "/images/galaxy-s24.jpg",
        "brandId": 1,
        "typeId": 1,
    }
