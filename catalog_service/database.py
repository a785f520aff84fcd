"""
Database configuration and connection management.

Engine and session factory are created once from settings; request
handlers receive a session through the get_db dependency.
"""

import time
from typing import Generator

import structlog
from sqlalchemy import create_engine, event, func, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .models import SEED_BRANDS, SEED_ITEMS, SEED_TYPES, Base, CatalogBrand, CatalogItem, CatalogType

logger = structlog.get_logger(__name__)

QUERY_LOGGING_THRESHOLD_MS = 100


def get_engine_options(db_url: str) -> dict:
    """
    Get database-specific engine arguments.

    Args:
        db_url: Database connection URL

    Returns:
        Keyword arguments for create_engine
    """
    if db_url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Track query start time."""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries."""
    total_time_ms = (time.time() - conn.info["query_start_time"].pop()) * 1000

    if total_time_ms > QUERY_LOGGING_THRESHOLD_MS:
        logger.warning(
            "Slow query detected",
            query_time_ms=round(total_time_ms, 2),
            statement=statement[:200],
        )


engine = create_engine(settings.DATABASE_URL, echo=False, **get_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """
    Initialize database tables.

    Creates all tables on application startup and loads the reference
    catalog when SEED_DATA is enabled.
    """
    logger.info("Initializing database tables")
    Base.metadata.create_all(bind=engine, checkfirst=True)

    if settings.SEED_DATA:
        db = SessionLocal()
        try:
            seed_catalog(db)
        finally:
            db.close()


def seed_catalog(db: Session) -> bool:
    """
    Load reference brands, types and items into an empty catalog.

    Args:
        db: Database session

    Returns:
        True if data was inserted, False if the catalog already had brands
    """
    if db.query(func.count(CatalogBrand.id)).scalar():
        logger.debug("Catalog already seeded")
        return False

    db.add_all(CatalogBrand(**row) for row in SEED_BRANDS)
    db.add_all(CatalogType(**row) for row in SEED_TYPES)
    db.flush()
    db.add_all(CatalogItem(**row) for row in SEED_ITEMS)
    db.flush()

    if db.get_bind().dialect.name == "postgresql":
        # Explicit ids bypass the identity sequences; move them past the seed rows
        for table in ("catalog_brands", "catalog_types", "catalog_items"):
            db.execute(
                text(
                    f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                    f"(SELECT MAX(id) FROM {table}))"
                )
            )

    db.commit()
    logger.info(
        "Catalog seeded",
        brands=len(SEED_BRANDS),
        types=len(SEED_TYPES),
        items=len(SEED_ITEMS),
    )
    return True


def check_database() -> bool:
    """Run a trivial query to confirm the database is reachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database check failed", error=str(e))
        return False


def get_db() -> Generator[Session, None, None]:
    """
    Get database session for dependency injection.

    Yields:
        SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
