"""
Main FastAPI application for the catalog service.

This file wires together all layers:
- Repositories: catalog store (SQLAlchemy or in-memory)
- Cache: Redis or in-memory backend for the cache-aside decorator
- Services: catalog service, optionally decorated with caching
- Routers: HTTP endpoints
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .cache.backend import CacheBackend
from .cache.memory_cache import MemoryCacheBackend
from .cache.redis_cache import RedisCacheBackend
from .config import Settings, settings
from .database import init_db
from .dependencies import set_cache_backend, set_memory_repository
from .domain.exceptions import CacheException
from .logging_config import configure_logging
from .metrics import metrics_endpoint, track_request_metrics
from .repositories.memory_repository import InMemoryCatalogRepository
from .routers import catalog_router, health_router

configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

logger = structlog.get_logger(__name__)


async def create_cache_backend(config: Settings) -> Optional[CacheBackend]:
    """
    Create the cache backend selected by configuration.

    Returns:
        Connected backend, or None when caching is disabled or Redis is
        unreachable (the service then runs uncached)
    """
    if not config.CACHE_ENABLED:
        logger.info("Catalog cache disabled")
        return None

    if config.CACHE_BACKEND == "memory":
        return MemoryCacheBackend(max_size=config.CACHE_MEMORY_MAX_SIZE)

    backend = RedisCacheBackend(
        redis_url=config.REDIS_URL,
        prefix=config.REDIS_KEY_PREFIX,
        max_connections=config.REDIS_MAX_CONNECTIONS,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=config.REDIS_SOCKET_TIMEOUT,
    )
    try:
        await backend.connect()
    except CacheException as e:
        logger.warning("Redis not available, serving catalog without cache", error=e.message)
        return None
    return backend


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Catalog Service", version=settings.SERVICE_VERSION)

    if settings.STORE_BACKEND == "memory":
        set_memory_repository(InMemoryCatalogRepository(seed=settings.SEED_DATA))
        logger.info("Using in-memory catalog store")
    else:
        try:
            init_db()
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    cache = await create_cache_backend(settings)
    set_cache_backend(cache, settings.cache_options())
    app.state.cache_backend = cache

    logger.info("Catalog Service started", cache_enabled=cache is not None)

    yield

    logger.info("Shutting down Catalog Service")
    if isinstance(cache, RedisCacheBackend):
        await cache.disconnect()
    set_cache_backend(None)
    set_memory_repository(None)
    logger.info("Catalog Service shut down complete")


app = FastAPI(
    title="Catalog Service",
    description="Product catalog API with a Redis cache-aside layer",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "Location"],
)


@app.middleware("http")
async def track_metrics(request: Request, call_next):
    """Track Prometheus metrics."""
    start_time = time.time()
    response = await call_next(request)

    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    track_request_metrics(request.method, endpoint, response.status_code, time.time() - start_time)
    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID for distributed tracing."""
    request_id = request.headers.get("X-Request-ID") or f"req-{uuid.uuid4().hex[:16]}"
    request.state.request_id = request_id

    structlog.contextvars.bind_contextvars(request_id=request_id)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(catalog_router.router)
app.include_router(health_router.router)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "status": "operational",
        "docs": "/api/docs",
        "health": "/health",
        "ready": "/ready",
    }


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=True,
    )

    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        "X-Request-ID", f"req-{uuid.uuid4().hex[:16]}"
    )

    # Runs outside the request-id middleware, so the header is set here
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "request_id": request_id,
        },
        headers={"X-Request-ID": request_id},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "catalog_service.app:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
