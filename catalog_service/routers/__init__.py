"""API routers."""

from . import catalog_router, health_router

__all__ = ["catalog_router", "health_router"]
