"""Catalog Service - product catalog API with a Redis cache-aside layer."""

__version__ = "1.0.0"
