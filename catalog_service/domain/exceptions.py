"""
Custom exceptions for the catalog service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, etc.).
"""

from typing import Any, Optional


class CatalogServiceException(Exception):
    """Base exception for all catalog service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CatalogItemNotFoundException(CatalogServiceException):
    """Raised when a catalog item id has no corresponding record."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(
            message=f"Catalog item with id {item_id} not found",
            details={"item_id": item_id},
        )


class ValidationException(CatalogServiceException):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: Any, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(
            message=message,
            details={"field": field, "value": str(value), "reason": reason},
        )


class InvalidReferenceException(ValidationException):
    """Raised when an item references a brand or type that does not exist."""

    def __init__(self, field: str, value: int):
        super().__init__(field, value, f"no record with id {value}")


class DataIntegrityException(CatalogServiceException):
    """Raised when the store rejects a write."""

    def __init__(self, entity: str, reason: str):
        message = f"Data integrity error for {entity}: {reason}"
        super().__init__(message=message, details={"entity": entity, "reason": reason})


class CacheException(CatalogServiceException):
    """Raised when cache operations fail."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Cache {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )
