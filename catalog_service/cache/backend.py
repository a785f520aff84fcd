"""Cache backend protocol used by the catalog cache-aside layer."""

from typing import Optional, Protocol


class CacheBackend(Protocol):
    """
    Key-value store holding serialized payloads with a per-entry TTL.

    Implementations raise CacheException when the backend fails; callers
    decide whether that is fatal.
    """

    def is_available(self) -> bool:
        """Return True if the backend is connected and usable."""
        ...

    async def get(self, key: str) -> Optional[bytes]:
        """Return the stored payload or None if absent/expired."""
        ...

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store a payload that expires after ttl_seconds."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if something was deleted."""
        ...

    async def get_stats(self) -> dict:
        """Return backend statistics."""
        ...
