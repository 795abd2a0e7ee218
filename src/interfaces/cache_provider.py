"""Abstract base classes for cache providers.

Two contracts live here:

``ICacheProvider``
    Plain key-value cache (the in-process tier).  Implementations may use
    an in-memory dict, Redis, or anything else keyed by string.
``ITourCache``
    Artist/region-keyed store for tour-date payloads.  Implemented by the
    persistent SQLite tier and by the two-tier composite that fronts it,
    so the tour-date service never knows how many tiers it is talking to.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* using the provider's configured TTL."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.  No-op if absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""


class ITourCache(ABC):
    """Contract for tour-date payload caches keyed by (artist, region).

    Artist matching is case-insensitive; region matching is exact.
    Payloads are JSON-compatible dicts.
    """

    @abstractmethod
    async def get(self, artist_name: str, region: str) -> dict[str, Any] | None:
        """Return the fresh payload for *artist_name* in *region*, or ``None``."""

    @abstractmethod
    async def set(self, artist_name: str, region: str, payload: dict[str, Any]) -> None:
        """Store *payload* stamped with the current time."""

    @abstractmethod
    async def sweep_expired(self) -> int:
        """Delete entries older than the TTL.  Returns the number removed."""
