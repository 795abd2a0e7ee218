"""Abstract base class for upstream tour-listing APIs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ITourDateProvider(ABC):
    """Contract for services that list an artist's upcoming events.

    The listing is not region-scoped; callers partition the raw events
    themselves.
    """

    @abstractmethod
    async def fetch_events(self, artist_name: str) -> list[dict[str, Any]]:
        """Return the raw upcoming-event records for *artist_name*.

        Raises
        ------
        ProviderUnavailableError
            On network error, timeout, non-2xx status, or a body that is
            not a JSON array.
        """

    @abstractmethod
    def artist_url(self, artist_name: str) -> str:
        """Return the public web page for *artist_name* on this service."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
