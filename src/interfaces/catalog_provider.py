"""Abstract base class for festival catalog storage.

# ─── CONSISTENCY MODEL ───────────────────────────────────────────────
#
# The catalog is re-read on every call so edits made outside the process
# (or by the admin approval flow) show up on the next request without a
# restart.  There is no lock around read-modify-write: two concurrent
# appends can both see the same "before" state.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from src.models.festival import Festival


class ICatalogProvider(ABC):
    """Contract for reading and appending festival catalog records."""

    @abstractmethod
    def load(self) -> list[Festival]:
        """Return every festival in catalog order.

        Raises
        ------
        CatalogError
            If the backing store cannot be read or parsed.
        """

    @abstractmethod
    def append(self, record: dict[str, Any]) -> Festival:
        """Append a raw catalog record and return it parsed.

        Raises
        ------
        CatalogError
            If the backing store cannot be written.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
