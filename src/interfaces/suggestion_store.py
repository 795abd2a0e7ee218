"""Abstract base class for festival suggestion persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.suggestion import FestivalSuggestion, SuggestionStatus


class ISuggestionStore(ABC):
    """Contract for storing user-submitted festival suggestions.

    The store only persists; transition rules live in
    ``src/services/suggestion_service.py``.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    @abstractmethod
    async def create(
        self,
        festival_name: str,
        country: str,
        city: str,
        dates_info: str | None = None,
        website: str | None = None,
        user_id: int | None = None,
    ) -> FestivalSuggestion:
        """Persist a new ``pending`` suggestion and return it."""

    @abstractmethod
    async def get(self, suggestion_id: int) -> FestivalSuggestion | None:
        """Return one suggestion, or ``None``."""

    @abstractmethod
    async def list_suggestions(self, status: SuggestionStatus | None = None) -> list[FestivalSuggestion]:
        """Return suggestions, newest first, optionally filtered by status."""

    @abstractmethod
    async def update_status(
        self, suggestion_id: int, status: SuggestionStatus
    ) -> FestivalSuggestion | None:
        """Set the status and return the updated row, or ``None`` if missing."""

    @abstractmethod
    async def delete(self, suggestion_id: int) -> bool:
        """Delete a suggestion.  ``False`` if it did not exist."""
