"""Festival suggestion intake and the admin approval workflow.

# ─── STATE MACHINE ────────────────────────────────────────────────────
#
#   submit   → PENDING
#   approve  PENDING → APPROVED   new catalog entry appended
#            PENDING → (deleted)  name already in the catalog (DUPLICATE)
#   reject   PENDING → REJECTED   catalog untouched
#
# Approving or rejecting a non-pending suggestion raises ConflictError.
# There is no lock around the catalog read-modify-write, so two
# simultaneous approvals of same-named suggestions can both append.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from typing import Any

from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.suggestion_store import ISuggestionStore
from src.models.festival import Festival, LineupStatus
from src.models.suggestion import (
    ApprovalOutcome,
    ApprovalResult,
    FestivalSuggestion,
    SuggestionStatus,
)
from src.utils.errors import ConflictError, NotFoundError, ValidationError
from src.utils.logging import get_logger
from src.utils.text_normalizer import fold_text, slugify

_FALLBACK_SLUG = "festival"


def unique_slug(name: str, taken: set[str]) -> str:
    """Slugify *name*, appending ``-2``, ``-3``... until it is not in *taken*."""
    base = slugify(name) or _FALLBACK_SLUG
    slug = base
    suffix = 2
    while slug in taken:
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug


class SuggestionService:
    """Owns the suggestion lifecycle; the store only persists."""

    def __init__(self, store: ISuggestionStore, catalog: ICatalogProvider) -> None:
        self._store = store
        self._catalog = catalog
        self._logger = get_logger(__name__)

    async def submit(
        self,
        festival_name: str | None,
        country: str | None,
        city: str | None,
        dates_info: str | None = None,
        website: str | None = None,
        user_id: int | None = None,
    ) -> FestivalSuggestion:
        """Validate and store a new pending suggestion.

        Raises:
            ValidationError: If name, country or city is missing or blank.
        """
        missing = [
            label
            for label, value in (("festivalName", festival_name), ("country", country), ("city", city))
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(message=f"Missing required fields: {', '.join(missing)}")

        return await self._store.create(
            festival_name=festival_name,
            country=country,
            city=city,
            dates_info=dates_info,
            website=website,
            user_id=user_id,
        )

    async def list_suggestions(self, status: SuggestionStatus | None = None) -> list[FestivalSuggestion]:
        return await self._store.list_suggestions(status)

    async def approve(self, suggestion_id: int) -> ApprovalResult:
        """Approve a pending suggestion.

        Returns:
            ``APPROVED`` with the new catalog entry, or ``DUPLICATE`` with
            the existing entry when a festival with the same name (case
            and accents ignored) is already in the catalog.  A duplicate
            suggestion is deleted.

        Raises:
            NotFoundError: Unknown suggestion id.
            ConflictError: The suggestion is not pending.
            CatalogError: The catalog could not be read or written.
        """
        suggestion = await self._get_pending(suggestion_id)
        festivals = await asyncio.to_thread(self._catalog.load)

        existing = self._find_by_name(festivals, suggestion.festival_name)
        if existing is not None:
            await self._store.delete(suggestion_id)
            self._logger.info(
                "suggestion_duplicate",
                suggestion_id=suggestion_id,
                festival_id=existing.id,
            )
            return ApprovalResult(
                outcome=ApprovalOutcome.DUPLICATE,
                suggestion_id=suggestion_id,
                festival=existing,
                message=f"'{existing.name}' is already in the catalog",
            )

        record = self._build_record(suggestion, {f.id for f in festivals})
        festival = await asyncio.to_thread(self._catalog.append, record)
        await self._store.update_status(suggestion_id, SuggestionStatus.APPROVED)
        self._logger.info("suggestion_approved", suggestion_id=suggestion_id, festival_id=festival.id)
        return ApprovalResult(
            outcome=ApprovalOutcome.APPROVED,
            suggestion_id=suggestion_id,
            festival=festival,
            message=f"'{festival.name}' added to the catalog",
        )

    async def reject(self, suggestion_id: int) -> FestivalSuggestion:
        """Reject a pending suggestion.  Never touches the catalog."""
        await self._get_pending(suggestion_id)
        updated = await self._store.update_status(suggestion_id, SuggestionStatus.REJECTED)
        if updated is None:
            raise NotFoundError(message=f"Suggestion {suggestion_id} not found")
        self._logger.info("suggestion_rejected", suggestion_id=suggestion_id)
        return updated

    async def delete(self, suggestion_id: int) -> None:
        if not await self._store.delete(suggestion_id):
            raise NotFoundError(message=f"Suggestion {suggestion_id} not found")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_pending(self, suggestion_id: int) -> FestivalSuggestion:
        suggestion = await self._store.get(suggestion_id)
        if suggestion is None:
            raise NotFoundError(message=f"Suggestion {suggestion_id} not found")
        if suggestion.status.is_terminal:
            raise ConflictError(
                message=f"Suggestion {suggestion_id} is already {suggestion.status.value}"
            )
        return suggestion

    @staticmethod
    def _find_by_name(festivals: list[Festival], name: str) -> Festival | None:
        key = fold_text(name)
        return next((f for f in festivals if fold_text(f.name) == key), None)

    @staticmethod
    def _build_record(suggestion: FestivalSuggestion, taken_ids: set[str]) -> dict[str, Any]:
        return {
            "id": unique_slug(suggestion.festival_name, taken_ids),
            "name": suggestion.festival_name,
            "country": suggestion.country.upper(),
            "city": suggestion.city,
            "dates": suggestion.dates_info or "TBA",
            "website": suggestion.website or "",
            "lineupStatus": LineupStatus.UNANNOUNCED.value,
            "lineup": [],
        }
