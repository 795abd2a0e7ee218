"""Festival suggestion models and the admin approval state machine.

# ─── LIFECYCLE ────────────────────────────────────────────────────────
#
#   PENDING ──approve──► APPROVED     (catalog entry appended)
#      │
#      ├──approve──► (deleted)        name already in catalog: DUPLICATE
#      │
#      └──reject───► REJECTED         catalog untouched
#
# APPROVED and REJECTED are terminal.  Transitions use
# ``model_copy(update={...})`` since the models are frozen.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from src.models.festival import CAMEL_CONFIG, Festival


class SuggestionStatus(str, Enum):  # noqa: UP042
    """Lifecycle states for a user-submitted festival suggestion."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not SuggestionStatus.PENDING


class FestivalSuggestion(BaseModel):
    """A festival a user asked the admins to add to the catalog."""

    model_config = CAMEL_CONFIG

    id: int
    user_id: int | None = None
    user_name: str | None = None
    user_email: str | None = None
    festival_name: str
    country: str
    city: str
    dates_info: str | None = None
    website: str | None = None
    status: SuggestionStatus = SuggestionStatus.PENDING
    created_at: str = Field(description="ISO-8601 UTC timestamp.")


class ApprovalOutcome(str, Enum):  # noqa: UP042
    """How an approve request was resolved."""

    APPROVED = "approved"
    DUPLICATE = "duplicate"


class ApprovalResult(BaseModel):
    """Result of approving a suggestion.

    ``festival`` is the new catalog entry for APPROVED.  For DUPLICATE it is
    the existing entry whose name collided, and the suggestion is gone.
    """

    model_config = CAMEL_CONFIG

    outcome: ApprovalOutcome
    suggestion_id: int
    festival: Festival
    message: str
