"""Festival Match domain models: re-exports all public model classes.

Other parts of the codebase can import directly from ``src.models``
(e.g. ``from src.models import Festival``) instead of the submodules:
    - festival.py    : Catalog records, match results, date ranges
    - suggestion.py  : Festival suggestions and the approval outcome
    - tour.py        : Bandsintown tour events per artist/region
    - user.py        : Accounts and user preferences

If you add a new model class, remember to add it to ``__all__`` too.
"""

from __future__ import annotations

from src.models.festival import (
    DateRange,
    Festival,
    FestivalAppearance,
    FestivalEvent,
    LineupStatus,
    MatchResult,
)
from src.models.suggestion import (
    ApprovalOutcome,
    ApprovalResult,
    FestivalSuggestion,
    SuggestionStatus,
)
from src.models.tour import ArtistEvents, TourEvent
from src.models.user import FavoriteFestival, User, UserArtist, UserGenre

__all__ = [
    "ApprovalOutcome",
    "ApprovalResult",
    "ArtistEvents",
    "DateRange",
    "FavoriteFestival",
    "Festival",
    "FestivalAppearance",
    "FestivalEvent",
    "FestivalSuggestion",
    "LineupStatus",
    "MatchResult",
    "SuggestionStatus",
    "TourEvent",
    "User",
    "UserArtist",
    "UserGenre",
]
