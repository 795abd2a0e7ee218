"""Festival catalog models and the derived per-user match results.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph, no imports from upper layers).
#
# ``Festival`` mirrors one record of the JSON catalog file.  Everything
# else in this module is *derived* per request and never persisted:
#
#   Festival ──► MatchResult        (match_service: score + presentation)
#            └─► FestivalEvent      (calendar_service: one parsed date range)
#
# JSON field names are camelCase (``lineupStatus``, ``matchPercentage``)
# because the catalog file and the browser client both use them.  The
# Python attributes stay snake_case; ``populate_by_name`` accepts either.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CAMEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class LineupStatus(str, Enum):  # noqa: UP042
    """How much of a festival's lineup has been published."""

    CONFIRMED = "confirmed"
    PARTIAL = "partial"
    UNANNOUNCED = "unannounced"
    HIATUS = "hiatus"

    @property
    def has_percentage(self) -> bool:
        """False for statuses whose match percentage is shown as N/A."""
        return self not in (LineupStatus.UNANNOUNCED, LineupStatus.HIATUS)


class Festival(BaseModel):
    """One festival record as stored in the catalog file."""

    model_config = ConfigDict(**CAMEL_CONFIG, extra="ignore")

    id: str = Field(description="Stable slug identifier.")
    name: str
    country: str = Field(default="", description="ISO-style country code, e.g. 'ES'.")
    city: str = ""
    dates: str = Field(default="TBA", description="Free-text dates, e.g. '3-7 Junio 2026'.")
    website: str = ""
    lineup_status: LineupStatus = LineupStatus.UNANNOUNCED
    lineup: list[str] = Field(default_factory=list)
    image: str | None = None
    note: str | None = Field(default=None, description="Shown for hiatus festivals.")

    @field_validator("lineup_status", mode="before")
    @classmethod
    def _unknown_status_is_unannounced(cls, value: Any) -> Any:
        if isinstance(value, LineupStatus):
            return value
        try:
            return LineupStatus(str(value).lower())
        except ValueError:
            return LineupStatus.UNANNOUNCED

    @field_validator("lineup", mode="before")
    @classmethod
    def _lineup_list(cls, value: Any) -> Any:
        return value or []


class MatchResult(Festival):
    """A festival scored against one user's artist set."""

    match_percentage: int = Field(default=0, ge=0, le=100)
    matched_artists: int = Field(default=0, ge=0)
    total_user_artists: int = Field(default=0, ge=0)
    artists_in_common: list[str] = Field(default_factory=list)
    is_favorite: bool = False
    match_display: str = "0%"
    match_class: str = "low-match"


class DateRange(BaseModel):
    """An inclusive start/end date pair produced by the date-range parser."""

    model_config = CAMEL_CONFIG

    start_date: datetime.date
    end_date: datetime.date

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date


class FestivalEvent(BaseModel):
    """A match result pinned to one concrete date range for calendar placement."""

    model_config = CAMEL_CONFIG

    festival: MatchResult
    start_date: datetime.date
    end_date: datetime.date


class FestivalAppearance(BaseModel):
    """A catalog festival whose lineup includes a given artist."""

    model_config = CAMEL_CONFIG

    id: str
    name: str
    dates: str
    city: str
    country: str
    website: str
