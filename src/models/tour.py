"""Tour-date models returned by the artist-events lookup.

``ArtistEvents`` is what gets cached (minus ``festival_appearances``, which
is recomputed from the catalog on every read) and what the API returns.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.festival import CAMEL_CONFIG, FestivalAppearance


class TourEvent(BaseModel):
    """One upcoming show as reported by Bandsintown."""

    model_config = CAMEL_CONFIG

    id: str | None = None
    date: str | None = Field(default=None, description="ISO datetime string from upstream.")
    venue: str = "Venue TBA"
    city: str = ""
    country: str = ""
    url: str | None = None
    lineup: list[str] = Field(default_factory=list)


class ArtistEvents(BaseModel):
    """Upcoming events for one artist, scoped to one region."""

    model_config = CAMEL_CONFIG

    artist: str
    region: str
    events: list[TourEvent] = Field(default_factory=list)
    total_region_events: int = 0
    festival_appearances: list[FestivalAppearance] = Field(default_factory=list)
    other_regions_with_events: list[str] = Field(default_factory=list)
    bandsintown_url: str = ""
    api_error: bool = False
