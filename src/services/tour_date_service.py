"""Artist tour-date lookup: cache, Bandsintown, and catalog appearances.

# ─── REQUEST FLOW ─────────────────────────────────────────────────────
#
#   get_artist_events(artist, region)
#     │
#     ├─ festival_appearances  ← always recomputed from the live catalog
#     │
#     ├─ tour cache hit?       → cached payload + fresh appearances
#     │
#     └─ miss → provider.fetch_events(artist)
#          ├─ ok:    partition by region, truncate, cache, return
#          └─ error: empty payload, api_error=True, NOT cached
#
# The upstream listing is global; region filtering happens here.  Each
# region is cached separately, so looking up the same artist in another
# region re-fetches upstream.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from src.config.regions import Region, other_regions, resolve_region
from src.interfaces.cache_provider import ITourCache
from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.tour_date_provider import ITourDateProvider
from src.models.festival import FestivalAppearance
from src.models.tour import ArtistEvents, TourEvent
from src.utils.errors import ProviderUnavailableError
from src.utils.logging import get_logger
from src.utils.text_normalizer import normalize_artist_name

_DEFAULT_MAX_EVENTS = 10


def to_tour_event(raw: dict[str, Any]) -> TourEvent:
    """Map one raw Bandsintown event to a :class:`TourEvent`."""
    venue = raw.get("venue") or {}
    offers = raw.get("offers") or []
    url = raw.get("url") or (offers[0].get("url") if offers and isinstance(offers[0], dict) else None)
    return TourEvent(
        id=str(raw["id"]) if raw.get("id") is not None else None,
        date=raw.get("datetime"),
        venue=venue.get("name") or "Venue TBA",
        city=venue.get("city") or "",
        country=venue.get("country") or "",
        url=url,
        lineup=raw.get("lineup") or [],
    )


def _venue_country(raw: dict[str, Any]) -> str | None:
    venue = raw.get("venue")
    return venue.get("country") if isinstance(venue, dict) else None


class TourDateService:
    """Builds :class:`ArtistEvents` payloads for the artist-events endpoint.

    Parameters
    ----------
    provider:
        Upstream tour listing (Bandsintown).
    cache:
        (artist, region) payload cache; normally the two-tier cache.
    catalog:
        Festival catalog, scanned on every call for lineup appearances.
    max_events:
        Number of region events kept in the payload.
    """

    def __init__(
        self,
        provider: ITourDateProvider,
        cache: ITourCache,
        catalog: ICatalogProvider,
        max_events: int = _DEFAULT_MAX_EVENTS,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._catalog = catalog
        self._max_events = max_events
        self._logger = get_logger(__name__)

    async def get_artist_events(self, artist_name: str, region_name: str | None = None) -> ArtistEvents:
        region = resolve_region(region_name)
        appearances = await self.find_festival_appearances(artist_name, region)

        cached = await self._cache.get(artist_name, region.name)
        if cached is not None:
            payload = ArtistEvents.model_validate(cached)
            return payload.model_copy(update={"festival_appearances": appearances})

        try:
            raw_events = await self._provider.fetch_events(artist_name)
        except ProviderUnavailableError as exc:
            self._logger.warning(
                "tour_dates_degraded",
                artist=artist_name,
                region=region.name,
                error=str(exc),
            )
            return ArtistEvents(
                artist=artist_name,
                region=region.name,
                festival_appearances=appearances,
                bandsintown_url=self._provider.artist_url(artist_name),
                api_error=True,
            )

        payload = self._build_payload(artist_name, region, raw_events)
        await self._cache.set(
            artist_name,
            region.name,
            payload.model_dump(mode="json", exclude={"festival_appearances"}),
        )
        self._logger.info(
            "tour_dates_fetched",
            artist=artist_name,
            region=region.name,
            region_events=payload.total_region_events,
        )
        return payload.model_copy(update={"festival_appearances": appearances})

    async def find_festival_appearances(self, artist_name: str, region: Region) -> list[FestivalAppearance]:
        """Return catalog festivals in *region* whose lineup names the artist."""
        key = normalize_artist_name(artist_name)
        catalog = await asyncio.to_thread(self._catalog.load)
        return [
            FestivalAppearance(
                id=festival.id,
                name=festival.name,
                dates=festival.dates,
                city=festival.city,
                country=festival.country,
                website=festival.website,
            )
            for festival in catalog
            if region.has_country_code(festival.country)
            and any(normalize_artist_name(name) == key for name in festival.lineup)
        ]

    def _build_payload(
        self, artist_name: str, region: Region, raw_events: list[dict[str, Any]]
    ) -> ArtistEvents:
        raw_events = [e for e in raw_events if isinstance(e, dict)]
        in_region = self._convert_events(
            artist_name, [e for e in raw_events if region.has_country_name(_venue_country(e))]
        )
        others = [
            other.name
            for other in other_regions(region)
            if any(other.has_country_name(_venue_country(e)) for e in raw_events)
        ]
        return ArtistEvents(
            artist=artist_name,
            region=region.name,
            events=in_region[: self._max_events],
            total_region_events=len(in_region),
            other_regions_with_events=others,
            bandsintown_url=self._provider.artist_url(artist_name),
        )

    def _convert_events(self, artist_name: str, raw_events: list[dict[str, Any]]) -> list[TourEvent]:
        """Map raw events to :class:`TourEvent`, dropping any that fail validation."""
        events: list[TourEvent] = []
        for raw in raw_events:
            try:
                events.append(to_tour_event(raw))
            except PydanticValidationError as exc:
                self._logger.warning(
                    "tour_event_skipped",
                    artist=artist_name,
                    event_id=raw.get("id"),
                    error=str(exc),
                )
        return events
