"""Unit tests for TourDateService (cache, region partition, appearances)."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.tour_date_provider import ITourDateProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.sqlite_tour_cache import SQLiteTourCache
from src.providers.cache.tour_cache import TwoTierTourCache
from src.services.tour_date_service import TourDateService, to_tour_event
from src.utils.errors import ProviderUnavailableError

TTL = 24 * 3600


def _event(event_id: int, country: str, city: str = "City", **extra: Any) -> dict[str, Any]:
    return {
        "id": str(event_id),
        "datetime": f"2026-06-{event_id % 28 + 1:02d}T20:00:00",
        "venue": {"name": f"Venue {event_id}", "city": city, "country": country},
        "url": f"https://bit.test/e/{event_id}",
        "lineup": ["Bicep"],
        **extra,
    }


@pytest.fixture
def provider() -> MagicMock:
    mock = MagicMock(spec=ITourDateProvider)
    mock.fetch_events = AsyncMock(return_value=[])
    mock.artist_url.side_effect = lambda name: f"https://www.bandsintown.com/a/{name}"
    mock.get_provider_name.return_value = "bandsintown"
    return mock


@pytest.fixture
async def tour_cache(db_path, clock) -> TwoTierTourCache:
    persistent = SQLiteTourCache(db_path=db_path, ttl=TTL, clock=clock)
    await persistent.initialize()
    return TwoTierTourCache(memory=MemoryCacheProvider(ttl=TTL, timer=clock), persistent=persistent)


@pytest.fixture
def service(provider, tour_cache, catalog) -> TourDateService:
    return TourDateService(provider=provider, cache=tour_cache, catalog=catalog, max_events=2)


class TestToTourEvent:
    def test_maps_fields(self) -> None:
        event = to_tour_event(_event(7, "Spain", city="Madrid"))
        assert event.id == "7"
        assert event.venue == "Venue 7"
        assert event.city == "Madrid"
        assert event.country == "Spain"
        assert event.url == "https://bit.test/e/7"

    def test_falls_back_to_offer_url_and_defaults(self) -> None:
        event = to_tour_event({"id": 1, "offers": [{"url": "https://tickets.test/1"}]})
        assert event.url == "https://tickets.test/1"
        assert event.venue == "Venue TBA"
        assert event.city == ""
        assert event.lineup == []


class TestGetArtistEvents:
    async def test_partitions_by_region_and_truncates(self, service, provider) -> None:
        provider.fetch_events.return_value = [
            _event(1, "Spain"),
            _event(2, "United States"),
            _event(3, "Germany"),
            _event(4, "France"),
            _event(5, "Atlantis"),
        ]

        result = await service.get_artist_events("Bicep", "europe")

        assert result.region == "europe"
        assert [e.id for e in result.events] == ["1", "3"]
        assert result.total_region_events == 3
        assert result.other_regions_with_events == ["usa"]
        assert result.bandsintown_url == "https://www.bandsintown.com/a/Bicep"
        assert result.api_error is False

    async def test_unknown_region_is_europe(self, service, provider) -> None:
        provider.fetch_events.return_value = [_event(1, "Spain")]
        result = await service.get_artist_events("Bicep", "mars")
        assert result.region == "europe"
        assert result.total_region_events == 1

    async def test_second_call_is_served_from_cache(self, service, provider) -> None:
        provider.fetch_events.return_value = [_event(1, "Spain")]

        first = await service.get_artist_events("Bicep", "europe")
        second = await service.get_artist_events("Bicep", "europe")

        assert provider.fetch_events.await_count == 1
        assert second == first

    async def test_each_region_is_fetched_separately(self, service, provider) -> None:
        provider.fetch_events.return_value = [_event(1, "Spain"), _event(2, "Mexico")]

        await service.get_artist_events("Bicep", "europe")
        latam = await service.get_artist_events("Bicep", "latam")

        assert provider.fetch_events.await_count == 2
        assert latam.total_region_events == 1
        assert latam.other_regions_with_events == ["europe"]

    async def test_refetches_after_ttl(self, service, provider, clock) -> None:
        provider.fetch_events.return_value = [_event(1, "Spain")]
        await service.get_artist_events("Bicep", "europe")

        clock.advance(TTL)
        await service.get_artist_events("Bicep", "europe")

        assert provider.fetch_events.await_count == 2

    async def test_malformed_events_are_skipped(self, service, provider) -> None:
        provider.fetch_events.return_value = [
            _event(1, "Spain", datetime=1767225600, lineup=[None]),
            _event(2, "France", venue={"name": 42, "city": "Paris", "country": "France"}),
            _event(3, "Germany"),
        ]

        result = await service.get_artist_events("Bicep", "europe")

        assert [e.id for e in result.events] == ["3"]
        assert result.total_region_events == 1
        assert result.api_error is False

    async def test_upstream_failure_is_degraded_and_not_cached(self, service, provider) -> None:
        provider.fetch_events.side_effect = ProviderUnavailableError(
            message="down", provider_name="bandsintown"
        )

        result = await service.get_artist_events("Tame Impala", "latam")

        assert result.api_error is True
        assert result.events == []
        assert result.total_region_events == 0
        assert [a.id for a in result.festival_appearances] == ["corona-capital"]

        provider.fetch_events.side_effect = None
        provider.fetch_events.return_value = []
        recovered = await service.get_artist_events("Tame Impala", "latam")
        assert recovered.api_error is False
        assert provider.fetch_events.await_count == 2

    async def test_non_dict_events_are_ignored(self, service, provider) -> None:
        provider.fetch_events.return_value = ["junk", None, _event(1, "Spain")]
        result = await service.get_artist_events("Bicep", "europe")
        assert result.total_region_events == 1


class TestFestivalAppearances:
    async def test_matches_normalized_names_in_region(self, service, provider) -> None:
        result = await service.get_artist_events("bjork", "europe")
        assert [a.id for a in result.festival_appearances] == ["primavera-sound"]

    async def test_other_region_festivals_excluded(self, service, provider) -> None:
        result = await service.get_artist_events("Charli XCX", "usa")
        assert [a.id for a in result.festival_appearances] == ["coachella"]

    async def test_recomputed_on_cache_hit(self, service, provider, catalog) -> None:
        await service.get_artist_events("Tame Impala", "europe")

        catalog.append({
            "id": "new-fest",
            "name": "New Fest",
            "country": "DE",
            "city": "Berlin",
            "lineupStatus": "confirmed",
            "lineup": ["Tame Impala"],
        })
        cached = await service.get_artist_events("Tame Impala", "europe")

        assert provider.fetch_events.await_count == 1
        assert [a.id for a in cached.festival_appearances] == ["new-fest"]
