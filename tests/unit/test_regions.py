"""Unit tests for region tables and region resolution."""

from __future__ import annotations

import pytest

from src.config.regions import DEFAULT_REGION, EUROPE, LATAM, USA, other_regions, resolve_region


class TestResolveRegion:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("europe", EUROPE), ("usa", USA), ("latam", LATAM), (" USA ", USA), ("LatAm", LATAM)],
    )
    def test_known_names(self, name: str, expected) -> None:
        assert resolve_region(name) is expected

    @pytest.mark.parametrize("name", [None, "", "asia", "oceania"])
    def test_unknown_falls_back_to_europe(self, name) -> None:
        assert resolve_region(name) is DEFAULT_REGION
        assert DEFAULT_REGION is EUROPE


class TestRegionMembership:
    def test_country_codes(self) -> None:
        assert EUROPE.has_country_code("ES")
        assert EUROPE.has_country_code("GB")
        assert USA.has_country_code("US")
        assert LATAM.has_country_code("MX")
        assert not EUROPE.has_country_code("US")

    def test_country_codes_are_case_sensitive(self) -> None:
        assert not EUROPE.has_country_code("es")

    def test_country_names(self) -> None:
        assert EUROPE.has_country_name("Spain")
        assert USA.has_country_name("United States")
        assert LATAM.has_country_name("Mexico")
        assert not LATAM.has_country_name("Spain")

    def test_missing_country(self) -> None:
        assert not EUROPE.has_country_code(None)
        assert not EUROPE.has_country_name(None)


class TestOtherRegions:
    def test_excludes_the_given_region(self) -> None:
        assert [r.name for r in other_regions(EUROPE)] == ["usa", "latam"]
        assert [r.name for r in other_regions(USA)] == ["europe", "latam"]
