"""Unit tests for text normalization utilities."""

from __future__ import annotations

import pytest

from src.utils.text_normalizer import (
    fold_text,
    normalize_artist_name,
    normalize_artist_set,
    slugify,
)


# ======================================================================
# normalize_artist_name
# ======================================================================


class TestNormalizeArtistName:
    """Tests for the normalize_artist_name function."""

    @pytest.mark.parametrize("raw", ["Björk", "BJORK ", "bjork", "  björk", "BJÖRK"])
    def test_case_and_accent_variants_are_equal(self, raw: str) -> None:
        assert normalize_artist_name(raw) == "bjork"

    def test_does_not_partially_match(self) -> None:
        assert normalize_artist_name("Bjork Live") != normalize_artist_name("Björk")

    def test_keeps_punctuation(self) -> None:
        assert normalize_artist_name("Fred Again..") == "fred again.."

    def test_empty_string(self) -> None:
        assert normalize_artist_name("") == ""

    def test_whitespace_only(self) -> None:
        assert normalize_artist_name("   ") == ""

    def test_strips_spanish_accents(self) -> None:
        assert normalize_artist_name("Rosalía") == "rosalia"


class TestFoldText:
    def test_folds_month_names(self) -> None:
        assert fold_text("  Diciémbre ") == "diciembre"


# ======================================================================
# normalize_artist_set
# ======================================================================


class TestNormalizeArtistSet:
    def test_collapses_duplicates(self) -> None:
        assert normalize_artist_set(["Björk", "bjork", "Bicep"]) == {"bjork", "bicep"}

    def test_drops_blank_names(self) -> None:
        assert normalize_artist_set(["", "  ", "Bicep"]) == {"bicep"}

    def test_empty_input(self) -> None:
        assert normalize_artist_set([]) == set()


# ======================================================================
# slugify
# ======================================================================


class TestSlugify:
    def test_spaces_become_hyphens(self) -> None:
        assert slugify("Primavera Sound") == "primavera-sound"

    def test_accents_and_punctuation(self) -> None:
        assert slugify("Sónar 2026!") == "sonar-2026"

    def test_only_symbols(self) -> None:
        assert slugify("!!!") == ""
