"""Static region tables used to scope catalog listings and tour dates.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# A region is a fixed grouping of countries.  Two spellings are needed
# because the two data sources disagree:
#
#   - The festival catalog stores ISO-style country *codes* ("ES", "GB").
#   - Bandsintown returns country *names* on each venue ("Spain",
#     "United Kingdom").
#
# The set of regions is closed.  Anything the client sends that is not
# a known region key silently resolves to Europe.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Region:
    """One region with its country-name and country-code tables."""

    name: str
    country_names: frozenset[str]
    country_codes: frozenset[str]

    def has_country_name(self, country_name: str | None) -> bool:
        return country_name in self.country_names

    def has_country_code(self, country_code: str | None) -> bool:
        return country_code in self.country_codes


# ═════════════════════════════════════════════════════════════════════════
# REGION TABLES
# ═════════════════════════════════════════════════════════════════════════

EUROPE = Region(
    name="europe",
    country_names=frozenset({
        "Germany", "France", "Spain", "Italy", "Netherlands",
        "Belgium", "Portugal", "United Kingdom", "Ireland",
        "Denmark", "Sweden", "Norway", "Finland", "Poland",
        "Austria", "Switzerland", "Czech Republic", "Czechia", "Hungary",
        "Croatia", "Serbia", "Greece", "Romania", "Bulgaria",
        "Slovakia", "Slovenia", "Estonia", "Latvia", "Lithuania",
        "Luxembourg", "Iceland", "Turkey", "Ukraine", "Russia",
    }),
    country_codes=frozenset({
        "DE", "FR", "ES", "IT", "NL", "BE", "PT", "GB", "UK", "IE",
        "DK", "SE", "NO", "FI", "PL", "AT", "CH", "CZ", "HU",
        "HR", "RS", "GR", "RO", "BG", "SK", "SI", "EE", "LV", "LT",
        "LU", "IS", "TR", "UA", "RU",
    }),
)

USA = Region(
    name="usa",
    country_names=frozenset({"United States", "USA", "US"}),
    country_codes=frozenset({"US", "USA"}),
)

LATAM = Region(
    name="latam",
    country_names=frozenset({
        "Mexico", "Brazil", "Argentina", "Chile", "Colombia",
        "Peru", "Ecuador", "Venezuela", "Uruguay", "Paraguay",
        "Bolivia", "Costa Rica", "Panama", "Guatemala", "Honduras",
        "El Salvador", "Nicaragua", "Cuba", "Dominican Republic", "Puerto Rico",
    }),
    country_codes=frozenset({
        "MX", "BR", "AR", "CL", "CO", "PE", "EC", "VE", "UY", "PY",
        "BO", "CR", "PA", "GT", "HN", "SV", "NI", "CU", "DO", "PR",
    }),
)

# Insertion order is the order "other regions" are reported in.
REGIONS: dict[str, Region] = {
    EUROPE.name: EUROPE,
    USA.name: USA,
    LATAM.name: LATAM,
}

DEFAULT_REGION = EUROPE


def resolve_region(name: str | None) -> Region:
    """Return the region called *name*, or Europe for anything unknown."""
    if not name:
        return DEFAULT_REGION
    return REGIONS.get(name.strip().lower(), DEFAULT_REGION)


def other_regions(region: Region) -> list[Region]:
    """Return every region except *region*, in table order."""
    return [r for r in REGIONS.values() if r.name != region.name]
