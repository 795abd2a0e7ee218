"""Shared pytest fixtures for the Festival Match test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from src.models.festival import Festival
from src.providers.catalog.json_catalog import JSONCatalogProvider
from src.providers.suggestion.sqlite_suggestion_store import SQLiteSuggestionStore
from src.providers.user_store.sqlite_user_store import SQLiteUserStore

ADMIN_EMAIL = "admin@example.com"


class FakeClock:
    """Callable epoch-seconds clock that only moves when told to."""

    def __init__(self, start: float = 1_767_225_600.0) -> None:  # 2026-01-01T00:00:00Z
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_festival(**overrides: Any) -> Festival:
    """Build a catalog Festival with sensible defaults."""
    data: dict[str, Any] = {
        "id": "test-fest",
        "name": "Test Fest",
        "country": "ES",
        "city": "Madrid",
        "dates": "3-7 Junio 2026",
        "website": "https://example.com",
        "lineup_status": "confirmed",
        "lineup": [],
    }
    data.update(overrides)
    return Festival.model_validate(data)


@pytest.fixture
def make_festival():
    """Factory fixture: `make_festival(lineup=[...])` returns a Festival."""
    return _make_festival


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog_records() -> list[dict[str, Any]]:
    """A small cross-region catalog, in the on-disk camelCase shape."""
    return [
        {
            "id": "primavera-sound",
            "name": "Primavera Sound",
            "country": "ES",
            "city": "Barcelona",
            "dates": "4-6 Junio 2026",
            "website": "https://www.primaverasound.com",
            "lineupStatus": "confirmed",
            "lineup": ["Charli XCX", "Björk", "Fontaines D.C.", "Four Tet"],
        },
        {
            "id": "sonar",
            "name": "Sónar",
            "country": "ES",
            "city": "Barcelona",
            "dates": "18-20 Junio 2026",
            "website": "https://sonar.es",
            "lineupStatus": "confirmed",
            "lineup": ["Four Tet", "Bicep"],
        },
        {
            "id": "nos-alive",
            "name": "NOS Alive",
            "country": "PT",
            "city": "Lisboa",
            "dates": "TBA",
            "website": "https://nosalive.com",
            "lineupStatus": "unannounced",
            "lineup": [],
        },
        {
            "id": "coachella",
            "name": "Coachella",
            "country": "US",
            "city": "Indio",
            "dates": "10-12 & 17-19 Abril 2026",
            "website": "https://www.coachella.com",
            "lineupStatus": "confirmed",
            "lineup": ["Charli XCX", "Tame Impala"],
        },
        {
            "id": "corona-capital",
            "name": "Corona Capital",
            "country": "MX",
            "city": "Ciudad de México",
            "dates": "14-16 Noviembre 2026",
            "website": "https://www.coronacapital.com.mx",
            "lineupStatus": "partial",
            "lineup": ["Tame Impala"],
        },
    ]


@pytest.fixture
def catalog_path(tmp_path: Path, catalog_records: list[dict[str, Any]]) -> Path:
    path = tmp_path / "festivals.json"
    path.write_text(json.dumps(catalog_records, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def catalog(catalog_path: Path) -> JSONCatalogProvider:
    return JSONCatalogProvider(catalog_path)


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "festival_match.db"


@pytest.fixture
async def user_store(db_path: Path, clock: FakeClock) -> SQLiteUserStore:
    store = SQLiteUserStore(
        db_path=db_path,
        session_ttl=3600,
        clock=clock,
        admin_emails=[ADMIN_EMAIL],
    )
    await store.initialize()
    return store


@pytest.fixture
async def suggestion_store(db_path: Path, user_store: SQLiteUserStore) -> SQLiteSuggestionStore:
    store = SQLiteSuggestionStore(db_path=db_path)
    await store.initialize()
    return store
