"""Integration tests for the Festival Match API using TestClient.

The full application is assembled by ``build_components`` against a
temporary database and catalog file.  Outbound HTTP (Bandsintown and the
time API) goes through an ``httpx.MockTransport``.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.auth import SESSION_HEADER
from src.config.settings import Settings
from src.main import build_components, create_app

ADMIN_EMAIL = "admin@example.com"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _bandsintown_event(event_id: int, country: str, city: str) -> dict:
    return {
        "id": str(event_id),
        "datetime": f"2026-07-{event_id:02d}T21:00:00",
        "venue": {"name": f"Venue {event_id}", "city": city, "country": country},
        "url": f"https://www.bandsintown.com/e/{event_id}",
        "lineup": ["Bicep"],
    }


class _Upstream:
    """Stand-in for Bandsintown and the time API."""

    def __init__(self) -> None:
        self.bandsintown_calls = 0
        self.bandsintown_status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "time.test":
            return httpx.Response(200, json={"datetime": "2027-03-01T09:00:00+00:00"})
        self.bandsintown_calls += 1
        if self.bandsintown_status != 200:
            return httpx.Response(self.bandsintown_status)
        return httpx.Response(
            200,
            json=[
                _bandsintown_event(1, "Spain", "Madrid"),
                _bandsintown_event(2, "United States", "Chicago"),
                _bandsintown_event(3, "Portugal", "Porto"),
            ],
        )


@pytest.fixture
def upstream() -> _Upstream:
    return _Upstream()


@pytest.fixture
def components(tmp_path: Path, catalog_path: Path, upstream: _Upstream) -> dict:
    settings = Settings(
        db_path=str(tmp_path / "api.db"),
        festivals_path=str(catalog_path),
        bandsintown_base_url="https://bit.test",
        current_year_url="https://time.test/api/ip",
        admin_emails=[ADMIN_EMAIL],
        app_env="test",
    )
    config = {"app": {"version": "9.9.9"}, "tour_dates": {"max_events": 10}}
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return build_components(settings, config, http_client=http_client)


@pytest.fixture
def client(components: dict) -> Iterator[TestClient]:
    with TestClient(create_app(components)) as test_client:
        yield test_client


def _login(components: dict, email: str) -> dict[str, str]:
    """Create a user and session directly in the store; return auth headers."""
    store = components["user_store"]

    async def _create() -> str:
        user = await store.find_or_create_user(email, name=email.split("@")[0])
        return await store.create_session(user.id)

    return {SESSION_HEADER: asyncio.run(_create())}


@pytest.fixture
def user_headers(client: TestClient, components: dict) -> dict[str, str]:
    return _login(components, "fan@example.com")


@pytest.fixture
def admin_headers(client: TestClient, components: dict) -> dict[str, str]:
    return _login(components, ADMIN_EMAIL)


# ---------------------------------------------------------------------------
# Health, year, session
# ---------------------------------------------------------------------------


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": "9.9.9", "year": 2027}

    def test_current_year_comes_from_time_api(self, client: TestClient) -> None:
        assert client.get("/api/current-year").json() == {"year": 2027}

    def test_unknown_route_uses_error_body(self, client: TestClient) -> None:
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestSession:
    def test_me_anonymous(self, client: TestClient) -> None:
        assert client.get("/auth/me").json() == {"user": None}

    def test_me_with_header(self, client: TestClient, user_headers) -> None:
        user = client.get("/auth/me", headers=user_headers).json()["user"]
        assert user["email"] == "fan@example.com"
        assert user["isAdmin"] is False

    def test_me_with_cookie(self, client: TestClient, user_headers) -> None:
        client.cookies.set("session", user_headers[SESSION_HEADER])
        assert client.get("/auth/me").json()["user"]["email"] == "fan@example.com"

    def test_admin_email_is_admin(self, client: TestClient, admin_headers) -> None:
        user = client.get("/auth/me", headers=admin_headers).json()["user"]
        assert user["role"] == "admin,dev"
        assert user["isAdmin"] is True

    def test_logout_ends_session(self, client: TestClient, user_headers) -> None:
        assert client.post("/auth/logout", headers=user_headers).json() == {"success": True}
        assert client.get("/auth/me", headers=user_headers).json() == {"user": None}
        assert client.get("/api/user/artists", headers=user_headers).status_code == 401

    def test_bogus_session(self, client: TestClient) -> None:
        response = client.get("/api/user/artists", headers={SESSION_HEADER: "forged"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid or expired session"}


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


class TestArtists:
    def test_requires_login(self, client: TestClient) -> None:
        response = client.get("/api/user/artists")
        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated"}

    def test_crud(self, client: TestClient, user_headers) -> None:
        created = client.post("/api/user/artists", json={"artistName": " Bicep "}, headers=user_headers)
        assert created.status_code == 201
        artist = created.json()["artist"]
        assert artist["artistName"] == "Bicep"
        assert "addedAt" in artist

        duplicate = client.post("/api/user/artists", json={"artistName": "BICEP"}, headers=user_headers)
        assert duplicate.status_code == 409
        assert "error" in duplicate.json()

        listed = client.get("/api/user/artists", headers=user_headers).json()["artists"]
        assert [a["artistName"] for a in listed] == ["Bicep"]

        path = f"/api/user/artists/{artist['id']}"
        assert client.delete(path, headers=user_headers).json() == {"success": True}
        assert client.delete(path, headers=user_headers).status_code == 404

    def test_blank_name(self, client: TestClient, user_headers) -> None:
        response = client.post("/api/user/artists", json={"artistName": "  "}, headers=user_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Artist name is required"}

    def test_malformed_body(self, client: TestClient, user_headers) -> None:
        response = client.post(
            "/api/user/artists",
            content=b"not json",
            headers={**user_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert set(response.json()) == {"error"}


class TestGenresAndFavorites:
    def test_available_genres(self, client: TestClient) -> None:
        assert "Techno" in client.get("/api/genres").json()["genres"]

    def test_user_genres(self, client: TestClient, user_headers) -> None:
        created = client.post("/api/user/genres", json={"genre": "Techno"}, headers=user_headers)
        assert created.status_code == 201
        genre_id = created.json()["genre"]["id"]
        assert client.post("/api/user/genres", json={"genre": "techno"}, headers=user_headers).status_code == 409
        assert client.delete(f"/api/user/genres/{genre_id}", headers=user_headers).status_code == 200
        assert client.get("/api/user/genres", headers=user_headers).json() == {"genres": []}

    def test_favorites(self, client: TestClient, user_headers) -> None:
        created = client.post(
            "/api/user/favorite-festivals", json={"festivalId": "sonar"}, headers=user_headers
        )
        assert created.status_code == 201
        assert created.json()["festival"]["festivalId"] == "sonar"

        festivals = client.get("/api/user/festivals", headers=user_headers).json()["festivals"]
        assert {f["id"]: f["isFavorite"] for f in festivals}["sonar"] is True

        assert client.delete("/api/user/favorite-festivals/sonar", headers=user_headers).status_code == 200
        assert client.delete("/api/user/favorite-festivals/sonar", headers=user_headers).status_code == 404


# ---------------------------------------------------------------------------
# Listings & calendar
# ---------------------------------------------------------------------------


class TestListings:
    def test_user_festivals_without_artists(self, client: TestClient, user_headers) -> None:
        body = client.get("/api/user/festivals", headers=user_headers).json()
        assert body["region"] == "europe"
        assert body["message"] == "Add artists to your profile to see your compatibility"
        assert "isDemo" not in body
        assert [f["id"] for f in body["festivals"]] == ["primavera-sound", "sonar", "nos-alive"]

    def test_user_festivals_ranked(self, client: TestClient, user_headers) -> None:
        client.post("/api/user/artists", json={"artistName": "Bicep"}, headers=user_headers)
        body = client.get("/api/user/festivals?region=europe", headers=user_headers).json()

        assert "message" not in body
        top = body["festivals"][0]
        assert top["id"] == "sonar"
        assert top["matchPercentage"] == 100
        assert top["matchDisplay"] == "100%"
        assert top["matchClass"] == "high-match"
        assert top["artistsInCommon"] == ["Bicep"]

        nos = next(f for f in body["festivals"] if f["id"] == "nos-alive")
        assert nos["matchDisplay"] == "N/A"
        assert nos["matchClass"] == "unannounced"

    def test_demo_festivals(self, client: TestClient) -> None:
        body = client.get("/api/demo/festivals?region=usa").json()
        assert body["isDemo"] is True
        assert body["region"] == "usa"
        assert [f["id"] for f in body["festivals"]] == ["coachella"]

    def test_unknown_region_is_europe(self, client: TestClient) -> None:
        assert client.get("/api/demo/festivals?region=oceania").json()["region"] == "europe"

    def test_demo_artists(self, client: TestClient) -> None:
        body = client.get("/api/demo/artists").json()
        assert body["isDemo"] is True
        assert len(body["artists"]) == 20
        assert body["artists"][0]["name"] == "Charli XCX"


class TestCalendar:
    def test_anonymous_month(self, client: TestClient) -> None:
        body = client.get("/api/calendar?year=2026&month=6&region=europe").json()

        assert body["title"] == "Junio 2026"
        assert body["leadingBlanks"] == 0
        assert len(body["days"]) == 30
        june_4 = body["days"][3]
        assert june_4["date"] == "2026-06-04"
        assert [e["id"] for e in june_4["entries"]] == ["primavera-sound"]

    def test_multi_range_festival(self, client: TestClient) -> None:
        days = client.get("/api/calendar?year=2026&month=4&region=usa").json()["days"]
        with_coachella = [d["day"] for d in days if d["entries"]]
        assert with_coachella == [10, 11, 12, 17, 18, 19]

    def test_year_defaults_to_current_year(self, client: TestClient) -> None:
        assert client.get("/api/calendar?month=1").json()["year"] == 2027

    def test_invalid_month(self, client: TestClient) -> None:
        response = client.get("/api/calendar?year=2026&month=13")
        assert response.status_code == 400
        assert response.json()["error"].startswith("month")

    @pytest.mark.parametrize("dates_info", ["Mayo 0000", "99999999999999999999-3 Junio 2026"])
    def test_unusable_approved_dates_only_drop_that_festival(
        self, client: TestClient, admin_headers, dates_info: str
    ) -> None:
        submitted = client.post(
            "/api/festival-suggestions",
            json={"festivalName": "Broken Dates Fest", "country": "ES", "city": "Madrid", "datesInfo": dates_info},
        )
        suggestion_id = submitted.json()["suggestion"]["id"]
        approved = client.post(f"/api/admin/suggestions/{suggestion_id}/approve", headers=admin_headers)
        assert approved.json()["outcome"] == "approved"

        response = client.get("/api/calendar?year=2026&month=6&region=europe")

        assert response.status_code == 200
        entries = {e["id"] for d in response.json()["days"] for e in d["entries"]}
        assert "primavera-sound" in entries
        assert "broken-dates-fest" not in entries


# ---------------------------------------------------------------------------
# Tour dates
# ---------------------------------------------------------------------------


class TestArtistEvents:
    def test_region_partition_and_cache(self, client: TestClient, upstream: _Upstream) -> None:
        body = client.get("/api/artist-events/Bicep?region=europe").json()

        assert body["artist"] == "Bicep"
        assert body["totalRegionEvents"] == 2
        assert [e["city"] for e in body["events"]] == ["Madrid", "Porto"]
        assert body["otherRegionsWithEvents"] == ["usa"]
        assert body["bandsintownUrl"] == "https://www.bandsintown.com/a/Bicep"
        assert [a["id"] for a in body["festivalAppearances"]] == ["sonar"]
        assert body["apiError"] is False

        client.get("/api/artist-events/Bicep?region=europe")
        assert upstream.bandsintown_calls == 1

    def test_upstream_failure_degrades(self, client: TestClient, upstream: _Upstream) -> None:
        upstream.bandsintown_status = 503
        response = client.get("/api/artist-events/Four Tet")

        assert response.status_code == 200
        body = response.json()
        assert body["apiError"] is True
        assert body["events"] == []
        assert [a["id"] for a in body["festivalAppearances"]] == ["primavera-sound", "sonar"]


# ---------------------------------------------------------------------------
# Suggestions & admin review
# ---------------------------------------------------------------------------


_SUGGESTION = {
    "festivalName": "Tomorrowland",
    "country": "BE",
    "city": "Boom",
    "datesInfo": "17-19 & 24-26 Julio 2026",
    "website": "https://www.tomorrowland.com",
}


class TestSuggestions:
    def test_anonymous_submission(self, client: TestClient) -> None:
        response = client.post("/api/festival-suggestions", json=_SUGGESTION)
        assert response.status_code == 201
        suggestion = response.json()["suggestion"]
        assert suggestion["status"] == "pending"
        assert suggestion["userId"] is None

    def test_missing_fields(self, client: TestClient) -> None:
        response = client.post("/api/festival-suggestions", json={"festivalName": "X", "country": "ES"})
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields: city"}

    def test_admin_routes_require_admin(self, client: TestClient, user_headers) -> None:
        assert client.get("/api/admin/suggestions").status_code == 401
        forbidden = client.get("/api/admin/suggestions", headers=user_headers)
        assert forbidden.status_code == 403
        assert forbidden.json() == {"error": "Admin access required"}

    def test_approve_flow(
        self, client: TestClient, user_headers, admin_headers, catalog_path: Path
    ) -> None:
        submitted = client.post("/api/festival-suggestions", json=_SUGGESTION, headers=user_headers)
        suggestion_id = submitted.json()["suggestion"]["id"]

        pending = client.get("/api/admin/suggestions?status=pending", headers=admin_headers).json()
        assert [s["id"] for s in pending["suggestions"]] == [suggestion_id]
        assert pending["suggestions"][0]["userEmail"] == "fan@example.com"

        approved = client.post(f"/api/admin/suggestions/{suggestion_id}/approve", headers=admin_headers)
        assert approved.status_code == 200
        result = approved.json()
        assert result["outcome"] == "approved"
        assert result["festival"]["id"] == "tomorrowland"

        on_disk = json.loads(catalog_path.read_text(encoding="utf-8"))
        assert on_disk[-1]["id"] == "tomorrowland"
        demo_ids = [f["id"] for f in client.get("/api/demo/festivals").json()["festivals"]]
        assert "tomorrowland" in demo_ids

        again = client.post(f"/api/admin/suggestions/{suggestion_id}/approve", headers=admin_headers)
        assert again.status_code == 409

    def test_duplicate_approval(self, client: TestClient, admin_headers) -> None:
        submitted = client.post(
            "/api/festival-suggestions",
            json={"festivalName": "SONAR", "country": "ES", "city": "Barcelona"},
        )
        suggestion_id = submitted.json()["suggestion"]["id"]

        result = client.post(f"/api/admin/suggestions/{suggestion_id}/approve", headers=admin_headers).json()

        assert result["outcome"] == "duplicate"
        assert result["festival"]["id"] == "sonar"
        assert client.get("/api/admin/suggestions", headers=admin_headers).json() == {"suggestions": []}

    def test_reject_and_delete(self, client: TestClient, admin_headers) -> None:
        suggestion_id = client.post("/api/festival-suggestions", json=_SUGGESTION).json()["suggestion"]["id"]

        rejected = client.post(f"/api/admin/suggestions/{suggestion_id}/reject", headers=admin_headers)
        assert rejected.json()["suggestion"]["status"] == "rejected"
        assert rejected.json()["message"] == "Suggestion rejected"

        path = f"/api/admin/suggestions/{suggestion_id}"
        assert client.delete(path, headers=admin_headers).json() == {"success": True}
        assert client.delete(path, headers=admin_headers).status_code == 404

    def test_unknown_suggestion(self, client: TestClient, admin_headers) -> None:
        response = client.post("/api/admin/suggestions/999/reject", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Suggestion 999 not found"}
