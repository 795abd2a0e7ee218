"""FastAPI routes for festival listings, user preferences and tour dates.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern.  Errors are raised as
``FestivalMatchError`` subclasses and turned into ``{"error": ...}``
bodies by the handlers in ``src/api/middleware.py``.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                                   Method  Auth
# ─────────────────────────────────────────────────────────────────────
# /api/health                                GET     -
# /auth/me                                   GET     optional
# /auth/logout                               POST    optional
# /api/user/artists                          GET/POST user
# /api/user/artists/{id}                     DELETE  user
# /api/genres                                GET     -
# /api/user/genres                           GET/POST user
# /api/user/genres/{id}                      DELETE  user
# /api/user/favorite-festivals               GET/POST user
# /api/user/favorite-festivals/{festival_id} DELETE  user
# /api/user/festivals?region=                GET     user
# /api/demo/artists                          GET     -
# /api/demo/festivals?region=                GET     -
# /api/calendar?year=&month=&region=         GET     optional
# /api/artist-events/{artist_name}?region=   GET     -
# /api/current-year                          GET     -
# /api/festival-suggestions                  POST    optional
#
# Admin routes live in src/api/admin_routes.py.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import datetime
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response

from src.api.auth import SESSION_COOKIE, OptionalUserDep, UserDep, UserStoreDep, session_id_from_request
from src.api.schemas import (
    AddArtistRequest,
    AddFavoriteRequest,
    AddGenreRequest,
    ArtistResponse,
    ArtistsResponse,
    AvailableGenresResponse,
    CurrentYearResponse,
    DemoArtist,
    DemoArtistsResponse,
    FavoriteResponse,
    FavoritesResponse,
    GenreResponse,
    HealthResponse,
    MeResponse,
    SuccessResponse,
    SuggestionRequest,
    SuggestionResponse,
    UserGenresResponse,
    UserInfo,
)
from src.config.demo_data import DEMO_ARTISTS
from src.models.tour import ArtistEvents
from src.services.calendar_service import CalendarMonth, CalendarService
from src.services.current_year import CurrentYearService
from src.services.festival_service import FestivalListing, FestivalService
from src.services.preference_service import PreferenceService
from src.services.suggestion_service import SuggestionService
from src.services.tour_date_service import TourDateService
from src.utils.errors import ValidationError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_festival_service(request: Request) -> FestivalService:
    """Return the festival listing service from application state."""
    return request.app.state.festival_service


def _get_preference_service(request: Request) -> PreferenceService:
    return request.app.state.preference_service


def _get_tour_date_service(request: Request) -> TourDateService:
    return request.app.state.tour_date_service


def _get_suggestion_service(request: Request) -> SuggestionService:
    return request.app.state.suggestion_service


def _get_calendar_service(request: Request) -> CalendarService:
    return request.app.state.calendar_service


def _get_current_year(request: Request) -> CurrentYearService:
    return request.app.state.current_year


def _get_config(request: Request) -> dict[str, Any]:
    return request.app.state.config


FestivalServiceDep = Annotated[FestivalService, Depends(_get_festival_service)]
PreferenceServiceDep = Annotated[PreferenceService, Depends(_get_preference_service)]
TourDateServiceDep = Annotated[TourDateService, Depends(_get_tour_date_service)]
SuggestionServiceDep = Annotated[SuggestionService, Depends(_get_suggestion_service)]
CalendarServiceDep = Annotated[CalendarService, Depends(_get_calendar_service)]
CurrentYearDep = Annotated[CurrentYearService, Depends(_get_current_year)]
ConfigDep = Annotated[dict[str, Any], Depends(_get_config)]

RegionQuery = Annotated[str | None, Query(description="europe, usa or latam; anything else means europe")]


# ---------------------------------------------------------------------------
# Health & session
# ---------------------------------------------------------------------------


@router.get("/api/health", response_model=HealthResponse)
async def health(config: ConfigDep, current_year: CurrentYearDep) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=str(config.get("app", {}).get("version", "0.0.0")),
        year=current_year.year,
    )


@router.get("/auth/me", response_model=MeResponse)
async def me(user: OptionalUserDep) -> MeResponse:
    return MeResponse(user=UserInfo.from_user(user) if user else None)


@router.post("/auth/logout", response_model=SuccessResponse)
async def logout(request: Request, response: Response, users: UserStoreDep) -> SuccessResponse:
    session_id = session_id_from_request(request)
    if session_id:
        await users.delete_session(session_id)
    response.delete_cookie(SESSION_COOKIE)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# User preferences
# ---------------------------------------------------------------------------


@router.get("/api/user/artists", response_model=ArtistsResponse)
async def list_artists(user: UserDep, prefs: PreferenceServiceDep) -> ArtistsResponse:
    return ArtistsResponse(artists=await prefs.list_artists(user.id))


@router.post("/api/user/artists", response_model=ArtistResponse, status_code=201)
async def add_artist(
    body: AddArtistRequest, user: UserDep, prefs: PreferenceServiceDep
) -> ArtistResponse:
    artist = await prefs.add_artist(user.id, body.artist_name, body.musicbrainz_id)
    return ArtistResponse(artist=artist)


@router.delete("/api/user/artists/{artist_id}", response_model=SuccessResponse)
async def remove_artist(artist_id: int, user: UserDep, prefs: PreferenceServiceDep) -> SuccessResponse:
    await prefs.remove_artist(user.id, artist_id)
    return SuccessResponse()


@router.get("/api/genres", response_model=AvailableGenresResponse)
async def available_genres() -> AvailableGenresResponse:
    return AvailableGenresResponse(genres=PreferenceService.available_genres())


@router.get("/api/user/genres", response_model=UserGenresResponse)
async def list_genres(user: UserDep, prefs: PreferenceServiceDep) -> UserGenresResponse:
    return UserGenresResponse(genres=await prefs.list_genres(user.id))


@router.post("/api/user/genres", response_model=GenreResponse, status_code=201)
async def add_genre(body: AddGenreRequest, user: UserDep, prefs: PreferenceServiceDep) -> GenreResponse:
    return GenreResponse(genre=await prefs.add_genre(user.id, body.genre))


@router.delete("/api/user/genres/{genre_id}", response_model=SuccessResponse)
async def remove_genre(genre_id: int, user: UserDep, prefs: PreferenceServiceDep) -> SuccessResponse:
    await prefs.remove_genre(user.id, genre_id)
    return SuccessResponse()


@router.get("/api/user/favorite-festivals", response_model=FavoritesResponse)
async def list_favorites(user: UserDep, prefs: PreferenceServiceDep) -> FavoritesResponse:
    return FavoritesResponse(festivals=await prefs.list_favorites(user.id))


@router.post("/api/user/favorite-festivals", response_model=FavoriteResponse, status_code=201)
async def add_favorite(
    body: AddFavoriteRequest, user: UserDep, prefs: PreferenceServiceDep
) -> FavoriteResponse:
    return FavoriteResponse(festival=await prefs.add_favorite(user.id, body.festival_id))


@router.delete("/api/user/favorite-festivals/{festival_id}", response_model=SuccessResponse)
async def remove_favorite(
    festival_id: str, user: UserDep, prefs: PreferenceServiceDep
) -> SuccessResponse:
    await prefs.remove_favorite(user.id, festival_id)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Festival listings
# ---------------------------------------------------------------------------


@router.get("/api/user/festivals", response_model=FestivalListing, response_model_exclude_none=True)
async def user_festivals(
    user: UserDep, festivals: FestivalServiceDep, region: RegionQuery = None
) -> FestivalListing:
    return await festivals.list_for_user(user.id, region)


@router.get("/api/demo/artists", response_model=DemoArtistsResponse)
async def demo_artists() -> DemoArtistsResponse:
    return DemoArtistsResponse(artists=[DemoArtist.model_validate(a) for a in DEMO_ARTISTS])


@router.get("/api/demo/festivals", response_model=FestivalListing, response_model_exclude_none=True)
async def demo_festivals(festivals: FestivalServiceDep, region: RegionQuery = None) -> FestivalListing:
    return await festivals.list_demo(region)


@router.get("/api/calendar", response_model=CalendarMonth)
async def calendar_month(
    user: OptionalUserDep,
    festivals: FestivalServiceDep,
    calendar_service: CalendarServiceDep,
    current_year: CurrentYearDep,
    year: int | None = None,
    month: Annotated[int | None, Query(ge=1, le=12)] = None,
    region: RegionQuery = None,
) -> CalendarMonth:
    """Month grid for the viewer; anonymous viewers get the demo scores."""
    listing = await festivals.rank_for_viewer(user.id if user else None, region)
    return calendar_service.build_month(
        listing.festivals,
        year if year is not None else current_year.year,
        month if month is not None else datetime.date.today().month,
    )


# ---------------------------------------------------------------------------
# Tour dates
# ---------------------------------------------------------------------------


@router.get("/api/artist-events/{artist_name:path}", response_model=ArtistEvents)
async def artist_events(
    artist_name: str, tours: TourDateServiceDep, region: RegionQuery = None
) -> ArtistEvents:
    if not artist_name.strip():
        raise ValidationError(message="Artist name is required")
    return await tours.get_artist_events(artist_name, region)


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


@router.get("/api/current-year", response_model=CurrentYearResponse)
async def get_current_year(current_year: CurrentYearDep) -> CurrentYearResponse:
    return CurrentYearResponse(year=current_year.year)


@router.post("/api/festival-suggestions", response_model=SuggestionResponse, status_code=201)
async def suggest_festival(
    body: SuggestionRequest, user: OptionalUserDep, suggestions: SuggestionServiceDep
) -> SuggestionResponse:
    suggestion = await suggestions.submit(
        festival_name=body.festival_name,
        country=body.country,
        city=body.city,
        dates_info=body.dates_info,
        website=body.website,
        user_id=user.id if user else None,
    )
    _logger.info("festival_suggested", suggestion_id=suggestion.id, anonymous=user is None)
    return SuggestionResponse(suggestion=suggestion)
