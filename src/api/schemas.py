"""Pydantic request/response schemas for the Festival Match API.

# ─── HOW SCHEMAS WORK ─────────────────────────────────────────────────
#
# Every request and response body is camelCase on the wire
# (``artistName``, ``isDemo``) and snake_case in Python.  ``_CamelModel``
# sets that up once; ``populate_by_name`` lets handlers build responses
# with snake_case keyword arguments.
#
# Request fields are optional at the schema level on purpose: a missing
# or blank required field must produce our own 400 ``{"error": ...}``
# from the service layer, not FastAPI's 422 validation dump.
#
# Convention: Request schemas end with "Request", response schemas
# end with "Response".
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.suggestion import FestivalSuggestion
from src.models.user import FavoriteFestival, User, UserArtist, UserGenre


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class AddArtistRequest(_CamelModel):
    artist_name: str | None = None
    musicbrainz_id: str | None = None


class AddGenreRequest(_CamelModel):
    genre: str | None = None


class AddFavoriteRequest(_CamelModel):
    festival_id: str | None = None


class SuggestionRequest(_CamelModel):
    """A user's request to add a festival to the catalog."""

    festival_name: str | None = Field(default=None, max_length=200)
    country: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=200)
    dates_info: str | None = Field(default=None, max_length=200)
    website: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    year: int


class UserInfo(_CamelModel):
    id: int
    email: str
    name: str | None = None
    picture: str | None = None
    role: str
    is_admin: bool

    @classmethod
    def from_user(cls, user: User) -> UserInfo:
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            picture=user.picture,
            role=user.role,
            is_admin=user.is_admin,
        )


class MeResponse(_CamelModel):
    user: UserInfo | None = None


class ArtistsResponse(_CamelModel):
    artists: list[UserArtist]


class ArtistResponse(_CamelModel):
    artist: UserArtist


class AvailableGenresResponse(_CamelModel):
    genres: list[str]


class UserGenresResponse(_CamelModel):
    genres: list[UserGenre]


class GenreResponse(_CamelModel):
    genre: UserGenre


class FavoritesResponse(_CamelModel):
    festivals: list[FavoriteFestival]


class FavoriteResponse(_CamelModel):
    festival: FavoriteFestival


class DemoArtist(_CamelModel):
    name: str
    image: str | None = None
    genres: list[str] = Field(default_factory=list)


class DemoArtistsResponse(_CamelModel):
    artists: list[DemoArtist]
    is_demo: bool = True


class CurrentYearResponse(_CamelModel):
    year: int


class SuggestionResponse(_CamelModel):
    suggestion: FestivalSuggestion
    message: str = "Thanks! Your suggestion will be reviewed by an admin."


class SuggestionsResponse(_CamelModel):
    suggestions: list[FestivalSuggestion]
