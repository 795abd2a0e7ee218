"""User preference management: artists, genres, favorite festivals.

Turns store results into the API's error taxonomy: blank input is a
ValidationError (400), an existing entry is a ConflictError (409), and
removing something the user does not have is a NotFoundError (404).
"""

from __future__ import annotations

from src.config.demo_data import AVAILABLE_GENRES
from src.interfaces.user_store import IUserStore
from src.models.user import FavoriteFestival, UserArtist, UserGenre
from src.utils.errors import ConflictError, NotFoundError, ValidationError
from src.utils.logging import get_logger


def _required(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(message=f"{label} is required")
    return value.strip()


class PreferenceService:
    def __init__(self, user_store: IUserStore) -> None:
        self._users = user_store
        self._logger = get_logger(__name__)

    # ── Artists ────────────────────────────────────────────────────────

    async def list_artists(self, user_id: int) -> list[UserArtist]:
        return await self._users.list_artists(user_id)

    async def add_artist(
        self, user_id: int, artist_name: str | None, musicbrainz_id: str | None = None
    ) -> UserArtist:
        name = _required(artist_name, "Artist name")
        artist = await self._users.add_artist(user_id, name, musicbrainz_id)
        if artist is None:
            raise ConflictError(message=f"Artist '{name}' already added")
        self._logger.info("user_artist_added", user_id=user_id, artist=name)
        return artist

    async def remove_artist(self, user_id: int, artist_id: int) -> None:
        if not await self._users.remove_artist(user_id, artist_id):
            raise NotFoundError(message="Artist not found")

    # ── Genres ─────────────────────────────────────────────────────────

    @staticmethod
    def available_genres() -> list[str]:
        return list(AVAILABLE_GENRES)

    async def list_genres(self, user_id: int) -> list[UserGenre]:
        return await self._users.list_genres(user_id)

    async def add_genre(self, user_id: int, genre: str | None) -> UserGenre:
        name = _required(genre, "Genre")
        added = await self._users.add_genre(user_id, name)
        if added is None:
            raise ConflictError(message=f"Genre '{name}' already added")
        return added

    async def remove_genre(self, user_id: int, genre_id: int) -> None:
        if not await self._users.remove_genre(user_id, genre_id):
            raise NotFoundError(message="Genre not found")

    # ── Favorite festivals ─────────────────────────────────────────────

    async def list_favorites(self, user_id: int) -> list[FavoriteFestival]:
        return await self._users.list_favorites(user_id)

    async def add_favorite(self, user_id: int, festival_id: str | None) -> FavoriteFestival:
        fid = _required(festival_id, "Festival id")
        favorite = await self._users.add_favorite(user_id, fid)
        if favorite is None:
            raise ConflictError(message="Festival already in favorites")
        return favorite

    async def remove_favorite(self, user_id: int, festival_id: str) -> None:
        if not await self._users.remove_favorite(user_id, festival_id):
            raise NotFoundError(message="Festival not in favorites")
