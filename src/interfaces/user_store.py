"""Abstract base class for user, session, and preference persistence.

# ─── ADAPTER PATTERN ─────────────────────────────────────────────────
#
# The concrete implementation is SQLiteUserStore
# (src/providers/user_store/sqlite_user_store.py).  Add methods return
# ``None`` on a uniqueness violation so the API layer can map it to 409
# without catching driver-specific exceptions.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.user import FavoriteFestival, User, UserArtist, UserGenre


class IUserStore(ABC):
    """Contract for accounts, sessions, and per-user preferences."""

    # ── Lifecycle ──────────────────────────────────────────────────────

    @abstractmethod
    async def initialize(self) -> None:
        """Create tables/indices if they don't exist.  Called at startup."""

    # ── Users & roles ──────────────────────────────────────────────────

    @abstractmethod
    async def find_or_create_user(
        self, email: str, name: str | None = None, picture: str | None = None
    ) -> User:
        """Return the user with *email*, creating it with role ``user`` if new."""

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Return the user with *user_id*, or ``None``."""

    @abstractmethod
    async def grant_role(self, email: str, role: str) -> User | None:
        """Add *role* to the user's role list.  ``None`` if no such user."""

    # ── Sessions ───────────────────────────────────────────────────────

    @abstractmethod
    async def create_session(self, user_id: int) -> str:
        """Create a session for *user_id* and return its opaque id."""

    @abstractmethod
    async def get_session_user(self, session_id: str) -> User | None:
        """Return the user owning an unexpired session, or ``None``."""

    @abstractmethod
    async def delete_session(self, session_id: str) -> None:
        """Remove a session.  No-op if absent."""

    @abstractmethod
    async def clean_expired_sessions(self) -> int:
        """Delete expired sessions and return how many were removed."""

    # ── Artists ────────────────────────────────────────────────────────

    @abstractmethod
    async def list_artists(self, user_id: int) -> list[UserArtist]:
        """Return the user's artists, newest first."""

    @abstractmethod
    async def add_artist(
        self, user_id: int, artist_name: str, musicbrainz_id: str | None = None
    ) -> UserArtist | None:
        """Add an artist.  ``None`` if the user already has it (any casing)."""

    @abstractmethod
    async def remove_artist(self, user_id: int, artist_id: int) -> bool:
        """Remove one of the user's artists.  ``False`` if not found."""

    # ── Genres ─────────────────────────────────────────────────────────

    @abstractmethod
    async def list_genres(self, user_id: int) -> list[UserGenre]:
        """Return the user's genres, newest first."""

    @abstractmethod
    async def add_genre(self, user_id: int, genre: str) -> UserGenre | None:
        """Add a genre.  ``None`` if the user already has it (any casing)."""

    @abstractmethod
    async def remove_genre(self, user_id: int, genre_id: int) -> bool:
        """Remove one of the user's genres.  ``False`` if not found."""

    # ── Favorite festivals ─────────────────────────────────────────────

    @abstractmethod
    async def list_favorites(self, user_id: int) -> list[FavoriteFestival]:
        """Return the user's favorite festivals, newest first."""

    @abstractmethod
    async def add_favorite(self, user_id: int, festival_id: str) -> FavoriteFestival | None:
        """Mark a festival as favorite.  ``None`` if already marked."""

    @abstractmethod
    async def remove_favorite(self, user_id: int, festival_id: str) -> bool:
        """Unmark a favorite festival.  ``False`` if it was not marked."""
