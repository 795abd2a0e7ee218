"""User account and preference models."""

from __future__ import annotations

from pydantic import BaseModel

from src.models.festival import CAMEL_CONFIG


class User(BaseModel):
    """An account.  ``role`` is comma-separated, e.g. ``"admin,dev"``."""

    model_config = CAMEL_CONFIG

    id: int
    email: str
    name: str | None = None
    picture: str | None = None
    role: str = "user"

    @property
    def roles(self) -> set[str]:
        return {part.strip() for part in self.role.split(",") if part.strip()}

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles


class UserArtist(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    artist_name: str
    musicbrainz_id: str | None = None
    added_at: str


class UserGenre(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    genre: str
    added_at: str


class FavoriteFestival(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    festival_id: str
    added_at: str
