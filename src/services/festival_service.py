"""Region-scoped festival listings with match scores.

Two listings share one pipeline (load catalog → filter region → rank):

- **user**: the signed-in user's artists and favorites.  With no artists
  the ranking step is skipped and a hint message is attached.
- **demo**: the fixed demo artist list, no favorites.
"""

from __future__ import annotations

import asyncio

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.config.demo_data import demo_artist_names
from src.config.regions import Region, resolve_region
from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.user_store import IUserStore
from src.models.festival import Festival, MatchResult
from src.services.match_service import NO_ARTISTS_MESSAGE, MatchService
from src.utils.logging import get_logger
from src.utils.text_normalizer import normalize_artist_set


class FestivalListing(BaseModel):
    """Ranked festivals for one region, as returned by the listing endpoints."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    festivals: list[MatchResult] = Field(default_factory=list)
    region: str
    message: str | None = None
    is_demo: bool | None = None


class FestivalService:
    """Composes catalog, user preferences and match scoring."""

    def __init__(
        self,
        catalog: ICatalogProvider,
        user_store: IUserStore,
        match_service: MatchService,
    ) -> None:
        self._catalog = catalog
        self._users = user_store
        self._matcher = match_service
        self._logger = get_logger(__name__)

    async def festivals_in_region(self, region: Region) -> list[Festival]:
        catalog = await asyncio.to_thread(self._catalog.load)
        return [f for f in catalog if region.has_country_code(f.country)]

    async def list_for_user(self, user_id: int, region_name: str | None = None) -> FestivalListing:
        region = resolve_region(region_name)
        festivals = await self.festivals_in_region(region)
        favorites = {fav.festival_id for fav in await self._users.list_favorites(user_id)}
        artists = normalize_artist_set(a.artist_name for a in await self._users.list_artists(user_id))

        results = self._matcher.rank_festivals(festivals, artists, favorites)
        self._logger.debug(
            "user_festivals_ranked",
            user_id=user_id,
            region=region.name,
            festivals=len(results),
            artists=len(artists),
        )
        return FestivalListing(
            festivals=results,
            region=region.name,
            message=None if artists else NO_ARTISTS_MESSAGE,
        )

    async def list_demo(self, region_name: str | None = None) -> FestivalListing:
        region = resolve_region(region_name)
        artists = normalize_artist_set(demo_artist_names())
        results = self._matcher.rank_festivals(await self.festivals_in_region(region), artists)
        return FestivalListing(festivals=results, region=region.name, is_demo=True)

    async def rank_for_viewer(self, user_id: int | None, region_name: str | None = None) -> FestivalListing:
        """User listing when signed in, demo listing otherwise."""
        if user_id is None:
            return await self.list_demo(region_name)
        return await self.list_for_user(user_id, region_name)
