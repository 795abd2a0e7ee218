"""Two-tier tour-date cache: in-process TTL map in front of SQLite.

# ─── LOOKUP ORDER ─────────────────────────────────────────────────────
#
#   get(artist, region)
#     1. memory     key "<artist lowercased>_<region>"   hit → return
#     2. persistent (artist_key, region) row, fresh      hit → backfill 1
#     3. miss       caller fetches upstream and calls set()
#
#   set(artist, region, payload) writes both tiers.  A failed persistent
#   write is logged and dropped; the memory copy still serves reads until
#   it expires, after which the next read re-fetches.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

import aiosqlite
import structlog

from src.interfaces.cache_provider import ICacheProvider, ITourCache

logger = structlog.get_logger(logger_name=__name__)


def memory_key(artist_name: str, region: str) -> str:
    """Return the in-process cache key for *artist_name* in *region*."""
    return f"{artist_name.lower()}_{region}"


class TwoTierTourCache(ITourCache):
    """Composite cache delegating to a memory tier and a persistent tier."""

    def __init__(self, memory: ICacheProvider, persistent: ITourCache) -> None:
        self._memory = memory
        self._persistent = persistent

    async def get(self, artist_name: str, region: str) -> dict[str, Any] | None:
        key = memory_key(artist_name, region)
        payload = await self._memory.get(key)
        if payload is not None:
            logger.debug("tour_cache_hit", tier="memory", artist=artist_name, region=region)
            return payload

        payload = await self._persistent.get(artist_name, region)
        if payload is not None:
            logger.debug("tour_cache_hit", tier="persistent", artist=artist_name, region=region)
            await self._memory.set(key, payload)
            return payload

        logger.debug("tour_cache_miss", artist=artist_name, region=region)
        return None

    async def set(self, artist_name: str, region: str, payload: dict[str, Any]) -> None:
        await self._memory.set(memory_key(artist_name, region), payload)
        try:
            await self._persistent.set(artist_name, region, payload)
        except (aiosqlite.Error, OSError) as exc:
            logger.warning(
                "tour_cache_persist_failed",
                artist=artist_name,
                region=region,
                error=str(exc),
            )

    async def sweep_expired(self) -> int:
        return await self._persistent.sweep_expired()
