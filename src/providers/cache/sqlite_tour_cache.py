"""SQLite-backed persistent tier of the tour-date cache.

Rows survive restarts, so a cold process does not hammer Bandsintown for
artists it looked up yesterday.  Freshness is checked on read against the
injected clock; :meth:`sweep_expired` removes stale rows in bulk and is
run periodically by the cache sweeper.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from src.interfaces.cache_provider import ITourCache

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/festival_match.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS tour_cache (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    artist_key  TEXT    NOT NULL,
    artist_name TEXT    NOT NULL,
    region      TEXT    NOT NULL,
    data        TEXT    NOT NULL,
    fetched_at  REAL    NOT NULL,
    UNIQUE(artist_key, region)
);
"""

_CREATE_INDEX_SQL = "CREATE INDEX IF NOT EXISTS idx_tour_cache_fetched ON tour_cache(fetched_at);"

_UPSERT_SQL = """\
INSERT INTO tour_cache (artist_key, artist_name, region, data, fetched_at)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(artist_key, region)
DO UPDATE SET artist_name = excluded.artist_name,
              data        = excluded.data,
              fetched_at  = excluded.fetched_at;
"""

_SELECT_SQL = "SELECT data, fetched_at FROM tour_cache WHERE artist_key = ? AND region = ?;"

_SWEEP_SQL = "DELETE FROM tour_cache WHERE fetched_at <= ?;"


class SQLiteTourCache(ITourCache):
    """Persistent (artist, region) → payload cache.

    Parameters
    ----------
    db_path:
        SQLite database file.  Shared with the other stores.
    ttl:
        Freshness window in seconds.
    clock:
        Returns epoch seconds.  Defaults to ``time.time``.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        ttl: float = 24 * 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = Path(db_path)
        self._ttl = ttl
        self._clock = clock

    async def initialize(self) -> None:
        """Create the tour_cache table and index if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            await db.execute(_CREATE_INDEX_SQL)
            await db.commit()
        logger.info("tour_cache_db_initialized", path=str(self._db_path))

    async def get(self, artist_name: str, region: str) -> dict[str, Any] | None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(_SELECT_SQL, (artist_name.lower(), region))
            row = await cursor.fetchone()

        if row is None:
            return None
        data, fetched_at = row
        if self._clock() - fetched_at >= self._ttl:
            logger.debug("tour_cache_row_stale", artist=artist_name, region=region)
            return None
        return json.loads(data)

    async def set(self, artist_name: str, region: str, payload: dict[str, Any]) -> None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(
                _UPSERT_SQL,
                (artist_name.lower(), artist_name, region, json.dumps(payload), self._clock()),
            )
            await db.commit()

    async def sweep_expired(self) -> int:
        cutoff = self._clock() - self._ttl
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(_SWEEP_SQL, (cutoff,))
            removed = cursor.rowcount
            await db.commit()
        if removed:
            logger.info("tour_cache_swept", removed=removed)
        return removed
