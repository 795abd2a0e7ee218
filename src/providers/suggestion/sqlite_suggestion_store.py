"""SQLite-backed festival suggestion store.

Suggestions live in the same database file as users.  ``user_id`` is
nullable (anonymous suggestions are allowed) and is set to NULL if the
account is deleted.  Listing joins the submitter's name and email for the
admin view.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

from src.interfaces.suggestion_store import ISuggestionStore
from src.models.suggestion import FestivalSuggestion, SuggestionStatus

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/festival_match.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS festival_suggestions (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id         INTEGER,
    festival_name   TEXT    NOT NULL,
    country         TEXT    NOT NULL,
    city            TEXT    NOT NULL,
    dates_info      TEXT,
    website         TEXT,
    status          TEXT    NOT NULL DEFAULT 'pending',
    created_at      TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE SET NULL
);
"""

_CREATE_INDEX_SQL = (
    "CREATE INDEX IF NOT EXISTS idx_suggestions_status ON festival_suggestions(status);"
)

_SELECT_SQL = """\
SELECT fs.id, fs.user_id, u.name AS user_name, u.email AS user_email,
       fs.festival_name, fs.country, fs.city, fs.dates_info, fs.website,
       fs.status, fs.created_at
FROM festival_suggestions fs
LEFT JOIN users u ON fs.user_id = u.id
"""


class SQLiteSuggestionStore(ISuggestionStore):
    """SQLite-backed suggestion persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            yield db

    async def initialize(self) -> None:
        """Create the suggestions table and index if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect() as db:
            await db.execute(_CREATE_TABLE_SQL)
            await db.execute(_CREATE_INDEX_SQL)
            await db.commit()
        logger.info("suggestion_db_initialized", path=str(self._db_path))

    async def create(
        self,
        festival_name: str,
        country: str,
        city: str,
        dates_info: str | None = None,
        website: str | None = None,
        user_id: int | None = None,
    ) -> FestivalSuggestion:
        async with self._connect() as db:
            cursor = await db.execute(
                "INSERT INTO festival_suggestions "
                "(user_id, festival_name, country, city, dates_info, website) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (
                    user_id,
                    festival_name.strip(),
                    country.strip(),
                    city.strip(),
                    _blank_to_none(dates_info),
                    _blank_to_none(website),
                ),
            )
            await db.commit()
            cursor = await db.execute(_SELECT_SQL + "WHERE fs.id = ?", (cursor.lastrowid,))
            row = await cursor.fetchone()
        suggestion = FestivalSuggestion.model_validate(dict(row))
        logger.info("suggestion_created", suggestion_id=suggestion.id, festival=suggestion.festival_name)
        return suggestion

    async def get(self, suggestion_id: int) -> FestivalSuggestion | None:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_SQL + "WHERE fs.id = ?", (suggestion_id,))
            row = await cursor.fetchone()
        return FestivalSuggestion.model_validate(dict(row)) if row else None

    async def list_suggestions(self, status: SuggestionStatus | None = None) -> list[FestivalSuggestion]:
        async with self._connect() as db:
            if status is not None:
                cursor = await db.execute(
                    _SELECT_SQL + "WHERE fs.status = ? ORDER BY fs.created_at DESC, fs.id DESC",
                    (status.value,),
                )
            else:
                cursor = await db.execute(_SELECT_SQL + "ORDER BY fs.created_at DESC, fs.id DESC")
            rows = await cursor.fetchall()
        return [FestivalSuggestion.model_validate(dict(r)) for r in rows]

    async def update_status(
        self, suggestion_id: int, status: SuggestionStatus
    ) -> FestivalSuggestion | None:
        async with self._connect() as db:
            await db.execute(
                "UPDATE festival_suggestions SET status = ? WHERE id = ?",
                (status.value, suggestion_id),
            )
            await db.commit()
        return await self.get(suggestion_id)

    async def delete(self, suggestion_id: int) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "DELETE FROM festival_suggestions WHERE id = ?", (suggestion_id,)
            )
            removed = cursor.rowcount > 0
            await db.commit()
        if removed:
            logger.info("suggestion_deleted", suggestion_id=suggestion_id)
        return removed


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None
