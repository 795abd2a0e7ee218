"""SQLite-backed user, session, and preference store.

Persists accounts and their preferences with ``aiosqlite``.  Artist and
genre uniqueness is case-insensitive (``COLLATE NOCASE`` in the UNIQUE
constraints), so "Bicep" and "bicep" collide at the database level and the
add methods return ``None``.

Session expiry is stored as epoch seconds from the injected clock rather
than via SQLite's ``datetime('now')``, so tests can expire sessions by
advancing a fake clock.
"""

from __future__ import annotations

import secrets
import time
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite
import structlog

from src.interfaces.user_store import IUserStore
from src.models.user import FavoriteFestival, User, UserArtist, UserGenre

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/festival_match.db")
_ADMIN_ROLE = "admin,dev"
_SESSION_TTL_SECONDS = 7 * 24 * 3600

_CREATE_TABLES_SQL = [
    """\
CREATE TABLE IF NOT EXISTS users (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    email       TEXT    NOT NULL UNIQUE COLLATE NOCASE,
    name        TEXT,
    picture     TEXT,
    role        TEXT    NOT NULL DEFAULT 'user',
    created_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
""",
    """\
CREATE TABLE IF NOT EXISTS sessions (
    id          TEXT    PRIMARY KEY,
    user_id     INTEGER NOT NULL,
    created_at  REAL    NOT NULL,
    expires_at  REAL    NOT NULL,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
);
""",
    """\
CREATE TABLE IF NOT EXISTS user_artists (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id         INTEGER NOT NULL,
    artist_name     TEXT    NOT NULL,
    musicbrainz_id  TEXT,
    added_at        TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    UNIQUE(user_id, artist_name COLLATE NOCASE)
);
""",
    """\
CREATE TABLE IF NOT EXISTS user_genres (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL,
    genre       TEXT    NOT NULL,
    added_at    TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    UNIQUE(user_id, genre COLLATE NOCASE)
);
""",
    """\
CREATE TABLE IF NOT EXISTS user_festivals (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL,
    festival_id TEXT    NOT NULL,
    added_at    TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    UNIQUE(user_id, festival_id)
);
""",
]

_CREATE_INDICES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_sessions_expires ON sessions(expires_at);",
    "CREATE INDEX IF NOT EXISTS idx_user_artists_user ON user_artists(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_user_genres_user ON user_genres(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_user_festivals_user ON user_festivals(user_id);",
]

_SELECT_USER_SQL = "SELECT id, email, name, picture, role FROM users WHERE {where};"

_SESSION_USER_SQL = """\
SELECT u.id, u.email, u.name, u.picture, u.role
FROM sessions s
JOIN users u ON s.user_id = u.id
WHERE s.id = ? AND s.expires_at > ?;
"""

# Only plain users are promoted, so a hand-assigned role is never clobbered.
_PROMOTE_SQL = (
    "UPDATE users SET role = ? WHERE email = ? COLLATE NOCASE AND (role IS NULL OR role = 'user');"
)


class SQLiteUserStore(IUserStore):
    """SQLite-backed accounts, sessions, and preferences.

    Parameters
    ----------
    db_path:
        SQLite database file.  Shared with the other stores.
    session_ttl:
        Session lifetime in seconds (default 7 days).
    clock:
        Returns epoch seconds.  Defaults to ``time.time``.
    admin_emails:
        Accounts with these emails get the ``admin,dev`` role when
        created, and on :meth:`promote_admins`.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        session_ttl: float = _SESSION_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
        admin_emails: Iterable[str] = (),
    ) -> None:
        self._db_path = Path(db_path)
        self._session_ttl = session_ttl
        self._clock = clock
        self._admin_emails = {email.lower() for email in admin_emails}

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        async with aiosqlite.connect(str(self._db_path)) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON;")
            yield db

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Create tables and indices if they don't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with self._connect() as db:
            for table_sql in _CREATE_TABLES_SQL:
                await db.execute(table_sql)
            for idx_sql in _CREATE_INDICES_SQL:
                await db.execute(idx_sql)
            await db.commit()
        logger.info("user_db_initialized", path=str(self._db_path))

    async def promote_admins(self) -> int:
        """Give existing plain users on the admin list the admin role."""
        promoted = 0
        async with self._connect() as db:
            for email in sorted(self._admin_emails):
                cursor = await db.execute(_PROMOTE_SQL, (_ADMIN_ROLE, email))
                promoted += cursor.rowcount
            await db.commit()
        if promoted:
            logger.info("admins_promoted", count=promoted)
        return promoted

    # ------------------------------------------------------------------
    # Users & roles
    # ------------------------------------------------------------------

    async def find_or_create_user(
        self, email: str, name: str | None = None, picture: str | None = None
    ) -> User:
        email = email.strip()
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_USER_SQL.format(where="email = ? COLLATE NOCASE"), (email,))
            row = await cursor.fetchone()
            if row is not None:
                await db.execute(
                    "UPDATE users SET name = COALESCE(?, name), picture = COALESCE(?, picture) WHERE id = ?",
                    (name, picture, row["id"]),
                )
                await db.commit()
                user_id = row["id"]
            else:
                role = _ADMIN_ROLE if email.lower() in self._admin_emails else "user"
                cursor = await db.execute(
                    "INSERT INTO users (email, name, picture, role) VALUES (?, ?, ?, ?)",
                    (email, name, picture, role),
                )
                await db.commit()
                user_id = cursor.lastrowid
                logger.info("user_created", user_id=user_id, role=role)

            cursor = await db.execute(_SELECT_USER_SQL.format(where="id = ?"), (user_id,))
            row = await cursor.fetchone()
        return User.model_validate(dict(row))

    async def get_user(self, user_id: int) -> User | None:
        async with self._connect() as db:
            cursor = await db.execute(_SELECT_USER_SQL.format(where="id = ?"), (user_id,))
            row = await cursor.fetchone()
        return User.model_validate(dict(row)) if row else None

    async def grant_role(self, email: str, role: str) -> User | None:
        async with self._connect() as db:
            cursor = await db.execute(
                _SELECT_USER_SQL.format(where="email = ? COLLATE NOCASE"), (email.strip(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            user = User.model_validate(dict(row))
            roles = [r for r in user.role.split(",") if r.strip()]
            new_roles = [r.strip() for r in role.split(",") if r.strip() and r.strip() not in user.roles]
            if new_roles:
                # Promoting a plain user replaces the "user" placeholder.
                if roles == ["user"]:
                    roles = []
                await db.execute(
                    "UPDATE users SET role = ? WHERE id = ?", (",".join(roles + new_roles), user.id)
                )
                await db.commit()
            cursor = await db.execute(_SELECT_USER_SQL.format(where="id = ?"), (user.id,))
            row = await cursor.fetchone()
        logger.info("role_granted", user_id=user.id, role=role)
        return User.model_validate(dict(row))

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(self, user_id: int) -> str:
        session_id = secrets.token_urlsafe(32)
        now = self._clock()
        async with self._connect() as db:
            await db.execute(
                "INSERT INTO sessions (id, user_id, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (session_id, user_id, now, now + self._session_ttl),
            )
            await db.commit()
        logger.info("session_created", user_id=user_id)
        return session_id

    async def get_session_user(self, session_id: str) -> User | None:
        async with self._connect() as db:
            cursor = await db.execute(_SESSION_USER_SQL, (session_id, self._clock()))
            row = await cursor.fetchone()
        return User.model_validate(dict(row)) if row else None

    async def delete_session(self, session_id: str) -> None:
        async with self._connect() as db:
            await db.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            await db.commit()

    async def clean_expired_sessions(self) -> int:
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM sessions WHERE expires_at <= ?", (self._clock(),))
            removed = cursor.rowcount
            await db.commit()
        if removed:
            logger.info("sessions_swept", removed=removed)
        return removed

    # ------------------------------------------------------------------
    # Artists
    # ------------------------------------------------------------------

    async def list_artists(self, user_id: int) -> list[UserArtist]:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT id, artist_name, musicbrainz_id, added_at FROM user_artists "
                "WHERE user_id = ? ORDER BY added_at DESC, id DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
        return [UserArtist.model_validate(dict(r)) for r in rows]

    async def add_artist(
        self, user_id: int, artist_name: str, musicbrainz_id: str | None = None
    ) -> UserArtist | None:
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "INSERT INTO user_artists (user_id, artist_name, musicbrainz_id) VALUES (?, ?, ?)",
                    (user_id, artist_name.strip(), musicbrainz_id),
                )
                await db.commit()
                cursor = await db.execute(
                    "SELECT id, artist_name, musicbrainz_id, added_at FROM user_artists WHERE id = ?",
                    (cursor.lastrowid,),
                )
                row = await cursor.fetchone()
        except aiosqlite.IntegrityError:
            logger.debug("user_artist_duplicate", user_id=user_id, artist=artist_name)
            return None
        return UserArtist.model_validate(dict(row))

    async def remove_artist(self, user_id: int, artist_id: int) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "DELETE FROM user_artists WHERE id = ? AND user_id = ?", (artist_id, user_id)
            )
            removed = cursor.rowcount > 0
            await db.commit()
        return removed

    # ------------------------------------------------------------------
    # Genres
    # ------------------------------------------------------------------

    async def list_genres(self, user_id: int) -> list[UserGenre]:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT id, genre, added_at FROM user_genres "
                "WHERE user_id = ? ORDER BY added_at DESC, id DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
        return [UserGenre.model_validate(dict(r)) for r in rows]

    async def add_genre(self, user_id: int, genre: str) -> UserGenre | None:
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "INSERT INTO user_genres (user_id, genre) VALUES (?, ?)",
                    (user_id, genre.strip()),
                )
                await db.commit()
                cursor = await db.execute(
                    "SELECT id, genre, added_at FROM user_genres WHERE id = ?", (cursor.lastrowid,)
                )
                row = await cursor.fetchone()
        except aiosqlite.IntegrityError:
            logger.debug("user_genre_duplicate", user_id=user_id, genre=genre)
            return None
        return UserGenre.model_validate(dict(row))

    async def remove_genre(self, user_id: int, genre_id: int) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "DELETE FROM user_genres WHERE id = ? AND user_id = ?", (genre_id, user_id)
            )
            removed = cursor.rowcount > 0
            await db.commit()
        return removed

    # ------------------------------------------------------------------
    # Favorite festivals
    # ------------------------------------------------------------------

    async def list_favorites(self, user_id: int) -> list[FavoriteFestival]:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT id, festival_id, added_at FROM user_festivals "
                "WHERE user_id = ? ORDER BY added_at DESC, id DESC",
                (user_id,),
            )
            rows = await cursor.fetchall()
        return [FavoriteFestival.model_validate(dict(r)) for r in rows]

    async def add_favorite(self, user_id: int, festival_id: str) -> FavoriteFestival | None:
        try:
            async with self._connect() as db:
                cursor = await db.execute(
                    "INSERT INTO user_festivals (user_id, festival_id) VALUES (?, ?)",
                    (user_id, festival_id.strip()),
                )
                await db.commit()
                cursor = await db.execute(
                    "SELECT id, festival_id, added_at FROM user_festivals WHERE id = ?",
                    (cursor.lastrowid,),
                )
                row = await cursor.fetchone()
        except aiosqlite.IntegrityError:
            logger.debug("favorite_duplicate", user_id=user_id, festival_id=festival_id)
            return None
        return FavoriteFestival.model_validate(dict(row))

    async def remove_favorite(self, user_id: int, festival_id: str) -> bool:
        async with self._connect() as db:
            cursor = await db.execute(
                "DELETE FROM user_festivals WHERE user_id = ? AND festival_id = ?",
                (user_id, festival_id),
            )
            removed = cursor.rowcount > 0
            await db.commit()
        return removed
