"""Unit tests for SQLiteUserStore.

Covers accounts and roles, session expiry against a fake clock, and the
artist/genre/favorite preference tables, using a temporary database file.
"""

from __future__ import annotations

from src.providers.user_store.sqlite_user_store import SQLiteUserStore

ADMIN_EMAIL = "admin@example.com"


# ======================================================================
# Users & roles
# ======================================================================


class TestUsers:
    async def test_find_or_create_is_idempotent(self, user_store: SQLiteUserStore) -> None:
        first = await user_store.find_or_create_user("fan@example.com", name="Fan")
        second = await user_store.find_or_create_user("FAN@example.com")

        assert first.id == second.id
        assert second.name == "Fan"
        assert first.role == "user"
        assert not first.is_admin

    async def test_updates_profile_fields(self, user_store: SQLiteUserStore) -> None:
        await user_store.find_or_create_user("fan@example.com", name="Old")
        user = await user_store.find_or_create_user("fan@example.com", name="New", picture="p.png")
        assert user.name == "New"
        assert user.picture == "p.png"

    async def test_admin_email_gets_admin_role(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user(ADMIN_EMAIL.upper())
        assert user.role == "admin,dev"
        assert user.is_admin

    async def test_get_user(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        assert await user_store.get_user(user.id) == user
        assert await user_store.get_user(9999) is None

    async def test_grant_role_replaces_plain_user(self, user_store: SQLiteUserStore) -> None:
        await user_store.find_or_create_user("fan@example.com")
        user = await user_store.grant_role("fan@example.com", "admin")
        assert user is not None
        assert user.role == "admin"
        assert user.is_admin

    async def test_grant_role_merges(self, user_store: SQLiteUserStore) -> None:
        await user_store.find_or_create_user(ADMIN_EMAIL)
        user = await user_store.grant_role(ADMIN_EMAIL, "editor")
        assert user is not None
        assert user.roles == {"admin", "dev", "editor"}

    async def test_grant_role_unknown_user(self, user_store: SQLiteUserStore) -> None:
        assert await user_store.grant_role("ghost@example.com", "admin") is None

    async def test_promote_admins_only_touches_plain_users(self, db_path, clock) -> None:
        plain = SQLiteUserStore(db_path=db_path, clock=clock)
        await plain.initialize()
        await plain.find_or_create_user("ops@example.com")
        await plain.find_or_create_user("custom@example.com")
        await plain.grant_role("custom@example.com", "editor")

        store = SQLiteUserStore(
            db_path=db_path, clock=clock, admin_emails=["ops@example.com", "custom@example.com"]
        )
        assert await store.promote_admins() == 1
        ops = await store.find_or_create_user("ops@example.com")
        custom = await store.find_or_create_user("custom@example.com")
        assert ops.role == "admin,dev"
        assert custom.role == "editor"


# ======================================================================
# Sessions
# ======================================================================


class TestSessions:
    async def test_session_resolves_to_user(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        session_id = await user_store.create_session(user.id)

        assert len(session_id) >= 32
        assert await user_store.get_session_user(session_id) == user

    async def test_session_ids_are_unique(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        ids = {await user_store.create_session(user.id) for _ in range(5)}
        assert len(ids) == 5

    async def test_expired_session_is_rejected(self, user_store: SQLiteUserStore, clock) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        session_id = await user_store.create_session(user.id)

        clock.advance(3600)
        assert await user_store.get_session_user(session_id) is None

    async def test_delete_session(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        session_id = await user_store.create_session(user.id)
        await user_store.delete_session(session_id)
        assert await user_store.get_session_user(session_id) is None

    async def test_unknown_session(self, user_store: SQLiteUserStore) -> None:
        assert await user_store.get_session_user("nope") is None

    async def test_clean_expired_sessions(self, user_store: SQLiteUserStore, clock) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        await user_store.create_session(user.id)
        clock.advance(1800)
        fresh = await user_store.create_session(user.id)
        clock.advance(1800)

        assert await user_store.clean_expired_sessions() == 1
        assert await user_store.get_session_user(fresh) == user


# ======================================================================
# Preferences
# ======================================================================


class TestArtists:
    async def test_add_list_remove(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        bicep = await user_store.add_artist(user.id, "  Bicep ", musicbrainz_id="mbid-1")
        four_tet = await user_store.add_artist(user.id, "Four Tet")

        assert bicep is not None and bicep.artist_name == "Bicep"
        assert bicep.musicbrainz_id == "mbid-1"
        listed = await user_store.list_artists(user.id)
        assert [a.id for a in listed] == [four_tet.id, bicep.id]

        assert await user_store.remove_artist(user.id, bicep.id)
        assert not await user_store.remove_artist(user.id, bicep.id)
        assert [a.artist_name for a in await user_store.list_artists(user.id)] == ["Four Tet"]

    async def test_duplicate_is_case_insensitive(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        await user_store.add_artist(user.id, "Bicep")
        assert await user_store.add_artist(user.id, "BICEP") is None

    async def test_artists_are_per_user(self, user_store: SQLiteUserStore) -> None:
        alice = await user_store.find_or_create_user("alice@example.com")
        bob = await user_store.find_or_create_user("bob@example.com")
        artist = await user_store.add_artist(alice.id, "Bicep")

        assert await user_store.add_artist(bob.id, "Bicep") is not None
        assert not await user_store.remove_artist(bob.id, artist.id)
        assert len(await user_store.list_artists(alice.id)) == 1


class TestGenres:
    async def test_add_duplicate_remove(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        genre = await user_store.add_genre(user.id, "House")

        assert genre is not None and genre.genre == "House"
        assert await user_store.add_genre(user.id, "house") is None
        assert await user_store.remove_genre(user.id, genre.id)
        assert await user_store.list_genres(user.id) == []


class TestFavorites:
    async def test_add_duplicate_remove(self, user_store: SQLiteUserStore) -> None:
        user = await user_store.find_or_create_user("fan@example.com")
        fav = await user_store.add_favorite(user.id, "sonar")

        assert fav is not None and fav.festival_id == "sonar"
        assert await user_store.add_favorite(user.id, "sonar") is None
        assert [f.festival_id for f in await user_store.list_favorites(user.id)] == ["sonar"]
        assert await user_store.remove_favorite(user.id, "sonar")
        assert not await user_store.remove_favorite(user.id, "sonar")
