"""User, session, and preference stores."""

from src.providers.user_store.sqlite_user_store import SQLiteUserStore

__all__ = ["SQLiteUserStore"]
