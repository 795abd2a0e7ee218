"""Festival suggestion stores."""

from src.providers.suggestion.sqlite_suggestion_store import SQLiteSuggestionStore

__all__ = ["SQLiteSuggestionStore"]
