"""Utility modules for Festival Match.

- **errors** -- exception hierarchy rooted at FestivalMatchError; every
  class carries the HTTP status the API layer maps it to.
- **logging** -- structlog setup: coloured console output in development,
  structured JSON in production.
- **text_normalizer** -- artist-name normalization (the only comparison
  key used for matching) and slug generation for catalog ids.
"""

from src.utils.errors import (
    AuthenticationError,
    CatalogError,
    ConfigurationError,
    ConflictError,
    FestivalMatchError,
    NotFoundError,
    PermissionDeniedError,
    ProviderUnavailableError,
    ValidationError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text_normalizer import fold_text, normalize_artist_name, normalize_artist_set, slugify

__all__ = [
    "AuthenticationError",
    "CatalogError",
    "ConfigurationError",
    "ConflictError",
    "FestivalMatchError",
    "NotFoundError",
    "PermissionDeniedError",
    "ProviderUnavailableError",
    "ValidationError",
    "configure_logging",
    "fold_text",
    "get_logger",
    "normalize_artist_name",
    "normalize_artist_set",
    "slugify",
]
