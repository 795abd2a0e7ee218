"""Public interface definitions for storage and external service providers.

Every external API or store is accessed through the abstract base classes
defined in this package.  Concrete adapters implement these interfaces and
are injected at runtime by ``build_components`` in ``src/main.py``.  Unit
tests inject fakes or mocks instead of real backends.

CONCRETE PROVIDER MAP:
    Interface             →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    ICacheProvider        →  MemoryCacheProvider
    ITourCache            →  SQLiteTourCache, TwoTierTourCache
    ITourDateProvider     →  BandsintownProvider
    ICatalogProvider      →  JSONCatalogProvider
    IUserStore            →  SQLiteUserStore
    ISuggestionStore      →  SQLiteSuggestionStore
"""

from src.interfaces.cache_provider import ICacheProvider, ITourCache
from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.suggestion_store import ISuggestionStore
from src.interfaces.tour_date_provider import ITourDateProvider
from src.interfaces.user_store import IUserStore

__all__ = [
    "ICacheProvider",
    "ICatalogProvider",
    "ISuggestionStore",
    "ITourCache",
    "ITourDateProvider",
    "IUserStore",
]
