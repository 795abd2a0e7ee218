"""Cache providers.

MemoryCacheProvider is the process-local TTL tier.  SQLiteTourCache keeps
tour-date payloads across restarts.  TwoTierTourCache composes the two
and is what the tour-date service talks to.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.sqlite_tour_cache import SQLiteTourCache
from src.providers.cache.tour_cache import TwoTierTourCache

__all__ = ["MemoryCacheProvider", "SQLiteTourCache", "TwoTierTourCache"]
