"""Festival catalog providers."""

from src.providers.catalog.json_catalog import JSONCatalogProvider

__all__ = ["JSONCatalogProvider"]
