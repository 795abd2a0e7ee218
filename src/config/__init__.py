"""Configuration module: exports Settings, load_config, and region lookups."""

from src.config.loader import load_config
from src.config.regions import DEFAULT_REGION, REGIONS, Region, resolve_region
from src.config.settings import Settings

__all__ = ["DEFAULT_REGION", "REGIONS", "Region", "Settings", "load_config", "resolve_region"]
