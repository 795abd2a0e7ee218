"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Layers, later ones win:
#
#   1. config/config.yaml  : static defaults checked into the repo
#                            (tour-date truncation, calendar limits,
#                            match-class thresholds)
#   2. .env file           : local developer overrides (not committed)
#   3. Environment vars    : set at deploy time
#
# load_config() reads the YAML file, then deep-merges the env-derived
# values from Settings on top:
#   base      = {"tour_dates": {"max_events": 10}}
#   overrides = {"tour_dates": {"timeout_seconds": 5.0}}
#   result    = {"tour_dates": {"max_events": 10, "timeout_seconds": 5.0}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "config.yaml"


def load_config(path: str | Path = _DEFAULT_CONFIG_PATH, settings: Settings | None = None) -> dict:
    """Load YAML config and merge it with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file yields
            the env-derived values only.
        settings: Settings instance to read overrides from.  A fresh one
            is created when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: The file exists but is not valid YAML or its
            top level is not a mapping.
    """
    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(message=f"Malformed YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(message=f"{config_path} must contain a mapping at the top level")
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "storage": {
            "db_path": settings.db_path,
            "festivals_path": settings.festivals_path,
        },
        "tour_dates": {
            "timeout_seconds": settings.tour_api_timeout,
            "cache_ttl_hours": settings.tour_cache_ttl_hours,
            "sweep_interval_hours": settings.tour_cache_sweep_hours,
        },
        "sessions": {
            "ttl_days": settings.session_ttl_days,
            "sweep_interval_hours": settings.session_sweep_hours,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
