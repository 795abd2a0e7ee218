"""Festival Match FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, and starts the background cache sweeps for the
lifetime of the server.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.admin_routes import admin_router
from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.sqlite_tour_cache import SQLiteTourCache
from src.providers.cache.tour_cache import TwoTierTourCache
from src.providers.catalog.json_catalog import JSONCatalogProvider
from src.providers.suggestion.sqlite_suggestion_store import SQLiteSuggestionStore
from src.providers.tour.bandsintown_provider import BandsintownProvider
from src.providers.user_store.sqlite_user_store import SQLiteUserStore
from src.services.cache_sweeper import PeriodicSweeper, SweepJob
from src.services.calendar_service import CalendarService
from src.services.current_year import CurrentYearService
from src.services.festival_service import FestivalService
from src.services.match_service import MatchService
from src.services.preference_service import PreferenceService
from src.services.suggestion_service import SuggestionService
from src.services.tour_date_service import TourDateService
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.is_production,
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def build_components(
    app_settings: Settings,
    app_config: dict[str, Any],
    http_client: httpx.AsyncClient | None = None,
    clock: Callable[[], float] = time.time,
) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    ``http_client`` and ``clock`` are injectable so tests can stub the
    outside world and move time forward.
    """
    # -- Shared resources --
    http_client = http_client or httpx.AsyncClient(timeout=app_settings.tour_api_timeout)

    # -- Storage --
    catalog = JSONCatalogProvider(app_settings.festivals_path)
    user_store = SQLiteUserStore(
        db_path=app_settings.db_path,
        session_ttl=app_settings.session_ttl_days * 86400,
        clock=clock,
        admin_emails=app_settings.admin_emails,
    )
    suggestion_store = SQLiteSuggestionStore(db_path=app_settings.db_path)

    # -- Tour dates: Bandsintown behind a two-tier cache --
    ttl = app_settings.tour_cache_ttl_seconds
    persistent_cache = SQLiteTourCache(db_path=app_settings.db_path, ttl=ttl, clock=clock)
    tour_cache = TwoTierTourCache(
        memory=MemoryCacheProvider(
            max_size=app_settings.tour_cache_max_entries, ttl=ttl, timer=clock
        ),
        persistent=persistent_cache,
    )
    tour_provider = BandsintownProvider(
        http_client=http_client,
        app_id=app_settings.bandsintown_app_id,
        base_url=app_settings.bandsintown_base_url,
        timeout=app_settings.tour_api_timeout,
    )

    # -- Services --
    match_cfg = app_config.get("match", {})
    match_service = MatchService(
        high_threshold=match_cfg.get("high_threshold", 20),
        medium_threshold=match_cfg.get("medium_threshold", 5),
    )
    festival_service = FestivalService(
        catalog=catalog, user_store=user_store, match_service=match_service
    )
    tour_date_service = TourDateService(
        provider=tour_provider,
        cache=tour_cache,
        catalog=catalog,
        max_events=app_config.get("tour_dates", {}).get("max_events", 10),
    )
    calendar_service = CalendarService(
        max_per_day=app_config.get("calendar", {}).get("max_events_per_day", 3)
    )
    current_year = CurrentYearService(
        http_client=http_client,
        url=app_settings.current_year_url,
        timeout=app_settings.tour_api_timeout,
    )

    sweeper = PeriodicSweeper(
        jobs=[
            SweepJob(
                name="tour_cache",
                interval=app_settings.tour_cache_sweep_hours * 3600,
                sweep=tour_cache.sweep_expired,
            ),
            SweepJob(
                name="sessions",
                interval=app_settings.session_sweep_hours * 3600,
                sweep=user_store.clean_expired_sessions,
            ),
        ]
    )

    return {
        "settings": app_settings,
        "config": app_config,
        "http_client": http_client,
        "catalog": catalog,
        "user_store": user_store,
        "suggestion_store": suggestion_store,
        "tour_cache": tour_cache,
        "persistent_tour_cache": persistent_cache,
        "festival_service": festival_service,
        "preference_service": PreferenceService(user_store=user_store),
        "tour_date_service": tour_date_service,
        "suggestion_service": SuggestionService(store=suggestion_store, catalog=catalog),
        "calendar_service": calendar_service,
        "current_year": current_year,
        "sweeper": sweeper,
    }


async def initialize_storage(components: dict[str, Any]) -> None:
    """Create tables and apply admin promotions.  Safe to call repeatedly."""
    await components["user_store"].initialize()
    await components["suggestion_store"].initialize()
    await components["persistent_tour_cache"].initialize()
    promoted = await components["user_store"].promote_admins()
    if promoted:
        _logger.info("admins_promoted", count=promoted)


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise storage and background jobs on startup, clean up on shutdown."""
    components: dict[str, Any] = application.state.components

    for key, value in components.items():
        setattr(application.state, key, value)

    await initialize_storage(components)
    year = await components["current_year"].refresh()
    components["sweeper"].start()

    _logger.info(
        "app_startup",
        version=components["config"].get("app", {}).get("version", "0.0.0"),
        environment=components["settings"].app_env,
        catalog=components["settings"].festivals_path,
        year=year,
    )

    yield

    # -- Shutdown: stop sweeps, close shared httpx client --
    await components["sweeper"].stop()
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(components: dict[str, Any] | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Components are built from the module-level settings unless supplied.
    """
    components = components or build_components(settings, config)
    app_settings: Settings = components["settings"]

    application = FastAPI(
        title="Festival Match API",
        version=str(components["config"].get("app", {}).get("version", "0.1.0")),
        description=(
            "Score music festivals against a user's favourite artists, browse "
            "them on a calendar, and look up artists' upcoming tour dates."
        ),
        lifespan=_lifespan,
    )
    application.state.components = components

    # -- Error handlers and middleware (last added = first executed) --
    register_exception_handlers(application)
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=app_settings.cors_origins or None)

    # -- API routes --
    application.include_router(api_router)
    application.include_router(admin_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
