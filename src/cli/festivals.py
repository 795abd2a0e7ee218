"""Operator CLI for the festival catalog, tour cache and user accounts.

Usage::

    python -m src.cli.festivals list --region usa
    python -m src.cli.festivals parse-dates "28 Nov - 1 Dic 2026" --year 2026
    python -m src.cli.festivals sweep-cache
    python -m src.cli.festivals grant-admin ops@example.com
    python -m src.cli.festivals create-session dev@example.com

Storage locations come from the same environment variables as the server
(``DB_PATH``, ``FESTIVALS_PATH``).  Log output goes to stderr at WARNING
and above so stdout only carries command output.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence

import structlog

from src.config.regions import REGIONS, resolve_region
from src.config.settings import Settings
from src.providers.cache.sqlite_tour_cache import SQLiteTourCache
from src.providers.catalog.json_catalog import JSONCatalogProvider
from src.providers.user_store.sqlite_user_store import SQLiteUserStore
from src.services.date_range_parser import parse_date_ranges
from src.utils.errors import FestivalMatchError


def _quiet_logs() -> None:
    """Send structlog and stdlib logging to stderr at WARNING+."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)


def _user_store(settings: Settings) -> SQLiteUserStore:
    return SQLiteUserStore(
        db_path=settings.db_path,
        session_ttl=settings.session_ttl_days * 86400,
        admin_emails=settings.admin_emails,
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_list(args: argparse.Namespace, settings: Settings) -> int:
    region = resolve_region(args.region)
    festivals = [
        f for f in JSONCatalogProvider(settings.festivals_path).load() if region.has_country_code(f.country)
    ]
    if args.json_output:
        print(json.dumps([f.model_dump(by_alias=True) for f in festivals], ensure_ascii=False, indent=2))
        return 0

    print(f"{len(festivals)} festivals in {region.name}")
    for f in festivals:
        print(f"  {f.id:<28} {f.name:<32} {f.city}, {f.country:<3} {f.dates:<24} {f.lineup_status.value}")
    return 0


def _cmd_parse_dates(args: argparse.Namespace, settings: Settings) -> int:
    ranges = parse_date_ranges(args.text, year=args.year)
    if not ranges:
        print(f"No dates recognised in {args.text!r}", file=sys.stderr)
        return 1
    for r in ranges:
        print(f"{r.start_date.isoformat()} .. {r.end_date.isoformat()}")
    return 0


async def _cmd_sweep_cache(args: argparse.Namespace, settings: Settings) -> int:
    tour_cache = SQLiteTourCache(db_path=settings.db_path, ttl=settings.tour_cache_ttl_seconds)
    users = _user_store(settings)
    await tour_cache.initialize()
    await users.initialize()

    removed_events = await tour_cache.sweep_expired()
    removed_sessions = await users.clean_expired_sessions()
    print(f"tour_cache: {removed_events} expired rows removed")
    print(f"sessions: {removed_sessions} expired sessions removed")
    return 0


async def _cmd_grant_admin(args: argparse.Namespace, settings: Settings) -> int:
    users = _user_store(settings)
    await users.initialize()
    user = await users.grant_role(args.email, args.role)
    if user is None:
        print(f"No user with email {args.email}", file=sys.stderr)
        return 1
    print(f"{user.email}: {user.role}")
    return 0


async def _cmd_create_session(args: argparse.Namespace, settings: Settings) -> int:
    users = _user_store(settings)
    await users.initialize()
    user = await users.find_or_create_user(args.email, name=args.name)
    print(await users.create_session(user.id))
    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.festivals",
        description="Festival Match operator tools.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List catalog festivals in a region")
    p_list.add_argument("--region", default=None, help=f"One of: {', '.join(REGIONS)} (default europe)")
    p_list.add_argument("--json", dest="json_output", action="store_true", help="Print JSON records")
    p_list.set_defaults(handler=_cmd_list)

    p_dates = sub.add_parser("parse-dates", help="Show the date ranges parsed from a dates string")
    p_dates.add_argument("text", help='Dates text, e.g. "3-7 Junio 2026"')
    p_dates.add_argument("--year", type=int, default=None, help="Keep only ranges touching this year")
    p_dates.set_defaults(handler=_cmd_parse_dates)

    p_sweep = sub.add_parser("sweep-cache", help="Delete expired tour-cache rows and sessions")
    p_sweep.set_defaults(handler=_cmd_sweep_cache)

    p_grant = sub.add_parser("grant-admin", help="Give an existing user a role (admin by default)")
    p_grant.add_argument("email")
    p_grant.add_argument("--role", default="admin")
    p_grant.set_defaults(handler=_cmd_grant_admin)

    p_session = sub.add_parser("create-session", help="Create a user if needed and print a session id")
    p_session.add_argument("email")
    p_session.add_argument("--name", default=None)
    p_session.set_defaults(handler=_cmd_create_session)

    return parser


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """Parse arguments, run the chosen command and return its exit code."""
    args = _build_parser().parse_args(argv)
    _quiet_logs()
    settings = settings or Settings()

    try:
        outcome = args.handler(args, settings)
        if asyncio.iscoroutine(outcome):
            outcome = asyncio.run(outcome)
    except FestivalMatchError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    return outcome


if __name__ == "__main__":
    sys.exit(main())
