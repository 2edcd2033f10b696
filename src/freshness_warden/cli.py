"""
Freshness Warden CLI.
Usage: freshness-warden <command> [options]    (or: python -m freshness_warden <command>)
Env: DATABASE_URL, or GS_DB_HOST / GS_DB_PORT / GS_DB_NAME / GS_DB_USER / GS_DB_PASSWORD; LOG_LEVEL.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from freshness_warden import __version__
from freshness_warden.core.config import get_settings
from freshness_warden.core.database import open_database
from freshness_warden.core.logging import setup_logging
from freshness_warden.errors import WardenError
from freshness_warden.reporting import console
from freshness_warden.services import FreshnessService, seed_if_empty

logger = logging.getLogger(__name__)

ServiceCall = Callable[[FreshnessService], Awaitable[str]]


def _run_with_service(call: ServiceCall, create_schema: bool = False) -> str:
    """Open the database, run one service call inside a committed session, dispose the engine."""

    async def _run() -> str:
        async with open_database(get_settings().database_url, create_schema=create_schema) as manager:
            async with manager.session() as session:
                return await call(FreshnessService(session))

    return asyncio.run(_run())


def _days(args: argparse.Namespace) -> int:
    return args.days if args.days is not None else get_settings().default_days


def _cmd_init_db(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        seeded = await seed_if_empty(service)
        return "Database initialized and seeded." if seeded else "Database initialized."

    return _run_with_service(call, create_schema=True)


def _cmd_add_source(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        created = await service.add_source(args.name, args.owner, args.sla_hours, args.notes)
        return "Source added." if created else "Source already exists; left unchanged."

    return _run_with_service(call)


def _cmd_update_source(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        kwargs = {}
        if args.clear_notes:
            kwargs["notes"] = None
        elif args.notes is not None:
            kwargs["notes"] = args.notes
        found = await service.update_source(args.name, args.owner, args.sla_hours, **kwargs)
        return "Source updated." if found else "Source not found."

    return _run_with_service(call)


def _cmd_remove_source(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        removed = await service.remove_source(args.name)
        return "Source removed." if removed else "Source not found."

    return _run_with_service(call)


def _cmd_log_check(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        await service.log_check(args.source, args.status, args.details)
        return "Check logged."

    return _run_with_service(call)


def _cmd_status(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        statuses = await service.source_status(owner=args.owner)
        return console.render_json(statuses) if args.json else console.render_status(statuses)

    return _run_with_service(call)


def _cmd_rollup(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        rollups = await service.rollups()
        return console.render_json(rollups) if args.json else console.render_rollup(rollups)

    return _run_with_service(call)


def _cmd_list_stale(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        stale = await service.stale_sources()
        return console.render_json(stale) if args.json else console.render_stale(stale)

    return _run_with_service(call)


def _cmd_source_history(args: argparse.Namespace) -> str:
    async def call(service: FreshnessService) -> str:
        history = await service.source_history(args.name, args.limit)
        return console.render_json(history) if args.json else console.render_history(args.name, history)

    return _run_with_service(call)


def _cmd_source_health(args: argparse.Namespace) -> str:
    days = _days(args)

    async def call(service: FreshnessService) -> str:
        health = await service.source_health(days)
        return console.render_json(health) if args.json else console.render_source_health(health, days)

    return _run_with_service(call)


def _cmd_owner_summary(args: argparse.Namespace) -> str:
    days = _days(args)

    async def call(service: FreshnessService) -> str:
        summaries = await service.owner_summary(days)
        return console.render_json(summaries) if args.json else console.render_owner_summary(summaries, days)

    return _run_with_service(call)


def _cmd_owner_health(args: argparse.Namespace) -> str:
    days = _days(args)

    async def call(service: FreshnessService) -> str:
        owners = await service.owner_health(days)
        return console.render_json(owners) if args.json else console.render_owner_health(owners, days)

    return _run_with_service(call)


def _cmd_summary(args: argparse.Namespace) -> str:
    days = _days(args)

    async def call(service: FreshnessService) -> str:
        report = await service.summary(days)
        return console.render_json(report) if args.json else console.render_summary(report)

    return _run_with_service(call)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freshness-warden",
        description="Data Freshness Warden: track source checks against per-source SLAs.",
        epilog="Environment variables: DATABASE_URL or GS_DB_HOST, GS_DB_PORT, GS_DB_NAME, GS_DB_USER, GS_DB_PASSWORD",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    output = argparse.ArgumentParser(add_help=False)
    output.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    windowed = argparse.ArgumentParser(add_help=False)
    windowed.add_argument("--days", type=int, default=None, help="Recent window in days (default: FRESHNESS_DEFAULT_DAYS or 7)")

    p = sub.add_parser("init-db", help="Create tables and seed sample sources when empty")
    p.set_defaults(func=_cmd_init_db)

    p = sub.add_parser("add-source", help="Register a source (existing names are left unchanged)")
    p.add_argument("--name", required=True)
    p.add_argument("--owner", required=True)
    p.add_argument("--sla-hours", type=int, required=True, help="Max hours between checks")
    p.add_argument("--notes", default=None)
    p.set_defaults(func=_cmd_add_source)

    p = sub.add_parser("update-source", help="Change owner, SLA or notes of a source")
    p.add_argument("--name", required=True)
    p.add_argument("--owner", default=None)
    p.add_argument("--sla-hours", type=int, default=None)
    notes = p.add_mutually_exclusive_group()
    notes.add_argument("--notes", default=None)
    notes.add_argument("--clear-notes", action="store_true")
    p.set_defaults(func=_cmd_update_source)

    p = sub.add_parser("remove-source", help="Delete a source and its checks")
    p.add_argument("--name", required=True)
    p.set_defaults(func=_cmd_remove_source)

    p = sub.add_parser("log-check", help="Record a check result for a source")
    p.add_argument("--source", required=True)
    p.add_argument("--status", required=True, help="ok | warning | failed")
    p.add_argument("--details", default=None)
    p.set_defaults(func=_cmd_log_check)

    p = sub.add_parser("status", parents=[output], help="Last check per source")
    p.add_argument("--owner", default=None, help="Only sources of this owner (case-insensitive)")
    p.set_defaults(func=_cmd_status)

    p = sub.add_parser("rollup", parents=[output], help="Last status, details and next due time per source")
    p.set_defaults(func=_cmd_rollup)

    p = sub.add_parser("list-stale", parents=[output], help="Sources past their SLA")
    p.set_defaults(func=_cmd_list_stale)

    p = sub.add_parser("source-history", parents=[output], help="Recent checks for one source, newest first")
    p.add_argument("--name", required=True)
    p.add_argument("--limit", type=int, default=10)
    p.set_defaults(func=_cmd_source_history)

    p = sub.add_parser("source-health", parents=[output, windowed], help="Per-source health over a window")
    p.set_defaults(func=_cmd_source_health)

    p = sub.add_parser("owner-summary", parents=[output, windowed], help="Per-owner counts over a window")
    p.set_defaults(func=_cmd_owner_summary)

    p = sub.add_parser("owner-health", parents=[output, windowed], help="Per-owner health incl. breaches")
    p.set_defaults(func=_cmd_owner_health)

    p = sub.add_parser("summary", parents=[output, windowed], help="Check totals and stale sources")
    p.set_defaults(func=_cmd_summary)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 0

    try:
        setup_logging(get_settings())
        output = args.func(args)
    except WardenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        logger.debug("Database error", exc_info=True)
        print(f"Error: {e.__class__.__name__}: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
