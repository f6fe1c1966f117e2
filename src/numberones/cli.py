"""Command line entry point.

    numberones lookup 1990-06-15
    numberones yearly 1990-06-15
    numberones backfill --start 1952-11-14
    numberones serve --port 8000
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from datetime import date

from numberones.application.services import default_playlist_name, to_playlist_pairs
from numberones.config import get_settings
from numberones.domain.entities import ChartEntry
from numberones.domain.exceptions import DomainException
from numberones.domain.value_objects import parse_iso_date
from numberones.infrastructure.lifecycle import build_services, shutdown_services
from numberones.infrastructure.observability import configure_logging, set_correlation_id

logger = logging.getLogger(__name__)


def _format_entry(entry: ChartEntry) -> str:
    return f"{entry.date}  {entry.artist} - {entry.track}"


async def _run(args: argparse.Namespace) -> int:
    settings = get_settings()
    services = await build_services(settings)
    try:
        if args.command == "lookup":
            day = parse_iso_date(args.date)
            entry = await services.lookup.lookup_one(day.year, day.month, day.day)
            print(_format_entry(entry))

        elif args.command == "yearly":
            services.access_log.record("Track Fetch", args.date)
            entries = await services.lookup.lookup_birthday(args.date, today=args.today)
            print(default_playlist_name(args.date))
            for entry in entries:
                print(_format_entry(entry))
            print(f"{len(to_playlist_pairs(entries))} playable tracks")

        elif args.command == "backfill":
            entries = await services.backfill.backfill(args.start, today=args.today)
            print(f"Backfilled {len(entries)} dates into {settings.cache.path}")
    finally:
        await shutdown_services(services)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numberones", description="UK number one singles by date."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Number one on one exact date")
    lookup.add_argument("date", help="YYYY-MM-DD")

    yearly = sub.add_parser("yearly", help="Number ones on a birthday every year since")
    yearly.add_argument("date", help="Birthday, YYYY-MM-DD")
    yearly.add_argument("--today", type=date.fromisoformat, default=None)

    backfill = sub.add_parser("backfill", help="Fill the cache from a start date")
    backfill.add_argument("--start", required=True, help="YYYY-MM-DD or YYYYMMDD")
    backfill.add_argument("--today", type=date.fromisoformat, default=None)

    serve = sub.add_parser("serve", help="Run the JSON API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("numberones.main:app", host=args.host, port=args.port)
        return 0

    settings = get_settings()
    configure_logging(
        log_level=settings.observability.log_level,
        json_format=settings.observability.json_logs,
        app_name=settings.app_name,
        stream=sys.stderr,
    )
    set_correlation_id()

    try:
        return asyncio.run(_run(args))
    except DomainException as e:
        logger.error("%s failed: %s", args.command, e.message)
        return 1


if __name__ == "__main__":
    sys.exit(main())
