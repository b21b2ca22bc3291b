import sys
import os

# Ensure the repository root is on sys.path so "antiques_trail" can be imported
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
import argparse
from datetime import datetime

from antiques_trail.helpers.storage import StorageClient
from antiques_trail.hours.service import HoursService
from antiques_trail.hours.utils.days import STORAGE_DAY_NAMES
from antiques_trail.hours.utils.grouping import dayHoursText
from antiques_trail.hours.utils.legacy_parser import parseLegacyHoursWithDiagnostics
from antiques_trail.libs.supabase_client import (
    _opening_hours_table_schema,
    _places_table_schema,
    check_connection,
    ensure_table_exists,
)


def _parse_at(value):
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"--at must be an ISO datetime, got {value!r}")


def print_parse_result(text: str) -> int:
    result = parseLegacyHoursWithDiagnostics(text, None)
    for h in result.hours:
        print(f"{STORAGE_DAY_NAMES[h.day_of_week]}: {dayHoursText(h)}")
    for s in result.skipped:
        print(f"Skipped: '{s.segment}' ({s.reason})")
    return 0


def print_hours_summary(service: HoursService, place_id: int, at=None) -> int:
    summary = service.get_hours_summary(place_id, now=at)
    if not summary["formatted"]:
        print(f"No opening hours configured for place {place_id}")
        return 1
    for group in summary["formatted"]:
        print(f"{group['dayText']}: {group['hours']}")
    status = summary["status"]
    if status["byAppointment"]:
        label = "By appointment only today"
    elif status["isOpen"]:
        label = "Open, closing soon" if status["closingSoon"] else "Open"
    else:
        label = "Closed"
    print(f"Now: {label}")
    return 0


def migrate_legacy(service: HoursService, place_ids, dry_run: bool = False) -> int:
    migrated = 0
    for place_id in place_ids:
        result = service.migrate_legacy(place_id, dry_run=dry_run)
        if result is None:
            continue
        migrated += 1
        for s in result.skipped:
            logging.warning(f"Place {place_id}: could not parse '{s.segment}' ({s.reason})")
    action = "Would migrate" if dry_run else "Migrated"
    logging.info(f"{action} legacy hours for {migrated} place(s)")
    return 0


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    parser = argparse.ArgumentParser(description="Edinburgh Antiques Trail opening hours")
    subparsers = parser.add_subparsers(dest="command", required=True)

    hours_parser = subparsers.add_parser("hours", help="Show grouped opening hours and current status")
    hours_parser.add_argument("--place-id", type=int, required=True, help="Place ID")
    hours_parser.add_argument("--at", type=_parse_at, default=None, help="Evaluate status at this ISO datetime")

    parse_parser = subparsers.add_parser("parse", help="Parse free-text hours without touching storage")
    parse_parser.add_argument("text", help='e.g. "Mon-Fri: 9am-5pm, Sat: 10-4, Sun: Closed"')

    migrate_parser = subparsers.add_parser("migrate-legacy", help="Convert legacy hours text into structured rows")
    migrate_parser.add_argument("--place-id", type=int, required=False, help="Only this place")
    migrate_parser.add_argument("--dry-run", action="store_true", help="Parse and report without writing")

    subparsers.add_parser("check", help="Verify the Supabase connection and hours tables")

    args = parser.parse_args(argv)

    if args.command == "parse":
        return print_parse_result(args.text)

    if args.command == "check":
        check_connection()
        for schema in (_places_table_schema(), _opening_hours_table_schema()):
            ensure_table_exists(schema)
            logging.info(f"Table '{schema['name']}' is available")
        return 0

    storage = StorageClient()
    service = HoursService.from_config(storage)
    if args.command == "hours":
        return print_hours_summary(service, args.place_id, args.at)
    if args.command == "migrate-legacy":
        place_ids = [args.place_id] if args.place_id is not None else storage.list_place_ids()
        return migrate_legacy(service, place_ids, dry_run=args.dry_run)
    return 1


if __name__ == "__main__":
    sys.exit(main())
