"""Command line agenda for published shows and events."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import List

from . import agenda, api, days, records, service, util, windows
from .errors import FetchError
from .models import EntityType


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show and event calendar")
    parser.add_argument("--tz", type=util.parse_timezone, default="UTC")
    parser.add_argument("--view", choices=windows.VIEWS, default="rolling")
    parser.add_argument(
        "--date", type=date.fromisoformat, help="Reference day (YYYY-MM-DD), default today"
    )
    parser.add_argument(
        "--days",
        type=_positive_int,
        default=windows.DEFAULT_ROLLING_DAYS,
        help="Length of the rolling view",
    )
    parser.add_argument("--type", choices=[t.value for t in EntityType])
    parser.add_argument("--search", help="Match titles and creator names")
    parser.add_argument(
        "--upcoming", action="store_true", help="Hide occurrences already past"
    )
    parser.add_argument("--status", default="published")
    parser.add_argument("--dump-json", action="store_true")
    parser.add_argument(
        "--offline", action="store_true", help="Use saved JSON fixtures"
    )
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    util.configure_logging(args.verbose)
    tz = args.tz
    reference = args.date or util.today(tz)
    window = windows.for_view(args.view, reference, tz, args.days)
    type_filter = EntityType(args.type) if args.type else None

    client = api.APIClient(dump_json=args.dump_json, offline=args.offline)
    diagnostics = service.DiagnosticLog()
    entities = []
    if type_filter in (None, EntityType.SHOW):
        entities.extend(
            records.entities_from_records(
                client.fetch_shows(args.status), EntityType.SHOW, diagnostics
            )
        )
    if type_filter in (None, EntityType.EVENT):
        try:
            event_records = client.fetch_events(args.status)
        except FetchError as exc:
            # a broken events feed must not hide the shows
            logging.warning("Continuing without events: %s", exc)
            event_records = []
        entities.extend(
            records.entities_from_records(event_records, EntityType.EVENT, diagnostics)
        )

    occurrences = service.project_all(
        entities, window, type_filter, tz=tz, on_diagnostic=diagnostics
    )
    occurrences = agenda.search(occurrences, args.search)
    if args.upcoming:
        occurrences = agenda.upcoming(occurrences, util.now(tz))

    for day, day_occurrences in agenda.group_by_day(occurrences).items():
        print(f"{day:%Y-%m-%d} {days.CALENDAR_DAY_NAMES[days.calendar_weekday(day)]}")
        for occ in day_occurrences:
            label = agenda.title(occ) or f"#{occ.entity_id}"
            print(f"  {occ.concrete_datetime:%H:%M} {occ.entity_type.value:<5} {label}")
    if not occurrences:
        print("Nothing scheduled")
    if diagnostics:
        print(f"{len(diagnostics)} record(s) skipped or shown at midnight")


if __name__ == "__main__":  # pragma: no cover
    main()
