"""Logging, timezone and clock helpers for the command line."""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# HTTP connection chatter is only wanted with --verbose
NOISY_LOGGERS = ("urllib3",)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def parse_timezone(name: str) -> ZoneInfo:
    """Look up an IANA zone, in a form usable as an argparse ``type``."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"unknown timezone {name!r}") from exc


def today(tz: ZoneInfo) -> date:
    return now(tz).date()


def now(tz: ZoneInfo) -> datetime:
    return datetime.now(tz)
