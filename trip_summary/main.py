"""Command-line entry point for building trip summaries.

Usage:
    trip-summary [YYYYMMDD]   build one date (today by default), then the index
    trip-summary --all        build every available date, then the index
    trip-summary --index      rebuild only the index
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from .builder import SummaryBuilder
from .storage import TripStore
from .utils import is_compact_date, today_compact


def _setup_logging() -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


def _date_arg(value: str) -> str:
    if not is_compact_date(value):
        raise argparse.ArgumentTypeError(f"expected YYYYMMDD, got {value!r}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build daily trip summaries from stored GPS snapshots"
    )
    parser.add_argument(
        "date",
        nargs="?",
        type=_date_arg,
        help="Date to build as YYYYMMDD (defaults to today)",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--all",
        action="store_true",
        help="Build every date with raw data, then rebuild the index",
    )
    mode.add_argument(
        "--index",
        action="store_true",
        help="Only rebuild the index from existing summaries",
    )
    parser.add_argument(
        "--docs-dir",
        help="Artefact root holding day folders and data/ (defaults to TRIP_DOCS_DIR)",
    )
    args = parser.parse_args(argv)
    if args.date and (args.all or args.index):
        parser.error("a date cannot be combined with --all or --index")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _setup_logging()
    builder = SummaryBuilder(TripStore(args.docs_dir))

    if args.all:
        builder.build_all()
    elif args.index:
        builder.build_index()
    else:
        builder.build(args.date or today_compact())
        builder.build_index()
    return 0


__all__ = ["main", "parse_args"]
