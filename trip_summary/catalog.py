"""Cross-day catalog of materialised trip summaries.

The catalog lets a viewer offer day selection without loading every summary.
Rows are aggregated in a DataFrame and ordered newest first; ``YYYY-MM-DD``
strings sort chronologically, so a plain string sort is sufficient.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping

import pandas as pd

from .models import DailyIndexEntry
from .storage import TripStore

_LOG = logging.getLogger(__name__)

DATE_COL = "date"
PROJECT_COL = "projectName"
DISTANCE_COL = "totalDistance"
COUNT_COL = "recordCount"

CATALOG_COLUMNS = [DATE_COL, PROJECT_COL, DISTANCE_COL, COUNT_COL]


def _row_for_summary(summary: Mapping[str, Any]) -> dict:
    timeline = summary.get("timeline")
    return {
        DATE_COL: str(summary.get("date", "")),
        PROJECT_COL: summary.get("projectName") or "",
        DISTANCE_COL: summary.get("totalDistance") or 0,
        COUNT_COL: len(timeline) if isinstance(timeline, list) else 0,
    }


def _as_number(value: Any) -> float | int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number


def build_catalog(summaries: Iterable[Mapping[str, Any]]) -> List[DailyIndexEntry]:
    """Return one entry per summary sorted by date, newest first."""

    rows = [_row_for_summary(summary) for summary in summaries]
    if not rows:
        return []
    df = pd.DataFrame(rows, columns=CATALOG_COLUMNS)
    df = df.sort_values(by=DATE_COL, ascending=False, kind="mergesort")
    return [
        DailyIndexEntry(
            date=str(row[DATE_COL]),
            project_name=str(row[PROJECT_COL]),
            total_distance=_as_number(row[DISTANCE_COL]),
            record_count=int(row[COUNT_COL]),
        )
        for row in df.to_dict(orient="records")
    ]


def collect_catalog(store: TripStore) -> List[DailyIndexEntry]:
    """Read every materialised summary of ``store`` and build the catalog."""

    summaries = []
    for date in store.available_dates():
        summary = store.read_summary(date)
        if summary is None:
            _LOG.debug("No summary materialised for %s", date)
            continue
        summaries.append(summary)
    return build_catalog(summaries)


__all__ = ["build_catalog", "collect_catalog"]
