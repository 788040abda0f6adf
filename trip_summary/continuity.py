"""Select the dominant continuous run of fixes for a day.

Devices occasionally report a stale position at power-on or a lone reading
long before or after the actual ride. Splitting on large time gaps and
keeping the longest run isolates the trip.
"""

from __future__ import annotations

from typing import List, Sequence

from .config import PipelineThresholds
from .geo import time_diff_seconds
from .models import Record


def split_runs(records: Sequence[Record], max_time_gap_s: int) -> List[List[Record]]:
    """Partition ``records`` into maximal runs without a gap above ``max_time_gap_s``.

    Every record lands in exactly one run; single-record runs are kept so
    callers can inspect the full partition.
    """

    runs: List[List[Record]] = []
    current: List[Record] = []
    for record in records:
        if current and (
            time_diff_seconds(current[-1].timestamp, record.timestamp) > max_time_gap_s
        ):
            runs.append(current)
            current = []
        current.append(record)
    if current:
        runs.append(current)
    return runs


def select_trip(
    records: Sequence[Record], thresholds: PipelineThresholds
) -> List[Record]:
    """Return the longest run of at least two records, or ``[]`` when none exists.

    Ties keep the earliest run.
    """

    longest: List[Record] = []
    for run in split_runs(records, thresholds.max_time_gap_s):
        if len(run) < 2:
            continue
        if len(run) > len(longest):
            longest = run
    return longest


__all__ = ["select_trip", "split_runs"]
