"""Collapse near-duplicate consecutive fixes into single waypoints."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from .config import PipelineThresholds
from .geo import distance_meters
from .models import Record


def merge_stationary(
    records: Sequence[Record], thresholds: PipelineThresholds
) -> List[Record]:
    """Merge runs of fixes that stay within the movement threshold.

    Each record is compared with the most recently *emitted* record, so a slow
    drift of small steps folds into one waypoint even when the cumulative
    drift exceeds the threshold. The kept waypoint records the time of the
    last folded fix in ``stationary_until`` and the number of folded fixes in
    ``stationary_duration``. Records without a position are always emitted
    and reset the merge state.
    """

    merged: List[Record] = []
    for record in records:
        if not merged:
            merged.append(record)
            continue

        anchor = merged[-1]
        if anchor.fix is None or record.fix is None:
            merged.append(record)
            continue

        distance = distance_meters(
            anchor.fix.lat, anchor.fix.lng, record.fix.lat, record.fix.lng
        )
        if distance < thresholds.min_movement_threshold_m:
            merged[-1] = replace(
                anchor,
                stationary_until=record.time,
                stationary_duration=anchor.stationary_duration + 1,
            )
        else:
            merged.append(record)
    return merged


__all__ = ["merge_stationary"]
