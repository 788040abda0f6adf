"""Trip reconstruction pipeline and summary assembly.

Pure transformation: given a day's ordered records it selects the continuous
trip, merges stationary fixes, annotates the result and packages it into a
:class:`TripSummary`. I/O lives in ``storage`` and orchestration in
``builder``.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .annotator import annotate
from .config import DEFAULT_PROJECT_NAME, PipelineThresholds, RouteLabels
from .continuity import select_trip
from .errors import MissingDataError
from .models import Record, TripAnnotation, TripSummary
from .stationary import merge_stationary
from .utils import round_half_away

_LOG = logging.getLogger(__name__)


def reconstruct_trip(
    records: Sequence[Record],
    thresholds: PipelineThresholds,
    labels: RouteLabels | None = None,
) -> tuple[list[Record], TripAnnotation]:
    """Run continuity filtering, stationary merging and annotation.

    Returns the merged records together with their annotation.

    Raises:
        MissingDataError: If ``records`` is empty or no continuous run of at
            least two fixes survives filtering.
    """

    if not records:
        raise MissingDataError("No records found")
    trip = select_trip(records, thresholds)
    if not trip:
        raise MissingDataError("No continuous records found")
    merged = merge_stationary(trip, thresholds)
    _LOG.debug(
        "Reconstructed trip: %d records -> %d continuous -> %d merged",
        len(records),
        len(trip),
        len(merged),
    )
    return merged, annotate(merged, thresholds, labels)


def assemble_summary(
    date: str,
    records: Sequence[Record],
    annotation: TripAnnotation,
    *,
    default_project_name: str = DEFAULT_PROJECT_NAME,
) -> TripSummary:
    """Package an annotation with the trip metadata.

    Args:
        date: Calendar date as ``YYYY-MM-DD``.
        records: The merged records the annotation was derived from; the
            first one supplies the project and device names.
        annotation: Output of :func:`trip_summary.annotator.annotate`.
    """

    first_fix = records[0].fix if records else None
    project_name = default_project_name
    dot_name = ""
    if first_fix is not None:
        if first_fix.project_name is not None:
            project_name = first_fix.project_name
        dot_name = first_fix.dot_name

    total = annotation.total_distance
    return TripSummary(
        date=date,
        project_name=project_name,
        dot_name=dot_name,
        total_distance=int(round_half_away(total)),
        total_distance_km=round_half_away(total / 1000.0, 2),
        center=annotation.center,
        points=list(annotation.points),
        timeline=list(annotation.timeline),
        rest_stops=list(annotation.rest_stops),
        speed_anomalies=list(annotation.speed_anomalies),
        segments=list(annotation.segments),
    )


__all__ = ["assemble_summary", "reconstruct_trip"]
