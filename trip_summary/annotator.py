"""Annotate a merged trip with step distances, speeds, rest stops and anomalies.

The walk is a fold: :func:`advance` takes the immutable
:class:`AnnotatorState` plus the next record and returns the new state
together with the :class:`StepOutcome` it emitted. :func:`annotate` drives the
fold and derives the aggregate artefacts (center and route legs).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .config import PipelineThresholds, RouteLabels
from .errors import DegenerateTripError
from .geo import compute_center, distance_meters, time_diff_seconds
from .models import (
    FixPayload,
    Record,
    RestStop,
    RouteSegment,
    SpeedAnomaly,
    TimelineEntry,
    TripAnnotation,
    TripStatus,
)
from .utils import round_half_away


@dataclass(frozen=True, slots=True)
class AnnotatorState:
    """Accumulator threaded through the walk."""

    previous: Optional[Record] = None
    total_distance: float = 0.0
    open_rest: Optional[RestStop] = None
    point_count: int = 0

    @property
    def resting(self) -> bool:
        return self.open_rest is not None


@dataclass(frozen=True, slots=True)
class StepOutcome:
    """Increments emitted by one step of the walk."""

    entry: TimelineEntry
    point: Mapping[str, Any]
    rest_stop: Optional[RestStop] = None
    anomaly: Optional[SpeedAnomaly] = None


def _step_metrics(
    previous: Record, previous_fix: FixPayload, record: Record, fix: FixPayload
) -> Tuple[float, float]:
    distance = distance_meters(previous_fix.lat, previous_fix.lng, fix.lat, fix.lng)
    elapsed = time_diff_seconds(previous.timestamp, record.timestamp)
    speed = distance / elapsed * 3.6 if elapsed > 0 else 0.0
    return distance, speed


def advance(
    state: AnnotatorState,
    record: Record,
    index: int,
    thresholds: PipelineThresholds,
) -> Tuple[AnnotatorState, Optional[StepOutcome]]:
    """Apply one record to the walk.

    Records without a position leave the state untouched and emit nothing.
    """

    fix = record.fix
    if fix is None:
        return state, None

    distance = 0.0
    speed = 0.0
    status = TripStatus.NORMAL
    total = state.total_distance
    open_rest = state.open_rest
    rest_stop: Optional[RestStop] = None
    anomaly: Optional[SpeedAnomaly] = None

    previous = state.previous
    if previous is not None and previous.fix is not None:
        distance, speed = _step_metrics(previous, previous.fix, record, fix)
        total = state.total_distance + distance

        if speed > thresholds.max_cycling_speed_kmh:
            status = TripStatus.SPEED_ANOMALY
            anomaly = SpeedAnomaly(
                index=index,
                time=record.time,
                speed=round_half_away(speed, 1),
                lat=fix.lat,
                lng=fix.lng,
            )
            open_rest = None
        elif distance < thresholds.rest_distance_threshold_m:
            status = TripStatus.REST
            if open_rest is None:
                # Anchored at the distance covered through the previous point.
                rest_stop = RestStop(
                    index=index,
                    point_index=state.point_count,
                    time=record.time,
                    lat=fix.lat,
                    lng=fix.lng,
                    addr=fix.addr,
                    cumulative_distance=state.total_distance,
                )
                open_rest = rest_stop
        else:
            open_rest = None

    entry = TimelineEntry(
        time=record.time,
        lat=fix.lat,
        lng=fix.lng,
        addr=fix.addr,
        power=fix.power,
        distance=int(round_half_away(distance)),
        speed=round_half_away(speed, 1),
        status=status,
        stationary_until=record.stationary_until,
        stationary_duration=record.stationary_duration,
    )
    new_state = AnnotatorState(
        previous=record,
        total_distance=total,
        open_rest=open_rest,
        point_count=state.point_count + 1,
    )
    point = fix.point or {"lat": fix.lat, "lng": fix.lng}
    return new_state, StepOutcome(
        entry=entry, point=point, rest_stop=rest_stop, anomaly=anomaly
    )


def build_route_segments(
    rest_stops: Sequence[RestStop],
    timeline: Sequence[TimelineEntry],
    total_distance: float,
    labels: RouteLabels,
) -> List[RouteSegment]:
    """Chain legs start -> rest 1 -> ... -> rest n -> end.

    Always returns ``len(rest_stops) + 1`` legs for a non-empty timeline.
    """

    if not timeline:
        return []
    first, last = timeline[0], timeline[-1]

    segments: List[RouteSegment] = []
    prev_label = labels.start
    prev_time = first.time
    prev_addr = first.addr
    prev_point_index = 0
    prev_distance = 0.0
    for number, stop in enumerate(rest_stops, start=1):
        label = labels.rest_label(number)
        segments.append(
            RouteSegment(
                from_label=prev_label,
                from_time=prev_time,
                from_addr=prev_addr,
                from_point_index=prev_point_index,
                to_label=label,
                to_time=stop.time,
                to_addr=stop.addr,
                to_point_index=stop.point_index,
                distance=round_half_away(
                    (stop.cumulative_distance - prev_distance) / 1000.0, 2
                ),
            )
        )
        prev_label = label
        prev_time = stop.time
        prev_addr = stop.addr
        prev_point_index = stop.point_index
        prev_distance = stop.cumulative_distance

    segments.append(
        RouteSegment(
            from_label=prev_label,
            from_time=prev_time,
            from_addr=prev_addr,
            from_point_index=prev_point_index,
            to_label=labels.end,
            to_time=last.time,
            to_addr=last.addr,
            to_point_index=len(timeline) - 1,
            distance=round_half_away((total_distance - prev_distance) / 1000.0, 2),
        )
    )
    return segments


def annotate(
    records: Sequence[Record],
    thresholds: PipelineThresholds,
    labels: RouteLabels | None = None,
) -> TripAnnotation:
    """Walk ``records`` once and derive the annotated trip.

    Raises:
        DegenerateTripError: If no record carries a position.
    """

    labels = labels or RouteLabels()
    state = AnnotatorState()
    points: List[Mapping[str, Any]] = []
    timeline: List[TimelineEntry] = []
    rest_stops: List[RestStop] = []
    anomalies: List[SpeedAnomaly] = []

    for index, record in enumerate(records):
        state, outcome = advance(state, record, index, thresholds)
        if outcome is None:
            continue
        points.append(outcome.point)
        timeline.append(outcome.entry)
        if outcome.rest_stop is not None:
            rest_stops.append(outcome.rest_stop)
        if outcome.anomaly is not None:
            anomalies.append(outcome.anomaly)

    if not timeline:
        raise DegenerateTripError("No positional records to annotate")

    center = compute_center(
        {"lat": entry.lat, "lng": entry.lng} for entry in timeline
    )
    segments = build_route_segments(
        rest_stops, timeline, state.total_distance, labels
    )
    return TripAnnotation(
        points=points,
        timeline=timeline,
        rest_stops=rest_stops,
        speed_anomalies=anomalies,
        segments=segments,
        total_distance=state.total_distance,
        center=center,
    )


__all__ = [
    "AnnotatorState",
    "StepOutcome",
    "advance",
    "annotate",
    "build_route_segments",
]
