"""Dataclasses describing raw fixes, reconstructed trips and exported artefacts.

Every type is an immutable value object. ``to_dict`` returns the camelCase
JSON shape consumed by the map/timeline viewer, which must stay stable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import MalformedPayloadError

LatLng = Tuple[float, float]


class TripStatus(str, Enum):
    NORMAL = "normal"
    REST = "rest"
    SPEED_ANOMALY = "speed_anomaly"


def _coerce_coordinate(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise MalformedPayloadError(f"{name} is not numeric: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(f"{name} is not numeric: {value!r}") from exc
    if not math.isfinite(number):
        raise MalformedPayloadError(f"{name} is not finite: {value!r}")
    return number


@dataclass(frozen=True, slots=True)
class FixPayload:
    """First element of a device snapshot, normalised.

    Devices report the position inside a ``GPS`` list (only its first entry is
    used); flattened payloads carrying ``lat``/``lng`` at the top level are
    accepted as well. ``point`` keeps the positional element verbatim because
    it is exported unchanged in the summary's point sequence.
    """

    lat: float
    lng: float
    addr: str = ""
    power: Any = ""
    project_name: Optional[str] = None
    dot_name: str = ""
    point: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "FixPayload":
        """Build a fix from a decoded snapshot (a list whose first item matters)."""

        if not isinstance(payload, list) or not payload:
            raise MalformedPayloadError("snapshot is not a non-empty list")
        first = payload[0]
        if not isinstance(first, Mapping):
            raise MalformedPayloadError("first snapshot element is not an object")

        gps = first.get("GPS")
        if isinstance(gps, list) and gps and isinstance(gps[0], Mapping):
            point: Mapping[str, Any] = gps[0]
        elif "lat" in first and "lng" in first:
            point = {"lat": first["lat"], "lng": first["lng"]}
        else:
            raise MalformedPayloadError("snapshot has no positional element")
        if "lat" not in point or "lng" not in point:
            raise MalformedPayloadError("positional element lacks lat/lng")

        return cls(
            lat=_coerce_coordinate(point["lat"], "lat"),
            lng=_coerce_coordinate(point["lng"], "lng"),
            addr=str(first.get("addr") or ""),
            power="" if first.get("dot_Power") is None else first["dot_Power"],
            project_name=(
                None if first.get("pjName") is None else str(first["pjName"])
            ),
            dot_name=str(first.get("dot_name") or ""),
            point=dict(point),
            raw=dict(first),
        )

    @property
    def position(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class Record:
    """A fix wrapped with its capture time.

    ``stationary_until``/``stationary_duration`` are only set by the
    stationary merger; ``fix`` is ``None`` for records without a position.
    """

    time: str
    timestamp: str
    fix: Optional[FixPayload]
    stationary_until: str = ""
    stationary_duration: int = 0

    @property
    def has_position(self) -> bool:
        return self.fix is not None


@dataclass(frozen=True, slots=True)
class TimelineEntry:
    time: str
    lat: float
    lng: float
    addr: str
    power: Any
    distance: int
    speed: float
    status: TripStatus
    stationary_until: str = ""
    stationary_duration: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "lat": self.lat,
            "lng": self.lng,
            "addr": self.addr,
            "power": self.power,
            "distance": self.distance,
            "speed": self.speed,
            "status": self.status.value,
            "stationaryUntil": self.stationary_until,
            "stationaryDuration": self.stationary_duration,
        }


@dataclass(frozen=True, slots=True)
class RestStop:
    """First point of a contiguous rest interval."""

    index: int
    point_index: int
    time: str
    lat: float
    lng: float
    addr: str
    cumulative_distance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "pointIndex": self.point_index,
            "time": self.time,
            "lat": self.lat,
            "lng": self.lng,
            "addr": self.addr,
            "cumulativeDistance": self.cumulative_distance,
        }


@dataclass(frozen=True, slots=True)
class SpeedAnomaly:
    index: int
    time: str
    speed: float
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "time": self.time,
            "speed": self.speed,
            "lat": self.lat,
            "lng": self.lng,
        }


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """One leg between consecutive waypoints (start, rest stops, end)."""

    from_label: str
    from_time: str
    from_addr: str
    from_point_index: int
    to_label: str
    to_time: str
    to_addr: str
    to_point_index: int
    distance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_label,
            "fromTime": self.from_time,
            "fromAddr": self.from_addr,
            "fromPointIndex": self.from_point_index,
            "to": self.to_label,
            "toTime": self.to_time,
            "toAddr": self.to_addr,
            "toPointIndex": self.to_point_index,
            "distance": self.distance,
        }


@dataclass(frozen=True, slots=True)
class TripAnnotation:
    """Everything the annotator derives from a merged record sequence."""

    points: List[Mapping[str, Any]]
    timeline: List[TimelineEntry]
    rest_stops: List[RestStop]
    speed_anomalies: List[SpeedAnomaly]
    segments: List[RouteSegment]
    total_distance: float
    center: LatLng


@dataclass(frozen=True, slots=True)
class TripSummary:
    """Exported per-day artefact."""

    date: str
    project_name: str
    dot_name: str
    total_distance: int
    total_distance_km: float
    center: LatLng
    points: List[Mapping[str, Any]]
    timeline: List[TimelineEntry]
    rest_stops: List[RestStop]
    speed_anomalies: List[SpeedAnomaly]
    segments: List[RouteSegment]

    @property
    def rest_count(self) -> int:
        return len(self.rest_stops)

    @property
    def anomaly_count(self) -> int:
        return len(self.speed_anomalies)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "projectName": self.project_name,
            "dotName": self.dot_name,
            "totalDistance": self.total_distance,
            "totalDistanceKm": self.total_distance_km,
            "restCount": self.rest_count,
            "anomalyCount": self.anomaly_count,
            "center": {"lat": self.center[0], "lng": self.center[1]},
            "points": [dict(point) for point in self.points],
            "timeline": [entry.to_dict() for entry in self.timeline],
            "restStops": [stop.to_dict() for stop in self.rest_stops],
            "speedAnomalies": [anomaly.to_dict() for anomaly in self.speed_anomalies],
            "segments": [segment.to_dict() for segment in self.segments],
        }


@dataclass(frozen=True, slots=True)
class DailyIndexEntry:
    date: str
    project_name: str
    total_distance: float
    record_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "projectName": self.project_name,
            "totalDistance": self.total_distance,
            "recordCount": self.record_count,
        }
