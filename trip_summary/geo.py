"""Distance and clock arithmetic for GPS fixes."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

import numpy as np

from .errors import DegenerateTripError
from .models import LatLng

_EARTH_RADIUS_M = 6_371_000.0


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in metres using the haversine formula."""

    sin = math.sin
    cos = math.cos
    radians = math.radians
    atan2 = math.atan2
    sqrt = math.sqrt
    lat1_rad = radians(lat1)
    lat2_rad = radians(lat2)
    delta_lat = radians(lat2 - lat1)
    delta_lng = radians(lng2 - lng1)
    sin_half_lat = sin(delta_lat / 2.0)
    sin_half_lng = sin(delta_lng / 2.0)
    a = sin_half_lat**2 + cos(lat1_rad) * cos(lat2_rad) * sin_half_lng**2
    # Rounding can push ``a`` marginally outside [0, 1] for antipodal points.
    a = min(max(a, 0.0), 1.0)
    c = 2.0 * atan2(sqrt(a), sqrt(1.0 - a))
    return _EARTH_RADIUS_M * c


def _clock_seconds(timestamp: str) -> int:
    hours = int(timestamp[0:2])
    minutes = int(timestamp[2:4])
    seconds = int(timestamp[4:6])
    return hours * 3600 + minutes * 60 + seconds


def time_diff_seconds(t1: str, t2: str) -> int:
    """Return ``t2 - t1`` in seconds for ``HHMMSS`` timestamps of the same day.

    There is no date rollover: a trip crossing midnight yields a negative delta.
    """

    return _clock_seconds(t2) - _clock_seconds(t1)


def format_clock(timestamp: str) -> str:
    """``HHMMSS`` -> ``HH:MM:SS``."""

    return f"{timestamp[0:2]}:{timestamp[2:4]}:{timestamp[4:6]}"


def compute_center(points: Iterable[Mapping[str, Any]]) -> LatLng:
    """Arithmetic mean of the latitudes and longitudes of ``points``."""

    coords = np.array(
        [(float(point["lat"]), float(point["lng"])) for point in points],
        dtype=np.float64,
    )
    if coords.size == 0:
        raise DegenerateTripError("Cannot compute the center of zero points")
    center = coords.mean(axis=0)
    return float(center[0]), float(center[1])


__all__ = [
    "compute_center",
    "distance_meters",
    "format_clock",
    "time_diff_seconds",
]
