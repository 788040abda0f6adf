"""Central configuration for the trip summary builder.

All values are constants imported by the rest of the package. Adjust as needed
for your deployment. Every value can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# Storage layout
# ---------------------------------------------------------------------------
# Root holding raw day folders (YYYY-MM-DD/HHMMSS.json) and the generated
# data/ folder. Can be absolute or relative to the working directory.
DOCS_DIR = os.getenv("TRIP_DOCS_DIR", "docs")

# Sub-folder of DOCS_DIR receiving per-day summaries and the catalog.
SUMMARY_SUBDIR = os.getenv("TRIP_SUMMARY_SUBDIR", "data")
INDEX_FILENAME = "index.json"


# ---------------------------------------------------------------------------
# Trip reconstruction thresholds
# ---------------------------------------------------------------------------
# Steps faster than this (km/h) are flagged as speed anomalies.
MAX_CYCLING_SPEED_KMH = _env_float("MAX_CYCLING_SPEED_KMH", 50.0)

# Steps shorter than this (metres) count as resting.
REST_DISTANCE_THRESHOLD_M = _env_float("REST_DISTANCE_THRESHOLD_M", 50.0)

# Adjacent fixes further apart than this (seconds) start a new run.
MAX_TIME_GAP_S = _env_int("MAX_TIME_GAP_S", 300)

# Consecutive fixes closer than this (metres) collapse into one waypoint.
MIN_MOVEMENT_THRESHOLD_M = _env_float("MIN_MOVEMENT_THRESHOLD_M", 10.0)


# ---------------------------------------------------------------------------
# Summary labels
# ---------------------------------------------------------------------------
DEFAULT_PROJECT_NAME = os.getenv("TRIP_DEFAULT_PROJECT_NAME", "GPS Tracking")

# Route leg endpoints. The rest label is formatted with the 1-based stop number.
ROUTE_START_LABEL = os.getenv("TRIP_ROUTE_START_LABEL", "起點")
ROUTE_REST_LABEL = os.getenv("TRIP_ROUTE_REST_LABEL", "休息 {number}")
ROUTE_END_LABEL = os.getenv("TRIP_ROUTE_END_LABEL", "終點")


@dataclass(frozen=True, slots=True)
class PipelineThresholds:
    """Tunable thresholds shared by every reconstruction stage."""

    max_cycling_speed_kmh: float = 50.0
    rest_distance_threshold_m: float = 50.0
    max_time_gap_s: int = 300
    min_movement_threshold_m: float = 10.0

    @classmethod
    def from_config(cls) -> "PipelineThresholds":
        return cls(
            max_cycling_speed_kmh=MAX_CYCLING_SPEED_KMH,
            rest_distance_threshold_m=REST_DISTANCE_THRESHOLD_M,
            max_time_gap_s=MAX_TIME_GAP_S,
            min_movement_threshold_m=MIN_MOVEMENT_THRESHOLD_M,
        )


@dataclass(frozen=True, slots=True)
class RouteLabels:
    """Names given to the start, rest and end waypoints of route legs."""

    start: str = "起點"
    rest: str = "休息 {number}"
    end: str = "終點"

    @classmethod
    def from_config(cls) -> "RouteLabels":
        return cls(start=ROUTE_START_LABEL, rest=ROUTE_REST_LABEL, end=ROUTE_END_LABEL)

    def rest_label(self, number: int) -> str:
        return self.rest.format(number=number)
