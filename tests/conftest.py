"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable record / snapshot factories
so pipeline tests can describe trips as (time, lat, lng) tuples.
"""
from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trip_summary.config import PipelineThresholds
from trip_summary.models import FixPayload, Record


# --- Factory helpers -------------------------------------------------
def make_payload(lat, lng, addr="Main St", power="80%", project="Island Ride", dot_name="Bike 1"):
    return [
        {
            "GPS": [{"lat": lat, "lng": lng}],
            "addr": addr,
            "dot_Power": power,
            "pjName": project,
            "dot_name": dot_name,
        }
    ]


def make_record(timestamp, lat=None, lng=None, addr="Main St"):
    time = f"{timestamp[0:2]}:{timestamp[2:4]}:{timestamp[4:6]}"
    fix = None
    if lat is not None and lng is not None:
        fix = FixPayload.from_payload(make_payload(lat, lng, addr=addr))
    return Record(time=time, timestamp=timestamp, fix=fix)


def write_day(docs_dir: Path, iso_date: str, fixes) -> Path:
    """Write (HHMMSS, lat, lng) tuples as snapshot files of one day folder."""
    day_dir = docs_dir / iso_date
    day_dir.mkdir(parents=True, exist_ok=True)
    for timestamp, lat, lng in fixes:
        (day_dir / f"{timestamp}.json").write_text(
            json.dumps(make_payload(lat, lng), ensure_ascii=False), encoding="utf-8"
        )
    return day_dir


# A short ride along the equator: 0.001 deg of longitude is ~111 m.
RIDE_FIXES = [
    ("080000", 0.0, 0.0),
    ("080100", 0.0, 0.001),
    ("080200", 0.0, 0.0012),
    ("080300", 0.0, 0.0014),
    ("080400", 0.0, 0.0024),
    ("080500", 0.0, 0.0025),
]


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def thresholds():
    return PipelineThresholds()


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def payload_factory():
    return make_payload


@pytest.fixture
def ride_records():
    return [make_record(ts, lat, lng) for ts, lat, lng in RIDE_FIXES]


@pytest.fixture
def docs_dir(tmp_path):
    return tmp_path / "docs"


@pytest.fixture
def day_writer(docs_dir):
    def _write(iso_date, fixes=RIDE_FIXES):
        return write_day(docs_dir, iso_date, fixes)
    return _write
