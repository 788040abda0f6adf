import math

import pytest

from trip_summary.errors import DegenerateTripError
from trip_summary.geo import compute_center, distance_meters, format_clock, time_diff_seconds

PAIRS = [
    ((0.0, 0.0), (0.0, 1.0)),
    ((25.0330, 121.5654), (22.6273, 120.3014)),
    ((-33.8688, 151.2093), (51.5074, -0.1278)),
    ((89.9, 10.0), (-89.9, -170.0)),
]


@pytest.mark.parametrize("a,b", PAIRS)
def test_distance_is_symmetric(a, b) -> None:
    assert distance_meters(*a, *b) == distance_meters(*b, *a)


@pytest.mark.parametrize("a,_b", PAIRS)
def test_distance_zero_for_identical_points(a, _b) -> None:
    assert distance_meters(*a, *a) == 0.0


def test_distance_one_degree_on_equator() -> None:
    expected = 6_371_000.0 * math.radians(1.0)
    assert distance_meters(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected, rel=1e-9)


def test_distance_antipodal_is_half_circumference() -> None:
    distance = distance_meters(0.0, 0.0, 0.0, 180.0)
    assert distance >= 0.0
    assert distance == pytest.approx(math.pi * 6_371_000.0, rel=1e-9)


def test_time_diff_seconds() -> None:
    assert time_diff_seconds("100000", "100510") == 310
    assert time_diff_seconds("095959", "100000") == 1
    assert time_diff_seconds("100000", "100000") == 0


def test_time_diff_can_be_negative_without_rollover() -> None:
    # No date rollover: a fix just after midnight appears to precede the earlier one.
    assert time_diff_seconds("235959", "000001") == -86398


def test_format_clock() -> None:
    assert format_clock("083015") == "08:30:15"


def test_compute_center_is_mean() -> None:
    center = compute_center([{"lat": 1.0, "lng": 10.0}, {"lat": 3.0, "lng": 20.0}])
    assert center == pytest.approx((2.0, 15.0))


def test_compute_center_rejects_empty() -> None:
    with pytest.raises(DegenerateTripError):
        compute_center([])
