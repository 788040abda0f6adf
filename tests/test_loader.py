import pytest

from trip_summary.errors import MalformedPayloadError
from trip_summary.loader import load_records, records_from_payloads
from trip_summary.models import FixPayload


def test_records_sorted_and_wrapped(payload_factory) -> None:
    payloads = {
        "081500": payload_factory(0.0, 0.002),
        "080000": payload_factory(0.0, 0.0),
        "080730": payload_factory(0.0, 0.001),
    }
    records = records_from_payloads(payloads)
    assert [r.timestamp for r in records] == ["080000", "080730", "081500"]
    assert [r.time for r in records] == ["08:00:00", "08:07:30", "08:15:00"]
    assert records[1].fix.lng == 0.001
    assert records[0].stationary_until == ""
    assert records[0].stationary_duration == 0


def test_malformed_payloads_are_dropped(payload_factory) -> None:
    payloads = {
        "080000": payload_factory(0.0, 0.0),
        "080100": None,
        "080200": [],
        "080300": [{"addr": "no position"}],
        "080400": [{"GPS": [{"lat": "north", "lng": 1.0}]}],
        "notime": payload_factory(0.0, 0.0),
        "080500": payload_factory(0.0, 0.001),
    }
    records = records_from_payloads(payloads)
    assert [r.timestamp for r in records] == ["080000", "080500"]


def test_flat_payload_shape_is_accepted() -> None:
    records = records_from_payloads(
        {"120000": [{"lat": "25.03", "lng": 121.56, "addr": "Taipei"}]}
    )
    assert len(records) == 1
    fix = records[0].fix
    assert fix.position == (25.03, 121.56)
    assert fix.addr == "Taipei"
    assert fix.power == ""
    assert fix.project_name is None


def test_only_first_list_entry_is_used(payload_factory) -> None:
    payload = payload_factory(1.0, 2.0) + payload_factory(5.0, 6.0)
    fix = FixPayload.from_payload(payload)
    assert fix.position == (1.0, 2.0)


def test_fix_defaults_for_missing_fields() -> None:
    fix = FixPayload.from_payload([{"GPS": [{"lat": 1, "lng": 2}], "dot_Power": None}])
    assert fix.addr == ""
    assert fix.power == ""
    assert fix.dot_name == ""
    assert fix.point == {"lat": 1, "lng": 2}


def test_from_payload_rejects_non_list() -> None:
    with pytest.raises(MalformedPayloadError):
        FixPayload.from_payload({"GPS": []})


def test_load_records_from_directory(tmp_path, day_writer) -> None:
    day_dir = day_writer("2024-01-01", [("080100", 0.0, 0.001), ("080000", 0.0, 0.0)])
    (day_dir / "080200.json").write_text("{not json", encoding="utf-8")
    records = load_records(day_dir)
    assert [r.timestamp for r in records] == ["080000", "080100"]


def test_load_records_empty_directory(tmp_path) -> None:
    assert load_records(tmp_path) == []


@pytest.mark.parametrize("lat", [float("inf"), float("nan"), "nan", "-Infinity"])
def test_non_finite_coordinates_are_dropped(payload_factory, lat) -> None:
    payloads = {
        "080000": payload_factory(0.0, 0.0),
        "080100": [{"GPS": [{"lat": lat, "lng": 0.0}]}],
        "080200": payload_factory(0.0, 0.001),
    }
    records = records_from_payloads(payloads)
    assert [r.timestamp for r in records] == ["080000", "080200"]


def test_load_records_drops_infinity_literal(day_writer) -> None:
    day_dir = day_writer("2024-01-01", [("080000", 0.0, 0.0), ("080200", 0.0, 0.001)])
    (day_dir / "080100.json").write_text(
        '[{"GPS": [{"lat": Infinity, "lng": 0.0}]}]', encoding="utf-8"
    )
    (day_dir / "080130.json").write_text(
        '[{"GPS": [{"lat": NaN, "lng": 0.0}]}]', encoding="utf-8"
    )
    records = load_records(day_dir)
    assert [r.timestamp for r in records] == ["080000", "080200"]


def test_project_name_keeps_explicit_empty_value() -> None:
    fix = FixPayload.from_payload([{"GPS": [{"lat": 1, "lng": 2}], "pjName": ""}])
    assert fix.project_name == ""
    fix = FixPayload.from_payload([{"GPS": [{"lat": 1, "lng": 2}], "pjName": None}])
    assert fix.project_name is None
