from __future__ import annotations

import pytest
from pydantic import ValidationError

from pycarpark.models.availability import UNKNOWN, AvailabilitySnapshot
from pycarpark.models.facility import FacilityRecord
from pycarpark.models.geo import LatLng
from pycarpark.models.route import RouteResponse


def _feed(*entries: dict[str, object]) -> dict[str, object]:
    return {"items": [{"timestamp": "2024-05-01T10:15:00+08:00", "carpark_data": list(entries)}]}


def test_facility_record_from_catalog_row() -> None:
    record = FacilityRecord.model_validate(
        {"car_park_no": " HE12 ", "address": "BLK 78/81 REDHILL LANE", "lat": "1.2871", "lng": 103.8174, "car_park_type": "SURFACE"}
    )
    assert record.id == "HE12"
    assert record.coordinates == LatLng(1.2871, 103.8174)


@pytest.mark.parametrize("lat", [None, "", "--", "abc"])
def test_facility_record_missing_coordinates(lat: object) -> None:
    record = FacilityRecord.model_validate({"car_park_no": "X1", "address": "Somewhere", "lat": lat, "lng": 103.8})
    assert record.lat is None
    assert record.coordinates is None


def test_facility_record_is_immutable() -> None:
    record = FacilityRecord(id="C1", address="123 Main St", lat=1.3, lng=103.8)
    with pytest.raises(ValidationError):
        record.address = "elsewhere"  # type: ignore[misc]


def test_snapshot_parses_string_counts_and_first_info_block() -> None:
    snapshot = AvailabilitySnapshot.from_payload(
        _feed(
            {
                "carpark_number": "HE12",
                "update_datetime": "2024-05-01T10:14:26",
                "carpark_info": [
                    {"total_lots": "105", "lot_type": "C", "lots_available": "42"},
                    {"total_lots": "10", "lot_type": "Y", "lots_available": "3"},
                ],
            }
        )
    )
    assert snapshot.timestamp is not None
    assert snapshot.lots_available("HE12") == 42
    entry = snapshot.entry("HE12")
    assert entry is not None
    assert entry.carpark_info[0].total_lots == 105


def test_snapshot_unknown_for_missing_or_empty_entries() -> None:
    snapshot = AvailabilitySnapshot.from_payload(
        _feed(
            {"carpark_number": "EMPTY", "carpark_info": []},
            {"carpark_number": "NULL", "carpark_info": None},
            {"carpark_number": "BAD", "carpark_info": [{"lots_available": "--"}]},
            {"carpark_info": [{"lots_available": "9"}]},
        )
    )
    assert snapshot.lookup(["EMPTY", "NULL", "BAD", "MISSING"]) == {
        "EMPTY": UNKNOWN,
        "NULL": UNKNOWN,
        "BAD": UNKNOWN,
        "MISSING": UNKNOWN,
    }


def test_snapshot_lookup_is_scoped_to_requested_ids() -> None:
    snapshot = AvailabilitySnapshot.from_payload(
        _feed(
            {"carpark_number": "A", "carpark_info": [{"lots_available": 1}]},
            {"carpark_number": "B", "carpark_info": [{"lots_available": 2}]},
        )
    )
    assert snapshot.lookup(["B"]) == {"B": 2}


def test_snapshot_with_no_items_is_empty() -> None:
    assert AvailabilitySnapshot.from_payload({"items": []}).entries == {}


@pytest.mark.parametrize(
    "payload",
    [
        {"message": "Internal error"},
        {"items": "nope"},
        {"items": [{"carpark_data": {"not": "a list"}}]},
        ["not", "an", "object"],
    ],
)
def test_snapshot_rejects_malformed_payloads(payload: object) -> None:
    with pytest.raises(ValidationError):
        AvailabilitySnapshot.from_payload(payload)


def test_route_response_swaps_to_lat_lng() -> None:
    response = RouteResponse.model_validate(
        {
            "code": "Ok",
            "routes": [
                {
                    "geometry": {"coordinates": [[103.8198, 1.3521], [103.8201, 1.3530]]},
                    "distance": 1523.4,
                    "duration": 240.1,
                }
            ],
        }
    )
    path = response.routes[0].path()
    assert path == (LatLng(1.3521, 103.8198), LatLng(1.3530, 103.8201))
    assert all(point.is_valid for point in path)


def test_route_response_without_routes() -> None:
    assert RouteResponse.model_validate({"code": "NoRoute", "routes": None}).routes == ()
    assert RouteResponse.model_validate({"code": "Ok"}).routes == ()


def test_lat_lng_helpers() -> None:
    point = LatLng.from_lon_lat([103.8, 1.3])
    assert point == LatLng(1.3, 103.8)
    assert point.as_lon_lat() == "103.8,1.3"
    assert not LatLng(103.8, 1.3).is_valid
