import asyncio
import json
import math

import pytest

from qap_core.amenities import (
    AmenityCategory,
    EARTH_RADIUS_KM,
    AmenityRecord,
    JsonAmenitySource,
    MockAmenitySource,
    haversine_km,
    records_from_places,
)
from qap_core.errors import InvalidAmenityError


def test_record_rejects_negative_distance():
    with pytest.raises(InvalidAmenityError):
        AmenityRecord(AmenityCategory.SCHOOL, -0.1)


def test_record_accepts_category_string():
    record = AmenityRecord("transit_stop", 1)
    assert record.category is AmenityCategory.TRANSIT_STOP
    assert record.distance_km == 1.0
    assert record.display_name == "Transit Stop"


def test_record_rejects_unknown_category():
    with pytest.raises(InvalidAmenityError):
        AmenityRecord("park", 1.0)


def test_place_type_mapping():
    assert AmenityCategory.from_place_type("bus_station") is AmenityCategory.TRANSIT_STOP
    assert AmenityCategory.from_place_type("grocery_or_supermarket") is AmenityCategory.SUPERMARKET
    assert AmenityCategory.from_place_type("cafe") is AmenityCategory.RESTAURANT
    assert AmenityCategory.from_place_type("museum") is None


def test_mock_source_is_reproducible_with_seed():
    a = MockAmenitySource(seed=7, delay_s=0).generate(30.0, -97.0)
    b = MockAmenitySource(seed=7, delay_s=0).generate(30.0, -97.0)
    assert a == b


def test_mock_source_shape():
    amenities = MockAmenitySource(seed=123, delay_s=0).generate(31.9686, -99.9018)
    for category in AmenityCategory:
        matching = [a for a in amenities if a.category is category]
        assert 0 <= len(matching) <= 3
        assert [a.amenity_id for a in matching] == [f"{category.value}-{i}" for i in range(len(matching))]
    for a in amenities:
        assert abs(a.lat - 31.9686) <= 0.01 + 1e-9
        assert abs(a.lon + 99.9018) <= 0.01 + 1e-9
        assert 0 <= a.distance_km <= 1.6
        assert a.distance_km == round(a.distance_km, 1)


def test_mock_fetch_is_async():
    source = MockAmenitySource(seed=1, delay_s=0)
    amenities = asyncio.run(source.fetch_nearby_amenities(36.7783, -119.4179))
    assert amenities == MockAmenitySource(seed=1, delay_s=0).generate(36.7783, -119.4179)


def test_mock_fetch_can_be_cancelled():
    async def run():
        task = asyncio.ensure_future(MockAmenitySource(delay_s=10).fetch_nearby_amenities(0.0, 0.0))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return task.cancelled()

    assert asyncio.run(run()) is True


def test_haversine_one_degree_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.2, abs=0.1)


def test_records_from_places_skips_unknown_and_computes_distance():
    places = [
        {"types": ["museum"], "name": "Art Museum", "lat": 30.0, "lon": -97.0},
        {"types": ["point_of_interest", "hospital"], "name": "General", "lat": 30.01, "lon": -97.0},
        {"type": "school", "name": "Elementary", "distance_km": 0.4},
    ]
    records = records_from_places(places, 30.0, -97.0)
    assert [r.category for r in records] == [AmenityCategory.HOSPITAL, AmenityCategory.SCHOOL]
    assert records[0].distance_km == pytest.approx(1.11, abs=0.01)
    assert records[1].distance_km == 0.4


def test_records_from_places_requires_position():
    with pytest.raises(InvalidAmenityError):
        records_from_places([{"type": "school"}], 30.0, -97.0)


def test_json_source(tmp_path):
    path = tmp_path / "places.json"
    path.write_text(json.dumps({"amenities": [
        {"type": "supermarket", "name": "H-E-B", "distance_km": 1.2},
        {"type": "bus_station", "distance_km": 0.3},
    ]}), encoding="utf-8")
    records = asyncio.run(JsonAmenitySource(path).fetch_nearby_amenities(30.0, -97.0))
    assert [r.category.value for r in records] == ["supermarket", "transit_stop"]
    assert records[0].name == "H-E-B"


def test_json_source_missing_file(tmp_path):
    with pytest.raises(InvalidAmenityError):
        JsonAmenitySource(tmp_path / "missing.json").load(0.0, 0.0)


def test_record_rejects_non_numeric_distance():
    with pytest.raises(InvalidAmenityError):
        AmenityRecord(AmenityCategory.SCHOOL, "near")
    with pytest.raises(InvalidAmenityError):
        AmenityRecord(AmenityCategory.SCHOOL, None)


def test_records_from_places_rejects_non_numeric_values():
    with pytest.raises(InvalidAmenityError, match="Place #0"):
        records_from_places([{"type": "school", "distance_km": "near"}], 30.0, -97.0)
    with pytest.raises(InvalidAmenityError, match="Place #1"):
        records_from_places([
            {"type": "school", "distance_km": 1.0},
            {"type": "school", "lat": "abc", "lon": 1},
        ], 30.0, -97.0)
    with pytest.raises(InvalidAmenityError):
        records_from_places([{"type": "school", "lat": [30], "lon": -97.0}], 30.0, -97.0)


def test_records_from_places_accepts_scalar_types_string():
    records = records_from_places([{"types": "hospital", "distance_km": 1.0}], 30.0, -97.0)
    assert len(records) == 1
    assert records[0].category is AmenityCategory.HOSPITAL


def test_records_from_places_rejects_malformed_types():
    with pytest.raises(InvalidAmenityError):
        records_from_places([{"types": {"kind": "hospital"}, "distance_km": 1.0}], 30.0, -97.0)
    with pytest.raises(InvalidAmenityError):
        records_from_places([{"types": 7, "distance_km": 1.0}], 30.0, -97.0)


def test_haversine_antipodal_points():
    assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(EARTH_RADIUS_KM * math.pi)
    assert haversine_km(45.0, 10.0, -45.0, -170.0) == pytest.approx(EARTH_RADIUS_KM * math.pi)
