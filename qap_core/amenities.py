"""
Nearby amenity records and the sources that produce them
"""
import asyncio
import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import numpy as np

from .errors import InvalidAmenityError

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0088
KM_PER_DEGREE = 111  # flat approximation used by the mock generator


class AmenityCategory(str, Enum):
    """Amenity categories recognized by the Development Location score"""
    HOSPITAL = "hospital"
    SCHOOL = "school"
    SUPERMARKET = "supermarket"
    RESTAURANT = "restaurant"
    TRANSIT_STOP = "transit_stop"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @classmethod
    def from_place_type(cls, place_type: str) -> Optional["AmenityCategory"]:
        """Map a Places-style type string onto a category, or None"""
        return PLACE_TYPE_CATEGORIES.get(place_type.strip().lower())


CATEGORY_LABELS: Dict[AmenityCategory, str] = {
    AmenityCategory.HOSPITAL: "Hospital",
    AmenityCategory.SCHOOL: "School",
    AmenityCategory.SUPERMARKET: "Grocery Store",
    AmenityCategory.RESTAURANT: "Restaurant",
    AmenityCategory.TRANSIT_STOP: "Transit Stop",
}

# Place type mappings (OSM / Google Places vocabulary)
PLACE_TYPE_CATEGORIES: Dict[str, AmenityCategory] = {
    **{t: AmenityCategory.HOSPITAL for t in ["hospital", "clinic", "doctors", "health"]},
    **{t: AmenityCategory.SCHOOL for t in [
        "school", "primary_school", "secondary_school", "kindergarten"
    ]},
    **{t: AmenityCategory.SUPERMARKET for t in [
        "supermarket", "grocery_or_supermarket", "grocery", "convenience_store"
    ]},
    **{t: AmenityCategory.RESTAURANT for t in [
        "restaurant", "cafe", "fast_food", "meal_takeaway", "food"
    ]},
    **{t: AmenityCategory.TRANSIT_STOP for t in [
        "transit_stop", "bus_station", "bus_stop", "subway_station",
        "train_station", "transit_station", "light_rail_station"
    ]},
}


@dataclass(frozen=True)
class AmenityRecord:
    """A point of interest near the project location"""
    category: AmenityCategory
    distance_km: float
    amenity_id: Optional[str] = None
    name: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.category, AmenityCategory):
            try:
                object.__setattr__(self, "category", AmenityCategory(self.category))
            except ValueError as e:
                raise InvalidAmenityError(f"Unknown amenity category: {self.category!r}") from e
        try:
            distance = float(self.distance_km)
        except (TypeError, ValueError) as e:
            raise InvalidAmenityError(f"Amenity distance must be a number, got {self.distance_km!r}") from e
        if math.isnan(distance) or distance < 0:
            raise InvalidAmenityError(f"Amenity distance must be non-negative, got {self.distance_km!r}")
        object.__setattr__(self, "distance_km", distance)

    @property
    def display_name(self) -> str:
        return self.name or self.category.label

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.amenity_id,
            "type": self.category.value,
            "name": self.display_name,
            "lat": self.lat,
            "lon": self.lon,
            "distance_km": self.distance_km,
        }


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres"""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


class AmenitySource:
    """Interface for anything that can list amenities around a point"""

    async def fetch_nearby_amenities(self, lat: float, lon: float) -> List[AmenityRecord]:
        raise NotImplementedError


class MockAmenitySource(AmenitySource):
    """
    Generates demo amenities around a location.

    Each category gets 0-3 amenities placed within +/-0.01 degrees of the
    origin. Pass a seed for reproducible output.
    """

    MAX_PER_CATEGORY = 3
    MAX_OFFSET_DEG = 0.01

    def __init__(self, seed: Optional[int] = None, delay_s: float = 1.5):
        self.seed = seed
        self.delay_s = delay_s
        self._rng = np.random.default_rng(seed)

    def generate(self, lat: float, lon: float) -> List[AmenityRecord]:
        amenities: List[AmenityRecord] = []

        for category in AmenityCategory:
            count = int(self._rng.integers(0, self.MAX_PER_CATEGORY + 1))

            for i in range(count):
                lat_offset = (self._rng.random() - 0.5) * 2 * self.MAX_OFFSET_DEG
                lon_offset = (self._rng.random() - 0.5) * 2 * self.MAX_OFFSET_DEG
                distance = round(math.hypot(lat_offset, lon_offset) * KM_PER_DEGREE, 1)

                amenities.append(AmenityRecord(
                    category=category,
                    distance_km=distance,
                    amenity_id=f"{category.value}-{i}",
                    name=f"{category.label} {i + 1}",
                    lat=lat + lat_offset,
                    lon=lon + lon_offset,
                ))

        logger.debug("Generated %d mock amenities around %.4f, %.4f", len(amenities), lat, lon)
        return amenities

    async def fetch_nearby_amenities(self, lat: float, lon: float) -> List[AmenityRecord]:
        if self.delay_s > 0:
            await asyncio.sleep(self.delay_s)
        return self.generate(lat, lon)


def records_from_places(places: Iterable[Dict], origin_lat: float, origin_lon: float) -> List[AmenityRecord]:
    """
    Convert place dictionaries into amenity records

    Args:
        places: Dicts with 'type' or 'types', and optionally 'name', 'lat',
            'lon' and 'distance_km'
        origin_lat: Latitude of the project location
        origin_lon: Longitude of the project location

    Returns:
        Records for every place with a recognized type, in input order
    """
    records: List[AmenityRecord] = []
    skipped = 0

    for index, place in enumerate(places):
        if not isinstance(place, dict):
            raise InvalidAmenityError(f"Place #{index} is not an object")

        place_types = place.get("types") or place.get("type") or ""
        if isinstance(place_types, str):
            place_types = [place_types]
        elif not isinstance(place_types, (list, tuple)):
            raise InvalidAmenityError(f"Place #{index} has malformed types: {place_types!r}")
        category = None
        for place_type in place_types:
            category = AmenityCategory.from_place_type(str(place_type))
            if category:
                break  # first matching type decides the category
        if category is None:
            skipped += 1
            continue

        try:
            lat = float(place["lat"]) if place.get("lat") is not None else None
            lon = float(place["lon"]) if place.get("lon") is not None else None
        except (TypeError, ValueError) as e:
            raise InvalidAmenityError(f"Place #{index} has non-numeric coordinates") from e

        distance = place.get("distance_km")
        if distance is None:
            if lat is None or lon is None:
                raise InvalidAmenityError(f"Place #{index} needs either distance_km or lat/lon")
            distance = haversine_km(origin_lat, origin_lon, lat, lon)

        try:
            record = AmenityRecord(
                category=category,
                distance_km=distance,
                amenity_id=place.get("id") or f"{category.value}-{index}",
                name=place.get("name"),
                lat=lat,
                lon=lon,
            )
        except InvalidAmenityError as e:
            raise InvalidAmenityError(f"Place #{index}: {e}") from e
        records.append(record)

    if skipped:
        logger.debug("Skipped %d places with unrecognized types", skipped)
    return records


class JsonAmenitySource(AmenitySource):
    """Reads a previously captured list of places from a JSON file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self, lat: float, lon: float) -> List[AmenityRecord]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise InvalidAmenityError(f"Amenity file not found: {self.path}") from e
        except json.JSONDecodeError as e:
            raise InvalidAmenityError(f"Amenity file is not valid JSON: {self.path}") from e

        if isinstance(data, dict):
            data = data.get("amenities", data.get("results", []))
        if not isinstance(data, list):
            raise InvalidAmenityError(f"Expected a list of places in {self.path}")

        return records_from_places(data, lat, lon)

    async def fetch_nearby_amenities(self, lat: float, lon: float) -> List[AmenityRecord]:
        return self.load(lat, lon)
