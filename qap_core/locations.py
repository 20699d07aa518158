"""
Reference data for selectable project locations
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .errors import UnknownLocationError
from .jurisdictions import CALIFORNIA, TEXAS, get_jurisdiction

STATE_CITIES: Dict[str, List[str]] = {
    TEXAS: ["Houston", "Dallas", "Austin", "San Antonio", "Fort Worth"],
    CALIFORNIA: ["Los Angeles", "San Francisco", "San Diego", "Sacramento", "San Jose"],
}

CITY_ZIP_CODES: Dict[str, List[str]] = {
    # Texas
    "Houston": ["77001", "77002", "77003", "77004", "77005"],
    "Dallas": ["75201", "75202", "75203", "75204", "75205"],
    "Austin": ["78701", "78702", "78703", "78704", "78705"],
    "San Antonio": ["78201", "78202", "78203", "78204", "78205"],
    "Fort Worth": ["76101", "76102", "76103", "76104", "76105"],
    # California
    "Los Angeles": ["90001", "90002", "90003", "90004", "90005"],
    "San Francisco": ["94102", "94103", "94104", "94105", "94107"],
    "San Diego": ["92101", "92102", "92103", "92104", "92105"],
    "Sacramento": ["95811", "95812", "95813", "95814", "95815"],
    "San Jose": ["95101", "95102", "95103", "95106", "95109"],
}

# Placeholder geocoding: every address resolves to the state's centre
STATE_CENTERS: Dict[str, Tuple[float, float]] = {
    TEXAS: (31.9686, -99.9018),
    CALIFORNIA: (36.7783, -119.4179),
}

DEFAULT_MAP_CENTER: Tuple[float, float] = (37.7749, -122.4194)


@dataclass(frozen=True)
class Location:
    state: str
    city: str
    zip_code: str
    address: str
    lat: float
    lon: float

    @property
    def label(self) -> str:
        return f"{self.address}, {self.city}, {self.state}, {self.zip_code}"


def cities_for(state: str) -> List[str]:
    return list(STATE_CITIES.get(state, []))


def zip_codes_for(city: str) -> List[str]:
    return list(CITY_ZIP_CODES.get(city, []))


def resolve_location(state: str, city: str, zip_code: str, address: str) -> Location:
    """
    Resolve a form selection to a Location with coordinates.

    Raises UnknownJurisdictionError for unsupported states and
    UnknownLocationError when the city or ZIP is not listed for the state.
    """
    jurisdiction = get_jurisdiction(state).jurisdiction_id

    if city not in STATE_CITIES[jurisdiction]:
        raise UnknownLocationError(f"{city!r} is not a listed city in {jurisdiction}")
    if zip_code not in CITY_ZIP_CODES[city]:
        raise UnknownLocationError(f"{zip_code!r} is not a listed ZIP code for {city}")

    lat, lon = STATE_CENTERS[jurisdiction]
    return Location(
        state=jurisdiction,
        city=city,
        zip_code=zip_code,
        address=address.strip(),
        lat=lat,
        lon=lon,
    )
