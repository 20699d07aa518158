"""
Folium map of the project location and its nearby amenities
"""
from datetime import datetime
from typing import Optional, Sequence

import folium

from .amenities import AmenityRecord
from .locations import DEFAULT_MAP_CENTER, Location

DEFAULT_ZOOM = 12

CATEGORY_COLORS = {
    "hospital": "red",
    "school": "orange",
    "supermarket": "green",
    "restaurant": "purple",
    "transit_stop": "blue",
}


def build_location_map(location: Optional[Location], amenities: Sequence[AmenityRecord] = ()) -> folium.Map:
    """
    Build a map centred on the project with one marker per amenity

    Amenities without coordinates are left off the map. When any amenity is
    plotted the view is fitted to all markers.
    """
    center = (location.lat, location.lon) if location else DEFAULT_MAP_CENTER
    m = folium.Map(location=list(center), zoom_start=DEFAULT_ZOOM, tiles="OpenStreetMap")

    if location is None:
        return m

    folium.Marker(
        [location.lat, location.lon],
        popup="<b>Project Location</b>",
        tooltip=location.label,
        icon=folium.Icon(color="red", icon="home"),
    ).add_to(m)

    points = [[location.lat, location.lon]]
    for amenity in amenities:
        if amenity.lat is None or amenity.lon is None:
            continue
        folium.Marker(
            [amenity.lat, amenity.lon],
            popup=f"<b>{amenity.display_name}</b><br>Distance: {amenity.distance_km:g} km",
            tooltip=amenity.category.label,
            icon=folium.Icon(color=CATEGORY_COLORS.get(amenity.category.value, "gray"), icon="info-sign"),
        ).add_to(m)
        points.append([amenity.lat, amenity.lon])

    if len(points) > 1:
        m.fit_bounds(points, padding=(50, 50))

    return m


def map_widget_key(location: Optional[Location], amenities: Sequence[AmenityRecord] = (),
                   generated_at: Optional[datetime] = None) -> str:
    """Widget key that changes whenever the plotted location or results change"""
    label = location.label if location else "none"
    stamp = generated_at.isoformat() if generated_at else "none"
    return f"qap_map_{label}_{len(amenities)}_{stamp}"
