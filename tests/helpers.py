from qap_core.amenities import AmenityCategory, AmenityRecord


def make_amenity(category, distance_km, **kwargs):
    return AmenityRecord(category=AmenityCategory(category), distance_km=distance_km, **kwargs)
