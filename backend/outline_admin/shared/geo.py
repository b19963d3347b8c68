"""
Geographic utility functions.
"""
import math

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def haversine(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def track_length_km(path) -> float:
    """
    Calculate the length of a track.

    Args:
        path: Sequence of objects with latitude/longitude (e.g. Coordinate)

    Returns:
        Total distance in kilometers (0 for fewer than two points)
    """
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += haversine(a.latitude, a.longitude, b.latitude, b.longitude)
    return total
