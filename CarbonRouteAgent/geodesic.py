"""
Great-circle distance between geographic coordinates (haversine, mean Earth radius)
"""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinate:
    """Geographic point in decimal degrees"""
    latitude: float
    longitude: float


def great_circle_distance_km(a: Coordinate, b: Coordinate) -> float:
    """
    Straight-line distance over the sphere between two points (haversine).
    Symmetric, never negative, 0 for identical points.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(b.latitude - a.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Float error can push h a hair outside [0, 1]
    h = min(1.0, max(0.0, h))

    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))
