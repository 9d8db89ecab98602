"""
Geospatial helpers.

Every "near me" query in the service reduces to a haversine distance compared
against a radius, so the whole geometry layer is this one function.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push `h` a hair past 1 for antipodal points.
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, h)))


def within_radius(origin: GeoPoint, point: GeoPoint, radius_km: float) -> tuple[bool, float]:
    """Return `(distance <= radius_km, distance)`.

    A negative or NaN radius never matches; callers do not special-case it.
    """
    d = haversine_km(origin, point)
    return d <= radius_km, d
