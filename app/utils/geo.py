"""Geospatial helpers shared by the spatial index and the location store."""

from __future__ import annotations

import math

LatLng = tuple[float, float]

# Mean earth radius per supported distance unit.
EARTH_RADIUS = {
    "mi": 3958.7613,
    "km": 6371.0088,
    "m": 6371008.8,
}
DEFAULT_UNIT = "mi"


def earth_radius(unit: str) -> float:
    try:
        return EARTH_RADIUS[unit]
    except KeyError:
        raise ValueError(f"unsupported distance unit: {unit!r}") from None


def haversine_distance(point_a: LatLng, point_b: LatLng, *, unit: str = DEFAULT_UNIT) -> float:
    """Compute the great-circle distance between two ``(lat, lng)`` points.

    The intermediate value is clamped to avoid floating point drift near the poles
    and across the antimeridian.
    """

    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.asin(math.sqrt(a))
    return earth_radius(unit) * c


def haversine_distance_km(point_a: LatLng, point_b: LatLng) -> float:
    return haversine_distance(point_a, point_b, unit="km")


def degrees_for_distance(distance: float, *, unit: str = DEFAULT_UNIT) -> float:
    """Latitude degrees spanned by ``distance`` along a meridian."""
    return math.degrees(distance / earth_radius(unit))


__all__ = [
    "DEFAULT_UNIT",
    "EARTH_RADIUS",
    "LatLng",
    "degrees_for_distance",
    "earth_radius",
    "haversine_distance",
    "haversine_distance_km",
]
