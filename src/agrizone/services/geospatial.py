"""Geospatial helper functions."""

from __future__ import annotations

import math

from shapely.geometry import Point, Polygon

from ..config import settings
from ..models.domain import GeoPoint

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE = 111.3199


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres."""

    if a == b:
        return 0.0
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def is_valid_latitude(latitude: float) -> bool:
    return math.isfinite(latitude) and -90.0 <= latitude <= 90.0


def is_valid_longitude(longitude: float) -> bool:
    return math.isfinite(longitude) and -180.0 <= longitude <= 180.0


def circle_polygon(center: GeoPoint, radius_km: float, segments: int | None = None) -> Polygon:
    """Approximate a circular zone as a polygon in (lon, lat) order.

    The radius is converted to degrees with a flat equatorial factor, which is
    good enough for drawing outlines but not for area calculations.
    """

    quad_segs = segments or settings.circle_polygon_segments
    return Point(center.longitude, center.latitude).buffer(radius_km / KM_PER_DEGREE, quad_segs=quad_segs)
