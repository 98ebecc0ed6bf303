"""Geospatial zone management and pickup-route optimization core."""

from .models.domain import (
    FarmerLocation,
    GeoPoint,
    Route,
    RouteStatus,
    RouteStop,
    StopStatus,
    Zone,
    ZoneCandidate,
    ZoneOverlap,
)
from .models.results import (
    CoreError,
    GeometryWarning,
    NotFoundError,
    Result,
    TransitionError,
    ValidationError,
)
from .services.routing import (
    optimize_route,
    plan_route,
    reoptimize_route,
    summarize_route,
    transition_route_status,
    transition_stop_status,
    update_route_stop,
)
from .services.zoning import (
    find_farmers_in_zone,
    find_nearby_farmers,
    find_optimal_zone,
    resolve_zone_membership,
    update_zone_comments,
    update_zone_radius,
    validate_coordinates,
    validate_zone,
)

__all__ = [
    "GeoPoint",
    "Zone",
    "ZoneCandidate",
    "ZoneOverlap",
    "FarmerLocation",
    "Route",
    "RouteStop",
    "RouteStatus",
    "StopStatus",
    "Result",
    "CoreError",
    "ValidationError",
    "NotFoundError",
    "TransitionError",
    "GeometryWarning",
    "validate_zone",
    "validate_coordinates",
    "resolve_zone_membership",
    "find_optimal_zone",
    "update_zone_radius",
    "update_zone_comments",
    "find_nearby_farmers",
    "find_farmers_in_zone",
    "optimize_route",
    "plan_route",
    "reoptimize_route",
    "summarize_route",
    "transition_route_status",
    "transition_stop_status",
    "update_route_stop",
]
