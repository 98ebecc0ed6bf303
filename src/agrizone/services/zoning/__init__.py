"""Zone boundary validation and membership resolution."""

from .service import (
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
    "validate_zone",
    "validate_coordinates",
    "resolve_zone_membership",
    "find_optimal_zone",
    "update_zone_radius",
    "update_zone_comments",
    "find_nearby_farmers",
    "find_farmers_in_zone",
]
