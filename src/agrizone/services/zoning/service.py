"""High-level zoning operations returning ``Result`` envelopes."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import FarmerLocation, GeoPoint, Zone, ZoneCandidate
from ...models.results import CoreError, Result, ValidationError
from ..coordinates import CoordinateValidationResult, check_coordinates
from .boundary import BoundaryValidationResult, validate_new_zone
from .membership import (
    MembershipResult,
    NearbyFarmer,
    OptimalZoneResult,
    farmers_in_zone,
    farmers_within_radius,
    find_optimal_zone as _find_optimal_zone,
    is_within,
)

logger = logging.getLogger(__name__)


def validate_zone(
    candidate: ZoneCandidate,
    existing_zones: Sequence[Zone],
    exclude_zone_id: str | None = None,
) -> Result[BoundaryValidationResult]:
    try:
        result = validate_new_zone(candidate, existing_zones, exclude_zone_id=exclude_zone_id)
    except CoreError as exc:
        logger.warning(f"Zone validation rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(result, "Zone boundary validation completed")


def validate_coordinates(
    point: Optional[GeoPoint],
    precision: int | None = None,
) -> Result[CoordinateValidationResult]:
    """Validate a point; the payload reports each check even when it fails."""

    if point is None:
        return Result.fail(
            ValidationError("Coordinates required: location not provided", field="point", code="location_required")
        )
    try:
        result = check_coordinates(point, precision)
    except ValueError as exc:
        return Result.fail(ValidationError(str(exc), field="precision"))
    return Result.ok(result, "Coordinate validation completed")


def resolve_zone_membership(point: Optional[GeoPoint], zone: Zone) -> Result[MembershipResult]:
    try:
        result = is_within(point, zone)
    except CoreError as exc:
        logger.warning(f"Membership check for zone {zone.zone_id} rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(result, "Geospatial validation completed")


def find_optimal_zone(point: Optional[GeoPoint], candidate_zones: Sequence[Zone]) -> Result[OptimalZoneResult]:
    try:
        result = _find_optimal_zone(point, candidate_zones)
    except CoreError as exc:
        logger.warning(f"Optimal zone search failed: {exc.message}")
        return Result.fail(exc)
    return Result.ok(result, "Optimal zone found")


def update_zone_radius(zone: Zone, radius_km: float, existing_zones: Sequence[Zone]) -> Result[Zone]:
    """Return a resized copy of ``zone`` if the new circle clears its neighbours."""

    candidate = ZoneCandidate(center=zone.center, radius_km=radius_km, owner_id=zone.owner_id, name=zone.name)
    validation = validate_zone(candidate, existing_zones, exclude_zone_id=zone.zone_id)
    if not validation.success:
        return Result.fail(validation.error)
    report = validation.data
    if not report.is_valid:
        suggestion = f"; suggested radius {report.suggested_radius_km:.2f} km" if report.suggested_radius_km else ""
        return Result.fail(ValidationError(f"{report.message}{suggestion}", field="radius_km", code="zone_overlap"))
    return Result.ok(zone.with_radius(radius_km), "Zone radius updated")


def update_zone_comments(zone: Zone, comments: Optional[str]) -> Result[Zone]:
    return Result.ok(zone.with_comments(comments), "Zone comment updated successfully")


def find_nearby_farmers(
    point: Optional[GeoPoint],
    farmers: Sequence[FarmerLocation],
    max_distance_km: float,
) -> Result[list[NearbyFarmer]]:
    try:
        nearby, warnings = farmers_within_radius(point, farmers, max_distance_km)
    except CoreError as exc:
        return Result.fail(exc)
    return Result.ok(nearby, f"Found {len(nearby)} farmer(s) within {max_distance_km} km", warnings)


def find_farmers_in_zone(zone: Zone, farmers: Sequence[FarmerLocation]) -> Result[list[FarmerLocation]]:
    """Farmers whose location falls inside ``zone``; unusable locations come back as warnings."""

    inside, warnings = farmers_in_zone(zone, farmers)
    logger.info(f"Zone {zone.zone_id}: {len(inside)} of {len(farmers)} farmer(s) inside")
    return Result.ok(inside, f"Found {len(inside)} farmer(s) in zone {zone.zone_id}", warnings)
