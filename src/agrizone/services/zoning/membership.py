"""Point-in-zone tests and best-zone search for farmer locations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import FarmerLocation, GeoPoint, Zone
from ...models.results import GeometryWarning, NotFoundError, ValidationError
from ..geospatial import distance_km

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MembershipResult:
    zone_id: str
    within_bounds: bool
    distance_km: float
    outside_by_km: float
    message: str


@dataclass(frozen=True, slots=True)
class ZoneDistance:
    zone: Zone
    distance_km: float
    within_bounds: bool


@dataclass(frozen=True, slots=True)
class OptimalZoneResult:
    recommended: ZoneDistance
    alternatives: tuple[ZoneDistance, ...]
    recommendation: str

    @property
    def within_bounds(self) -> bool:
        return self.recommended.within_bounds

    @property
    def distance_km(self) -> float:
        return self.recommended.distance_km


@dataclass(frozen=True, slots=True)
class NearbyFarmer:
    farmer: FarmerLocation
    distance_km: float


def require_point(point: Optional[GeoPoint]) -> GeoPoint:
    if point is None:
        raise ValidationError("Farmer location not available: location required", field="point", code="location_required")
    if not point.is_valid:
        raise ValidationError("Invalid coordinates provided", field="point")
    return point


def is_within(point: GeoPoint, zone: Zone) -> MembershipResult:
    point = require_point(point)
    distance = distance_km(point, zone.center)
    within = distance <= zone.radius_km
    outside_by = 0.0 if within else distance - zone.radius_km
    message = (
        "Farmer is within zone boundaries"
        if within
        else f"Farmer is {outside_by:.2f} km outside zone boundaries"
    )
    return MembershipResult(
        zone_id=zone.zone_id,
        within_bounds=within,
        distance_km=distance,
        outside_by_km=outside_by,
        message=message,
    )


def rank_zones(point: GeoPoint, zones: Sequence[Zone]) -> list[ZoneDistance]:
    ranked = []
    for zone in zones:
        distance = distance_km(point, zone.center)
        ranked.append(ZoneDistance(zone=zone, distance_km=distance, within_bounds=distance <= zone.radius_km))
    ranked.sort(key=lambda item: (item.distance_km, item.zone.zone_id))
    return ranked


def find_optimal_zone(
    point: Optional[GeoPoint],
    candidate_zones: Sequence[Zone],
    max_alternatives: int | None = None,
) -> OptimalZoneResult:
    if not candidate_zones:
        raise NotFoundError("No zones available", code="no_zones")
    point = require_point(point)

    limit = settings.max_alternative_zones if max_alternatives is None else max_alternatives
    ranked = rank_zones(point, candidate_zones)
    chosen = next((item for item in ranked if item.within_bounds), ranked[0])
    alternatives = tuple(item for item in ranked if item is not chosen)[:limit]

    if chosen.within_bounds:
        recommendation = f"Farmer is within {chosen.zone.name} zone boundaries"
    else:
        recommendation = (
            f"Farmer is closest to {chosen.zone.name} but outside boundaries. "
            "Consider expanding zone or creating new zone."
        )

    logger.info(
        f"Optimal zone for ({point.latitude}, {point.longitude}): {chosen.zone.zone_id} "
        f"({chosen.distance_km:.3f} km, within={chosen.within_bounds})"
    )
    return OptimalZoneResult(recommended=chosen, alternatives=alternatives, recommendation=recommendation)


def _location_warning(farmer: FarmerLocation) -> Optional[GeometryWarning]:
    """Warning for a farmer whose location cannot be used, else ``None``."""

    if farmer.point is None:
        return GeometryWarning(
            code="missing_location",
            message=f"Farmer {farmer.farmer_id} has no location and was skipped",
            farmer_id=farmer.farmer_id,
        )
    if not farmer.point.is_valid:
        return GeometryWarning(
            code="invalid_location",
            message=f"Farmer {farmer.farmer_id} has invalid coordinates and was skipped",
            farmer_id=farmer.farmer_id,
        )
    return None


def farmers_within_radius(
    point: GeoPoint,
    farmers: Sequence[FarmerLocation],
    max_distance_km: float,
) -> tuple[list[NearbyFarmer], list[GeometryWarning]]:
    """Farmers within ``max_distance_km`` of ``point``, nearest first."""

    point = require_point(point)
    if not max_distance_km >= 0:
        raise ValidationError("max_distance_km must be >= 0", field="max_distance_km")

    nearby: list[NearbyFarmer] = []
    warnings: list[GeometryWarning] = []
    for farmer in farmers:
        warning = _location_warning(farmer)
        if warning is not None:
            warnings.append(warning)
            continue
        distance = distance_km(point, farmer.point)
        if distance <= max_distance_km:
            nearby.append(NearbyFarmer(farmer=farmer, distance_km=distance))
    nearby.sort(key=lambda item: (item.distance_km, item.farmer.farmer_id))
    return nearby, warnings


def farmers_in_zone(
    zone: Zone,
    farmers: Sequence[FarmerLocation],
) -> tuple[list[FarmerLocation], list[GeometryWarning]]:
    inside: list[FarmerLocation] = []
    warnings: list[GeometryWarning] = []
    for farmer in farmers:
        warning = _location_warning(farmer)
        if warning is not None:
            warnings.append(warning)
        elif distance_km(farmer.point, zone.center) <= zone.radius_km:
            inside.append(farmer)
    return inside, warnings
