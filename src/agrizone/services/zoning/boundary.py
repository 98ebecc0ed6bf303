"""Overlap detection between circular zones."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import (
    MAX_ZONE_RADIUS_KM,
    MIN_ZONE_RADIUS_KM,
    Zone,
    ZoneCandidate,
    ZoneOverlap,
)
from ...models.results import ValidationError
from ..geospatial import distance_km, is_valid_latitude, is_valid_longitude

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BoundaryValidationResult:
    is_valid: bool
    overlaps: tuple[ZoneOverlap, ...]
    suggested_radius_km: Optional[float]
    message: str


def check_candidate(candidate: ZoneCandidate) -> None:
    """Raise ``ValidationError`` when the candidate's center or radius is out of range."""

    if not is_valid_latitude(candidate.center.latitude):
        raise ValidationError("Invalid latitude: must be between -90 and 90 degrees", field="latitude")
    if not is_valid_longitude(candidate.center.longitude):
        raise ValidationError("Invalid longitude: must be between -180 and 180 degrees", field="longitude")
    if not candidate.radius_km >= MIN_ZONE_RADIUS_KM:
        raise ValidationError(f"Zone radius too small: minimum {MIN_ZONE_RADIUS_KM} km", field="radius_km")
    if candidate.radius_km > MAX_ZONE_RADIUS_KM:
        raise ValidationError(f"Zone radius too large: maximum {MAX_ZONE_RADIUS_KM} km", field="radius_km")


def zone_overlap(candidate: ZoneCandidate, existing: Zone) -> ZoneOverlap:
    center_distance = distance_km(candidate.center, existing.center)
    combined_radius = candidate.radius_km + existing.radius_km
    overlaps = center_distance < combined_radius
    overlap_distance = combined_radius - center_distance if overlaps else 0.0
    return ZoneOverlap(
        other_zone_id=existing.zone_id,
        center_distance_km=center_distance,
        overlaps=overlaps,
        overlap_distance_km=overlap_distance,
        overlap_percentage=round(overlap_distance / candidate.radius_km * 100) if overlaps else 0,
    )


def suggest_radius(candidate: ZoneCandidate, existing_zones: Sequence[Zone]) -> float:
    """Largest advisory radius that keeps clear of every existing zone."""

    if not existing_zones:
        return candidate.radius_km
    min_slack = min(distance_km(candidate.center, zone.center) - zone.radius_km for zone in existing_zones)
    return max(MIN_ZONE_RADIUS_KM, min_slack * settings.suggested_radius_factor)


def validate_new_zone(
    candidate: ZoneCandidate,
    existing_zones: Sequence[Zone],
    exclude_zone_id: str | None = None,
) -> BoundaryValidationResult:
    check_candidate(candidate)

    considered = [zone for zone in existing_zones if zone.zone_id != exclude_zone_id]
    overlaps = [info for info in (zone_overlap(candidate, zone) for zone in considered) if info.overlaps]

    if overlaps:
        suggested: float | None = suggest_radius(candidate, considered)
        message = f"Zone overlaps with {len(overlaps)} existing zone(s)"
    else:
        suggested = None
        message = "Zone boundaries are valid"

    logger.info(
        f"Zone boundary validation at ({candidate.center.latitude}, {candidate.center.longitude}) "
        f"radius {candidate.radius_km} km: {len(overlaps)} overlap(s) against {len(considered)} zone(s)"
    )
    return BoundaryValidationResult(
        is_valid=not overlaps,
        overlaps=tuple(overlaps),
        suggested_radius_km=suggested,
        message=message,
    )
