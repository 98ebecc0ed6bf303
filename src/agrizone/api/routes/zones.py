"""API routes for zone validation and membership."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...models.results import CoreError
from ...schemas.zoning import (
    CoordinateValidationRequest,
    CoordinateValidationResponse,
    FarmerLocationModel,
    GeoPointModel,
    MembershipRequest,
    MembershipResponse,
    NearbyFarmerModel,
    NearbyFarmersRequest,
    NearbyFarmersResponse,
    OptimalZoneRequest,
    OptimalZoneResponse,
    WarningModel,
    ZoneDistanceModel,
    ZoneFarmersRequest,
    ZoneFarmersResponse,
    ZoneModel,
    ZoneOverlapModel,
    ZonesGeoJSONRequest,
    ZoneValidationRequest,
    ZoneValidationResponse,
)
from ...services.export.geojson import zones_to_geojson
from ...services.zoning.service import (
    find_farmers_in_zone,
    find_nearby_farmers,
    find_optimal_zone,
    resolve_zone_membership,
    validate_coordinates,
    validate_zone,
)
from ..errors import http_error

router = APIRouter(tags=["zones"])


def _point(model: GeoPointModel | None):
    return model.to_domain() if model is not None else None


def _zone_distance(item) -> ZoneDistanceModel:
    return ZoneDistanceModel(
        zone=ZoneModel.from_domain(item.zone),
        distance_km=item.distance_km,
        within_bounds=item.within_bounds,
    )


@router.post("/zones/validate", response_model=ZoneValidationResponse, status_code=status.HTTP_200_OK)
def validate(payload: ZoneValidationRequest) -> ZoneValidationResponse:
    """Check a zone candidate against existing zones and suggest a radius on overlap."""
    try:
        existing = [zone.to_domain() for zone in payload.existing_zones]
        report = validate_zone(payload.candidate(), existing, exclude_zone_id=payload.exclude_zone_id).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return ZoneValidationResponse(
        is_valid=report.is_valid,
        overlaps=[
            ZoneOverlapModel(
                other_zone_id=overlap.other_zone_id,
                center_distance_km=overlap.center_distance_km,
                overlaps=overlap.overlaps,
                overlap_distance_km=overlap.overlap_distance_km,
                overlap_percentage=overlap.overlap_percentage,
            )
            for overlap in report.overlaps
        ],
        suggested_radius_km=report.suggested_radius_km,
        message=report.message,
    )


@router.post("/coordinates/validate", response_model=CoordinateValidationResponse, status_code=status.HTTP_200_OK)
def coordinates(payload: CoordinateValidationRequest) -> CoordinateValidationResponse:
    try:
        report = validate_coordinates(payload.point.to_domain(), payload.precision).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return CoordinateValidationResponse(
        is_valid=report.is_valid,
        latitude_valid=report.latitude_valid,
        longitude_valid=report.longitude_valid,
        precision_valid=report.precision_valid,
        formatted_latitude=report.formatted_latitude,
        formatted_longitude=report.formatted_longitude,
        failed_checks=list(report.failed_checks),
        message=report.message,
    )


@router.post("/zones/membership", response_model=MembershipResponse, status_code=status.HTTP_200_OK)
def membership(payload: MembershipRequest) -> MembershipResponse:
    try:
        result = resolve_zone_membership(_point(payload.point), payload.zone.to_domain()).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return MembershipResponse(
        zone_id=result.zone_id,
        within_bounds=result.within_bounds,
        distance_km=result.distance_km,
        outside_by_km=result.outside_by_km,
        message=result.message,
    )


@router.post("/zones/optimal", response_model=OptimalZoneResponse, status_code=status.HTTP_200_OK)
def optimal(payload: OptimalZoneRequest) -> OptimalZoneResponse:
    try:
        zones = [zone.to_domain() for zone in payload.zones]
        result = find_optimal_zone(_point(payload.point), zones).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return OptimalZoneResponse(
        recommended=_zone_distance(result.recommended),
        alternatives=[_zone_distance(item) for item in result.alternatives],
        within_bounds=result.within_bounds,
        distance_km=result.distance_km,
        recommendation=result.recommendation,
    )


@router.post("/zones/nearby-farmers", response_model=NearbyFarmersResponse, status_code=status.HTTP_200_OK)
def nearby_farmers(payload: NearbyFarmersRequest) -> NearbyFarmersResponse:
    result = find_nearby_farmers(
        _point(payload.point),
        [farmer.to_domain() for farmer in payload.farmers],
        payload.max_distance_km,
    )
    if not result.success:
        raise http_error(result.error)
    return NearbyFarmersResponse(
        farmers=[
            NearbyFarmerModel(
                farmer_id=item.farmer.farmer_id,
                label=item.farmer.label,
                point=GeoPointModel.from_domain(item.farmer.point),
                distance_km=item.distance_km,
            )
            for item in result.data
        ],
        warnings=[WarningModel(code=w.code, message=w.message, farmer_id=w.farmer_id) for w in result.warnings],
    )


@router.post("/zones/farmers", response_model=ZoneFarmersResponse, status_code=status.HTTP_200_OK)
def zone_farmers(payload: ZoneFarmersRequest) -> ZoneFarmersResponse:
    try:
        zone = payload.zone.to_domain()
        inside = find_farmers_in_zone(zone, [farmer.to_domain() for farmer in payload.farmers])
        farmers = inside.unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return ZoneFarmersResponse(
        zone_id=zone.zone_id,
        farmers=[FarmerLocationModel.from_domain(farmer) for farmer in farmers],
        warnings=[WarningModel(code=w.code, message=w.message, farmer_id=w.farmer_id) for w in inside.warnings],
    )


@router.post("/zones/geojson", status_code=status.HTTP_200_OK)
def zones_geojson(payload: ZonesGeoJSONRequest) -> dict:
    """Zone outlines as a GeoJSON FeatureCollection for map overlays."""
    try:
        zones = [zone.to_domain() for zone in payload.zones]
    except CoreError as exc:
        raise http_error(exc) from exc
    return zones_to_geojson(zones)
