"""Pydantic request/response models for zoning endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import FarmerLocation, GeoPoint, Zone, ZoneCandidate


class GeoPointModel(BaseModel):
    latitude: float
    longitude: float

    def to_domain(self) -> GeoPoint:
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)

    @classmethod
    def from_domain(cls, point: GeoPoint) -> "GeoPointModel":
        return cls(latitude=point.latitude, longitude=point.longitude)


class ZoneModel(BaseModel):
    zone_id: str
    name: str
    center: GeoPointModel
    radius_km: float
    owner_id: str
    produce_type: Optional[str] = None
    comments: Optional[str] = None

    def to_domain(self) -> Zone:
        return Zone(
            zone_id=self.zone_id,
            name=self.name,
            center=self.center.to_domain(),
            radius_km=self.radius_km,
            owner_id=self.owner_id,
            produce_type=self.produce_type,
            comments=self.comments,
        )

    @classmethod
    def from_domain(cls, zone: Zone) -> "ZoneModel":
        return cls(
            zone_id=zone.zone_id,
            name=zone.name,
            center=GeoPointModel.from_domain(zone.center),
            radius_km=zone.radius_km,
            owner_id=zone.owner_id,
            produce_type=zone.produce_type,
            comments=zone.comments,
        )


class FarmerLocationModel(BaseModel):
    farmer_id: str
    point: Optional[GeoPointModel] = Field(default=None, description="Absent when the farmer has no location yet.")
    label: Optional[str] = None

    def to_domain(self) -> FarmerLocation:
        return FarmerLocation(
            farmer_id=self.farmer_id,
            point=self.point.to_domain() if self.point else None,
            label=self.label,
        )

    @classmethod
    def from_domain(cls, farmer: FarmerLocation) -> "FarmerLocationModel":
        return cls(
            farmer_id=farmer.farmer_id,
            point=GeoPointModel.from_domain(farmer.point) if farmer.point else None,
            label=farmer.label,
        )


class ZoneValidationRequest(BaseModel):
    center: GeoPointModel
    radius_km: float
    owner_id: Optional[str] = None
    name: Optional[str] = None
    existing_zones: List[ZoneModel] = Field(default_factory=list)
    exclude_zone_id: Optional[str] = None

    def candidate(self) -> ZoneCandidate:
        return ZoneCandidate(
            center=self.center.to_domain(),
            radius_km=self.radius_km,
            owner_id=self.owner_id,
            name=self.name,
        )


class ZoneOverlapModel(BaseModel):
    other_zone_id: str
    center_distance_km: float
    overlaps: bool
    overlap_distance_km: float
    overlap_percentage: int


class ZoneValidationResponse(BaseModel):
    is_valid: bool
    overlaps: List[ZoneOverlapModel]
    suggested_radius_km: Optional[float]
    message: str


class CoordinateValidationRequest(BaseModel):
    point: GeoPointModel
    precision: Optional[int] = Field(default=None, ge=0, le=15)


class CoordinateValidationResponse(BaseModel):
    is_valid: bool
    latitude_valid: bool
    longitude_valid: bool
    precision_valid: bool
    formatted_latitude: str
    formatted_longitude: str
    failed_checks: List[str]
    message: str


class MembershipRequest(BaseModel):
    point: Optional[GeoPointModel] = None
    zone: ZoneModel


class MembershipResponse(BaseModel):
    zone_id: str
    within_bounds: bool
    distance_km: float
    outside_by_km: float
    message: str


class OptimalZoneRequest(BaseModel):
    point: Optional[GeoPointModel] = None
    zones: List[ZoneModel] = Field(default_factory=list)


class ZoneDistanceModel(BaseModel):
    zone: ZoneModel
    distance_km: float
    within_bounds: bool


class OptimalZoneResponse(BaseModel):
    recommended: ZoneDistanceModel
    alternatives: List[ZoneDistanceModel]
    within_bounds: bool
    distance_km: float
    recommendation: str


class NearbyFarmersRequest(BaseModel):
    point: Optional[GeoPointModel] = None
    farmers: List[FarmerLocationModel] = Field(default_factory=list)
    max_distance_km: float = Field(10.0, description="Search radius in kilometres.")


class NearbyFarmerModel(BaseModel):
    farmer_id: str
    label: Optional[str]
    point: GeoPointModel
    distance_km: float


class WarningModel(BaseModel):
    code: str
    message: str
    farmer_id: Optional[str] = None


class NearbyFarmersResponse(BaseModel):
    farmers: List[NearbyFarmerModel]
    warnings: List[WarningModel]


class ZonesGeoJSONRequest(BaseModel):
    zones: List[ZoneModel]


class ZoneFarmersRequest(BaseModel):
    zone: ZoneModel
    farmers: List[FarmerLocationModel] = Field(default_factory=list)


class ZoneFarmersResponse(BaseModel):
    zone_id: str
    farmers: List[FarmerLocationModel]
    warnings: List[WarningModel]
