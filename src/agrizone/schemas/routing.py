"""Routing request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Route, RouteStatus, RouteStop, StopStatus
from .zoning import FarmerLocationModel, GeoPointModel, WarningModel, ZoneModel


class RouteOptimizationRequest(BaseModel):
    start: GeoPointModel
    stops: List[FarmerLocationModel]
    average_speed_kmh: Optional[float] = Field(None, description="Defaults to the configured average speed.")


class PlannedStopModel(BaseModel):
    farmer_id: str
    sequence_order: int
    point: GeoPointModel
    label: Optional[str]
    distance_from_prev_km: float
    arrival_offset_min: float


class RouteOptimizationResponse(BaseModel):
    stops: List[PlannedStopModel]
    total_distance_km: float
    estimated_duration_minutes: int
    start_leg_km: float
    average_speed_kmh: float
    passes: int
    excluded_farmer_ids: List[str]
    warnings: List[WarningModel]


class RouteStopModel(BaseModel):
    stop_id: str
    route_id: str
    farmer_id: str
    sequence_order: int = Field(..., ge=1)
    point: GeoPointModel
    status: StopStatus = StopStatus.PENDING
    arrival_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    notes: Optional[str] = None
    label: Optional[str] = None

    def to_domain(self) -> RouteStop:
        return RouteStop(
            stop_id=self.stop_id,
            route_id=self.route_id,
            farmer_id=self.farmer_id,
            sequence_order=self.sequence_order,
            point=self.point.to_domain(),
            status=self.status,
            arrival_time=self.arrival_time,
            completion_time=self.completion_time,
            notes=self.notes,
            label=self.label,
        )

    @classmethod
    def from_domain(cls, stop: RouteStop) -> "RouteStopModel":
        return cls(
            stop_id=stop.stop_id,
            route_id=stop.route_id,
            farmer_id=stop.farmer_id,
            sequence_order=stop.sequence_order,
            point=GeoPointModel.from_domain(stop.point),
            status=stop.status,
            arrival_time=stop.arrival_time,
            completion_time=stop.completion_time,
            notes=stop.notes,
            label=stop.label,
        )


class RouteModel(BaseModel):
    route_id: str
    zone_id: str
    owner_id: str
    scheduled_date: date
    status: RouteStatus = RouteStatus.PLANNED
    stops: List[RouteStopModel] = Field(default_factory=list)
    total_distance_km: float = 0.0
    estimated_duration_minutes: int = 0

    def to_domain(self) -> Route:
        return Route(
            route_id=self.route_id,
            zone_id=self.zone_id,
            owner_id=self.owner_id,
            scheduled_date=self.scheduled_date,
            status=self.status,
            stops=tuple(stop.to_domain() for stop in self.stops),
            total_distance_km=self.total_distance_km,
            estimated_duration_minutes=self.estimated_duration_minutes,
        )

    @classmethod
    def from_domain(cls, route: Route) -> "RouteModel":
        return cls(
            route_id=route.route_id,
            zone_id=route.zone_id,
            owner_id=route.owner_id,
            scheduled_date=route.scheduled_date,
            status=route.status,
            stops=[RouteStopModel.from_domain(stop) for stop in route.ordered_stops()],
            total_distance_km=route.total_distance_km,
            estimated_duration_minutes=route.estimated_duration_minutes,
        )


class RoutePlanRequest(BaseModel):
    zone: ZoneModel
    farmers: List[FarmerLocationModel]
    owner_id: str
    scheduled_date: date
    average_speed_kmh: Optional[float] = None
    route_id: Optional[str] = None


class RouteStatisticsModel(BaseModel):
    stop_count: int
    completed_stops: int
    skipped_stops: int
    estimated_cost: float
    fuel_litres: float
    carbon_kg: float


class RouteResponse(BaseModel):
    route: RouteModel
    statistics: RouteStatisticsModel
    warnings: List[WarningModel] = Field(default_factory=list)


class RouteStatusRequest(BaseModel):
    route: RouteModel
    status: str


class StopStatusRequest(BaseModel):
    route: RouteModel
    stop_id: str
    status: str
    notes: Optional[str] = Field(None, description="Replaces the stop's notes when given.")


class RouteGeoJSONRequest(BaseModel):
    route: RouteModel
    start: Optional[GeoPointModel] = Field(None, description="Prepended to the route line, usually the zone center.")
