"""Domain models for zones, farmer locations and pickup routes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional

from .results import ValidationError

MIN_ZONE_RADIUS_KM = 0.1
MAX_ZONE_RADIUS_KM = 100.0


class RouteStatus(str, Enum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class StopStatus(str, Enum):
    PENDING = "PENDING"
    ARRIVED = "ARRIVED"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees.

    Construction does not range-check so that validators can report which
    component is wrong; use :meth:`checked` when a valid point is required.
    """

    latitude: float
    longitude: float

    @classmethod
    def checked(cls, latitude: float, longitude: float) -> "GeoPoint":
        point = cls(float(latitude), float(longitude))
        if not _in_range(point.latitude, 90.0):
            raise ValidationError(
                "Invalid latitude: must be between -90 and 90 degrees", field="latitude"
            )
        if not _in_range(point.longitude, 180.0):
            raise ValidationError(
                "Invalid longitude: must be between -180 and 180 degrees", field="longitude"
            )
        return point

    @property
    def is_valid(self) -> bool:
        return _in_range(self.latitude, 90.0) and _in_range(self.longitude, 180.0)

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


def _in_range(value: float, limit: float) -> bool:
    return math.isfinite(value) and -limit <= value <= limit


def _coerce_status(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown status '{value}'", field="status") from exc


@dataclass(frozen=True, slots=True)
class ZoneCandidate:
    """An unvalidated request to create a zone."""

    center: GeoPoint
    radius_km: float
    owner_id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Zone:
    """A circular operational area owned by an exporter or supervisor."""

    zone_id: str
    name: str
    center: GeoPoint
    radius_km: float
    owner_id: str
    produce_type: Optional[str] = None
    comments: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.center.is_valid:
            raise ValidationError(f"Zone {self.zone_id} has an invalid center", field="center")
        if not MIN_ZONE_RADIUS_KM <= self.radius_km <= MAX_ZONE_RADIUS_KM:
            raise ValidationError(
                f"Zone radius must be between {MIN_ZONE_RADIUS_KM} and {MAX_ZONE_RADIUS_KM} km",
                field="radius_km",
            )

    def with_comments(self, comments: Optional[str]) -> "Zone":
        return replace(self, comments=comments)

    def with_radius(self, radius_km: float) -> "Zone":
        return replace(self, radius_km=radius_km)


@dataclass(frozen=True, slots=True)
class ZoneOverlap:
    other_zone_id: str
    center_distance_km: float
    overlaps: bool
    overlap_distance_km: float
    overlap_percentage: int


@dataclass(frozen=True, slots=True)
class FarmerLocation:
    """A farmer's pickup location; ``point`` is ``None`` when none is recorded."""

    farmer_id: str
    point: Optional[GeoPoint] = None
    label: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RouteStop:
    stop_id: str
    route_id: str
    farmer_id: str
    sequence_order: int
    point: GeoPoint
    status: StopStatus = StopStatus.PENDING
    arrival_time: Optional[datetime] = None
    completion_time: Optional[datetime] = None
    notes: Optional[str] = None
    label: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", _coerce_status(StopStatus, self.status))
        if self.sequence_order < 1:
            raise ValidationError("sequence_order must be >= 1", field="sequence_order")


@dataclass(frozen=True, slots=True)
class Route:
    """A planned field-collection trip through a zone."""

    route_id: str
    zone_id: str
    owner_id: str
    scheduled_date: date
    status: RouteStatus = RouteStatus.PLANNED
    stops: tuple[RouteStop, ...] = field(default_factory=tuple)
    total_distance_km: float = 0.0
    estimated_duration_minutes: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", _coerce_status(RouteStatus, self.status))
        orders = sorted(stop.sequence_order for stop in self.stops)
        if orders != list(range(1, len(self.stops) + 1)):
            raise ValidationError(
                f"Route {self.route_id} stop sequence must be contiguous from 1, got {orders}",
                field="stops",
            )

    @property
    def is_terminal(self) -> bool:
        return self.status in (RouteStatus.COMPLETED, RouteStatus.CANCELLED)

    def ordered_stops(self) -> list[RouteStop]:
        return sorted(self.stops, key=lambda stop: stop.sequence_order)

    def stop_by_id(self, stop_id: str) -> Optional[RouteStop]:
        return next((stop for stop in self.stops if stop.stop_id == stop_id), None)
