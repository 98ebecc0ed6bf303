"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...models.domain import GeoPoint
from ...models.results import GeometryWarning


@dataclass(frozen=True, slots=True)
class PlannedStop:
    farmer_id: str
    sequence_order: int
    point: GeoPoint
    distance_from_prev_km: float
    arrival_offset_min: float
    label: Optional[str] = None


@dataclass(frozen=True, slots=True)
class OptimizedRoute:
    start: GeoPoint
    stops: tuple[PlannedStop, ...]
    total_distance_km: float
    estimated_duration_minutes: int
    start_leg_km: float
    average_speed_kmh: float
    passes: int
    distance_history: tuple[float, ...]
    excluded_farmer_ids: tuple[str, ...]
    warnings: tuple[GeometryWarning, ...]

    @property
    def farmer_ids(self) -> list[str]:
        return [stop.farmer_id for stop in self.stops]


@dataclass(frozen=True, slots=True)
class RouteStatistics:
    route_id: str
    stop_count: int
    completed_stops: int
    skipped_stops: int
    total_distance_km: float
    estimated_duration_minutes: int
    estimated_cost: float
    fuel_litres: float
    carbon_kg: float
