"""High-level orchestration for pickup route planning and execution."""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ...config import settings
from ...models.domain import (
    FarmerLocation,
    GeoPoint,
    Route,
    RouteStatus,
    RouteStop,
    StopStatus,
    Zone,
)
from ...models.results import CoreError, GeometryWarning, Result, TransitionError, ValidationError
from ..geospatial import distance_km
from .lifecycle import advance_route, advance_stop, advance_stop_in_route
from .models import OptimizedRoute, RouteStatistics
from .optimizer import optimize

logger = logging.getLogger(__name__)


def _check_size(stops: Sequence[FarmerLocation]) -> None:
    if len(stops) > settings.max_stops_per_route:
        raise ValidationError(
            f"Too many stops for one route: {len(stops)} > {settings.max_stops_per_route}",
            field="stops",
        )


def _coerce(enum_cls, value, field: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown {field} '{value}'", field=field) from exc


def optimize_route(
    start: GeoPoint,
    stops: Sequence[FarmerLocation],
    average_speed_kmh: float | None = None,
) -> Result[OptimizedRoute]:
    try:
        if stops is None:
            raise ValidationError("A list of stops is required", field="stops")
        stops = list(stops)
        _check_size(stops)
        result = optimize(start, stops, average_speed_kmh)
    except CoreError as exc:
        logger.warning(f"Route optimization rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(result, "Route optimized", result.warnings)


def _stops_from_plan(route_id: str, plan: OptimizedRoute) -> tuple[RouteStop, ...]:
    return tuple(
        RouteStop(
            stop_id=str(uuid.uuid4()),
            route_id=route_id,
            farmer_id=planned.farmer_id,
            sequence_order=planned.sequence_order,
            point=planned.point,
            status=StopStatus.PENDING,
            label=planned.label,
        )
        for planned in plan.stops
    )


def _outside_zone_warnings(zone: Zone, plan: OptimizedRoute) -> list[GeometryWarning]:
    warnings = []
    for planned in plan.stops:
        distance = distance_km(planned.point, zone.center)
        if distance > zone.radius_km:
            warnings.append(
                GeometryWarning(
                    code="outside_zone",
                    message=(
                        f"Farmer {planned.farmer_id} is {distance - zone.radius_km:.2f} km "
                        f"outside zone {zone.zone_id}"
                    ),
                    farmer_id=planned.farmer_id,
                )
            )
    return warnings


def plan_route(
    zone: Zone,
    farmers: Sequence[FarmerLocation],
    *,
    owner_id: str,
    scheduled_date: date,
    average_speed_kmh: float | None = None,
    route_id: str | None = None,
) -> Result[Route]:
    """Build a PLANNED route visiting ``farmers`` starting from the zone center."""

    optimized = optimize_route(zone.center, farmers, average_speed_kmh)
    if not optimized.success:
        return Result.fail(optimized.error, optimized.warnings)
    plan = optimized.data

    route_id = route_id or str(uuid.uuid4())
    route = Route(
        route_id=route_id,
        zone_id=zone.zone_id,
        owner_id=owner_id,
        scheduled_date=scheduled_date,
        status=RouteStatus.PLANNED,
        stops=_stops_from_plan(route_id, plan),
        total_distance_km=plan.total_distance_km,
        estimated_duration_minutes=plan.estimated_duration_minutes,
    )
    warnings = list(plan.warnings) + _outside_zone_warnings(zone, plan)
    logger.info(f"Planned route {route_id} in zone {zone.zone_id} with {len(route.stops)} stop(s)")
    return Result.ok(route, "Pickup route created", warnings)


def reoptimize_route(
    route: Route,
    start: GeoPoint,
    average_speed_kmh: float | None = None,
) -> Result[Route]:
    """Replace every stop of a PLANNED route with a freshly optimized sequence."""

    status = RouteStatus(route.status)
    if status is not RouteStatus.PLANNED:
        return Result.fail(
            TransitionError(
                f"Route {route.route_id} can only be re-optimized while PLANNED, not {status.value}",
                current=status.value,
                requested=RouteStatus.PLANNED.value,
                code="closed" if route.is_terminal else None,
            )
        )
    farmers = [
        FarmerLocation(farmer_id=stop.farmer_id, point=stop.point, label=stop.label)
        for stop in route.ordered_stops()
    ]
    optimized = optimize_route(start, farmers, average_speed_kmh)
    if not optimized.success:
        return Result.fail(optimized.error, optimized.warnings)
    plan = optimized.data

    notes = {stop.farmer_id: stop.notes for stop in route.stops}
    stops = tuple(replace(stop, notes=notes.get(stop.farmer_id)) for stop in _stops_from_plan(route.route_id, plan))
    updated = replace(
        route,
        stops=stops,
        total_distance_km=plan.total_distance_km,
        estimated_duration_minutes=plan.estimated_duration_minutes,
    )
    logger.info(
        f"Re-optimized route {route.route_id}: {route.total_distance_km:.3f} km -> {updated.total_distance_km:.3f} km"
    )
    return Result.ok(updated, "Route re-optimized", plan.warnings)


def transition_route_status(route: Route, new_status: RouteStatus | str) -> Result[Route]:
    try:
        updated = advance_route(route, _coerce(RouteStatus, new_status, "status"))
    except CoreError as exc:
        logger.warning(f"Route {route.route_id} transition rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(updated, "Route status updated")


def transition_stop_status(
    stop: RouteStop,
    new_status: StopStatus | str,
    now: Optional[datetime] = None,
    notes: Optional[str] = None,
) -> Result[RouteStop]:
    try:
        updated = advance_stop(stop, _coerce(StopStatus, new_status, "status"), now, notes)
    except CoreError as exc:
        logger.warning(f"Stop {stop.stop_id} transition rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(updated, "Stop status updated")


def update_route_stop(
    route: Route,
    stop_id: str,
    new_status: StopStatus | str,
    now: Optional[datetime] = None,
    notes: Optional[str] = None,
) -> Result[Route]:
    """Change one stop of ``route``; ``notes`` are recorded with the new status when given."""

    try:
        updated = advance_stop_in_route(route, stop_id, _coerce(StopStatus, new_status, "status"), now, notes)
    except CoreError as exc:
        logger.warning(f"Stop {stop_id} on route {route.route_id} rejected: {exc.message}")
        return Result.fail(exc)
    return Result.ok(updated, "Stop status updated")


def summarize_route(route: Route) -> RouteStatistics:
    distance = route.total_distance_km
    duration = route.estimated_duration_minutes
    cost = distance * settings.fuel_cost_per_km + duration * settings.time_cost_per_hour / 60
    return RouteStatistics(
        route_id=route.route_id,
        stop_count=len(route.stops),
        completed_stops=sum(1 for stop in route.stops if stop.status == StopStatus.COMPLETED),
        skipped_stops=sum(1 for stop in route.stops if stop.status == StopStatus.SKIPPED),
        total_distance_km=distance,
        estimated_duration_minutes=duration,
        estimated_cost=cost,
        fuel_litres=distance * settings.fuel_litres_per_km,
        carbon_kg=distance * settings.carbon_kg_per_km,
    )
