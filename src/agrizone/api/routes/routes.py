"""Routing endpoints."""

from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from ...models.domain import Route
from ...models.results import CoreError, GeometryWarning
from ...schemas.routing import (
    PlannedStopModel,
    RouteGeoJSONRequest,
    RouteModel,
    RouteOptimizationRequest,
    RouteOptimizationResponse,
    RoutePlanRequest,
    RouteResponse,
    RouteStatisticsModel,
    RouteStatusRequest,
    StopStatusRequest,
)
from ...schemas.zoning import GeoPointModel, WarningModel
from ...services.export.geojson import route_to_geojson
from ...services.outputs.routing_formatter import route_to_csv, route_to_json
from ...services.routing.service import (
    optimize_route,
    plan_route,
    summarize_route,
    transition_route_status,
    update_route_stop,
)
from ..errors import http_error

router = APIRouter(prefix="/routes", tags=["routes"])


def _warnings(warnings: Sequence[GeometryWarning]) -> list[WarningModel]:
    return [WarningModel(code=w.code, message=w.message, farmer_id=w.farmer_id) for w in warnings]


def _route_response(route: Route, warnings: Sequence[GeometryWarning] = ()) -> RouteResponse:
    stats = summarize_route(route)
    return RouteResponse(
        route=RouteModel.from_domain(route),
        statistics=RouteStatisticsModel(
            stop_count=stats.stop_count,
            completed_stops=stats.completed_stops,
            skipped_stops=stats.skipped_stops,
            estimated_cost=stats.estimated_cost,
            fuel_litres=stats.fuel_litres,
            carbon_kg=stats.carbon_kg,
        ),
        warnings=_warnings(warnings),
    )


@router.post("/optimize", response_model=RouteOptimizationResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RouteOptimizationRequest) -> RouteOptimizationResponse:
    result = optimize_route(
        payload.start.to_domain(),
        [stop.to_domain() for stop in payload.stops],
        payload.average_speed_kmh,
    )
    if not result.success:
        raise http_error(result.error)
    plan = result.data
    return RouteOptimizationResponse(
        stops=[
            PlannedStopModel(
                farmer_id=stop.farmer_id,
                sequence_order=stop.sequence_order,
                point=GeoPointModel.from_domain(stop.point),
                label=stop.label,
                distance_from_prev_km=stop.distance_from_prev_km,
                arrival_offset_min=stop.arrival_offset_min,
            )
            for stop in plan.stops
        ],
        total_distance_km=plan.total_distance_km,
        estimated_duration_minutes=plan.estimated_duration_minutes,
        start_leg_km=plan.start_leg_km,
        average_speed_kmh=plan.average_speed_kmh,
        passes=plan.passes,
        excluded_farmer_ids=list(plan.excluded_farmer_ids),
        warnings=_warnings(plan.warnings),
    )


@router.post("/plan", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def plan(payload: RoutePlanRequest) -> RouteResponse:
    """Build a PLANNED route from the zone center; the caller persists it."""
    try:
        result = plan_route(
            payload.zone.to_domain(),
            [farmer.to_domain() for farmer in payload.farmers],
            owner_id=payload.owner_id,
            scheduled_date=payload.scheduled_date,
            average_speed_kmh=payload.average_speed_kmh,
            route_id=payload.route_id,
        )
        route = result.unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return _route_response(route, result.warnings)


@router.post("/status", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def route_status(payload: RouteStatusRequest) -> RouteResponse:
    try:
        route = transition_route_status(payload.route.to_domain(), payload.status).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return _route_response(route)


@router.post("/stop-status", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def stop_status(payload: StopStatusRequest) -> RouteResponse:
    try:
        route = update_route_stop(
            payload.route.to_domain(), payload.stop_id, payload.status, notes=payload.notes
        ).unwrap()
    except CoreError as exc:
        raise http_error(exc) from exc
    return _route_response(route)


@router.post("/export.csv", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def export_csv(payload: RouteModel) -> PlainTextResponse:
    try:
        route = payload.to_domain()
    except CoreError as exc:
        raise http_error(exc) from exc
    return PlainTextResponse(route_to_csv(route), media_type="text/csv")


@router.post("/export.json", status_code=status.HTTP_200_OK)
def export_json(payload: RouteModel) -> dict:
    try:
        route = payload.to_domain()
    except CoreError as exc:
        raise http_error(exc) from exc
    return route_to_json(route)


@router.post("/export.geojson", status_code=status.HTTP_200_OK)
def export_geojson(payload: RouteGeoJSONRequest) -> dict:
    """Route line and stop markers as a GeoJSON FeatureCollection."""
    try:
        route = payload.route.to_domain()
    except CoreError as exc:
        raise http_error(exc) from exc
    start = payload.start.to_domain() if payload.start is not None else None
    return route_to_geojson(route, start=start)
