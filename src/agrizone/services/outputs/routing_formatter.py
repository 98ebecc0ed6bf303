"""Serializers for routing outputs."""

from __future__ import annotations

import csv
import io

from ...models.domain import Route


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


def route_to_json(route: Route) -> dict:
    return {
        "route_id": route.route_id,
        "zone_id": route.zone_id,
        "owner_id": route.owner_id,
        "scheduled_date": route.scheduled_date.isoformat(),
        "status": route.status.value,
        "total_distance_km": route.total_distance_km,
        "estimated_duration_minutes": route.estimated_duration_minutes,
        "stops": [
            {
                "stop_id": stop.stop_id,
                "farmer_id": stop.farmer_id,
                "sequence_order": stop.sequence_order,
                "status": stop.status.value,
                "latitude": stop.point.latitude,
                "longitude": stop.point.longitude,
                "label": stop.label,
                "arrival_time": _isoformat(stop.arrival_time),
                "completion_time": _isoformat(stop.completion_time),
                "notes": stop.notes,
            }
            for stop in route.ordered_stops()
        ],
    }


def route_to_csv(route: Route) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "route_id",
        "zone_id",
        "scheduled_date",
        "sequence_order",
        "farmer_id",
        "label",
        "latitude",
        "longitude",
        "status",
        "total_distance_km",
        "estimated_duration_minutes",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for stop in route.ordered_stops():
        writer.writerow(
            {
                "route_id": route.route_id,
                "zone_id": route.zone_id,
                "scheduled_date": route.scheduled_date.isoformat(),
                "sequence_order": stop.sequence_order,
                "farmer_id": stop.farmer_id,
                "label": stop.label or "",
                "latitude": stop.point.latitude,
                "longitude": stop.point.longitude,
                "status": stop.status.value,
                "total_distance_km": route.total_distance_km,
                "estimated_duration_minutes": route.estimated_duration_minutes,
            }
        )
    return buffer.getvalue()
