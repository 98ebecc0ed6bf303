"""GeoJSON export of zones and pickup routes for map overlays."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from shapely.geometry import LineString, Point, mapping

from ...models.domain import GeoPoint, Route, Zone
from ..geospatial import circle_polygon


def generate_zone_color(index: int) -> str:
    """Generate distinct colors for zones."""
    colors = [
        "#02d8e0", "#e0003e", "#38e000", "#0000c1", "#e0e005",
        "#611cc7", "#e0af00", "#13aae0", "#a4d819", "#00e0bb",
    ]
    return colors[index % len(colors)]


def zone_feature(zone: Zone, index: int = 0) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "id": zone.zone_id,
        "geometry": mapping(circle_polygon(zone.center, zone.radius_km)),
        "properties": {
            "zone_id": zone.zone_id,
            "name": zone.name,
            "owner_id": zone.owner_id,
            "produce_type": zone.produce_type,
            "radius_km": zone.radius_km,
            "center": [zone.center.longitude, zone.center.latitude],
            "fill_color": generate_zone_color(index),
        },
    }


def zones_to_geojson(zones: Sequence[Zone]) -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [zone_feature(zone, idx) for idx, zone in enumerate(zones)],
    }


def route_to_geojson(route: Route, start: Optional[GeoPoint] = None) -> Dict[str, Any]:
    """Route as a LineString through its stops plus one Point per stop.

    ``start`` (usually the zone center) is prepended to the line when given.
    """

    stops = route.ordered_stops()
    path = ([start] if start is not None else []) + [stop.point for stop in stops]
    features: List[Dict[str, Any]] = []
    if len(path) >= 2:
        features.append(
            {
                "type": "Feature",
                "id": route.route_id,
                "geometry": mapping(LineString([(p.longitude, p.latitude) for p in path])),
                "properties": {
                    "route_id": route.route_id,
                    "zone_id": route.zone_id,
                    "status": route.status.value,
                    "total_distance_km": route.total_distance_km,
                    "estimated_duration_minutes": route.estimated_duration_minutes,
                },
            }
        )
    for stop in stops:
        features.append(
            {
                "type": "Feature",
                "id": stop.stop_id,
                "geometry": mapping(Point(stop.point.longitude, stop.point.latitude)),
                "properties": {
                    "farmer_id": stop.farmer_id,
                    "sequence_order": stop.sequence_order,
                    "status": stop.status.value,
                    "label": stop.label,
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
