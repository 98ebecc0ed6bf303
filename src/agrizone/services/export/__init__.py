"""Export services."""

from .geojson import route_to_geojson, zone_feature, zones_to_geojson

__all__ = ["zones_to_geojson", "zone_feature", "route_to_geojson"]
