"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Expose the routing tunables the service is running with."""
    return {
        "default_average_speed_kmh": settings.default_average_speed_kmh,
        "two_opt_max_passes": settings.two_opt_max_passes,
        "coordinate_precision": settings.coordinate_precision,
        "max_stops_per_route": settings.max_stops_per_route,
    }
