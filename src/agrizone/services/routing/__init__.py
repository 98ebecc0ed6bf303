"""Pickup route optimization and lifecycle."""

from .service import (
    optimize_route,
    plan_route,
    reoptimize_route,
    summarize_route,
    transition_route_status,
    transition_stop_status,
    update_route_stop,
)

__all__ = [
    "optimize_route",
    "plan_route",
    "reoptimize_route",
    "summarize_route",
    "transition_route_status",
    "transition_stop_status",
    "update_route_stop",
]
