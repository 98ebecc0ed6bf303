"""Status transitions for pickup routes and their stops."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from ...models.domain import Route, RouteStatus, RouteStop, StopStatus
from ...models.results import NotFoundError, TransitionError

logger = logging.getLogger(__name__)

ROUTE_TRANSITIONS: dict[RouteStatus, frozenset[RouteStatus]] = {
    RouteStatus.PLANNED: frozenset({RouteStatus.IN_PROGRESS, RouteStatus.CANCELLED}),
    RouteStatus.IN_PROGRESS: frozenset({RouteStatus.COMPLETED, RouteStatus.CANCELLED}),
    RouteStatus.COMPLETED: frozenset(),
    RouteStatus.CANCELLED: frozenset(),
}

STOP_TRANSITIONS: dict[StopStatus, frozenset[StopStatus]] = {
    StopStatus.PENDING: frozenset({StopStatus.ARRIVED, StopStatus.COMPLETED, StopStatus.SKIPPED}),
    StopStatus.ARRIVED: frozenset({StopStatus.COMPLETED, StopStatus.SKIPPED}),
    StopStatus.COMPLETED: frozenset(),
    StopStatus.SKIPPED: frozenset(),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check(kind: str, ident: str, current, requested, table) -> None:
    allowed = table[current]
    if requested in allowed:
        return
    if not allowed:
        raise TransitionError(
            f"{kind} {ident} is closed: cannot move from {current.value} to {requested.value}",
            current=current.value,
            requested=requested.value,
            code="closed",
        )
    raise TransitionError(
        f"{kind} {ident} cannot move from {current.value} to {requested.value}",
        current=current.value,
        requested=requested.value,
    )


def advance_route(route: Route, new_status: RouteStatus | str) -> Route:
    current = RouteStatus(route.status)
    requested = RouteStatus(new_status)
    _check("Route", route.route_id, current, requested, ROUTE_TRANSITIONS)
    logger.info(f"Route {route.route_id}: {current.value} -> {requested.value}")
    return replace(route, status=requested)


def advance_stop(
    stop: RouteStop,
    new_status: StopStatus | str,
    now: datetime | None = None,
    notes: str | None = None,
) -> RouteStop:
    """Move ``stop`` to ``new_status``, stamping times; ``notes`` replaces the stop's notes when given."""

    current = StopStatus(stop.status)
    requested = StopStatus(new_status)
    _check("Stop", stop.stop_id, current, requested, STOP_TRANSITIONS)
    now = now or _utcnow()

    changes: dict = {"status": requested}
    if requested is StopStatus.ARRIVED and stop.arrival_time is None:
        changes["arrival_time"] = now
    elif requested is StopStatus.COMPLETED:
        changes["completion_time"] = now
        if stop.arrival_time is None:
            changes["arrival_time"] = now
    if notes is not None:
        changes["notes"] = notes
    logger.info(f"Stop {stop.stop_id} on route {stop.route_id}: {current.value} -> {requested.value}")
    return replace(stop, **changes)


def advance_stop_in_route(
    route: Route,
    stop_id: str,
    new_status: StopStatus | str,
    now: datetime | None = None,
    notes: str | None = None,
) -> Route:
    """Apply a stop transition inside ``route`` and return the new route version."""

    current = RouteStatus(route.status)
    if current in (RouteStatus.COMPLETED, RouteStatus.CANCELLED):
        raise TransitionError(
            f"Route {route.route_id} is closed ({current.value}); its stops cannot change",
            current=current.value,
            requested=StopStatus(new_status).value,
            code="closed",
        )
    stop = route.stop_by_id(stop_id)
    if stop is None:
        raise NotFoundError(f"Stop {stop_id} not found on route {route.route_id}")
    updated = advance_stop(stop, new_status, now, notes)
    stops = tuple(updated if item.stop_id == stop_id else item for item in route.stops)
    return replace(route, stops=stops)
