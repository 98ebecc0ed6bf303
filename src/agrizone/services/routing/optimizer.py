"""Pickup sequence optimization: nearest-neighbor seed refined by 2-opt.

Distances are great-circle kilometres between stop coordinates. The stop
sequence is treated as an open path: the start point (usually the zone
center) seeds the nearest-neighbor construction but the start-to-first-stop
leg is not part of ``total_distance_km``; it is reported as ``start_leg_km``.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from ...config import settings
from ...models.domain import FarmerLocation, GeoPoint
from ...models.results import GeometryWarning, ValidationError
from ..geospatial import distance_km
from .models import OptimizedRoute, PlannedStop

logger = logging.getLogger(__name__)

Matrix = list[list[float]]


def _build_matrix(points: Sequence[GeoPoint]) -> Matrix:
    size = len(points)
    matrix = [[0.0] * size for _ in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            matrix[i][j] = matrix[j][i] = distance_km(points[i], points[j])
    return matrix


def path_length(order: Sequence[int], matrix: Matrix) -> float:
    return sum(matrix[a][b] for a, b in zip(order, order[1:]))


def nearest_neighbor_order(start_distances: Sequence[float], matrix: Matrix, keys: Sequence[str]) -> list[int]:
    """Greedy construction; ties go to the lowest key, then the earliest input."""

    unvisited = set(range(len(start_distances)))
    order: list[int] = []
    distances = start_distances
    while unvisited:
        nxt = min(unvisited, key=lambda j: (distances[j], keys[j], j))
        order.append(nxt)
        unvisited.remove(nxt)
        distances = matrix[nxt]
    return order


def two_opt(
    order: Sequence[int],
    matrix: Matrix,
    max_passes: int,
    epsilon_km: float,
) -> tuple[list[int], int, list[float]]:
    """Refine an open path with 2-opt moves.

    Returns the improved order, the number of passes run and the path length
    after construction followed by the length after every pass.
    """

    order = list(order)
    size = len(order)
    history = [path_length(order, matrix)]
    if size < 3:
        return order, 0, history

    passes = 0
    while passes < max_passes:
        passes += 1
        improved = False
        for i in range(size - 2):
            for k in range(i + 1, size - 1):
                a, b, c, d = order[i], order[i + 1], order[k], order[k + 1]
                current = matrix[a][b] + matrix[c][d]
                proposed = matrix[a][c] + matrix[b][d]
                if proposed + epsilon_km < current:
                    order[i + 1 : k + 1] = reversed(order[i + 1 : k + 1])
                    improved = True
        history.append(path_length(order, matrix))
        logger.debug(f"2-opt pass {passes}: path length {history[-1]:.4f} km")
        if not improved:
            break
    return order, passes, history


def _partition(stops: Sequence[FarmerLocation]) -> tuple[list[FarmerLocation], list[GeometryWarning]]:
    routable: list[FarmerLocation] = []
    warnings: list[GeometryWarning] = []
    seen: set[str] = set()
    for stop in stops:
        if stop.farmer_id in seen:
            raise ValidationError(f"Farmer {stop.farmer_id} appears more than once", field="stops")
        seen.add(stop.farmer_id)
        if stop.point is None:
            warnings.append(
                GeometryWarning(
                    code="missing_location",
                    message=f"Farmer {stop.farmer_id} has no location and was excluded from the route",
                    farmer_id=stop.farmer_id,
                )
            )
        elif not stop.point.is_valid:
            warnings.append(
                GeometryWarning(
                    code="invalid_location",
                    message=f"Farmer {stop.farmer_id} has invalid coordinates and was excluded from the route",
                    farmer_id=stop.farmer_id,
                )
            )
        else:
            routable.append(stop)
    return routable, warnings


def resolve_speed(average_speed_kmh: float | None) -> float:
    speed = settings.default_average_speed_kmh if average_speed_kmh is None else float(average_speed_kmh)
    if not math.isfinite(speed) or speed <= 0:
        raise ValidationError("average_speed_kmh must be a positive number", field="average_speed_kmh")
    return speed


def optimize(
    start: GeoPoint,
    stops: Sequence[FarmerLocation],
    average_speed_kmh: float | None = None,
    *,
    max_passes: int | None = None,
    epsilon_km: float | None = None,
) -> OptimizedRoute:
    if start is None or not start.is_valid:
        raise ValidationError("A valid start point is required", field="start")
    speed = resolve_speed(average_speed_kmh)
    max_passes = settings.two_opt_max_passes if max_passes is None else max_passes
    epsilon_km = settings.two_opt_epsilon_km if epsilon_km is None else epsilon_km

    routable, warnings = _partition(stops)
    for warning in warnings:
        logger.warning(warning.message)

    points = [stop.point for stop in routable]
    matrix = _build_matrix(points)
    start_distances = [distance_km(start, point) for point in points]

    seed = nearest_neighbor_order(start_distances, matrix, [stop.farmer_id for stop in routable])
    order, passes, history = two_opt(seed, matrix, max_passes, epsilon_km)

    planned: list[PlannedStop] = []
    travelled = 0.0
    for position, index in enumerate(order):
        leg = matrix[order[position - 1]][index] if position else 0.0
        travelled += leg
        planned.append(
            PlannedStop(
                farmer_id=routable[index].farmer_id,
                sequence_order=position + 1,
                point=points[index],
                distance_from_prev_km=leg,
                arrival_offset_min=travelled / speed * 60,
                label=routable[index].label,
            )
        )

    total = path_length(order, matrix)
    result = OptimizedRoute(
        start=start,
        stops=tuple(planned),
        total_distance_km=total,
        estimated_duration_minutes=round(total / speed * 60),
        start_leg_km=start_distances[order[0]] if order else 0.0,
        average_speed_kmh=speed,
        passes=passes,
        distance_history=tuple(history),
        excluded_farmer_ids=tuple(w.farmer_id for w in warnings if w.farmer_id),
        warnings=tuple(warnings),
    )
    logger.info(
        f"Optimized route over {len(planned)} stop(s): {total:.3f} km, "
        f"{result.estimated_duration_minutes} min, {passes} 2-opt pass(es), {len(warnings)} excluded"
    )
    return result
