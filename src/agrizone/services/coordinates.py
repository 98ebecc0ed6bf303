"""Coordinate range and precision validation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ..config import settings
from ..models.domain import GeoPoint
from .geospatial import is_valid_latitude, is_valid_longitude


@dataclass(frozen=True, slots=True)
class CoordinateValidationResult:
    is_valid: bool
    latitude_valid: bool
    longitude_valid: bool
    precision_valid: bool
    formatted_latitude: str
    formatted_longitude: str
    failed_checks: tuple[str, ...]
    message: str


def decimal_places(value: float) -> int:
    """Number of decimal places in the shortest representation of ``value``."""

    if not math.isfinite(value):
        raise ValueError(f"Cannot count decimals of non-finite value {value!r}")
    try:
        exponent = Decimal(repr(float(value))).normalize().as_tuple().exponent
    except InvalidOperation as exc:
        raise ValueError(f"Cannot count decimals of {value!r}") from exc
    return max(0, -exponent)


def has_valid_precision(value: float, precision: int) -> bool:
    if not math.isfinite(value):
        return False
    return decimal_places(value) <= precision


def format_coordinate(value: float, precision: int) -> str:
    return f"{value:.{precision}f}"


def check_coordinates(point: GeoPoint, precision: int | None = None) -> CoordinateValidationResult:
    """Run every coordinate check independently and report which ones failed."""

    precision = settings.coordinate_precision if precision is None else precision
    if precision < 0:
        raise ValueError("precision must be >= 0")

    lat_valid = is_valid_latitude(point.latitude)
    lon_valid = is_valid_longitude(point.longitude)
    precision_valid = has_valid_precision(point.latitude, precision) and has_valid_precision(
        point.longitude, precision
    )

    failed: list[str] = []
    if not lat_valid:
        failed.append("latitude")
    if not lon_valid:
        failed.append("longitude")
    if not precision_valid:
        failed.append("precision")

    if not lat_valid:
        message = "Invalid latitude: must be between -90 and 90 degrees"
    elif not lon_valid:
        message = "Invalid longitude: must be between -180 and 180 degrees"
    elif not precision_valid:
        message = f"Coordinate precision too high: maximum {precision} decimal places"
    else:
        message = "Coordinates are valid"

    return CoordinateValidationResult(
        is_valid=not failed,
        latitude_valid=lat_valid,
        longitude_valid=lon_valid,
        precision_valid=precision_valid,
        formatted_latitude=format_coordinate(point.latitude, precision),
        formatted_longitude=format_coordinate(point.longitude, precision),
        failed_checks=tuple(failed),
        message=message,
    )
