import math

import pytest

from agrizone.models.domain import GeoPoint, Zone, ZoneCandidate
from agrizone.models.results import ValidationError
from agrizone.services.geospatial import EARTH_RADIUS_KM
from agrizone.services.zoning.boundary import validate_new_zone

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180


def _east(km: float) -> GeoPoint:
    """Point ``km`` kilometres east of (0, 0) along the equator."""
    return GeoPoint(0.0, km / KM_PER_DEGREE)


def _zone(zone_id: str, center: GeoPoint, radius_km: float) -> Zone:
    return Zone(zone_id=zone_id, name=f"Zone {zone_id}", center=center, radius_km=radius_km, owner_id="EXP1")


def test_overlapping_zones_report_overlap_distance():
    candidate = ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=3.0)
    result = validate_new_zone(candidate, [_zone("Z1", _east(5.0), 3.0)])

    assert not result.is_valid
    assert len(result.overlaps) == 1
    overlap = result.overlaps[0]
    assert overlap.other_zone_id == "Z1"
    assert overlap.overlaps is True
    assert overlap.center_distance_km == pytest.approx(5.0)
    assert overlap.overlap_distance_km == pytest.approx(1.0)
    assert overlap.overlap_percentage == 33
    assert result.suggested_radius_km == pytest.approx(0.9 * 2.0)
    assert result.message == "Zone overlaps with 1 existing zone(s)"


def test_distant_zones_do_not_overlap():
    candidate = ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=3.0)
    result = validate_new_zone(candidate, [_zone("Z1", _east(10.0), 3.0)])

    assert result.is_valid
    assert result.overlaps == ()
    assert result.suggested_radius_km is None


def test_no_existing_zones_is_always_valid():
    result = validate_new_zone(ZoneCandidate(center=GeoPoint(-1.29, 36.82), radius_km=100.0), [])

    assert result.is_valid
    assert result.suggested_radius_km is None


def test_all_overlaps_are_collected():
    candidate = ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=3.0)
    existing = [
        _zone("EAST", _east(4.0), 3.0),
        _zone("WEST", _east(-4.0), 3.0),
        _zone("FAR", _east(50.0), 3.0),
    ]
    result = validate_new_zone(candidate, existing)

    assert {overlap.other_zone_id for overlap in result.overlaps} == {"EAST", "WEST"}
    assert result.suggested_radius_km == pytest.approx(0.9 * 1.0)


def test_suggestion_never_drops_below_minimum_radius():
    candidate = ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=2.0)
    result = validate_new_zone(candidate, [_zone("BIG", _east(1.0), 5.0)])

    assert not result.is_valid
    assert result.suggested_radius_km == pytest.approx(0.1)


def test_excluded_zone_is_ignored():
    candidate = ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=3.0)
    result = validate_new_zone(candidate, [_zone("SELF", GeoPoint(0.0, 0.0), 2.0)], exclude_zone_id="SELF")

    assert result.is_valid


@pytest.mark.parametrize(
    "center,radius,field",
    [
        (GeoPoint(0.0, 0.0), 0.05, "radius_km"),
        (GeoPoint(0.0, 0.0), 100.5, "radius_km"),
        (GeoPoint(95.0, 0.0), 5.0, "latitude"),
        (GeoPoint(0.0, -181.0), 5.0, "longitude"),
    ],
)
def test_invalid_candidates_are_rejected(center, radius, field):
    with pytest.raises(ValidationError) as excinfo:
        validate_new_zone(ZoneCandidate(center=center, radius_km=radius), [])
    assert excinfo.value.field == field


def test_radius_bounds_are_inclusive():
    assert validate_new_zone(ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=0.1), []).is_valid
    assert validate_new_zone(ZoneCandidate(center=GeoPoint(0.0, 0.0), radius_km=100.0), []).is_valid
