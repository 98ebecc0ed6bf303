import math

import pytest

from agrizone.models.domain import FarmerLocation, GeoPoint, Zone
from agrizone.models.results import NotFoundError, ValidationError
from agrizone.services.geospatial import EARTH_RADIUS_KM
from agrizone.services.zoning.membership import (
    farmers_in_zone,
    farmers_within_radius,
    find_optimal_zone,
    is_within,
)

KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180


def _east(km: float) -> GeoPoint:
    return GeoPoint(0.0, km / KM_PER_DEGREE)


def _zone(zone_id: str, center: GeoPoint, radius_km: float, name: str | None = None) -> Zone:
    return Zone(zone_id=zone_id, name=name or zone_id, center=center, radius_km=radius_km, owner_id="EXP1")


def test_point_inside_radius_is_within():
    zone = _zone("Z1", GeoPoint(0.0, 0.0), 10.0)

    inside = is_within(_east(9.9), zone)
    outside = is_within(_east(10.1), zone)

    assert inside.within_bounds is True
    assert inside.distance_km == pytest.approx(9.9)
    assert inside.outside_by_km == 0.0
    assert outside.within_bounds is False
    assert outside.outside_by_km == pytest.approx(0.1)
    assert "0.10 km outside" in outside.message


def test_zone_center_is_within():
    zone = _zone("Z1", GeoPoint(0.0, 0.0), 1.0)
    assert is_within(GeoPoint(0.0, 0.0), zone).within_bounds


def test_optimal_zone_prefers_containing_zone_over_nearer_center():
    # NEAR's center is closer but its radius does not reach the point.
    near = _zone("NEAR", _east(2.0), 1.0)
    wide = _zone("WIDE", _east(-4.0), 5.0)

    result = find_optimal_zone(GeoPoint(0.0, 0.0), [near, wide])

    assert result.recommended.zone.zone_id == "WIDE"
    assert result.within_bounds is True
    assert [alt.zone.zone_id for alt in result.alternatives] == ["NEAR"]
    assert result.alternatives[0].within_bounds is False


def test_optimal_zone_falls_back_to_nearest_when_none_contains_point():
    zones = [_zone("A", _east(20.0), 1.0, name="Alpha"), _zone("B", _east(-8.0), 1.0, name="Bravo")]

    result = find_optimal_zone(GeoPoint(0.0, 0.0), zones)

    assert result.recommended.zone.zone_id == "B"
    assert result.within_bounds is False
    assert result.distance_km == pytest.approx(8.0)
    assert "closest to Bravo but outside boundaries" in result.recommendation


def test_alternatives_are_capped_and_exclude_choice():
    zones = [_zone(f"Z{i}", _east(float(i)), 0.5) for i in range(1, 7)]

    result = find_optimal_zone(GeoPoint(0.0, 0.0), zones)

    assert result.recommended.zone.zone_id == "Z1"
    assert [alt.zone.zone_id for alt in result.alternatives] == ["Z2", "Z3", "Z4"]


def test_equal_distances_break_by_zone_id():
    zones = [_zone("ZB", _east(3.0), 1.0), _zone("ZA", _east(-3.0), 1.0)]

    result = find_optimal_zone(GeoPoint(0.0, 0.0), zones)

    assert result.recommended.zone.zone_id == "ZA"


def test_empty_candidate_list_is_not_found():
    with pytest.raises(NotFoundError):
        find_optimal_zone(GeoPoint(0.0, 0.0), [])


def test_missing_point_requires_location():
    with pytest.raises(ValidationError) as excinfo:
        find_optimal_zone(None, [_zone("Z1", GeoPoint(0.0, 0.0), 1.0)])
    assert excinfo.value.code == "location_required"


def test_nearby_farmers_are_ranked_and_missing_locations_reported():
    farmers = [
        FarmerLocation("F3", _east(3.0)),
        FarmerLocation("F1", _east(1.0)),
        FarmerLocation("F9", _east(30.0)),
        FarmerLocation("F0", None),
    ]

    nearby, warnings = farmers_within_radius(GeoPoint(0.0, 0.0), farmers, 5.0)

    assert [item.farmer.farmer_id for item in nearby] == ["F1", "F3"]
    assert [w.farmer_id for w in warnings] == ["F0"]
    assert warnings[0].code == "missing_location"


def test_farmers_in_zone_filters_by_radius():
    zone = _zone("Z1", GeoPoint(0.0, 0.0), 2.0)
    farmers = [FarmerLocation("IN", _east(1.5)), FarmerLocation("OUT", _east(2.5)), FarmerLocation("NONE")]

    inside, warnings = farmers_in_zone(zone, farmers)

    assert [farmer.farmer_id for farmer in inside] == ["IN"]
    assert [w.farmer_id for w in warnings] == ["NONE"]


def test_out_of_range_farmers_are_not_treated_as_nearby():
    # 360 degrees of longitude wraps onto the search point itself.
    farmers = [FarmerLocation("WRAP", GeoPoint(0.0, 360.0)), FarmerLocation("F1", _east(0.5))]

    nearby, warnings = farmers_within_radius(GeoPoint(0.0, 0.0), farmers, 1.0)

    assert [item.farmer.farmer_id for item in nearby] == ["F1"]
    assert [(w.code, w.farmer_id) for w in warnings] == [("invalid_location", "WRAP")]


def test_out_of_range_farmers_are_never_inside_a_zone():
    zone = _zone("Z1", GeoPoint(0.0, 0.0), 1.0)
    farmers = [FarmerLocation("WRAP", GeoPoint(0.0, 360.0)), FarmerLocation("POLE", GeoPoint(95.0, 0.0))]

    inside, warnings = farmers_in_zone(zone, farmers)

    assert inside == []
    assert [w.code for w in warnings] == ["invalid_location", "invalid_location"]
