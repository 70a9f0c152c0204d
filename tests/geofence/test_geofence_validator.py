from __future__ import annotations

import math

import pytest

from src.care_clock.care_clock.core.exceptions import InvalidCoordinate
from src.care_clock.care_clock.geofence.model import FacilityPerimeter, GeoPoint
from src.care_clock.care_clock.geofence.validator import GeofenceValidator, distance_meters, is_within_perimeter

NYC = GeoPoint(40.7128, -74.0060)

SAMPLE_POINTS = [
    GeoPoint(0.0, 0.0),
    GeoPoint(90.0, 180.0),
    GeoPoint(-90.0, -180.0),
    GeoPoint(12.927538, 77.526807),
    GeoPoint(-33.8688, 151.2093),
    NYC,
]


@pytest.mark.parametrize("point", SAMPLE_POINTS)
def test_distance_to_self_is_zero(point):
    assert distance_meters(point, point) == 0.0


@pytest.mark.parametrize("point", SAMPLE_POINTS)
@pytest.mark.parametrize("radius", [0.001, 1.0, 200.0, 2_000_000.0])
def test_center_is_always_inside_its_own_perimeter(point, radius):
    assert is_within_perimeter(point, FacilityPerimeter(point, radius))


def test_distance_is_symmetric():
    for a in SAMPLE_POINTS:
        for b in SAMPLE_POINTS:
            assert distance_meters(a, b) == pytest.approx(distance_meters(b, a), rel=1e-12, abs=1e-6)


def test_known_distance_new_york_to_london():
    london = GeoPoint(51.5074, -0.1278)
    assert distance_meters(NYC, london) == pytest.approx(5_570_000, rel=0.005)


def test_boundary_is_inclusive():
    candidate = GeoPoint(40.7128, -74.0040)
    radius = distance_meters(candidate, NYC)

    assert is_within_perimeter(candidate, FacilityPerimeter(NYC, radius))
    assert not is_within_perimeter(candidate, FacilityPerimeter(NYC, math.nextafter(radius, 0.0)))


def test_point_about_150m_east_is_inside_200m_perimeter():
    perimeter = FacilityPerimeter(NYC, 200.0)
    candidate = GeoPoint(40.7128, -74.0060 + 0.0018)

    assert distance_meters(candidate, NYC) == pytest.approx(151.7, abs=1.0)
    assert is_within_perimeter(candidate, perimeter)


def test_point_about_840m_east_is_outside_200m_perimeter():
    perimeter = FacilityPerimeter(NYC, 200.0)
    candidate = GeoPoint(40.7128, -74.0060 + 0.01)

    assert distance_meters(candidate, NYC) == pytest.approx(842.7, abs=2.0)
    assert not is_within_perimeter(candidate, perimeter)


@pytest.mark.parametrize(
    "lat,lng",
    [(90.0001, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0), (float("nan"), 0.0), (0.0, float("inf")), (None, 0.0), ("40", 0.0)],
)
def test_invalid_coordinates_are_rejected(lat, lng):
    with pytest.raises(InvalidCoordinate):
        GeoPoint(lat, lng)


@pytest.mark.parametrize("radius", [0, -5.0, float("nan"), None])
def test_invalid_radius_is_rejected(radius):
    with pytest.raises(InvalidCoordinate):
        FacilityPerimeter(NYC, radius)


def test_non_point_arguments_are_rejected():
    with pytest.raises(InvalidCoordinate):
        distance_meters((40.7, -74.0), NYC)
    with pytest.raises(InvalidCoordinate):
        is_within_perimeter(NYC, {"center": NYC, "radius": 10})


def test_validator_check_reports_distance_and_verdict():
    check = GeofenceValidator().check(GeoPoint(40.7128, -73.9960), FacilityPerimeter(NYC, 200.0))

    assert check.radius_meters == 200.0
    assert check.distance_meters > 800
    assert check.within is False
