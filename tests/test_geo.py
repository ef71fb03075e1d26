"""
Tests for geographic helpers.

Tests haversine distance, per-axis interpolation and the local
flat-earth projection used by the simulator handler.
"""

import pytest
from rendezvous_mobility.geo import (
    EARTH_RADIUS_KM,
    GeoPoint,
    haversine_distance,
    interpolate,
    project_to_local,
    unproject_from_local,
)


class TestHaversineDistance:
    """Test great-circle distance."""

    def test_same_point_is_zero(self):
        """Distance from a point to itself should be exactly zero."""
        for p in (GeoPoint(0.0, 0.0), GeoPoint(23.0375, 72.4949), GeoPoint(-89.9, 179.9)):
            assert haversine_distance(p, p) == 0.0

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180."""
        d = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
        assert d == pytest.approx(EARTH_RADIUS_KM * 3.141592653589793 / 180.0)

    def test_symmetry(self):
        """Distance should not depend on argument order."""
        a = GeoPoint(23.0375, 72.4949)
        b = GeoPoint(23.129318, 72.544884)
        assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a))

    def test_longitude_shrinks_with_latitude(self):
        """A degree of longitude is shorter away from the equator."""
        at_equator = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
        at_sixty = haversine_distance(GeoPoint(60.0, 0.0), GeoPoint(60.0, 1.0))
        assert at_sixty == pytest.approx(at_equator / 2, rel=1e-3)

    def test_antipodal_points(self):
        """Opposite points are half the circumference apart."""
        d = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))
        assert d == pytest.approx(EARTH_RADIUS_KM * 3.141592653589793)

    def test_known_city_scale_distance(self):
        """Drivers in the demo scenario are a few kilometers apart."""
        d = haversine_distance(GeoPoint(23.0375, 72.4949), GeoPoint(23.0475, 72.5049))
        assert 1.0 < d < 2.0


class TestInterpolate:
    """Test per-axis linear interpolation."""

    def test_endpoints(self):
        """Fractions 0 and 1 should give the endpoints."""
        a = GeoPoint(10.0, 20.0)
        b = GeoPoint(12.0, 16.0)
        assert interpolate(a, b, 0.0) == a
        assert interpolate(a, b, 1.0).as_tuple() == pytest.approx(b.as_tuple())

    def test_midpoint(self):
        """Fraction 0.5 should be the coordinate midpoint."""
        mid = interpolate(GeoPoint(10.0, 20.0), GeoPoint(12.0, 16.0), 0.5)
        assert mid.as_tuple() == pytest.approx((11.0, 18.0))

    def test_axes_are_independent(self):
        """Each axis moves by its own difference."""
        p = interpolate(GeoPoint(0.0, 0.0), GeoPoint(1.0, -4.0), 0.25)
        assert p.as_tuple() == pytest.approx((0.25, -1.0))


class TestLocalProjection:
    """Test the flat-earth local frame."""

    def test_origin_maps_to_zero(self):
        """The origin should project to (0, 0)."""
        origin = GeoPoint(23.0375, 72.4949)
        assert project_to_local(origin, origin) == pytest.approx((0.0, 0.0))

    def test_north_is_positive_y(self):
        """Moving north increases y only."""
        origin = GeoPoint(23.0, 72.0)
        x, y = project_to_local(GeoPoint(23.01, 72.0), origin)
        assert x == pytest.approx(0.0)
        assert y == pytest.approx(1111.11)

    def test_unproject_inverts_project(self):
        """Projecting then unprojecting should return the same point."""
        origin = GeoPoint(23.0375, 72.4949)
        point = GeoPoint(23.129318, 72.544884)
        back = unproject_from_local(project_to_local(point, origin), origin)
        assert back.as_tuple() == pytest.approx(point.as_tuple())

    def test_unproject_accepts_3d_positions(self):
        """Node positions carry z; it should be ignored."""
        origin = GeoPoint(0.0, 0.0)
        p = unproject_from_local((0.0, 111_111.0, 42.0), origin)
        assert p.as_tuple() == pytest.approx((1.0, 0.0))

    def test_unproject_rejects_pole_origin(self):
        """The east scale is zero at a pole."""
        with pytest.raises(ValueError):
            unproject_from_local((1.0, 1.0), GeoPoint(90.0, 0.0))
