import math

import pytest

from localherro.core.geo import GeoPoint, haversine_km, within_radius


def test_haversine_identical_points_is_zero():
    p = GeoPoint(lat=19.07, lon=72.88)
    assert haversine_km(p, p) == 0.0


@pytest.mark.parametrize(
    "a,b",
    [
        (GeoPoint(lat=19.07, lon=72.88), GeoPoint(lat=28.61, lon=77.21)),
        (GeoPoint(lat=-33.87, lon=151.21), GeoPoint(lat=51.51, lon=-0.13)),
        (GeoPoint(lat=0.0, lon=179.9), GeoPoint(lat=0.0, lon=-179.9)),
    ],
)
def test_haversine_is_symmetric(a, b):
    assert haversine_km(a, b) == pytest.approx(haversine_km(b, a))


def test_haversine_known_distance_mumbai_delhi():
    # Roughly 1150 km as the crow flies.
    d = haversine_km(GeoPoint(lat=19.076, lon=72.8777), GeoPoint(lat=28.6139, lon=77.209))
    assert 1140 < d < 1160


def test_haversine_antipodal_points_is_half_circumference():
    d = haversine_km(GeoPoint(lat=10.0, lon=20.0), GeoPoint(lat=-10.0, lon=-160.0))
    assert d == pytest.approx(math.pi * 6371.0, rel=1e-9)


def test_within_radius_negative_or_nan_radius_never_matches():
    p = GeoPoint(lat=1.0, lon=1.0)
    assert within_radius(p, p, -1.0)[0] is False
    assert within_radius(p, p, math.nan)[0] is False
    assert within_radius(p, p, 0.0) == (True, 0.0)


def test_geo_module_is_documented():
    import localherro.core.geo as geo

    assert geo.__doc__ is not None
    assert "Geospatial helpers" in geo.__doc__
