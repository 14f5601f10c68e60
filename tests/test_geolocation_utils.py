# -*- coding: utf-8 -*-
"""
Geolocation Utility Tests - Geodesic distances, centroids, pole checks and
the segment working frame.

Dependencies
------------
pytest
pyproj

Author
------
scanwarp contributors

License
-------
MIT License
Copyright (c) 2026 scanwarp contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from scanwarp.exceptions import GeolocationError, ValidationError
from scanwarp.geolocation.frame import from_frame, to_frame, wrap_longitude
from scanwarp.geolocation.utils import (
    consecutive_distances_km,
    geodesic_distance_km,
    geodesic_distance_km_batch,
    pole_within,
    spherical_centroid,
)


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------

class TestGeodesicDistance:

    def test_one_degree_latitude_at_equator(self):
        assert geodesic_distance_km(0, 0, 1, 0) == pytest.approx(110.574, rel=1e-3)

    def test_one_degree_longitude_at_equator(self):
        assert geodesic_distance_km(0, 0, 0, 1) == pytest.approx(111.319, rel=1e-3)

    def test_zero_distance(self):
        assert geodesic_distance_km(35.0, 139.0, 35.0, 139.0) == pytest.approx(0.0)

    def test_across_antimeridian(self):
        d = geodesic_distance_km(0, 179.5, 0, -179.5)
        assert d == pytest.approx(111.319, rel=1e-3)

    def test_nearly_antipodal_converges(self):
        d = geodesic_distance_km(0, 0, 0.5, 179.7)
        assert np.isfinite(d)
        assert 19000 < d < 20100

    def test_non_finite_raises(self):
        with pytest.raises(GeolocationError):
            geodesic_distance_km(np.nan, 0, 0, 0)

    def test_batch_matches_scalar(self):
        lats1 = np.array([0.0, 10.0, -45.0])
        lons1 = np.array([0.0, 20.0, 100.0])
        lats2 = np.array([1.0, 12.0, -44.0])
        lons2 = np.array([0.0, 25.0, 101.0])
        batch = geodesic_distance_km_batch(lats1, lons1, lats2, lons2)
        for i in range(3):
            assert batch[i] == pytest.approx(
                geodesic_distance_km(lats1[i], lons1[i], lats2[i], lons2[i])
            )

    def test_consecutive_distances(self):
        d = consecutive_distances_km([0, 1, 2], [0, 0, 0])
        assert d.shape == (2,)
        np.testing.assert_allclose(d, 110.574, rtol=1e-3)

    def test_consecutive_distances_single_point(self):
        assert consecutive_distances_km([5.0], [5.0]).size == 0


# ---------------------------------------------------------------------------
# Centroid and poles
# ---------------------------------------------------------------------------

class TestSphericalCentroid:

    def test_symmetric_points(self):
        lat, lon = spherical_centroid([10, -10], [30, 30])
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert lon == pytest.approx(30.0)

    def test_antimeridian_is_continuous(self):
        lat, lon = spherical_centroid([0, 0], [179, -179])
        assert lat == pytest.approx(0.0, abs=1e-9)
        assert abs(lon) == pytest.approx(180.0)

    def test_empty_raises(self):
        with pytest.raises(ValidationError):
            spherical_centroid([], [])


class TestPoleWithin:

    def test_south_pole(self):
        assert pole_within([-85.0], [0.0], 1000.0) == -90.0

    def test_north_pole(self):
        assert pole_within([85.0], [120.0], 1000.0) == 90.0

    def test_far_from_poles(self):
        assert pole_within([60.0, -60.0], [0.0, 0.0], 1000.0) == 0.0

    def test_last_match_wins(self):
        assert pole_within([-85.0, 85.0], [0.0, 0.0], 1000.0) == 90.0
        assert pole_within([85.0, -85.0], [0.0, 0.0], 1000.0) == -90.0

    def test_empty(self):
        assert pole_within([], [], 1000.0) == 0.0


# ---------------------------------------------------------------------------
# Working frame
# ---------------------------------------------------------------------------

class TestWorkingFrame:

    def test_wrap_longitude(self):
        np.testing.assert_allclose(
            wrap_longitude(np.array([180.0, 190.0, -190.0, 0.0])),
            [-180.0, -170.0, 170.0, 0.0],
        )

    def test_longitude_shift_wraps(self):
        lats, lons = to_frame(5.0, 170.0, 20.0, 0.0)
        assert float(lats) == pytest.approx(5.0)
        assert float(lons) == pytest.approx(-170.0)

    @pytest.mark.parametrize('pole', [-90.0, 90.0])
    def test_pole_lands_on_origin(self, pole):
        lats, lons = to_frame(pole, 0.0, 0.0, pole)
        assert float(lats) == pytest.approx(0.0, abs=1e-9)
        assert float(lons) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize('shift_lon,shift_lat', [
        (-30.0, 0.0),
        (0.0, -90.0),
        (0.0, 90.0),
    ])
    def test_round_trip(self, shift_lon, shift_lat):
        lats = np.array([10.0, -80.0, 45.0, 85.0])
        lons = np.array([20.0, 170.0, -100.0, 5.0])
        frame_lats, frame_lons = to_frame(lats, lons, shift_lon, shift_lat)
        back_lats, back_lons = from_frame(frame_lats, frame_lons,
                                          shift_lon, shift_lat)
        np.testing.assert_allclose(back_lats, lats, atol=1e-9)
        np.testing.assert_allclose(
            wrap_longitude(back_lons - lons), 0.0, atol=1e-9
        )
