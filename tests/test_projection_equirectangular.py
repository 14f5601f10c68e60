# -*- coding: utf-8 -*-
"""
Equirectangular Projection Tests - Forward/inverse mapping over a window.

Dependencies
------------
pytest

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

from scanwarp.exceptions import ValidationError
from scanwarp.projection import EquirectangularProjection


@pytest.fixture
def globe():
    """One degree per pixel over the whole globe."""
    return EquirectangularProjection(360, 180, -180, 90, 180, -90)


@pytest.fixture
def window():
    """A 100x50 window, 0.1 degree pixels, lon 20..30, lat 5..10."""
    return EquirectangularProjection(100, 50, 20.0, 10.0, 30.0, 5.0)


class TestConstruction:

    def test_pixel_sizes(self, window):
        assert window.pixel_size_lon == pytest.approx(0.1)
        assert window.pixel_size_lat == pytest.approx(0.1)

    @pytest.mark.parametrize('args', [
        (0, 10, 0, 10, 10, 0),
        (10, -1, 0, 10, 10, 0),
        (10, 10, 10, 10, 0, 0),
        (10, 10, 0, 0, 10, 10),
    ])
    def test_invalid(self, args):
        with pytest.raises(ValidationError):
            EquirectangularProjection(*args)

    def test_repr(self, window):
        assert '100x50' in repr(window)


class TestForward:

    def test_globe_centre(self, globe):
        assert globe.forward(0.0, 0.0) == (180, 90)

    def test_top_left_edge(self, window):
        assert window.forward(20.0, 10.0) == (0, 0)

    def test_rounds_to_nearest(self, window):
        assert window.forward(20.04, 9.96) == (0, 0)
        assert window.forward(20.06, 9.94) == (1, 1)

    def test_outside_window(self, window):
        assert window.forward(19.5, 7.0) is None
        assert window.forward(25.0, 10.5) is None
        assert window.forward(25.0, 4.0) is None

    def test_far_edge_is_outside_grid(self, window):
        # The east edge rounds to column 100, one past the last pixel
        assert window.forward(30.0, 7.0) is None


class TestInverse:

    def test_edges(self, window):
        lon, lat = window.inverse(0, 0)
        assert (lon, lat) == pytest.approx((20.0, 10.0))
        lon, lat = window.inverse(100, 50)
        assert (lon, lat) == pytest.approx((30.0, 5.0))

    def test_forward_of_inverse(self, window):
        for x, y in [(0, 0), (17, 33), (99, 49)]:
            lon, lat = window.inverse(x, y)
            assert window.forward(lon, lat) == (x, y)

    def test_pixel_centers(self, window):
        lons, lats = window.pixel_centers()
        assert lons.shape == (50, 100)
        assert lons[0, 0] == pytest.approx(20.05)
        assert lats[0, 0] == pytest.approx(9.95)
        np.testing.assert_allclose(np.diff(lons[0]), 0.1)
