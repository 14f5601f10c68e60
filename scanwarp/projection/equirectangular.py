# -*- coding: utf-8 -*-
"""
Equirectangular Projection - Plate carree grid over a geographic window.

Maps longitude/latitude to pixel positions on a regular grid spanning a
geographic window. The grid follows image conventions: row 0 is the
northern (top) edge, row increases southward. Column 0 is the western
(left) edge, column increases eastward.

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

# Standard library
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# scanwarp internal
from scanwarp.exceptions import ValidationError

# Tolerance for points sitting exactly on the window edge
_EDGE_EPS = 1e-9


class EquirectangularProjection:
    """
    Equirectangular grid over a geographic window.

    Attributes
    ----------
    width : int
        Number of grid columns.
    height : int
        Number of grid rows.
    top_left_lon : float
        Western boundary (degrees East).
    top_left_lat : float
        Northern boundary (degrees North).
    bottom_right_lon : float
        Eastern boundary (degrees East).
    bottom_right_lat : float
        Southern boundary (degrees North).
    pixel_size_lon : float
        Longitude spacing per pixel (degrees).
    pixel_size_lat : float
        Latitude spacing per pixel (degrees).

    Examples
    --------
    A 360 x 180 grid covering the globe at one degree per pixel:

    >>> proj = EquirectangularProjection(360, 180, -180, 90, 180, -90)
    >>> proj.forward(0.0, 0.0)
    (180, 90)
    """

    def __init__(
        self,
        width: int,
        height: int,
        top_left_lon: float,
        top_left_lat: float,
        bottom_right_lon: float,
        bottom_right_lat: float
    ) -> None:
        """
        Initialize the projection.

        Parameters
        ----------
        width, height : int
            Grid size in pixels. Must be positive.
        top_left_lon, top_left_lat : float
            Geographic position of the grid's top-left edge.
        bottom_right_lon, bottom_right_lat : float
            Geographic position of the grid's bottom-right edge.

        Raises
        ------
        ValidationError
            If the size is not positive or the window is empty.
        """
        if width <= 0 or height <= 0:
            raise ValidationError(
                f"Projection size must be positive, got {width}x{height}"
            )
        if bottom_right_lon <= top_left_lon:
            raise ValidationError(
                f"bottom_right_lon ({bottom_right_lon}) must be greater than "
                f"top_left_lon ({top_left_lon})"
            )
        if top_left_lat <= bottom_right_lat:
            raise ValidationError(
                f"top_left_lat ({top_left_lat}) must be greater than "
                f"bottom_right_lat ({bottom_right_lat})"
            )

        self.width = int(width)
        self.height = int(height)
        self.top_left_lon = float(top_left_lon)
        self.top_left_lat = float(top_left_lat)
        self.bottom_right_lon = float(bottom_right_lon)
        self.bottom_right_lat = float(bottom_right_lat)

        self.pixel_size_lon = (self.bottom_right_lon - self.top_left_lon) / self.width
        self.pixel_size_lat = (self.top_left_lat - self.bottom_right_lat) / self.height

    def forward(self, lon: float, lat: float) -> Optional[Tuple[int, int]]:
        """
        Project a geographic coordinate to the nearest grid pixel.

        Parameters
        ----------
        lon : float
            Longitude in degrees East.
        lat : float
            Latitude in degrees North.

        Returns
        -------
        Optional[Tuple[int, int]]
            (x, y) pixel position, or ``None`` when the coordinate falls
            outside the grid.
        """
        if (lat > self.top_left_lat + _EDGE_EPS
                or lat < self.bottom_right_lat - _EDGE_EPS
                or lon < self.top_left_lon - _EDGE_EPS
                or lon > self.bottom_right_lon + _EDGE_EPS):
            return None

        x = int(np.floor((lon - self.top_left_lon) / self.pixel_size_lon + 0.5))
        y = int(np.floor((self.top_left_lat - lat) / self.pixel_size_lat + 0.5))

        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return None
        return x, y

    def inverse(
        self,
        x: Union[float, np.ndarray],
        y: Union[float, np.ndarray]
    ) -> Tuple[Union[float, np.ndarray], Union[float, np.ndarray]]:
        """
        Convert grid pixel positions to longitude/latitude.

        Pixel ``(0, 0)`` is the top-left edge of the window; add 0.5 for
        pixel centres.

        Parameters
        ----------
        x : float or np.ndarray
            Column position(s).
        y : float or np.ndarray
            Row position(s).

        Returns
        -------
        Tuple[float or np.ndarray, float or np.ndarray]
            (longitude, latitude) in degrees.
        """
        lon = self.top_left_lon + x * self.pixel_size_lon
        lat = self.top_left_lat - y * self.pixel_size_lat
        return lon, lat

    def pixel_centers(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Longitudes and latitudes of every pixel centre.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            (lons, lats), each with shape ``(height, width)``.
        """
        cols = np.arange(self.width, dtype=np.float64) + 0.5
        rows = np.arange(self.height, dtype=np.float64) + 0.5
        col_grid, row_grid = np.meshgrid(cols, rows)
        return self.inverse(col_grid, row_grid)

    def __repr__(self) -> str:
        return (
            f"EquirectangularProjection("
            f"lon=[{self.top_left_lon:.4f}, {self.bottom_right_lon:.4f}], "
            f"lat=[{self.bottom_right_lat:.4f}, {self.top_left_lat:.4f}], "
            f"size={self.width}x{self.height})"
        )
