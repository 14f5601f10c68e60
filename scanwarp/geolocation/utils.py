# -*- coding: utf-8 -*-
"""
Geolocation Utilities - Geodesic helpers for scan-track processing.

Ellipsoidal inverse distances on WGS84, the spherical centroid of a point
set, and pole-proximity checks. Distances are returned in kilometres, the
unit the segment heuristics are tuned in.

Dependencies
------------
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

# Standard library
from typing import Sequence, Tuple

# Third-party
import numpy as np
from pyproj import Geod

# scanwarp internal
from scanwarp.exceptions import GeolocationError, ValidationError

_WGS84 = Geod(ellps='WGS84')

NORTH_POLE = (90.0, 0.0)
SOUTH_POLE = (-90.0, 0.0)


def geodesic_distance_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float
) -> float:
    """
    Ellipsoidal distance between two geographic coordinates.

    Parameters
    ----------
    lat1, lon1 : float
        First point (latitude, longitude) in degrees
    lat2, lon2 : float
        Second point (latitude, longitude) in degrees

    Returns
    -------
    float
        Distance in kilometres

    Raises
    ------
    GeolocationError
        If the inputs are not finite or the solution is not finite.

    Notes
    -----
    Uses ``pyproj.Geod.inv`` on the WGS84 ellipsoid (Karney's algorithm),
    which converges for nearly antipodal points where Vincenty does not.
    """
    coords = (lat1, lon1, lat2, lon2)
    if not all(np.isfinite(c) for c in coords):
        raise GeolocationError(f"Non-finite coordinates: {coords}")

    _, _, dist_m = _WGS84.inv(lon1, lat1, lon2, lat2)
    if not np.isfinite(dist_m):
        raise GeolocationError(
            f"Geodesic inverse did not converge for {coords}"
        )
    return float(dist_m) / 1000.0


def geodesic_distance_km_batch(
    lats1: np.ndarray,
    lons1: np.ndarray,
    lats2: np.ndarray,
    lons2: np.ndarray
) -> np.ndarray:
    """
    Ellipsoidal distances between arrays of geographic coordinates.

    Parameters
    ----------
    lats1, lons1 : np.ndarray
        First points (latitude, longitude) in degrees
    lats2, lons2 : np.ndarray
        Second points (latitude, longitude) in degrees

    Returns
    -------
    np.ndarray
        Distances in kilometres (same shape as input arrays)
    """
    lats1 = np.asarray(lats1, dtype=np.float64)
    lons1 = np.asarray(lons1, dtype=np.float64)
    lats2 = np.asarray(lats2, dtype=np.float64)
    lons2 = np.asarray(lons2, dtype=np.float64)

    if lats1.size == 0:
        return np.zeros(lats1.shape, dtype=np.float64)

    _, _, dist_m = _WGS84.inv(lons1, lats1, lons2, lats2)
    return np.asarray(dist_m, dtype=np.float64) / 1000.0


def consecutive_distances_km(
    lats: Sequence[float],
    lons: Sequence[float]
) -> np.ndarray:
    """Distances between each consecutive pair of points, in kilometres."""
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)
    if lats.size < 2:
        return np.zeros(0, dtype=np.float64)
    return geodesic_distance_km_batch(lats[:-1], lons[:-1], lats[1:], lons[1:])


def spherical_centroid(
    lats: Sequence[float],
    lons: Sequence[float]
) -> Tuple[float, float]:
    """
    Centre of a point set computed on the unit sphere.

    Each point is converted to a unit vector, the vectors are averaged and
    the mean is converted back to latitude/longitude. Unlike an arithmetic
    mean of longitudes this is continuous across the antimeridian.

    Parameters
    ----------
    lats, lons : Sequence[float]
        Point coordinates in degrees.

    Returns
    -------
    Tuple[float, float]
        (latitude, longitude) of the centroid in degrees.

    Raises
    ------
    ValidationError
        If no points are given.
    """
    lat_r = np.radians(np.asarray(lats, dtype=np.float64))
    lon_r = np.radians(np.asarray(lons, dtype=np.float64))
    if lat_r.size == 0:
        raise ValidationError("Cannot compute the centroid of zero points")

    x = np.mean(np.cos(lat_r) * np.cos(lon_r))
    y = np.mean(np.cos(lat_r) * np.sin(lon_r))
    z = np.mean(np.sin(lat_r))

    lon = np.degrees(np.arctan2(y, x))
    lat = np.degrees(np.arctan2(z, np.hypot(x, y)))
    return float(lat), float(lon)


def pole_within(
    lats: Sequence[float],
    lons: Sequence[float],
    threshold_km: float
) -> float:
    """
    Latitude of a pole lying within ``threshold_km`` of any point.

    Points are checked in order, the south pole before the north pole for
    each point; the last match wins.

    Parameters
    ----------
    lats, lons : Sequence[float]
        Point coordinates in degrees.
    threshold_km : float
        Proximity threshold in kilometres.

    Returns
    -------
    float
        ``-90.0`` or ``90.0`` for a nearby pole, ``0.0`` when neither is
        close.
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)
    if lats.size == 0:
        return 0.0

    south = geodesic_distance_km_batch(
        lats, lons,
        np.full_like(lats, SOUTH_POLE[0]), np.full_like(lons, SOUTH_POLE[1]),
    )
    north = geodesic_distance_km_batch(
        lats, lons,
        np.full_like(lats, NORTH_POLE[0]), np.full_like(lons, NORTH_POLE[1]),
    )

    pole = 0.0
    for d_south, d_north in zip(south, north):
        if d_south < threshold_km:
            pole = SOUTH_POLE[0]
        if d_north < threshold_km:
            pole = NORTH_POLE[0]
    return pole
