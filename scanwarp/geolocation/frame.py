# -*- coding: utf-8 -*-
"""
Segment Working Frame - Rotated geographic frame used for transform fits.

A segment's transform is fit in a frame where the segment sits away from
the coordinate singularities. ``shift_lon`` rotates longitudes so the
segment centre lands on the prime meridian. A non-zero ``shift_lat``
(``+90`` or ``-90``) additionally rotates the sphere about the y-axis so
that the designated pole lands on the equator at longitude 0, where
longitude is no longer degenerate.

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
from typing import Tuple, Union

# Third-party
import numpy as np

ArrayLike = Union[float, np.ndarray]


def wrap_longitude(lon: ArrayLike) -> ArrayLike:
    """Wrap longitude(s) into ``[-180, 180)`` degrees."""
    return (np.asarray(lon, dtype=np.float64) + 180.0) % 360.0 - 180.0


def _rotate_about_y(
    lats: np.ndarray,
    lons: np.ndarray,
    angle_deg: float
) -> Tuple[np.ndarray, np.ndarray]:
    lat_r = np.radians(lats)
    lon_r = np.radians(lons)
    x = np.cos(lat_r) * np.cos(lon_r)
    y = np.cos(lat_r) * np.sin(lon_r)
    z = np.sin(lat_r)

    a = np.radians(angle_deg)
    xr = x * np.cos(a) + z * np.sin(a)
    zr = -x * np.sin(a) + z * np.cos(a)

    out_lats = np.degrees(np.arctan2(zr, np.hypot(xr, y)))
    out_lons = np.degrees(np.arctan2(y, xr))
    return out_lats, out_lons


def to_frame(
    lats: ArrayLike,
    lons: ArrayLike,
    shift_lon: float,
    shift_lat: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Move geodetic coordinates into a segment's working frame.

    Parameters
    ----------
    lats, lons : float or np.ndarray
        Geodetic coordinates in degrees.
    shift_lon : float
        Longitude shift in degrees, applied first.
    shift_lat : float
        Rotation about the y-axis in degrees, applied second. ``-90``
        moves the south pole to (0, 0); ``90`` moves the north pole there.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (frame_lats, frame_lons) in degrees, longitudes in ``[-180, 180)``.
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = wrap_longitude(np.asarray(lons, dtype=np.float64) + shift_lon)
    if shift_lat == 0:
        return lats, lons
    frame_lats, frame_lons = _rotate_about_y(lats, lons, shift_lat)
    return frame_lats, wrap_longitude(frame_lons)


def from_frame(
    frame_lats: ArrayLike,
    frame_lons: ArrayLike,
    shift_lon: float,
    shift_lat: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Inverse of :func:`to_frame`.

    Parameters
    ----------
    frame_lats, frame_lons : float or np.ndarray
        Working-frame coordinates in degrees.
    shift_lon, shift_lat : float
        The shift the frame was built with.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (lats, lons) geodetic coordinates in degrees.
    """
    lats = np.asarray(frame_lats, dtype=np.float64)
    lons = np.asarray(frame_lons, dtype=np.float64)
    if shift_lat != 0:
        lats, lons = _rotate_about_y(lats, lons, -shift_lat)
    return lats, wrap_longitude(lons - shift_lon)
