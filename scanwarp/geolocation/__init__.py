# -*- coding: utf-8 -*-
"""
Geolocation Module - Ground control points and geodesic helpers.

Provides the ``GroundControlPoint`` record, scan-order utilities, WGS84
geodesic distances, and the rotated working frame that segment transforms
are fit in.

Key Classes
-----------
- GroundControlPoint: Immutable pixel to lat/lon correspondence

Usage
-----
    >>> from scanwarp.geolocation import GroundControlPoint, geodesic_distance_km
    >>> a = GroundControlPoint(x=0, y=0, lat=10.0, lon=20.0)
    >>> b = GroundControlPoint(x=0, y=100, lat=11.0, lon=20.0)
    >>> geodesic_distance_km(a.lat, a.lon, b.lat, b.lon)  # ~110.6 km

Modules
-------
- gcp: GCP record and scan-order helpers
- utils: Geodesic distances, spherical centroid, pole proximity
- frame: Segment working frame (longitude shift and pole rotation)

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

from scanwarp.geolocation.gcp import (
    GroundControlPoint,
    gcps_from_array,
    sort_scan_order,
    first_per_scanline,
    scanline_track,
)
from scanwarp.geolocation.utils import (
    geodesic_distance_km,
    geodesic_distance_km_batch,
    consecutive_distances_km,
    spherical_centroid,
    pole_within,
)
from scanwarp.geolocation.frame import to_frame, from_frame, wrap_longitude

__all__ = [
    'GroundControlPoint',
    'gcps_from_array',
    'sort_scan_order',
    'first_per_scanline',
    'scanline_track',
    'geodesic_distance_km',
    'geodesic_distance_km_batch',
    'consecutive_distances_km',
    'spherical_centroid',
    'pole_within',
    'to_frame',
    'from_frame',
    'wrap_longitude',
]
