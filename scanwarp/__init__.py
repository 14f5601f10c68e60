# -*- coding: utf-8 -*-
"""
Scanwarp - Georeferencing for scanning satellite sensors.

Turns raw, geometrically distorted scan imagery plus a sparse set of
ground control points into a map-referenced equirectangular mosaic.
Long passes are warped in segments, each with its own thin-plate-spline
correction, and composited into one raster sized to a memory budget.

Dependencies
------------
numpy
scipy
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

__version__ = "0.1.0"

from scanwarp.exceptions import (
    ScanwarpError,
    ValidationError,
    InsufficientGCPError,
    MemoryBudgetError,
    WarpError,
    GeolocationError,
)
from scanwarp.geolocation.gcp import GroundControlPoint
from scanwarp.warp import (
    WarpConfig,
    WarpOperation,
    WarpResult,
    perform_smart_warp,
)

__all__ = [
    'ScanwarpError',
    'ValidationError',
    'InsufficientGCPError',
    'MemoryBudgetError',
    'WarpError',
    'GeolocationError',
    'GroundControlPoint',
    'WarpConfig',
    'WarpOperation',
    'WarpResult',
    'perform_smart_warp',
]
