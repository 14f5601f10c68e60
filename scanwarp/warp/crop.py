# -*- coding: utf-8 -*-
"""
Crop Planning - Choose the window of the output grid a warp must cover.

The output of every warp is a window of one full-globe equirectangular
grid of ``output_width x output_height`` pixels, so segments and the final
mosaic share pixel spacing and registration. The window is the GCP
bounding box, rounded outward to whole degrees and snapped to grid pixels.
A track passing close to a pole extends the window to that pole over all
longitudes, since a polar cap cannot be bounded in longitude.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# scanwarp internal
from scanwarp.exceptions import InsufficientGCPError
from scanwarp.geolocation.utils import pole_within
from scanwarp.warp.config import WarpConfig, resolve_config
from scanwarp.warp.models import CropSettings, WarpOperation

# Pixel tolerance absorbing float noise before flooring or ceiling
_SNAP_EPS = 1e-6


def grid_size(operation: WarpOperation) -> Tuple[int, int]:
    """Integer (width, height) of the operation's full-globe grid."""
    return (max(1, int(operation.output_width)),
            max(1, int(operation.output_height)))


def choose_crop_area(
    operation: WarpOperation,
    config: Optional[WarpConfig] = None
) -> CropSettings:
    """
    Derive the output window covering an operation's GCPs.

    Parameters
    ----------
    operation : WarpOperation
        Operation whose GCPs and output grid size define the window.
    config : WarpConfig, optional
        Supplies ``crop_margin_deg`` and ``pole_distance_km``.

    Returns
    -------
    CropSettings
        Pixel window in the full-globe grid, with the geographic extent
        re-derived from the pixel bounds so both agree exactly.

    Raises
    ------
    InsufficientGCPError
        If the operation has no GCPs.
    """
    config = resolve_config(config)
    gcps = operation.ground_control_points
    if not gcps:
        raise InsufficientGCPError("Cannot plan a crop area without GCPs")

    lats = np.array([g.lat for g in gcps], dtype=np.float64)
    lons = np.array([g.lon for g in gcps], dtype=np.float64)
    margin = config.crop_margin_deg

    lat_min = max(-90.0, float(np.floor(lats.min() - margin)))
    lat_max = min(90.0, float(np.ceil(lats.max() + margin)))
    lon_min = max(-180.0, float(np.floor(lons.min() - margin)))
    lon_max = min(180.0, float(np.ceil(lons.max() + margin)))

    pole = pole_within(lats, lons, config.pole_distance_km)
    if pole != 0:
        lon_min, lon_max = -180.0, 180.0
        if pole > 0:
            lat_max = 90.0
        else:
            lat_min = -90.0

    width, height = grid_size(operation)

    x_min = int(np.floor((lon_min + 180.0) / 360.0 * width + _SNAP_EPS))
    x_max = int(np.ceil((lon_max + 180.0) / 360.0 * width - _SNAP_EPS))
    y_min = int(np.floor((90.0 - lat_max) / 180.0 * height + _SNAP_EPS))
    y_max = int(np.ceil((90.0 - lat_min) / 180.0 * height - _SNAP_EPS))

    x_min, x_max = _clamp_span(x_min, x_max, width)
    y_min, y_max = _clamp_span(y_min, y_max, height)

    return CropSettings(
        x_min=x_min,
        x_max=x_max,
        y_min=y_min,
        y_max=y_max,
        lon_min=x_min / width * 360.0 - 180.0,
        lon_max=x_max / width * 360.0 - 180.0,
        lat_min=90.0 - y_max / height * 180.0,
        lat_max=90.0 - y_min / height * 180.0,
    )


def _clamp_span(low: int, high: int, size: int) -> Tuple[int, int]:
    """Clamp ``[low, high)`` into ``[0, size]``, keeping at least one pixel."""
    low = min(max(low, 0), size - 1)
    high = min(max(high, low + 1), size)
    return low, high
