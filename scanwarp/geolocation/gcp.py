# -*- coding: utf-8 -*-
"""
Ground Control Points - Pixel to geodetic correspondences along a scan track.

Defines the immutable ``GroundControlPoint`` record produced by upstream
geolocation and the scan-order helpers used by segment planning: sorting
by raster scan order and reducing a track to one point per scanline.

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
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

# Third-party
import numpy as np

# scanwarp internal
from scanwarp.exceptions import ValidationError


@dataclass(frozen=True)
class GroundControlPoint:
    """
    A single pixel to geodetic correspondence.

    Attributes
    ----------
    x : float
        Source pixel column (0-based).
    y : float
        Source scanline (0-based). Segment-local once rebased.
    lat : float
        Latitude in degrees North.
    lon : float
        Longitude in degrees East.
    """

    x: float
    y: float
    lat: float
    lon: float

    @classmethod
    def from_tuple(
        cls, values: Tuple[float, float, float, float]
    ) -> 'GroundControlPoint':
        """Build a GCP from an ``(x, y, lat, lon)`` tuple."""
        x, y, lat, lon = values
        return cls(x, y, lat, lon)

    def rebased(self, y_offset: float) -> 'GroundControlPoint':
        """Return a copy with ``y`` shifted down by ``y_offset`` scanlines."""
        return replace(self, y=self.y - y_offset)


def gcps_from_array(array: np.ndarray) -> List[GroundControlPoint]:
    """
    Build GCPs from an ``(N, 4)`` array of ``[x, y, lat, lon]`` rows.

    Parameters
    ----------
    array : np.ndarray
        GCP table, one point per row.

    Returns
    -------
    List[GroundControlPoint]

    Raises
    ------
    ValidationError
        If the array is not two-dimensional with four columns.
    """
    arr = np.asarray(array, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 4:
        raise ValidationError(
            f"GCP array must have shape (N, 4), got {arr.shape}"
        )
    return [GroundControlPoint(*(float(v) for v in row)) for row in arr]


def sort_scan_order(
    gcps: Iterable[GroundControlPoint],
    width: int
) -> List[GroundControlPoint]:
    """
    Sort GCPs by raster scan order (``y * width + x``).

    Parameters
    ----------
    gcps : Iterable[GroundControlPoint]
        Points to sort.
    width : int
        Source raster width in pixels.

    Returns
    -------
    List[GroundControlPoint]
        New list, sorted. The sort is stable.
    """
    return sorted(gcps, key=lambda g: g.y * width + g.x)


def first_per_scanline(
    gcps: Sequence[GroundControlPoint]
) -> List[GroundControlPoint]:
    """
    Keep the first GCP of each distinct scanline.

    Parameters
    ----------
    gcps : Sequence[GroundControlPoint]
        Points already in scan order.

    Returns
    -------
    List[GroundControlPoint]
        One point per distinct ``y``, in input order.
    """
    kept: List[GroundControlPoint] = []
    for gcp in gcps:
        if not kept or gcp.y != kept[-1].y:
            kept.append(gcp)
    return kept


def scanline_track(
    gcps: Iterable[GroundControlPoint],
    width: int
) -> List[GroundControlPoint]:
    """Sort ``gcps`` by scan order and reduce them to one per scanline."""
    return first_per_scanline(sort_scan_order(gcps, width))
