# -*- coding: utf-8 -*-
"""
Thin-Plate-Spline Transforms - Geodetic to source-pixel mapping per segment.

Fits a thin-plate spline through a segment's GCPs, mapping working-frame
(lon, lat) to source (x, y). The fit is a pure function of its inputs, so
the fits of different segments can run concurrently.

Dependencies
------------
scipy

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
from typing import Optional, Sequence, Tuple, Union

# Third-party
import numpy as np

try:
    from scipy.interpolate import RBFInterpolator
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False
    RBFInterpolator = None

# scanwarp internal
from scanwarp.exceptions import InsufficientGCPError, WarpError
from scanwarp.geolocation.frame import to_frame
from scanwarp.geolocation.gcp import GroundControlPoint
from scanwarp.warp.config import WarpConfig, resolve_config


class TPSTransform:
    """
    Thin-plate-spline mapping from geodetic coordinates to source pixels.

    GCPs are moved into the segment's working frame (see
    :mod:`scanwarp.geolocation.frame`) before fitting, and every query is
    moved the same way, so callers always pass true latitudes and
    longitudes.

    Attributes
    ----------
    shift_lon : float
        Working-frame longitude shift (degrees).
    shift_lat : float
        Working-frame pole rotation (degrees).
    n_points : int
        Number of distinct control points the spline was fit through.
    """

    def __init__(
        self,
        gcps: Sequence[GroundControlPoint],
        shift_lon: float = 0.0,
        shift_lat: float = 0.0,
        smoothing: float = 0.0
    ) -> None:
        """
        Fit the spline.

        Parameters
        ----------
        gcps : Sequence[GroundControlPoint]
            Control points, ``y`` in segment-local scanlines.
        shift_lon, shift_lat : float
            Working-frame shift.
        smoothing : float, default=0.0
            Spline smoothing; ``0`` interpolates the GCPs exactly.

        Raises
        ------
        ImportError
            If scipy is not installed.
        InsufficientGCPError
            If fewer than 3 distinct frame positions remain.
        WarpError
            If the spline system is singular (e.g. collinear GCPs).
        """
        if not SCIPY_AVAILABLE:
            raise ImportError(
                "scipy is required for thin-plate-spline transforms. "
                "Install with: pip install scipy>=1.7.0"
            )

        self.shift_lon = float(shift_lon)
        self.shift_lat = float(shift_lat)

        table = np.array(
            [(g.lat, g.lon, g.x, g.y) for g in gcps], dtype=np.float64
        ).reshape(-1, 4)
        frame_lats, frame_lons = to_frame(
            table[:, 0], table[:, 1], self.shift_lon, self.shift_lat
        )

        # Duplicate geodetic positions make the spline system singular
        points = np.column_stack([frame_lons, frame_lats])
        points, keep = np.unique(points, axis=0, return_index=True)
        values = table[keep][:, 2:4]

        if points.shape[0] < 3:
            raise InsufficientGCPError(
                f"A thin-plate spline needs at least 3 distinct GCPs, "
                f"got {points.shape[0]}"
            )

        # The affine part of the spline needs points spanning the plane
        centred = points - points.mean(axis=0)
        if np.linalg.matrix_rank(centred) < 2:
            raise WarpError(
                f"Thin-plate-spline fit failed: {points.shape[0]} GCPs "
                f"are collinear"
            )

        try:
            self._spline = RBFInterpolator(
                points, values,
                kernel='thin_plate_spline',
                smoothing=smoothing,
            )
        except (np.linalg.LinAlgError, ValueError) as e:
            raise WarpError(f"Thin-plate-spline fit failed: {e}") from e

        self.n_points = points.shape[0]

    def __call__(
        self,
        lats: Union[float, np.ndarray],
        lons: Union[float, np.ndarray]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Map geodetic coordinates to source pixel positions.

        Parameters
        ----------
        lats, lons : float or np.ndarray
            Coordinates in degrees, any matching shape.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            (x, y) source positions with the input shape.
        """
        lats = np.asarray(lats, dtype=np.float64)
        lons = np.asarray(lons, dtype=np.float64)
        shape = lats.shape

        frame_lats, frame_lons = to_frame(
            lats.ravel(), lons.ravel(), self.shift_lon, self.shift_lat
        )
        if frame_lats.size == 0:
            return np.zeros(shape), np.zeros(shape)

        xy = self._spline(np.column_stack([frame_lons, frame_lats]))
        return xy[:, 0].reshape(shape), xy[:, 1].reshape(shape)

    def __repr__(self) -> str:
        return (
            f"TPSTransform(n_points={self.n_points}, "
            f"shift_lon={self.shift_lon:.2f}, shift_lat={self.shift_lat:.1f})"
        )


def fit_tps_transform(
    gcps: Sequence[GroundControlPoint],
    shift_lon: float,
    shift_lat: float,
    config: Optional[WarpConfig] = None
) -> TPSTransform:
    """
    Fit a segment's transform.

    Parameters
    ----------
    gcps : Sequence[GroundControlPoint]
        The segment's rebased GCPs.
    shift_lon, shift_lat : float
        The segment's working-frame shift.
    config : WarpConfig, optional
        Supplies ``min_tps_points`` and ``tps_smoothing``.

    Returns
    -------
    TPSTransform

    Raises
    ------
    InsufficientGCPError
        If fewer than ``config.min_tps_points`` GCPs are given.
    WarpError
        If the fit fails.
    """
    config = resolve_config(config)
    if len(gcps) < config.min_tps_points:
        raise InsufficientGCPError(
            f"Segment transform needs at least {config.min_tps_points} GCPs, "
            f"got {len(gcps)}"
        )
    return TPSTransform(gcps, shift_lon, shift_lat,
                        smoothing=config.tps_smoothing)
