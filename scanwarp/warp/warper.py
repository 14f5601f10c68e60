# -*- coding: utf-8 -*-
"""
Segment Warper - Resample one segment of a scan onto the output grid.

Works like an inverse-mapping orthorectifier: for every output pixel the
segment transform gives the source position, and the source sample there
is copied out. Output pixels that map outside the segment's source
scanlines keep a zero alpha.

Evaluating a thin-plate spline costs one kernel evaluation per control
point, so the mapping is computed on a lattice every ``lattice_step``
output pixels and densified with bilinear interpolation
(``scipy.ndimage.map_coordinates``). The spline is smooth at that scale.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

try:
    from scipy.ndimage import map_coordinates
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False
    map_coordinates = None

# scanwarp internal
from scanwarp.projection.equirectangular import EquirectangularProjection
from scanwarp.warp.config import WarpConfig, resolve_config
from scanwarp.warp.crop import choose_crop_area
from scanwarp.warp.models import ALPHA_OPAQUE, WarpOperation, WarpResult
from scanwarp.warp.tps import TPSTransform


def _lattice(size: int, step: int) -> np.ndarray:
    """Lattice node indices over ``[0, size)``, always including the last."""
    nodes = np.arange(0, size, step)
    if nodes[-1] != size - 1:
        nodes = np.append(nodes, size - 1)
    return nodes


class ImageWarper:
    """
    Warp one segment's source raster onto its output window.

    Algorithm
    ---------
    1. Plan the output window from the segment's GCPs
       (``choose_crop_area``) on the operation's full-globe grid.
    2. Evaluate the transform at pixel centres on a lattice of output
       pixels and densify to every output pixel.
    3. Copy the nearest source sample into each output pixel whose source
       position lies inside the source raster, and mark it opaque.

    Attributes
    ----------
    operation : WarpOperation
        Segment-scoped operation (cropped raster, rebased GCPs).
    transform : TPSTransform
        The segment's fitted transform.
    crop : CropSettings
        Output window.
    projection : EquirectangularProjection
        Projection of the output window.

    Examples
    --------
    >>> segment_op = operation.for_segment(segment)
    >>> result = ImageWarper(segment_op, segment.transform).warp()
    """

    def __init__(
        self,
        operation: WarpOperation,
        transform: TPSTransform,
        config: Optional[WarpConfig] = None
    ) -> None:
        """
        Initialize the warper.

        Parameters
        ----------
        operation : WarpOperation
            Segment-scoped operation.
        transform : TPSTransform
            Fitted transform for the segment.
        config : WarpConfig, optional
            Supplies ``lattice_step`` and crop planning settings.

        Raises
        ------
        ImportError
            If scipy is not available.
        """
        if not SCIPY_AVAILABLE:
            raise ImportError(
                "scipy is required for segment warping. "
                "Install with: pip install scipy>=1.7.0"
            )

        self.operation = operation
        self.transform = transform
        self.config = resolve_config(config)

        self.crop = choose_crop_area(operation, self.config)
        self.projection = EquirectangularProjection(
            self.crop.width, self.crop.height,
            self.crop.lon_min, self.crop.lat_max,
            self.crop.lon_max, self.crop.lat_min,
        )

        self._source_x: Optional[np.ndarray] = None
        self._source_y: Optional[np.ndarray] = None
        self._valid_mask: Optional[np.ndarray] = None

    def compute_mapping(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Source pixel position of every output pixel.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            (source_x, source_y, valid_mask), each with shape
            ``(crop.height, crop.width)``. ``valid_mask`` is True where the
            position is finite and inside the source raster.
        """
        height, width = self.crop.height, self.crop.width
        step = self.config.lattice_step

        node_rows = _lattice(height, step)
        node_cols = _lattice(width, step)
        col_grid, row_grid = np.meshgrid(node_cols + 0.5, node_rows + 0.5)
        lons, lats = self.projection.inverse(col_grid, row_grid)
        lattice_x, lattice_y = self.transform(lats, lons)

        if node_rows.size == height and node_cols.size == width:
            source_x, source_y = lattice_x, lattice_y
        else:
            # Fractional lattice index of every output row / column
            row_idx = np.interp(np.arange(height), node_rows,
                                np.arange(node_rows.size))
            col_idx = np.interp(np.arange(width), node_cols,
                                np.arange(node_cols.size))
            col_coords, row_coords = np.meshgrid(col_idx, row_idx)
            coords = np.array([row_coords, col_coords])
            source_x = map_coordinates(lattice_x, coords, order=1,
                                       mode='nearest')
            source_y = map_coordinates(lattice_y, coords, order=1,
                                       mode='nearest')

        src_height, src_width = self.operation.height, self.operation.width
        valid = (
            np.isfinite(source_x) &
            np.isfinite(source_y) &
            (source_x >= 0) &
            (source_x < src_width) &
            (source_y >= 0) &
            (source_y < src_height)
        )

        self._source_x = source_x
        self._source_y = source_y
        self._valid_mask = valid
        return source_x, source_y, valid

    def _source_channel_map(self) -> list:
        """Source channel feeding each non-alpha output channel."""
        n_source = self.operation.source_channels
        if self.operation.output_rgba:
            return [min(c, n_source - 1) for c in range(3)]
        return list(range(n_source))

    def warp(self) -> WarpResult:
        """
        Warp the segment.

        Returns
        -------
        WarpResult
            Raster covering ``crop`` with ``operation.output_channels``
            channels; alpha is opaque where a source sample was written.
        """
        if self._source_x is None:
            self.compute_mapping()

        result = WarpResult.from_crop(self.crop, self.operation.output_channels)
        valid = self._valid_mask
        if not np.any(valid):
            return result

        src_height, src_width = self.operation.height, self.operation.width
        cols = np.minimum(
            np.floor(self._source_x[valid] + 0.5).astype(np.intp), src_width - 1
        )
        rows = np.minimum(
            np.floor(self._source_y[valid] + 0.5).astype(np.intp), src_height - 1
        )

        source = self.operation.input_image
        for out_ch, src_ch in enumerate(self._source_channel_map()):
            samples = source[src_ch, rows, cols]
            if samples.dtype != np.uint16:
                samples = np.clip(samples, 0, ALPHA_OPAQUE).astype(np.uint16)
            result.raster[out_ch][valid] = samples
        result.alpha[valid] = ALPHA_OPAQUE
        return result

    def __repr__(self) -> str:
        return (
            f"ImageWarper(crop={self.crop.width}x{self.crop.height}, "
            f"transform={self.transform!r})"
        )


def warp_segment(
    operation: WarpOperation,
    transform: TPSTransform,
    config: Optional[WarpConfig] = None
) -> WarpResult:
    """Warp a segment-scoped operation with its fitted transform."""
    return ImageWarper(operation, transform, config).warp()
