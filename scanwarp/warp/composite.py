# -*- coding: utf-8 -*-
"""
Compositor - Fold warped segments into the final mosaic.

Segments are placed by projecting their top-left corner into the mosaic's
equirectangular grid. Since every segment is warped onto the same
full-globe grid as the mosaic, placement is a pure pixel offset. Where a
segment's alpha is set, its samples replace the mosaic's; segments are
folded in planner order, so the later of two overlapping segments wins.

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
import logging

# scanwarp internal
from scanwarp.projection.equirectangular import EquirectangularProjection
from scanwarp.warp.models import ALPHA_OPAQUE, WarpResult

logger = logging.getLogger(__name__)


def mosaic_projection(mosaic: WarpResult) -> EquirectangularProjection:
    """Equirectangular projection spanning a mosaic's corners."""
    return EquirectangularProjection(
        mosaic.width, mosaic.height,
        mosaic.top_left.lon, mosaic.top_left.lat,
        mosaic.bottom_right.lon, mosaic.bottom_right.lat,
    )


def composite_segment(
    mosaic: WarpResult,
    projection: EquirectangularProjection,
    segment: WarpResult
) -> WarpResult:
    """
    Fold one warped segment into the mosaic.

    Parameters
    ----------
    mosaic : WarpResult
        Accumulated mosaic. Its raster is written in place.
    projection : EquirectangularProjection
        The mosaic's projection, shared by every fold step.
    segment : WarpResult
        Warped segment to draw.

    Returns
    -------
    WarpResult
        ``mosaic``, for chaining the fold.

    Notes
    -----
    A segment whose top-left corner projects outside the mosaic, or whose
    channel count differs from the mosaic's, is skipped.
    """
    if segment.channels != mosaic.channels:
        logger.debug(
            "Skipping segment with %d channels, mosaic has %d",
            segment.channels, mosaic.channels,
        )
        return mosaic

    position = projection.forward(segment.top_left.lon, segment.top_left.lat)
    if position is None:
        logger.debug(
            "Skipping segment at lon %.4f lat %.4f: outside the mosaic",
            segment.top_left.lon, segment.top_left.lat,
        )
        return mosaic

    x0, y0 = position
    width = min(mosaic.width, x0 + segment.width) - x0
    height = min(mosaic.height, y0 + segment.height) - y0
    if width <= 0 or height <= 0:
        return mosaic

    src = segment.raster[:, :height, :width]
    dst = mosaic.raster[:, y0:y0 + height, x0:x0 + width]
    drawn = src[-1] > 0

    dst[:-1, drawn] = src[:-1, drawn]
    dst[-1, drawn] = ALPHA_OPAQUE
    return mosaic
