# -*- coding: utf-8 -*-
"""
Warp Sub-module - Segmented thin-plate-spline warping of scan imagery.

``perform_smart_warp`` is the entry point. It sizes the output mosaic to
a memory budget, splits the scan track into segments at natural breaks,
fits one thin-plate spline per segment in parallel, and folds the warped
segments into a single equirectangular mosaic.

Key Classes
-----------
WarpOperation
    The job: source raster, GCPs, full-globe output grid size, channel
    mode and working-frame shift.
WarpResult
    Warped raster (alpha last) with its corner coordinates.
WarpConfig
    Segmentation thresholds and resource limits.
ImageWarper
    Single-segment inverse-mapping warper.
TPSTransform
    Thin-plate spline from geodetic coordinates to source pixels.

Dependencies
------------
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

from scanwarp.warp.config import WarpConfig, DEFAULT_CONFIG
from scanwarp.warp.models import (
    WarpOperation,
    CropSettings,
    SegmentConfig,
    GeoCorner,
    WarpResult,
)
from scanwarp.warp.crop import choose_crop_area
from scanwarp.warp.memory import ensure_memory_limit
from scanwarp.warp.segments import (
    segment_count,
    build_segments,
    plan_segments,
    generate_segment,
    update_gcp_overlap,
    compute_gcp_center,
)
from scanwarp.warp.tps import TPSTransform, fit_tps_transform
from scanwarp.warp.warper import ImageWarper, warp_segment
from scanwarp.warp.composite import composite_segment, mosaic_projection
from scanwarp.warp.smart_warp import perform_smart_warp, fit_segments

__all__ = [
    'WarpConfig',
    'DEFAULT_CONFIG',
    'WarpOperation',
    'CropSettings',
    'SegmentConfig',
    'GeoCorner',
    'WarpResult',
    'choose_crop_area',
    'ensure_memory_limit',
    'segment_count',
    'build_segments',
    'plan_segments',
    'generate_segment',
    'update_gcp_overlap',
    'compute_gcp_center',
    'TPSTransform',
    'fit_tps_transform',
    'ImageWarper',
    'warp_segment',
    'composite_segment',
    'mosaic_projection',
    'perform_smart_warp',
    'fit_segments',
]
