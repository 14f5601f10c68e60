# -*- coding: utf-8 -*-
"""
Smart Warp - Georeference a full scan by warping it in segments.

Orchestrates the whole job:

1. Size the segmentation (``segment_count``), which also rejects tracks
   with fewer than two GCP scanlines.
2. Plan the mosaic window (``choose_crop_area``) and shrink the output
   grid until the mosaic fits the memory budget (``ensure_memory_limit``).
3. Plan segments along the scan track (``build_segments``) and fit every
   segment's thin-plate spline concurrently, waiting for all of them.
   Segments that cannot be fit are dropped.
4. Allocate the mosaic, then warp the segments one by one and fold each
   into it in planner order. This stage is sequential; the order decides
   which segment wins where segments overlap.

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

# Standard library
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

# scanwarp internal
from scanwarp.exceptions import InsufficientGCPError, ScanwarpError, WarpError
from scanwarp.warp.composite import composite_segment, mosaic_projection
from scanwarp.warp.config import WarpConfig, resolve_config
from scanwarp.warp.crop import choose_crop_area
from scanwarp.warp.memory import ensure_memory_limit
from scanwarp.warp.models import SegmentConfig, WarpOperation, WarpResult
from scanwarp.warp.segments import build_segments, segment_count
from scanwarp.warp.tps import TPSTransform, fit_tps_transform
from scanwarp.warp.warper import warp_segment

logger = logging.getLogger(__name__)


def fit_segments(
    segments: List[SegmentConfig],
    config: Optional[WarpConfig] = None
) -> List[SegmentConfig]:
    """
    Fit the transform of every segment and keep the segments that fit.

    Fits are independent and run on a thread pool; the call returns once
    all of them have finished. Each outcome is gathered as a transform or
    the error its fit raised. A segment whose fit fails (too few or
    collinear GCPs, as for a lone frame after a loss of signal) is dropped
    with a warning, and the rest of the scan is still warped.

    Parameters
    ----------
    segments : List[SegmentConfig]
        Planned segments. The ``transform`` attribute of each fitted
        segment is set.
    config : WarpConfig, optional
        Supplies ``max_workers`` and the fit settings.

    Returns
    -------
    List[SegmentConfig]
        The fitted segments, in planner order.

    Raises
    ------
    InsufficientGCPError, WarpError
        The first fit failure, in segment order, when no segment fits.
    """
    config = resolve_config(config)

    def _fit(
        segment: SegmentConfig
    ) -> Tuple[Optional[TPSTransform], Optional[ScanwarpError]]:
        try:
            transform = fit_tps_transform(
                segment.gcps, segment.shift_lon, segment.shift_lat, config
            )
        except (InsufficientGCPError, WarpError) as e:
            return None, e
        return transform, None

    if config.max_workers == 1 or len(segments) <= 1:
        outcomes = [_fit(s) for s in segments]
    else:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            outcomes = list(executor.map(_fit, segments))

    fitted: List[SegmentConfig] = []
    errors: List[ScanwarpError] = []
    for segment, (transform, error) in zip(segments, outcomes):
        if error is not None:
            logger.warning(
                "Dropping segment [%d, %d): %s",
                segment.y_start, segment.y_end, error,
            )
            errors.append(error)
            continue
        segment.transform = transform
        fitted.append(segment)

    if errors and not fitted:
        raise errors[0]
    return fitted


def perform_smart_warp(
    operation: WarpOperation,
    progress_callback: Optional[Callable[[float], None]] = None,
    config: Optional[WarpConfig] = None
) -> WarpResult:
    """
    Warp a scan into a cropped equirectangular mosaic.

    Parameters
    ----------
    operation : WarpOperation
        The job. Not modified; the engine works on a copy.
    progress_callback : Callable[[float], None], optional
        Called with ``completed / total`` after each fitted segment is
        folded in.
    config : WarpConfig, optional
        Thresholds and limits. Defaults to ``DEFAULT_CONFIG``.

    Returns
    -------
    WarpResult
        The mosaic. Its corners are the memory-bounded crop's extent.

    Raises
    ------
    InsufficientGCPError
        If the GCPs cover fewer than two scanlines, or no segment has
        enough GCPs to fit.
    MemoryBudgetError
        If the mosaic cannot fit the memory budget.
    WarpError
        If every segment fit fails.

    Examples
    --------
    >>> op = WarpOperation(image, gcps, output_width=8192, output_height=4096)
    >>> result = perform_smart_warp(op, progress_callback=print)
    >>> result.geolocation_metadata()['bounds']
    """
    config = resolve_config(config)
    operation = operation.copy()

    # Reject unusable tracks before any planning or allocation
    n_segments = segment_count(operation, config)

    crop = choose_crop_area(operation, config)
    channels = operation.output_channels
    crop = ensure_memory_limit(
        crop, operation, channels, config.memory_budget_bytes, config
    )

    segments = build_segments(n_segments, operation, config)
    segments = fit_segments(segments, config)

    mosaic = WarpResult.from_crop(crop, channels)
    projection = mosaic_projection(mosaic)
    logger.info(
        "Mosaic %dx%d with %d channels, lon [%.3f, %.3f] lat [%.3f, %.3f]",
        mosaic.width, mosaic.height, channels,
        crop.lon_min, crop.lon_max, crop.lat_min, crop.lat_max,
    )

    total = len(segments)
    for done, segment in enumerate(segments, start=1):
        segment_result = warp_segment(
            operation.for_segment(segment), segment.transform, config
        )
        mosaic = composite_segment(mosaic, projection, segment_result)
        segment.transform = None

        logger.debug("Segment %d/%d composited", done, total)
        if progress_callback is not None:
            progress_callback(done / total)

    return mosaic
