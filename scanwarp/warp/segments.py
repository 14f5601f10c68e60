# -*- coding: utf-8 -*-
"""
Segment Planning - Split a scan track into independently warped segments.

A single thin-plate spline degrades over long or strongly curved tracks,
so the source image is cut into scanline segments, each fit with its own
transform. Planning happens in two steps:

1. ``segment_count`` sizes the split from the track length, approximated
   by the median spacing of per-scanline GCPs times their count.
2. ``build_segments`` slices the image into equal-height pieces, splits a
   piece in two where the track jumps (loss of signal, pass boundary),
   widens each piece to overlap its neighbours' nearest GCP scanlines, and
   chooses the working frame each segment's transform is fit in.

Before overlap expansion the slices partition ``[0, height)``. After
expansion neighbouring segments overlap; the compositor resolves the
overlap in emission order.

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

# Standard library
import logging
from typing import List, NamedTuple, Optional, Sequence, Tuple

# Third-party
import numpy as np

# scanwarp internal
from scanwarp.exceptions import InsufficientGCPError, ValidationError
from scanwarp.geolocation.gcp import GroundControlPoint, scanline_track
from scanwarp.geolocation.utils import (
    consecutive_distances_km,
    pole_within,
    spherical_centroid,
)
from scanwarp.warp.config import WarpConfig, resolve_config
from scanwarp.warp.models import SegmentConfig, WarpOperation

logger = logging.getLogger(__name__)


class SegmentRange(NamedTuple):
    """A scanline range before overlap expansion."""

    y_start: int
    y_end: int
    start_overlap: bool
    end_overlap: bool


def _track_distances(track: Sequence[GroundControlPoint]) -> np.ndarray:
    return consecutive_distances_km(
        [g.lat for g in track], [g.lon for g in track]
    )


def segment_count(
    operation: WarpOperation,
    config: Optional[WarpConfig] = None
) -> int:
    """
    Number of segments to split an operation's scan track into.

    Parameters
    ----------
    operation : WarpOperation
        Operation whose GCPs describe the track.
    config : WarpConfig, optional
        Supplies ``km_per_segment``.

    Returns
    -------
    int
        ``floor(median_km * n_scanlines / km_per_segment)``, at least 1.

    Raises
    ------
    InsufficientGCPError
        If the GCPs cover fewer than two distinct scanlines.
    """
    config = resolve_config(config)
    track = scanline_track(operation.ground_control_points, operation.width)
    if len(track) < 2:
        raise InsufficientGCPError(
            f"Segment planning needs GCPs on at least 2 distinct scanlines, "
            f"got {len(track)}"
        )

    distances = np.sort(_track_distances(track))
    median_km = float(distances[distances.size // 2])
    total_km = median_km * len(track)

    n_segments = max(1, int(np.floor(total_km / config.km_per_segment)))
    logger.info(
        "Splitting into %d segments. Median distance is %.1f km and "
        "total (avg) distance is %.1f km",
        n_segments, median_km, total_km,
    )
    return n_segments


def find_cut(
    track: Sequence[GroundControlPoint],
    config: Optional[WarpConfig] = None
) -> Optional[float]:
    """
    Scanline where a per-scanline GCP track first jumps.

    Parameters
    ----------
    track : Sequence[GroundControlPoint]
        One GCP per scanline, in scan order.
    config : WarpConfig, optional
        Supplies ``cut_distance_km``.

    Returns
    -------
    float or None
        ``y`` of the second GCP of the first consecutive pair further apart
        than ``cut_distance_km``; ``None`` when the track is continuous.
    """
    config = resolve_config(config)
    if len(track) < 2:
        return None

    distances = _track_distances(track)
    jumps = np.nonzero(distances > config.cut_distance_km)[0]
    if jumps.size == 0:
        return None
    return track[int(jumps[0]) + 1].y


def slice_ranges(
    n_segments: int,
    operation: WarpOperation,
    config: Optional[WarpConfig] = None
) -> List[SegmentRange]:
    """
    Scanline ranges to build segments from, before overlap expansion.

    The image is cut into ``n_segments`` equal-height slices; a slice
    whose track is cut is split in two at the cut, and each half only
    overlaps on its outer boundary.

    Parameters
    ----------
    n_segments : int
        Number of equal-height slices.
    operation : WarpOperation
        Operation to slice.
    config : WarpConfig, optional
        Supplies ``cut_distance_km``.

    Returns
    -------
    List[SegmentRange]
        Ranges in emission order. They partition ``[0, height)``.

    Raises
    ------
    ValidationError
        If ``n_segments`` is less than 1.
    """
    config = resolve_config(config)
    if n_segments < 1:
        raise ValidationError(f"n_segments must be >= 1, got {n_segments}")

    height = operation.height
    ranges: List[SegmentRange] = []
    for segment in range(n_segments):
        y_start = int(segment / n_segments * height)
        y_end = int((segment + 1) / n_segments * height)
        if y_end <= y_start:
            continue

        track = scanline_track(
            (g for g in operation.ground_control_points
             if y_start <= g.y < y_end),
            operation.width,
        )
        cut = find_cut(track, config)
        cut_line = None if cut is None else int(np.ceil(cut))

        if cut_line is not None and y_start < cut_line < y_end:
            logger.debug(
                "Slice [%d, %d) is cut at scanline %d", y_start, y_end, cut_line
            )
            ranges.append(SegmentRange(y_start, cut_line, True, False))
            ranges.append(SegmentRange(cut_line, y_end, False, True))
        else:
            ranges.append(SegmentRange(y_start, y_end, True, True))
    return ranges


def update_gcp_overlap(
    operation: WarpOperation,
    segment: SegmentConfig,
    start_overlap: bool,
    end_overlap: bool,
    config: Optional[WarpConfig] = None
) -> None:
    """
    Widen a segment so it reaches its neighbours' nearest GCP scanlines.

    Each pass finds, over the whole operation's GCPs, the nearest GCP
    strictly before ``y_start`` and strictly after ``y_end`` and moves the
    enabled boundaries just past them. Every pass that finds a neighbour
    reaches one more GCP scanline, so on a regular track the segment grows
    by exactly ``config.max_overlap_passes`` GCP rows per enabled side.
    Passes stop early once neither boundary changes (no neighbour left on
    an enabled side). Both boundaries are then clamped to ``[0, height]``.

    Parameters
    ----------
    operation : WarpOperation
        Operation providing the GCPs and source height.
    segment : SegmentConfig
        Segment to widen. Mutated.
    start_overlap, end_overlap : bool
        Which boundaries may move.
    config : WarpConfig, optional
        Supplies ``max_overlap_passes``.
    """
    config = resolve_config(config)
    ys = np.array([g.y for g in operation.ground_control_points],
                  dtype=np.float64)

    for _ in range(config.max_overlap_passes):
        bounds = (segment.y_start, segment.y_end)

        before = ys[ys < segment.y_start]
        if start_overlap and before.size:
            segment.y_start = int(np.floor(before.max())) - 1

        after = ys[ys > segment.y_end]
        if end_overlap and after.size:
            segment.y_end = int(np.floor(after.min())) + 1

        if (segment.y_start, segment.y_end) == bounds:
            break

    segment.y_start = max(segment.y_start, 0)
    segment.y_end = min(segment.y_end, operation.height)


def compute_gcp_center(
    gcps: Sequence[GroundControlPoint]
) -> Tuple[float, float]:
    """
    Centre of a GCP set on the sphere.

    Parameters
    ----------
    gcps : Sequence[GroundControlPoint]
        At least one GCP.

    Returns
    -------
    Tuple[float, float]
        (lon, lat) of the centre in degrees.
    """
    lat, lon = spherical_centroid(
        [g.lat for g in gcps], [g.lon for g in gcps]
    )
    return lon, lat


def generate_segment(
    operation: WarpOperation,
    y_start: int,
    y_end: int,
    start_overlap: bool,
    end_overlap: bool,
    config: Optional[WarpConfig] = None
) -> SegmentConfig:
    """
    Build one segment from a scanline range.

    Parameters
    ----------
    operation : WarpOperation
        Operation the segment belongs to.
    y_start, y_end : int
        Scanline range before overlap expansion.
    start_overlap, end_overlap : bool
        Which boundaries may be widened.
    config : WarpConfig, optional
        Supplies ``max_overlap_passes`` and ``pole_distance_km``.

    Returns
    -------
    SegmentConfig
        Expanded range, rebased GCPs and working-frame shift. A segment
        within ``pole_distance_km`` of a pole gets ``shift_lon = 0`` and
        ``shift_lat = +/-90``; otherwise ``shift_lon`` is minus the
        longitude of its GCP centre and ``shift_lat = 0``.
    """
    config = resolve_config(config)
    segment = SegmentConfig(y_start=y_start, y_end=y_end)
    update_gcp_overlap(operation, segment, start_overlap, end_overlap, config)

    segment.gcps = [
        g.rebased(segment.y_start)
        for g in operation.ground_control_points
        if segment.y_start <= g.y < segment.y_end
    ]

    if not segment.gcps:
        logger.warning(
            "Segment [%d, %d) has no GCPs", segment.y_start, segment.y_end
        )
        return segment

    center_lon, _ = compute_gcp_center(segment.gcps)
    segment.shift_lon = -center_lon
    segment.shift_lat = 0.0

    pole = pole_within(
        [g.lat for g in segment.gcps],
        [g.lon for g in segment.gcps],
        config.pole_distance_km,
    )
    if pole != 0:
        segment.shift_lon = 0.0
        segment.shift_lat = pole

    logger.debug(
        "Segment [%d, %d): %d GCPs, shift lon %.2f lat %.1f",
        segment.y_start, segment.y_end, len(segment.gcps),
        segment.shift_lon, segment.shift_lat,
    )
    return segment


def build_segments(
    n_segments: int,
    operation: WarpOperation,
    config: Optional[WarpConfig] = None
) -> List[SegmentConfig]:
    """
    Plan the segments of an operation.

    Parameters
    ----------
    n_segments : int
        Number of equal-height slices, usually from ``segment_count``.
    operation : WarpOperation
        Operation to plan.
    config : WarpConfig, optional
        Planning thresholds.

    Returns
    -------
    List[SegmentConfig]
        Segments in emission order, without fitted transforms.
    """
    config = resolve_config(config)
    return [
        generate_segment(operation, r.y_start, r.y_end,
                         r.start_overlap, r.end_overlap, config)
        for r in slice_ranges(n_segments, operation, config)
    ]


def plan_segments(
    operation: WarpOperation,
    config: Optional[WarpConfig] = None
) -> List[SegmentConfig]:
    """Size and build the segments of an operation in one call."""
    config = resolve_config(config)
    return build_segments(segment_count(operation, config), operation, config)
