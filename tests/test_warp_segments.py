# -*- coding: utf-8 -*-
"""
Segment Planner Tests - Segment sizing, cut detection, overlap expansion
and working-frame selection.

All fixtures use synthetic tracks with GCPs every 10 scanlines on a
100-scanline image, with longitudes chosen so consecutive distances are
known to within a few kilometres.

Dependencies
------------
pytest
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

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from scanwarp.exceptions import InsufficientGCPError, ValidationError
from scanwarp.geolocation.gcp import GroundControlPoint, scanline_track
from scanwarp.warp.config import WarpConfig
from scanwarp.warp.models import SegmentConfig, WarpOperation
from scanwarp.warp.segments import (
    SegmentRange,
    build_segments,
    compute_gcp_center,
    find_cut,
    generate_segment,
    plan_segments,
    segment_count,
    slice_ranges,
    update_gcp_overlap,
)


def make_operation(rows, lats, lons, height=100, width=40):
    """Operation with two GCPs per listed scanline (columns 0 and 39)."""
    gcps = []
    for y, lat, lon in zip(rows, lats, lons):
        gcps.append(GroundControlPoint(0.0, float(y), lat, lon))
        gcps.append(GroundControlPoint(float(width - 1), float(y),
                                       lat, lon + 0.2))
    image = np.zeros((height, width), dtype=np.uint16)
    return WarpOperation(image, gcps, 3600.0, 1800.0)


def jumping_track(jump_rows):
    """Track every 10 scanlines, jumping 40 degrees east at each jump row."""
    rows = np.arange(0, 100, 10)
    lons = rows * 0.1 + 40.0 * np.array(
        [sum(1 for j in jump_rows if r >= j) for r in rows]
    )
    return make_operation(rows, np.zeros(rows.size), lons)


@pytest.fixture
def continuous_track():
    """Scanlines 0..90 every 10 rows, 1 degree of longitude apart."""
    rows = np.arange(0, 100, 10)
    return make_operation(rows, np.zeros(rows.size), rows * 0.1)


# ---------------------------------------------------------------------------
# Segment count
# ---------------------------------------------------------------------------

class TestSegmentCount:

    def test_long_track(self):
        rows = [0, 20, 40, 60, 80]
        lons = [-55.0, -27.5, 0.0, 27.5, 55.0]
        op = make_operation(rows, [0.0] * 5, lons)
        # ~3061 km per step, 5 scanlines
        assert segment_count(op) == 5

    def test_short_track_is_one_segment(self, continuous_track):
        assert segment_count(continuous_track) == 1

    def test_km_per_segment_scales_count(self, continuous_track):
        # 10 scanlines x ~111 km
        config = WarpConfig(km_per_segment=200.0)
        assert segment_count(continuous_track, config) == 5

    def test_upper_median(self):
        # Sorted distances ~[111, 222, 333, 445]; upper median is ~333 km
        op = make_operation([0, 10, 20, 30, 40], [0.0] * 5,
                            [0.0, 1.0, 3.0, 6.0, 10.0])
        config = WarpConfig(km_per_segment=1000.0)
        assert segment_count(op, config) == 1
        config = WarpConfig(km_per_segment=800.0)
        assert segment_count(op, config) == 2

    def test_single_scanline_raises(self):
        op = make_operation([5], [0.0], [0.0])
        with pytest.raises(InsufficientGCPError):
            segment_count(op)

    def test_no_gcps_raises(self):
        op = WarpOperation(np.zeros((10, 10)), [], 360.0, 180.0)
        with pytest.raises(InsufficientGCPError):
            segment_count(op)


# ---------------------------------------------------------------------------
# Cuts and slicing
# ---------------------------------------------------------------------------

class TestFindCut:

    def test_continuous(self, continuous_track):
        track = scanline_track(continuous_track.ground_control_points, 40)
        assert find_cut(track) is None

    def test_first_jump(self):
        op = jumping_track([30, 70])
        track = scanline_track(op.ground_control_points, 40)
        assert find_cut(track) == 30.0

    def test_short_track(self):
        assert find_cut([GroundControlPoint(0, 0, 0, 0)]) is None


class TestSliceRanges:

    def test_partition(self, continuous_track):
        ranges = slice_ranges(3, continuous_track)
        assert ranges == [
            SegmentRange(0, 33, True, True),
            SegmentRange(33, 66, True, True),
            SegmentRange(66, 100, True, True),
        ]

    def test_cut_splits_slice(self):
        ranges = slice_ranges(1, jumping_track([50]))
        assert ranges == [
            SegmentRange(0, 50, True, False),
            SegmentRange(50, 100, False, True),
        ]

    def test_only_first_cut_is_used(self):
        ranges = slice_ranges(1, jumping_track([30, 70]))
        assert ranges == [
            SegmentRange(0, 30, True, False),
            SegmentRange(30, 100, False, True),
        ]

    def test_cut_on_slice_boundary_is_ignored(self):
        # The jump between rows 40 and 50 lies across the two slices
        ranges = slice_ranges(2, jumping_track([50]))
        assert ranges == [
            SegmentRange(0, 50, True, True),
            SegmentRange(50, 100, True, True),
        ]

    def test_more_slices_than_rows_skips_empty(self):
        op = make_operation([0, 1], [0.0, 0.0], [0.0, 0.1], height=3)
        ranges = slice_ranges(5, op)
        covered = [y for r in ranges for y in range(r.y_start, r.y_end)]
        assert covered == [0, 1, 2]

    def test_invalid_count(self, continuous_track):
        with pytest.raises(ValidationError):
            slice_ranges(0, continuous_track)


# ---------------------------------------------------------------------------
# Overlap expansion
# ---------------------------------------------------------------------------

class TestUpdateGcpOverlap:

    def test_two_passes(self, continuous_track):
        segment = SegmentConfig(40, 60)
        update_gcp_overlap(continuous_track, segment, True, True)
        assert (segment.y_start, segment.y_end) == (19, 81)

    def test_one_pass(self, continuous_track):
        segment = SegmentConfig(40, 60)
        config = WarpConfig(max_overlap_passes=1)
        update_gcp_overlap(continuous_track, segment, True, True, config)
        assert (segment.y_start, segment.y_end) == (29, 71)

    def test_start_only(self, continuous_track):
        segment = SegmentConfig(40, 60)
        update_gcp_overlap(continuous_track, segment, True, False)
        assert (segment.y_start, segment.y_end) == (19, 60)

    def test_clamped_to_image(self, continuous_track):
        segment = SegmentConfig(5, 95)
        update_gcp_overlap(continuous_track, segment, True, True)
        assert (segment.y_start, segment.y_end) == (0, 95)

    def test_disabled(self, continuous_track):
        segment = SegmentConfig(40, 60)
        update_gcp_overlap(continuous_track, segment, False, False)
        assert (segment.y_start, segment.y_end) == (40, 60)

    def test_each_pass_reaches_one_more_row(self, continuous_track):
        segment = SegmentConfig(40, 60)
        config = WarpConfig(max_overlap_passes=3)
        update_gcp_overlap(continuous_track, segment, True, True, config)
        assert (segment.y_start, segment.y_end) == (9, 91)

    def test_stops_when_no_neighbour_is_left(self):
        op = make_operation([0, 90], [0.0, 0.0], [0.0, 9.0])
        segment = SegmentConfig(40, 60)
        config = WarpConfig(max_overlap_passes=5)
        update_gcp_overlap(op, segment, True, True, config)
        assert (segment.y_start, segment.y_end) == (0, 91)


# ---------------------------------------------------------------------------
# Segment generation
# ---------------------------------------------------------------------------

class TestGenerateSegment:

    def test_rebased_gcps(self, continuous_track):
        segment = generate_segment(continuous_track, 40, 60, True, True)
        assert (segment.y_start, segment.y_end) == (19, 81)
        ys = sorted({g.y for g in segment.gcps})
        assert ys == [1.0, 11.0, 21.0, 31.0, 41.0, 51.0, 61.0]
        assert segment.transform is None

    def test_shift_centres_longitude(self):
        rows = np.arange(0, 100, 10)
        op = make_operation(rows, np.linspace(20, 25, rows.size),
                            29.0 + rows * 0.02)
        segment = generate_segment(op, 0, 100, False, False)
        center_lon, _ = compute_gcp_center(segment.gcps)
        assert segment.shift_lon == pytest.approx(-center_lon)
        assert segment.shift_lon == pytest.approx(-30.0, abs=0.2)
        assert segment.shift_lat == 0.0

    def test_south_pole_frame(self):
        rows = np.arange(0, 100, 10)
        op = make_operation(rows, np.linspace(-70, -85, rows.size),
                            np.full(rows.size, 100.0))
        segment = generate_segment(op, 0, 100, False, False)
        assert segment.shift_lon == 0.0
        assert segment.shift_lat == -90.0

    def test_north_pole_frame(self):
        rows = np.arange(0, 100, 10)
        op = make_operation(rows, np.linspace(70, 85, rows.size),
                            np.full(rows.size, -60.0))
        segment = generate_segment(op, 0, 100, False, False)
        assert segment.shift_lon == 0.0
        assert segment.shift_lat == 90.0

    def test_empty_segment(self):
        op = make_operation([0, 10], [0.0, 0.0], [0.0, 1.0])
        segment = generate_segment(op, 50, 100, False, False)
        assert segment.gcps == []
        assert (segment.shift_lon, segment.shift_lat) == (0.0, 0.0)


class TestBuildSegments:

    def test_single_segment_covers_image(self, continuous_track):
        segments = build_segments(1, continuous_track)
        assert len(segments) == 1
        assert (segments[0].y_start, segments[0].y_end) == (0, 100)
        assert len(segments[0].gcps) == 20
        assert min(g.y for g in segments[0].gcps) == 0

    def test_cut_track_overlaps_outward_only(self):
        segments = build_segments(1, jumping_track([50]))
        assert [(s.y_start, s.y_end) for s in segments] == [(0, 50), (50, 100)]

    def test_plan_segments(self, continuous_track):
        segments = plan_segments(continuous_track)
        assert len(segments) == 1
